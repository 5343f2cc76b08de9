"""
Synthetic transit light curves.

A box-shaped transit with a shallow V-shaped bottom is laid over a flat
out-of-transit baseline, sampled over two orbital periods, and perturbed with
small uniform jitter. The result is a plausible-looking photometric time
series, not a physical transit model.
"""
import functools
import logging
import math
import operator
from typing import NamedTuple, Optional

import jax
import jax.numpy as jnp
import numpy as np
from jax import jit

from astrosampler.constants import (
    HOURS_PER_DAY,
    JITTER_AMPLITUDE,
    LIGHT_CURVE_SAMPLES,
    LIMB_DARKENING_COEFF,
    OUT_OF_TRANSIT_FLUX,
    PERIODS_SIMULATED,
)
from astrosampler.exceptions import InvalidLightCurveParameters, SamplingError

logger = logging.getLogger(__name__)

_SEED_MIN = -2**63
_SEED_MAX = 2**63 - 1


class LightCurve(NamedTuple):
    """
    Time series of normalized flux samples.

    Attributes:
        time: Sample times (days), monotonically increasing
        flux: Normalized flux (dimensionless, 1.0 out of transit)
    """
    time: jnp.ndarray
    flux: jnp.ndarray

    def samples(self) -> list[tuple[float, float]]:
        """Return the curve as a list of (time, flux) pairs"""
        return list(zip(np.asarray(self.time).tolist(), np.asarray(self.flux).tolist()))

    def to_records(self) -> list[dict]:
        """Return the curve as a list of {'time': t, 'flux': f} dicts for charting"""
        return [{'time': t, 'flux': f} for t, f in self.samples()]


def depth_from_percent(depth_percent: float) -> float:
    """Convert a transit depth given in percent to a fractional flux drop"""
    return depth_percent / 100.0


def make_key(seed: Optional[int] = None) -> jax.Array:
    """
    Create a PRNG key for the light curve jitter.

    Args:
        seed: Integer seed in the signed 64-bit range. If None, the key is
            drawn from fresh OS entropy so that unseeded calls are independent
            of each other.

    Returns:
        JAX PRNG key

    Raises:
        SamplingError: if seed is not an integer or does not fit in 64 bits
    """
    if seed is None:
        seed = int(np.random.SeedSequence().generate_state(1)[0])
    try:
        seed = operator.index(seed)
    except TypeError:
        raise SamplingError(f"seed must be an integer, got {seed!r}") from None
    if not (_SEED_MIN <= seed <= _SEED_MAX):
        raise SamplingError(f"seed must fit in a signed 64-bit integer, got {seed}")
    return jax.random.PRNGKey(seed)


def transit_profile(time: jnp.ndarray, period: float, depth: float, duration_days: float,
                    limb_darkening: float = LIMB_DARKENING_COEFF) -> jnp.ndarray:
    """
    Noise-free transit shape.

    Transits are centered at period/2 within each period. Inside the window
    |t mod period - period/2| < duration/2 the flux is

        1 - depth + (distance_from_center / (duration/2)) * depth * limb_darkening

    and 1.0 outside it. The window is not wrapped across period boundaries.

    Args:
        time: Sample times (days)
        period: Orbital period (days)
        depth: Fractional flux drop at transit center
        duration_days: Full transit duration (days)
        limb_darkening: Extra flux at the transit edges as a fraction of depth

    Returns:
        Flux values with the same shape as time
    """
    time_in_period = jnp.mod(time, period)
    transit_center = period / 2.0
    half_duration = duration_days / 2.0
    distance_from_center = jnp.abs(time_in_period - transit_center)

    in_transit_flux = (OUT_OF_TRANSIT_FLUX - depth) + \
        (distance_from_center / half_duration) * (depth * limb_darkening)

    return jnp.where(distance_from_center < half_duration, in_transit_flux, OUT_OF_TRANSIT_FLUX)


@functools.partial(jit, static_argnames=('n_samples',))
def _simulate(key, period, depth, duration_days, jitter_amplitude, limb_darkening, n_samples):
    total_time = period * PERIODS_SIMULATED
    i = jnp.arange(n_samples, dtype=jnp.float64)
    time = (i / n_samples) * total_time

    flux = transit_profile(time, period, depth, duration_days, limb_darkening)

    # Uniform jitter in [-jitter_amplitude/2, jitter_amplitude/2)
    u = jax.random.uniform(key, shape=(n_samples,), dtype=jnp.float64)
    flux = flux + (u - 0.5) * jitter_amplitude

    return time, flux


def _validate(period_days, fractional_depth, transit_duration_hours):
    checks = (
        ('period_days', period_days),
        ('fractional_depth', fractional_depth),
        ('transit_duration_hours', transit_duration_hours),
    )
    for name, value in checks:
        if not math.isfinite(value):
            raise InvalidLightCurveParameters(f"{name} must be finite, got {value}")

    if period_days <= 0.0:
        raise InvalidLightCurveParameters(f"period_days must be positive, got {period_days}")
    if transit_duration_hours <= 0.0:
        raise InvalidLightCurveParameters(
            f"transit_duration_hours must be positive, got {transit_duration_hours}"
        )
    if not (0.0 <= fractional_depth < 1.0):
        raise InvalidLightCurveParameters(
            f"fractional_depth must be in [0, 1), got {fractional_depth}"
        )


def simulate_transit_light_curve(period_days: float,
                                 fractional_depth: float,
                                 transit_duration_hours: float,
                                 key: Optional[jax.Array] = None,
                                 seed: Optional[int] = None,
                                 n_samples: int = LIGHT_CURVE_SAMPLES,
                                 jitter_amplitude: float = JITTER_AMPLITUDE,
                                 limb_darkening: float = LIMB_DARKENING_COEFF) -> LightCurve:
    """
    Simulate a transit light curve spanning two orbital periods.

    The default output always has exactly 200 samples. n_samples, like
    limb_darkening and jitter_amplitude, is a tunable visual parameter.

    Sample i is taken at t_i = (i / n_samples) * 2 * period, so the first
    sample is at t = 0 and the last one falls just short of 2 * period.

    The jitter is drawn from an explicit PRNG key. Pass `key` or `seed` for a
    reproducible curve; with neither, every call uses fresh entropy.

    Args:
        period_days: Orbital period (days)
        fractional_depth: Fractional flux drop at transit center, in [0, 1)
        transit_duration_hours: Full transit duration (hours)
        key: JAX PRNG key for the jitter (takes precedence over seed)
        seed: Integer seed used to build a key when key is None
        n_samples: Number of samples (default: 200, the length the dashboard
            charts expect; other values are a presentation override)
        jitter_amplitude: Full width of the uniform jitter (default: 0.0005)
        limb_darkening: Edge brightening as a fraction of depth (default: 0.1)

    Returns:
        LightCurve with time and flux arrays of shape (n_samples,)

    Raises:
        InvalidLightCurveParameters: if period or duration is not positive or
            depth is outside [0, 1)
        SamplingError: if n_samples is not a positive integer or seed is not
            a 64-bit integer

    Examples:
        >>> curve = simulate_transit_light_curve(3.5, 0.012, 2.5, seed=0)
        >>> curve.time.shape
        (200,)
    """
    try:
        _validate(period_days, fractional_depth, transit_duration_hours)
    except InvalidLightCurveParameters as err:
        logger.debug("Rejected light curve parameters: %s", err)
        raise

    try:
        n_samples = operator.index(n_samples)
    except TypeError:
        raise SamplingError(f"n_samples must be an integer, got {n_samples!r}") from None
    if n_samples < 1:
        raise SamplingError(f"n_samples must be at least 1, got {n_samples}")

    duration_days = transit_duration_hours / HOURS_PER_DAY
    if duration_days / 2.0 > period_days / 2.0:
        logger.warning(
            "Transit duration (%.4f d) exceeds the period (%.4f d); "
            "the transit window is not wrapped across period boundaries",
            duration_days, period_days,
        )

    if key is None:
        key = make_key(seed)

    time, flux = _simulate(
        key, float(period_days), float(fractional_depth), float(duration_days),
        float(jitter_amplitude), float(limb_darkening), n_samples=n_samples,
    )
    logger.debug("Simulated light curve with %d samples over %.4f days",
                 n_samples, PERIODS_SIMULATED * period_days)
    return LightCurve(time=time, flux=flux)
