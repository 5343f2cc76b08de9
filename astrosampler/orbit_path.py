"""
Orbit path sampling for 3D visualization.

Orbital elements are turned into an ordered, closed sequence of points that a
renderer can join with line segments. The ellipse is parametrized uniformly in
eccentric anomaly, which draws the correct shape but is not a time-uniform
sampling of the orbit.
"""
import functools
import logging
import operator

import jax.numpy as jnp
from jax import jit

from astrosampler.constants import DEFAULT_POINT_COUNT, DEG2RAD, VIZ_SCALE
from astrosampler.exceptions import SamplingError
from astrosampler.orbital_elements import OrbitalElements
from astrosampler.rotations import ecliptic_to_visualization, perifocal_to_ecliptic

logger = logging.getLogger(__name__)


def eccentric_anomaly_grid(point_count: int) -> jnp.ndarray:
    """
    Uniform grid of eccentric anomalies E_j = (j / point_count) * 2π, j = 0..point_count.

    The last entry is exactly 2π, so the sampled path closes on itself.
    """
    j = jnp.arange(point_count + 1, dtype=jnp.float64)
    return (j / point_count) * 2.0 * jnp.pi


def perifocal_coordinates(a: float, e: float, E: jnp.ndarray) -> jnp.ndarray:
    """
    Position in the perifocal frame for the given eccentric anomalies.

    Args:
        a: Semi-major axis (AU)
        e: Eccentricity
        E: Eccentric anomalies (radians), shape (n,)

    Returns:
        Array of shape (n, 3) with [P, Q, 0] for each anomaly, in AU.
        P points toward periapsis.
    """
    P = a * (jnp.cos(E) - e)
    Q = a * jnp.sqrt(1.0 - e**2) * jnp.sin(E)
    return jnp.stack([P, Q, jnp.zeros_like(E)], axis=1)


@functools.partial(jit, static_argnames=('point_count',))
def _ecliptic_path(a, e, i, om, w, point_count):
    E = eccentric_anomaly_grid(point_count)
    r_pf = perifocal_coordinates(a, e, E)
    R = perifocal_to_ecliptic(i * DEG2RAD, om * DEG2RAD, w * DEG2RAD)
    # Row vectors, so apply R on the right as R^T
    return r_pf @ R.T


def _check_point_count(point_count) -> int:
    try:
        count = operator.index(point_count)
    except TypeError:
        raise SamplingError(f"point_count must be an integer, got {point_count!r}") from None
    if count < 1:
        raise SamplingError(f"point_count must be at least 1, got {count}")
    return count


def sample_orbit_path_ecliptic(elements: OrbitalElements,
                               point_count: int = DEFAULT_POINT_COUNT) -> jnp.ndarray:
    """
    Sample an orbit in the heliocentric ecliptic frame.

    Args:
        elements: Orbital elements (angles in degrees, a in AU)
        point_count: Number of segments in the path

    Returns:
        Array of shape (point_count + 1, 3) with [x, y, z] positions in AU

    Raises:
        InvalidOrbitalElements: if the elements do not describe a closed ellipse
        SamplingError: if point_count is not a positive integer
    """
    count = _check_point_count(point_count)
    elements = OrbitalElements(*elements).validate()
    return _ecliptic_path(
        float(elements.a), float(elements.e),
        float(elements.i), float(elements.om), float(elements.w),
        point_count=count,
    )


def sample_orbit_path(elements: OrbitalElements,
                      point_count: int = DEFAULT_POINT_COUNT,
                      scale: float = VIZ_SCALE) -> jnp.ndarray:
    """
    Sample one full revolution of an orbit in the visualization frame.

    The path starts at periapsis (E = 0) and ends at E = 2π, so the first and
    last points coincide. Downstream renderers draw connected segments through
    the points and place the "current position" marker on the first one.

    Args:
        elements: Orbital elements (angles in degrees, a in AU)
        point_count: Number of segments in the path (default: 100)
        scale: Visualization units per AU (default: 10)

    Returns:
        Array of shape (point_count + 1, 3). Each row is (x, z, -y) of the
        ecliptic position, multiplied by scale.

    Raises:
        InvalidOrbitalElements: if a <= 0 or e is outside [0, 1)
        SamplingError: if point_count is not a positive integer

    Examples:
        >>> path = sample_orbit_path(OrbitalElements(a=1.0, e=0.0, i=0.0, om=0.0, w=0.0), 4)
        >>> path.shape
        (5, 3)
    """
    r = sample_orbit_path_ecliptic(elements, point_count)
    logger.debug("Sampled orbit path with %d points (a=%s, e=%s)",
                 r.shape[0], elements[0], elements[1])
    return ecliptic_to_visualization(r, scale)
