"""Tests for transit light curve synthesis"""
import logging
import unittest
from concurrent.futures import ThreadPoolExecutor

import jax
import numpy as np
import pytest
from numpy.testing import assert_allclose

from astrosampler import (
    InvalidLightCurveParameters,
    LightCurve,
    SamplingError,
    depth_from_percent,
    make_key,
    simulate_transit_light_curve,
    transit_profile,
)

NOISE_BOUND = 0.00025 + 1e-12


class TestSimulateTransitLightCurve(unittest.TestCase):

    def setUp(self):
        self.period = 3.5
        self.depth = 0.012
        self.duration_hours = 2.5
        self.curve = simulate_transit_light_curve(self.period, self.depth, self.duration_hours, seed=1234)

    def test_sample_count(self):
        for period, depth, hours in [(3.5, 0.012, 2.5), (0.01, 0.5, 0.1), (1.0e4, 0.0, 300.0)]:
            curve = simulate_transit_light_curve(period, depth, hours, seed=0)
            self.assertEqual(curve.time.shape, (200,))
            self.assertEqual(curve.flux.shape, (200,))

    def test_time_spans_two_periods(self):
        time = np.asarray(self.curve.time)
        self.assertEqual(time[0], 0.0)
        self.assertTrue(np.all(np.diff(time) > 0.0))
        self.assertLess(time[-1], 2 * self.period)
        self.assertAlmostEqual(time[-1], 199 / 200 * 2 * self.period, places=12)

    def test_out_of_transit_flux(self):
        time = np.asarray(self.curve.time)
        flux = np.asarray(self.curve.flux)
        duration_days = self.duration_hours / 24
        distance = np.abs(np.mod(time, self.period) - self.period / 2)
        outside = distance >= duration_days / 2

        self.assertGreater(outside.sum(), 150)
        self.assertTrue(np.all(np.abs(flux[outside] - 1.0) <= NOISE_BOUND))

    def test_transit_center_flux(self):
        time = np.asarray(self.curve.time)
        flux = np.asarray(self.curve.flux)

        # Samples 50 and 150 fall exactly on the two transit centers
        self.assertAlmostEqual(time[50], 1.75, places=12)
        self.assertAlmostEqual(time[150], 5.25, places=12)
        self.assertLessEqual(abs(flux[50] - 0.988), NOISE_BOUND)
        self.assertLessEqual(abs(flux[150] - 0.988), NOISE_BOUND)

    def test_jitter_is_bounded(self):
        time = self.curve.time
        duration_days = self.duration_hours / 24
        clean = np.asarray(transit_profile(time, self.period, self.depth, duration_days))
        residual = np.asarray(self.curve.flux) - clean
        self.assertTrue(np.all(residual >= -NOISE_BOUND))
        self.assertTrue(np.all(residual < NOISE_BOUND))
        self.assertGreater(np.std(residual), 0.0)

    def test_zero_jitter_gives_clean_profile(self):
        curve = simulate_transit_light_curve(self.period, self.depth, self.duration_hours,
                                             seed=3, jitter_amplitude=0.0)
        clean = transit_profile(curve.time, self.period, self.depth, self.duration_hours / 24)
        assert_allclose(np.asarray(curve.flux), np.asarray(clean), rtol=1e-14)

    def test_same_seed_is_reproducible(self):
        again = simulate_transit_light_curve(self.period, self.depth, self.duration_hours, seed=1234)
        assert_allclose(np.asarray(again.flux), np.asarray(self.curve.flux), atol=0.0)

    def test_key_and_seed_agree(self):
        by_key = simulate_transit_light_curve(self.period, self.depth, self.duration_hours,
                                              key=jax.random.PRNGKey(1234))
        assert_allclose(np.asarray(by_key.flux), np.asarray(self.curve.flux), atol=0.0)

    def test_different_seeds_differ(self):
        other = simulate_transit_light_curve(self.period, self.depth, self.duration_hours, seed=4321)
        self.assertFalse(np.array_equal(np.asarray(other.flux), np.asarray(self.curve.flux)))

    def test_unseeded_calls_are_independent(self):
        first = simulate_transit_light_curve(self.period, self.depth, self.duration_hours)
        second = simulate_transit_light_curve(self.period, self.depth, self.duration_hours)
        self.assertFalse(np.array_equal(np.asarray(first.flux), np.asarray(second.flux)))
        assert_allclose(np.asarray(first.time), np.asarray(second.time), atol=0.0)


class TestTransitProfile(unittest.TestCase):

    def test_shallow_v_bottom(self):
        period, depth, duration = 10.0, 0.1, 1.0
        time = np.array([5.0, 5.25, 5.49, 5.5, 7.0])
        flux = np.asarray(transit_profile(time, period, depth, duration))

        assert_allclose(flux[0], 0.9, rtol=1e-12)
        # Halfway to the edge adds half of depth * 0.1
        assert_allclose(flux[1], 0.9 + 0.5 * 0.01, rtol=1e-12)
        assert_allclose(flux[2], 0.9 + 0.98 * 0.01, rtol=1e-10)
        # The window edge itself is out of transit
        self.assertEqual(flux[3], 1.0)
        self.assertEqual(flux[4], 1.0)

    def test_limb_darkening_coefficient(self):
        flux = np.asarray(transit_profile(np.array([5.25]), 10.0, 0.1, 1.0, limb_darkening=0.0))
        assert_allclose(flux, [0.9], rtol=1e-12)

    def test_repeats_every_period(self):
        time = np.array([5.2, 15.2, 25.2])
        flux = np.asarray(transit_profile(time, 10.0, 0.05, 1.0))
        assert_allclose(flux, flux[0], rtol=1e-12)


class TestLightCurveValidation(unittest.TestCase):

    def test_rejects_non_positive_period(self):
        for period in (0.0, -3.5):
            with self.assertRaises(InvalidLightCurveParameters) as cm:
                simulate_transit_light_curve(period, 0.01, 2.5, seed=0)
            self.assertIn("period_days", str(cm.exception))

    def test_rejects_non_positive_duration(self):
        for hours in (0.0, -1.0):
            with self.assertRaises(InvalidLightCurveParameters):
                simulate_transit_light_curve(3.5, 0.01, hours, seed=0)

    def test_rejects_depth_outside_unit_interval(self):
        for depth in (-0.01, 1.0, 2.0):
            with self.assertRaises(InvalidLightCurveParameters):
                simulate_transit_light_curve(3.5, depth, 2.5, seed=0)

    def test_rejects_non_finite(self):
        with self.assertRaises(InvalidLightCurveParameters):
            simulate_transit_light_curve(float('inf'), 0.01, 2.5, seed=0)
        with self.assertRaises(InvalidLightCurveParameters):
            simulate_transit_light_curve(3.5, float('nan'), 2.5, seed=0)

    def test_rejects_bad_sample_count(self):
        for n_samples in (0, 1.5):
            with self.assertRaises(SamplingError):
                simulate_transit_light_curve(3.5, 0.01, 2.5, seed=0, n_samples=n_samples)


def test_curve_records():
    curve = simulate_transit_light_curve(3.5, 0.012, 2.5, seed=7)
    records = curve.to_records()
    assert len(records) == 200
    assert set(records[0]) == {'time', 'flux'}
    assert records[0]['time'] == 0.0

    samples = curve.samples()
    assert isinstance(samples[10], tuple)
    assert samples[10] == (records[10]['time'], records[10]['flux'])


def test_custom_sample_count():
    curve = simulate_transit_light_curve(2.0, 0.01, 1.0, seed=0, n_samples=50)
    assert isinstance(curve, LightCurve)
    assert curve.time.shape == (50,)
    assert float(curve.time[-1]) == pytest.approx(49 / 50 * 4.0)


def test_depth_from_percent():
    assert depth_from_percent(1.2) == pytest.approx(0.012)
    assert depth_from_percent(0.0) == 0.0


def test_make_key_with_seed_is_deterministic():
    assert np.array_equal(np.asarray(make_key(11)), np.asarray(make_key(11)))


def test_long_transit_warns(caplog):
    """A transit longer than the period is simulated but flagged"""
    with caplog.at_level(logging.WARNING, logger='astrosampler.light_curve'):
        curve = simulate_transit_light_curve(1.0, 0.01, 30.0, seed=0)
    assert curve.flux.shape == (200,)
    assert any("not wrapped" in record.getMessage() for record in caplog.records)


def test_short_transit_does_not_warn(caplog):
    with caplog.at_level(logging.WARNING, logger='astrosampler.light_curve'):
        simulate_transit_light_curve(3.5, 0.012, 2.5, seed=0)
    assert not [r for r in caplog.records if r.name.startswith("astrosampler")]


def test_make_key_rejects_oversized_seed():
    for seed in (2**63, 2**70, -2**63 - 1):
        with pytest.raises(SamplingError, match="signed 64-bit"):
            make_key(seed)


def test_make_key_rejects_non_integer_seed():
    with pytest.raises(SamplingError, match="seed must be an integer"):
        make_key(1.5)


def test_make_key_accepts_64_bit_bounds():
    make_key(2**63 - 1)
    make_key(-2**63)


def test_oversized_seed_through_simulation():
    with pytest.raises(SamplingError):
        simulate_transit_light_curve(3.5, 0.012, 2.5, seed=2**64)


def test_concurrent_calls_match_serial_calls():
    """Seeded curves computed on worker threads equal the same curves computed serially"""
    seeds = list(range(8))

    def run(seed):
        return np.asarray(simulate_transit_light_curve(3.5, 0.012, 2.5, seed=seed).flux)

    serial = [run(seed) for seed in seeds]
    with ThreadPoolExecutor(max_workers=4) as executor:
        parallel = list(executor.map(run, seeds))

    for seed, expected, actual in zip(seeds, serial, parallel):
        assert_allclose(actual, expected, atol=0.0, err_msg=f"seed {seed}")
