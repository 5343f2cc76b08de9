"""
Numerical constants for orbit path sampling and transit light curve synthesis.

This module contains the fixed parameters shared by the astrosampler routines.
"""

import jax.numpy as jnp

# Angle conversion
DEG2RAD = jnp.pi / 180.0  # radians per degree
HOURS_PER_DAY = 24.0

# Orbit path sampling
DEFAULT_POINT_COUNT = 100  # segments per revolution (point_count + 1 points)
VIZ_SCALE = 10.0  # visualization units per AU

# Transit light curve synthesis
LIGHT_CURVE_SAMPLES = 200  # samples spanning two orbital periods
PERIODS_SIMULATED = 2.0
OUT_OF_TRANSIT_FLUX = 1.0
JITTER_AMPLITUDE = 0.0005  # full width of the uniform jitter, [-0.00025, 0.00025]
LIMB_DARKENING_COEFF = 0.1  # extra flux at the transit edges, as a fraction of depth
DEFAULT_TRANSIT_DURATION_HOURS = 2.5
