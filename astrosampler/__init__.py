# Configure JAX to use double precision (64-bit floats) throughout the package
import jax
jax.config.update("jax_enable_x64", True)

from .exceptions import (
    SamplingError,
    InvalidOrbitalElements,
    InvalidLightCurveParameters,
)

from .constants import (
    # Constants
    DEG2RAD,
    HOURS_PER_DAY,
    DEFAULT_POINT_COUNT,
    VIZ_SCALE,
    LIGHT_CURVE_SAMPLES,
    JITTER_AMPLITUDE,
    LIMB_DARKENING_COEFF,
    DEFAULT_TRANSIT_DURATION_HOURS,
)

from .orbital_elements import (
    OrbitalElements,
    OrbitalElementsRecord,
    EARTH_ORBIT,
    APOPHIS_ORBIT,
)

from .rotations import (
    # Frame rotations
    rot_x,
    rot_z,
    perifocal_to_ecliptic,
    ecliptic_to_visualization,
)

from .orbit_path import (
    # Orbit sampling
    eccentric_anomaly_grid,
    perifocal_coordinates,
    sample_orbit_path_ecliptic,
    sample_orbit_path,
)

from .light_curve import (
    # Light curve synthesis
    LightCurve,
    depth_from_percent,
    make_key,
    transit_profile,
    simulate_transit_light_curve,
)

from .config import SamplingConfig

__all__ = [
    # Exceptions
    "SamplingError",
    "InvalidOrbitalElements",
    "InvalidLightCurveParameters",

    # Constants
    "DEG2RAD",
    "HOURS_PER_DAY",
    "DEFAULT_POINT_COUNT",
    "VIZ_SCALE",
    "LIGHT_CURVE_SAMPLES",
    "JITTER_AMPLITUDE",
    "LIMB_DARKENING_COEFF",
    "DEFAULT_TRANSIT_DURATION_HOURS",

    # Orbital elements
    "OrbitalElements",
    "OrbitalElementsRecord",
    "EARTH_ORBIT",
    "APOPHIS_ORBIT",

    # Frame rotations
    "rot_x",
    "rot_z",
    "perifocal_to_ecliptic",
    "ecliptic_to_visualization",

    # Orbit sampling
    "eccentric_anomaly_grid",
    "perifocal_coordinates",
    "sample_orbit_path_ecliptic",
    "sample_orbit_path",

    # Light curve synthesis
    "LightCurve",
    "depth_from_percent",
    "make_key",
    "transit_profile",
    "simulate_transit_light_curve",

    # Configuration
    "SamplingConfig",
]
