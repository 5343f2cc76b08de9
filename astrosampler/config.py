"""
Tunable sampling parameters, persisted as JSON.
"""
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from astrosampler.constants import (
    DEFAULT_POINT_COUNT,
    JITTER_AMPLITUDE,
    LIGHT_CURVE_SAMPLES,
    LIMB_DARKENING_COEFF,
    VIZ_SCALE,
)


class SamplingConfig(BaseModel):
    """
    Visual parameters for orbit paths and light curves.

    The defaults reproduce the standard dashboard output. The limb darkening
    coefficient and jitter amplitude are presentation knobs, not physical
    constants.
    """
    point_count: int = Field(
        default=DEFAULT_POINT_COUNT,
        description="Number of segments per sampled orbit (points = point_count + 1)"
    )
    visualization_scale: float = Field(
        default=VIZ_SCALE,
        description="Visualization units per AU"
    )
    light_curve_samples: int = Field(
        default=LIGHT_CURVE_SAMPLES,
        description="Number of samples over two orbital periods"
    )
    jitter_amplitude: float = Field(
        default=JITTER_AMPLITUDE,
        description="Full width of the uniform flux jitter"
    )
    limb_darkening_coefficient: float = Field(
        default=LIMB_DARKENING_COEFF,
        description="Edge brightening inside the transit, as a fraction of depth"
    )

    @field_validator('point_count', 'light_curve_samples')
    @classmethod
    def validate_counts(cls, v: int, info) -> int:
        """Validate that sample counts are at least 1."""
        if v < 1:
            raise ValueError(f"{info.field_name} must be at least 1, got {v}")
        return v

    @field_validator('visualization_scale')
    @classmethod
    def validate_scale(cls, v: float) -> float:
        if v <= 0.0:
            raise ValueError(f"visualization_scale must be positive, got {v}")
        return v

    @field_validator('jitter_amplitude', 'limb_darkening_coefficient')
    @classmethod
    def validate_non_negative(cls, v: float, info) -> float:
        if v < 0.0:
            raise ValueError(f"{info.field_name} must be non-negative, got {v}")
        return v

    def save(self, filepath: str | Path) -> None:
        """
        Save the configuration to a JSON file.

        Parameters
        ----------
        filepath : str | Path
            Path to the file where the configuration will be saved.
        """
        filepath = Path(filepath)
        with open(filepath, 'w') as f:
            f.write(self.model_dump_json(indent=2))

    @classmethod
    def load(cls, filepath: str | Path) -> 'SamplingConfig':
        """
        Load a configuration from a JSON file.

        Missing fields take their default values.

        Parameters
        ----------
        filepath : str | Path
            Path to the JSON file to load.

        Returns
        -------
        SamplingConfig
            The loaded configuration.
        """
        filepath = Path(filepath)
        with open(filepath, 'r') as f:
            return cls.model_validate_json(f.read())
