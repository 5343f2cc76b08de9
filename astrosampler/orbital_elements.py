"""
Orbital elements representation for asteroids and reference bodies.
"""
import logging
import math
from typing import Any, Mapping, NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from astrosampler.exceptions import InvalidOrbitalElements

logger = logging.getLogger(__name__)


class OrbitalElements(NamedTuple):
    """
    Keplerian orbital elements of a heliocentric body.

    Only a, e, i, om and w shape the sampled orbit path. The remaining fields
    are carried along for the caller but are not used by the sampler, which
    parametrizes the ellipse by a synthetic angle rather than by time.
    All angular quantities are in degrees.

    Attributes:
        a: Semi-major axis (AU)
        e: Eccentricity (dimensionless, 0 ≤ e < 1 for a closed ellipse)
        i: Inclination relative to the ecliptic (deg)
        om: Longitude of the ascending node (deg)
        w: Argument of periapsis (deg)
        epoch: Epoch of the elements (optional)
        ma: Mean anomaly at epoch (deg, optional)
        n: Mean motion (deg/day, optional)
        per: Orbital period (days, optional)
    """
    a: float  # semi-major axis (AU)
    e: float  # eccentricity
    i: float  # inclination (deg)
    om: float  # longitude of ascending node (deg)
    w: float  # argument of periapsis (deg)
    epoch: Optional[float] = None
    ma: Optional[float] = None  # mean anomaly (deg)
    n: Optional[float] = None  # mean motion (deg/day)
    per: Optional[float] = None  # period (days)

    def validate(self) -> 'OrbitalElements':
        """
        Check that the elements describe a closed ellipse.

        Returns:
            The elements themselves, so the call can be chained.

        Raises:
            InvalidOrbitalElements: if a <= 0, e is outside [0, 1), or any
                shaping element is not finite.
        """
        for name in ('a', 'e', 'i', 'om', 'w'):
            value = getattr(self, name)
            if not math.isfinite(value):
                logger.debug("Rejected orbital elements %r: non-finite %s", self, name)
                raise InvalidOrbitalElements(f"{name} must be finite, got {value}")

        if self.a <= 0.0:
            logger.debug("Rejected orbital elements %r: non-positive a", self)
            raise InvalidOrbitalElements(f"a must be positive, got {self.a}")

        if not (0.0 <= self.e < 1.0):
            logger.debug("Rejected orbital elements %r: e outside [0, 1)", self)
            raise InvalidOrbitalElements(
                f"e must be in [0, 1) for a closed orbit, got {self.e}"
            )
        return self

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> 'OrbitalElements':
        """
        Build orbital elements from an upstream in-memory record.

        Records usually arrive as decoded JSON (real catalogue data or
        generated data), where numbers may be encoded as strings and extra
        keys may be present.

        Args:
            record: Mapping with at least the keys a, e, i, om and w.

        Returns:
            Validated OrbitalElements.

        Raises:
            InvalidOrbitalElements: if the record cannot be parsed or the
                parsed elements are outside their valid domain.

        Examples:
            >>> OrbitalElements.from_record({'a': '0.922', 'e': 0.191, 'i': 3.33,
            ...                              'om': 204.4, 'w': 126.4, 'ma': 99.3})
            OrbitalElements(a=0.922, e=0.191, i=3.33, om=204.4, w=126.4, epoch=None, ma=99.3, n=None, per=None)
        """
        try:
            parsed = OrbitalElementsRecord.model_validate(record)
        except ValidationError as err:
            raise InvalidOrbitalElements(f"Malformed orbital element record: {err}") from err
        return parsed.to_elements().validate()


class OrbitalElementsRecord(BaseModel):
    """
    Schema of an orbital element record as delivered by a data source.

    Unknown keys are ignored so whole upstream objects can be passed in.
    """
    model_config = ConfigDict(extra='ignore')

    a: float
    e: float
    i: float
    om: float
    w: float
    epoch: Optional[float] = None
    ma: Optional[float] = None
    n: Optional[float] = None
    per: Optional[float] = None

    def to_elements(self) -> OrbitalElements:
        """Convert the record to an OrbitalElements tuple"""
        return OrbitalElements(**self.model_dump())


# Earth's orbit, drawn as the reference ring behind every other body
EARTH_ORBIT = OrbitalElements(a=1.0, e=0.0167, i=0.0, om=0.0, w=102.0, ma=0.0)

# 99942 Apophis, shown when no other object has been loaded
APOPHIS_ORBIT = OrbitalElements(a=0.922, e=0.191, i=3.33, om=204.4, w=126.4, ma=99.3, per=323.5)
