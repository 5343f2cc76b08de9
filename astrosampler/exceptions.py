"""
Exceptions raised when sampling inputs fall outside their valid domain.
"""


class SamplingError(ValueError):
    """Base class for invalid inputs to the sampling routines."""


class InvalidOrbitalElements(SamplingError):
    """
    Raised when orbital elements do not describe a closed ellipse.

    Valid elements satisfy a > 0 and 0 <= e < 1 with finite angles.
    """


class InvalidLightCurveParameters(SamplingError):
    """
    Raised when transit parameters cannot produce a light curve.

    Valid parameters satisfy period > 0, duration > 0 and 0 <= depth < 1.
    """
