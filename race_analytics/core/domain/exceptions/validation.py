"""Validation exceptions for caller-supplied arguments."""

from .base import RaceAnalyticsError


class ValidationError(RaceAnalyticsError):
    """Input validation failed."""

    error_code = "RA_VAL_001"


class InvalidSessionError(ValidationError):
    """Season or round number is out of range."""

    error_code = "RA_VAL_002"


class MixedDriverLapsError(ValidationError):
    """A single-driver operation received laps from several drivers."""

    error_code = "RA_VAL_003"
