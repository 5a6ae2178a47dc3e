"""Exceptions raised while computing analytics."""

from .base import RaceAnalyticsError


class AnalysisError(RaceAnalyticsError):
    """An analysis step could not be completed."""

    error_code = "RA_ANA_001"


class DriverAnalysisError(AnalysisError):
    """Analytics for a single driver failed.

    Entry points catch this per driver so the rest of the batch survives.
    """

    error_code = "RA_ANA_002"
