"""Data ingestion exceptions raised at the data source boundary."""

from .base import RaceAnalyticsError


class DataIngestionError(RaceAnalyticsError):
    """Error while loading session data."""

    error_code = "RA_DAT_001"


class SnapshotNotFoundError(DataIngestionError):
    """No snapshot exists for the requested season/round."""

    error_code = "RA_DAT_002"


class DataValidationError(DataIngestionError):
    """Loaded data is structurally unusable."""

    error_code = "RA_DAT_003"
