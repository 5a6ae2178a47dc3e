"""Custom exception hierarchy for the race analytics engine.

Each exception includes an error code, the location it was raised from,
an optional chained cause and a JSON-friendly ``to_dict``.

    from race_analytics.core.domain.exceptions import RaceAnalyticsError, ValidationError
"""

# Analysis exceptions
from .analysis import AnalysisError, DriverAnalysisError

# Base classes
from .base import ExceptionContext, RaceAnalyticsError

# Configuration exceptions
from .configuration import ConfigurationError, InvalidConfigurationError

# Data ingestion exceptions
from .data_ingestion import DataIngestionError, DataValidationError, SnapshotNotFoundError

# Validation exceptions
from .validation import InvalidSessionError, MixedDriverLapsError, ValidationError

__all__ = [
    # Base
    "ExceptionContext",
    "RaceAnalyticsError",
    # Configuration
    "ConfigurationError",
    "InvalidConfigurationError",
    # Data Ingestion
    "DataIngestionError",
    "SnapshotNotFoundError",
    "DataValidationError",
    # Validation
    "ValidationError",
    "InvalidSessionError",
    "MixedDriverLapsError",
    # Analysis
    "AnalysisError",
    "DriverAnalysisError",
]
