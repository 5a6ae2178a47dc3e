"""Configuration-related exceptions."""

from .base import RaceAnalyticsError


class ConfigurationError(RaceAnalyticsError):
    """Configuration or environment variable errors."""

    error_code = "RA_CFG_001"


class InvalidConfigurationError(ConfigurationError):
    """Configuration value is invalid."""

    error_code = "RA_CFG_002"
