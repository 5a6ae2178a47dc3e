"""Configuration package: settings and logging setup."""

from .logging import get_logger, setup_logging
from .settings import Settings, settings

__all__ = ["Settings", "settings", "get_logger", "setup_logging"]
