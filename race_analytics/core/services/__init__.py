"""Analysis services.

The entry points live on ``RaceAnalysisService``; the modules underneath
(time codec, stints, pace, gaps, sectors, overtakes, chart) are pure
functions that can be used directly.
"""

from .analysis_service import RaceAnalysisService
from .time_codec import LapWindow, format_time, parse_time

__all__ = ["RaceAnalysisService", "LapWindow", "format_time", "parse_time"]
