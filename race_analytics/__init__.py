"""Race analytics engine: pace, gaps, sectors, overtakes and lap charts.

    from race_analytics import RaceAnalysisService

    service = RaceAnalysisService()
    profiles = service.pace(race_results, lap_records)
"""

from .core.domain import LapRecord, QualifyingResult, RaceResult
from .core.services import RaceAnalysisService, format_time, parse_time

__version__ = "0.1.0"

__all__ = [
    "RaceAnalysisService",
    "LapRecord",
    "RaceResult",
    "QualifyingResult",
    "format_time",
    "parse_time",
    "__version__",
]
