"""Domain models for the race analytics engine.

- race_data: LapRecord, RaceResult and QualifyingResult inputs
- analysis: the analytics value objects returned by the entry points

All models are re-exported here:

    from race_analytics.core.domain import LapRecord, RaceResult, Stint
"""

from .analysis import (
    ChartPoint,
    ChartResult,
    ClosestRival,
    DriverPaceProfile,
    GapProfile,
    InsufficientData,
    LapStatistics,
    Overtake,
    OvertakeRecord,
    PerformanceTier,
    PositionLoss,
    SectorAnalysis,
    SectorProfile,
    SectorTiers,
    SectorTimes,
    Stint,
)
from .race_data import LapRecord, QualifyingResult, RaceResult

__all__ = [
    # Inputs
    "LapRecord",
    "RaceResult",
    "QualifyingResult",
    # Pace
    "Stint",
    "DriverPaceProfile",
    # Gaps
    "ClosestRival",
    "GapProfile",
    # Sectors
    "PerformanceTier",
    "SectorTimes",
    "SectorTiers",
    "SectorProfile",
    "SectorAnalysis",
    # Overtakes
    "Overtake",
    "PositionLoss",
    "OvertakeRecord",
    # Chart
    "ChartPoint",
    "ChartResult",
    "LapStatistics",
    "InsufficientData",
]
