"""Analytics value objects returned by the analysis entry points.

All objects are frozen and created fresh per call; the caller owns them.
"""

from dataclasses import dataclass
from enum import Enum


class PerformanceTier(str, Enum):
    """How close a time is to the session reference (fastest) time."""

    FASTEST = "fastest"
    WITHIN_1_PERCENT = "within_1_percent"
    WITHIN_2_PERCENT = "within_2_percent"
    SLOWER = "slower"

    @property
    def rank(self) -> int:
        """1 for the fastest tier through 4 for the slowest."""
        return list(PerformanceTier).index(self) + 1


@dataclass(frozen=True)
class Stint:
    """A contiguous run of laps between inferred pit stops.

    Attributes:
        number: 1-based index among the driver's emitted stints.
        start_lap: First lap number in the stint.
        end_lap: Last lap number in the stint.
        lap_count: Number of laps (always >= 3).
        avg_time: Mean lap time.
        median_time: Upper median lap time.
        best_lap: Fastest lap time.
        worst_lap: Slowest lap time.
        range: worst_lap - best_lap.
        trend: Mean of the second half minus mean of the first half;
            negative means the driver got faster.
        consistency: Population standard deviation of the stint's laps.
        consistency_rating: Qualitative label for ``consistency``.
    """

    number: int
    start_lap: int
    end_lap: int
    lap_count: int
    avg_time: float
    median_time: float
    best_lap: float
    worst_lap: float
    range: float
    trend: float
    consistency: float
    consistency_rating: str = ""


@dataclass(frozen=True)
class DriverPaceProfile:
    """Race pace statistics and tire management score for one driver."""

    driver_id: str
    times_in_seconds: tuple[float, ...]
    avg_time: float
    median: float
    best_time: float
    consistency: float
    iqr: float
    stints: tuple[Stint, ...]
    best_stint: Stint | None
    constructor_name: str = ""
    grid_position: int = 0
    finish_position: int = 0
    pace_rank: int = 0
    relative_pace: float = 0.0
    pace_rating: str = ""
    tire_score: float = 5.0
    tire_rating: str = ""
    trend: float = 0.0
    trend_rating: str = ""

    @property
    def is_pit_lane_start(self) -> bool:
        return self.grid_position == 0


@dataclass(frozen=True)
class ClosestRival:
    """The driver whose lap times tracked this driver's most closely."""

    driver_id: str
    avg_gap: float


@dataclass(frozen=True)
class GapProfile:
    """Interval and gap-to-leader analysis for one driver.

    Any gap is None when no index-aligned laps exist to compare against.
    """

    driver_id: str
    position: int
    constructor_name: str
    gap_to_ahead: float | None
    driver_ahead_id: str | None
    avg_gap_to_leader: float | None
    gap_consistency: float | None
    closest_rival: ClosestRival | None
    gap_consistency_rating: str | None = None


@dataclass(frozen=True)
class SectorTimes:
    """Estimated sector split in seconds."""

    s1: float
    s2: float
    s3: float

    @property
    def total(self) -> float:
        return self.s1 + self.s2 + self.s3


@dataclass(frozen=True)
class SectorTiers:
    s1: PerformanceTier
    s2: PerformanceTier
    s3: PerformanceTier


@dataclass(frozen=True)
class SectorProfile:
    """Qualifying sector estimate for one driver.

    ``best_lap`` and ``sectors`` come from the furthest session reached
    (Q3, else Q2, else Q1), even when an earlier session was faster.
    ``improvement`` is measured against the personal best across all
    sessions, so the two can refer to different laps. ``sectors`` is None
    when the driver set no valid qualifying time.
    """

    driver_id: str
    position: int
    sectors: SectorTimes | None
    best_lap: str | None
    best_lap_seconds: float | None
    improvement: float
    tiers: SectorTiers | None = None
    time_lost: float | None = None
    performance_rating: str | None = None
    improvement_rating: str = ""


@dataclass(frozen=True)
class SectorAnalysis:
    """All sector profiles plus the session's theoretical best lap."""

    profiles: tuple[SectorProfile, ...]
    theoretical_best: SectorTimes | None

    @property
    def theoretical_best_lap(self) -> float | None:
        return self.theoretical_best.total if self.theoretical_best else None


@dataclass(frozen=True)
class Overtake:
    """A lap on which the reconstructed position improved."""

    lap: int
    positions_gained: int
    is_drs: bool


@dataclass(frozen=True)
class PositionLoss:
    """A lap on which the reconstructed position got worse."""

    lap: int
    positions_lost: int


@dataclass(frozen=True)
class OvertakeRecord:
    """Reconstructed overtaking activity for one driver."""

    driver_id: str
    start_pos: int
    finish_pos: int
    overtakes: tuple[Overtake, ...]
    total_positions_gained: int
    position_losses: tuple[PositionLoss, ...] = ()
    constructor_name: str = ""
    overtake_rating: str = ""
    defence_rating: str = ""

    @property
    def drs_overtakes(self) -> int:
        return sum(1 for overtake in self.overtakes if overtake.is_drs)

    @property
    def total_moves(self) -> int:
        return sum(overtake.positions_gained for overtake in self.overtakes)

    @property
    def total_losses(self) -> int:
        return sum(loss.positions_lost for loss in self.position_losses)


@dataclass(frozen=True)
class ChartPoint:
    lap: int
    time: float
    x: int
    y: int
    tier: PerformanceTier


@dataclass(frozen=True)
class LapStatistics:
    """Summary statistics shown alongside a lap-time chart."""

    best_lap: float
    average: float
    median: float
    range: float
    consistency: float
    consistency_rating: str


@dataclass(frozen=True)
class ChartResult:
    """A rendered lap-time progression chart.

    ``rows`` is the character grid, top row first; every row is exactly
    ``width`` characters long.
    """

    rows: tuple[str, ...]
    points: tuple[ChartPoint, ...]
    y_ticks: tuple[float, ...]
    x_labels: tuple[int, ...]
    statistics: LapStatistics
    width: int
    height: int

    @property
    def text(self) -> str:
        return "\n".join(self.rows)


@dataclass(frozen=True)
class InsufficientData:
    """Explicit "not enough data" outcome for analyses needing a minimum lap count."""

    reason: str
    valid_laps: int
    required: int = 3
    driver_id: str | None = None
