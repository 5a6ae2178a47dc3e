"""Qualitative rating tables.

Each table is an ordered list of literal cutoffs; the first row whose
comparison holds supplies the label. There is no model behind these
numbers and they are not meant to be tuned at runtime.
"""

import operator
from collections.abc import Callable
from dataclasses import dataclass

from ..domain import PerformanceTier


@dataclass(frozen=True)
class RatingScale:
    """Ordered ``(cutoff, label)`` table evaluated top to bottom."""

    steps: tuple[tuple[float, str], ...]
    fallback: str
    compare: Callable[[float, float], bool] = operator.le

    def rate(self, value: float) -> str:
        for cutoff, label in self.steps:
            if self.compare(value, cutoff):
                return label
        return self.fallback


TIRE_SCORE = RatingScale(
    steps=(
        (9.5, "Outstanding"),
        (8.5, "Excellent"),
        (7.5, "Good"),
        (6.0, "Fair"),
        (5.0, "Moderate"),
    ),
    fallback="Poor",
    compare=operator.ge,
)

# Seconds slower than the fastest average pace.
RACE_PACE = RatingScale(
    steps=(
        (0.001, "Fastest"),
        (0.2, "Outstanding"),
        (0.4, "Strong"),
        (0.7, "Competitive"),
        (1.0, "Midfield"),
    ),
    fallback="Poor",
)

STINT_CONSISTENCY = RatingScale(
    steps=((0.5, "High"), (1.0, "Medium")),
    fallback="Low",
    compare=operator.lt,
)

GAP_CONSISTENCY = RatingScale(
    steps=((0.5, "Outstanding"), (1.0, "Strong"), (2.0, "Variable")),
    fallback="Poor",
    compare=operator.lt,
)

LAP_CONSISTENCY = RatingScale(
    steps=((0.5, "Excellent"), (1.0, "Good"), (1.5, "Fair")),
    fallback="Poor",
    compare=operator.lt,
)

# Seconds lost to the theoretical best lap.
SECTOR_TIME_LOST = RatingScale(
    steps=(
        (0.3, "Outstanding"),
        (0.5, "Strong"),
        (0.8, "Competitive"),
        (1.2, "Developing"),
    ),
    fallback="Poor",
)

QUALIFYING_IMPROVEMENT = RatingScale(
    steps=((1.0, "Outstanding"), (0.5, "Strong"), (0.2, "Good")),
    fallback="None",
    compare=operator.ge,
)

OVERTAKES = RatingScale(
    steps=((5, "Exceptional"), (3, "Strong"), (1, "Active")),
    fallback="Limited",
    compare=operator.ge,
)

WINNER_TREND = RatingScale(
    steps=(
        (-0.3, "Exceptional Pace"),
        (-0.1, "Strong Pace"),
        (0.1, "Consistent Pace"),
        (0.3, "Managed Pace"),
    ),
    fallback="Conservative Pace",
)

PODIUM_TREND = RatingScale(
    steps=(
        (-0.2, "Strong Pace"),
        (0.0, "Competitive Pace"),
        (0.2, "Consistent Pace"),
        (0.4, "Managed Pace"),
    ),
    fallback="Steady Pace",
)


def rate_improvement(improvement: float) -> str:
    """Label a Q1-to-best improvement percentage."""
    if 0 < improvement < 0.2:
        return "Slight"
    return QUALIFYING_IMPROVEMENT.rate(improvement)


def rate_defence(positions_lost: int, net_gain: int) -> str:
    if positions_lost == 0 and net_gain > 0:
        return "Clean Race"
    if positions_lost <= 2:
        return "Solid"
    if positions_lost <= 4:
        return "Under Pressure"
    return "Defensive"


def _trend_variation(finish_pos: int, start_pos: int) -> float:
    gained = start_pos - finish_pos
    if finish_pos <= 3:
        return -0.05 if gained > 0 else 0.0
    if finish_pos <= 10:
        return -0.02 if gained > 0 else 0.02
    return 0.0 if gained > 3 else 0.15


def _general_trend(trend: float, variation: float) -> str:
    inclusive = (
        (-0.5, "Exceptional Improvement"),
        (-0.3, "Strong Improvement"),
        (-0.2, "Improving"),
        (-0.1, "Slight Improvement"),
    )
    for cutoff, label in inclusive:
        if trend <= cutoff + variation:
            return label

    exclusive = (
        (0.15, "Stable"),
        (0.3, "Slight Decline"),
        (0.5, "Declining"),
    )
    for cutoff, label in exclusive:
        if trend < cutoff + variation:
            return label
    return "Strong Decline"


def rate_trend(trend: float, finish_pos: int, start_pos: int) -> str:
    """Label a pace trend, judging front-runners against stricter tables.

    Args:
        trend: Second-half minus first-half mean lap time.
        finish_pos: Finishing position used for the table choice.
        start_pos: Grid position; gains shift the general table slightly.
    """
    if finish_pos == 1:
        return WINNER_TREND.rate(trend)
    if finish_pos <= 3:
        return PODIUM_TREND.rate(trend)
    return _general_trend(trend, _trend_variation(finish_pos, start_pos))


def classify_against_best(value: float, best: float) -> PerformanceTier:
    """Tier a time by its distance from the session's fastest time."""
    if value == best:
        return PerformanceTier.FASTEST
    if value <= best * 1.01:
        return PerformanceTier.WITHIN_1_PERCENT
    if value <= best * 1.02:
        return PerformanceTier.WITHIN_2_PERCENT
    return PerformanceTier.SLOWER
