"""Stint segmentation for a single driver's race laps.

A new stint is inferred whenever laps go missing (more than three lap
numbers skipped, typically a pit stop the timing feed dropped) or the lap
time jumps by more than 3.5s between consecutive laps. Fragments shorter
than three laps are discarded.
"""

from collections.abc import Sequence

from ..domain import Stint
from . import lap_stats
from .ratings import STINT_CONSISTENCY

MIN_STINT_LAPS = 3
MAX_LAP_NUMBER_GAP = 3
MAX_LAP_TIME_JUMP = 3.5


def segment_stints(laps: Sequence[tuple[int, float]]) -> list[Stint]:
    """Split chronologically ordered ``(lap_number, lap_time)`` pairs into stints.

    Args:
        laps: One driver's laps, already ordered by lap number.

    Returns:
        Stints of at least ``MIN_STINT_LAPS`` laps, numbered from 1.
    """
    stints: list[Stint] = []
    current: list[tuple[int, float]] = []

    for lap_number, lap_time in laps:
        if current:
            last_lap, last_time = current[-1]
            lap_gap = lap_number - last_lap
            if lap_gap > MAX_LAP_NUMBER_GAP or abs(lap_time - last_time) > MAX_LAP_TIME_JUMP:
                _flush(current, stints)
                current = []
        current.append((lap_number, lap_time))

    _flush(current, stints)
    return stints


def _flush(current: list[tuple[int, float]], stints: list[Stint]) -> None:
    if len(current) >= MIN_STINT_LAPS:
        stints.append(build_stint(current, number=len(stints) + 1))


def build_stint(laps: Sequence[tuple[int, float]], number: int) -> Stint:
    times = [lap_time for _, lap_time in laps]
    best = min(times)
    worst = max(times)
    consistency = lap_stats.std_dev(times)
    return Stint(
        number=number,
        start_lap=laps[0][0],
        end_lap=laps[-1][0],
        lap_count=len(times),
        avg_time=lap_stats.mean(times),
        median_time=lap_stats.median(times),
        best_lap=best,
        worst_lap=worst,
        range=worst - best,
        trend=lap_stats.half_trend(times),
        consistency=consistency,
        consistency_rating=STINT_CONSISTENCY.rate(consistency),
    )
