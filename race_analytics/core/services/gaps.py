"""Interval and gap analysis across the finishing order.

Deltas pair the i-th recorded lap of one driver with the i-th recorded lap
of another. This is only exact when both drivers have the same laps in the
same order; when the counts differ (retirements, missing timing rows) the
series is silently truncated to the shorter driver.
"""

from collections.abc import Mapping, Sequence

from ..domain import ClosestRival, GapProfile, RaceResult
from . import lap_stats
from .ratings import GAP_CONSISTENCY
from .time_codec import driver_key


def aligned_deltas(mine: Sequence[float], other: Sequence[float]) -> list[float]:
    """``mine[i] - other[i]`` for every index both series have."""
    return [own - theirs for own, theirs in zip(mine, other)]


def mean_or_none(values: Sequence[float]) -> float | None:
    return lap_stats.mean(values) if values else None


def find_closest_rival(
    driver_id: str,
    times: Sequence[float],
    finishers: Sequence[RaceResult],
    times_by_driver: Mapping[str, Sequence[float]],
) -> ClosestRival | None:
    """The finisher with the lowest mean absolute index-aligned delta.

    Ties keep the earlier finisher.
    """
    closest: ClosestRival | None = None
    for rival in finishers:
        if driver_key(rival.driver_id) == driver_key(driver_id):
            continue
        rival_times = times_by_driver.get(driver_key(rival.driver_id))
        if not rival_times:
            continue
        deltas = [abs(delta) for delta in aligned_deltas(times, rival_times)]
        if not deltas:
            continue
        avg_gap = lap_stats.mean(deltas)
        if closest is None or avg_gap < closest.avg_gap:
            closest = ClosestRival(driver_id=rival.driver_id, avg_gap=avg_gap)
    return closest


def finishing_order(results: Sequence[RaceResult]) -> list[RaceResult]:
    """Every result sorted by finishing position, retirements included."""
    return sorted(results, key=lambda result: result.finish_position)


def analyze_driver_gaps(
    result: RaceResult,
    finishers: Sequence[RaceResult],
    times_by_driver: Mapping[str, Sequence[float]],
) -> GapProfile | None:
    """Build one driver's gap profile.

    Args:
        result: The driver being analyzed.
        finishers: All results in finishing order.
        times_by_driver: Lap-ordered times keyed by ``driver_key``.

    Returns:
        The profile, or None when the driver has no valid laps.
    """
    times = times_by_driver.get(driver_key(result.driver_id))
    if not times:
        return None

    ahead = next(
        (other for other in finishers if other.finish_position == result.finish_position - 1),
        None,
    )
    gap_to_ahead = None
    if ahead is not None:
        gap_to_ahead = mean_or_none(
            aligned_deltas(times, times_by_driver.get(driver_key(ahead.driver_id), ()))
        )

    leader_series = aligned_deltas(
        times, times_by_driver.get(driver_key(finishers[0].driver_id), ())
    )
    gap_consistency = lap_stats.std_dev(leader_series) if leader_series else None

    return GapProfile(
        driver_id=result.driver_id,
        position=result.finish_position,
        constructor_name=result.constructor_name,
        gap_to_ahead=gap_to_ahead,
        driver_ahead_id=ahead.driver_id if ahead else None,
        avg_gap_to_leader=mean_or_none(leader_series),
        gap_consistency=gap_consistency,
        closest_rival=find_closest_rival(result.driver_id, times, finishers, times_by_driver),
        gap_consistency_rating=(
            GAP_CONSISTENCY.rate(gap_consistency) if gap_consistency is not None else None
        ),
    )
