"""Race pace statistics and the composite tire management score."""

import logging
import math
from collections.abc import Mapping, Sequence
from dataclasses import replace

from ..domain import DriverPaceProfile, LapRecord, RaceResult, Stint
from . import lap_stats
from .ratings import RACE_PACE, TIRE_SCORE, rate_trend
from .stints import segment_stints
from .time_codec import driver_key

logger = logging.getLogger(__name__)

NEUTRAL_SCORE = 5.0
LAPS_PER_EXPECTED_STOP = 25

SCORE_WEIGHTS = {
    "stint_length": 0.35,
    "consistency": 0.30,
    "trend": 0.15,
    "range": 0.10,
    "position": 0.10,
}

# Multipliers for notable grid-to-flag results; first match in _position_bonus wins.
HELD_PODIUM_BONUS = 1.08
GAINED_PODIUM_BONUS = 1.15
INTO_TOP_TEN_BONUS = 1.10


def build_pace_profile(driver_id: str, laps: Sequence[LapRecord]) -> DriverPaceProfile | None:
    """Compute pace statistics and stints for one driver.

    Args:
        driver_id: Driver the laps belong to.
        laps: The driver's valid laps, ordered by lap number.

    Returns:
        The profile, or None if the driver has no valid laps.
    """
    if not laps:
        return None

    times = [lap.lap_time_seconds for lap in laps]
    stints = segment_stints([(lap.lap_number, lap.lap_time_seconds) for lap in laps])
    best_stint = min(stints, key=lambda stint: stint.avg_time) if stints else None

    return DriverPaceProfile(
        driver_id=driver_id,
        times_in_seconds=tuple(times),
        avg_time=lap_stats.mean(times),
        median=lap_stats.median(times),
        best_time=min(times),
        consistency=lap_stats.std_dev(times),
        iqr=lap_stats.interquartile_range(times),
        stints=tuple(stints),
        best_stint=best_stint,
        trend=lap_stats.half_trend(times),
    )


def target_stint_length(total_race_laps: int) -> float:
    expected_stops = math.ceil(total_race_laps / LAPS_PER_EXPECTED_STOP)
    return total_race_laps / (expected_stops + 1)


def _stint_length_score(stints: Sequence[Stint], target: float) -> float:
    avg_length = sum(stint.lap_count for stint in stints) / len(stints)
    longest = max(stint.lap_count for stint in stints)
    score = min(10.0, avg_length / target * 9.5)
    if longest > target:
        score += min(2.0, (longest - target) * 0.15)
    return score


def _stint_consistency_score(stints: Sequence[Stint], target: float) -> float:
    total = 0.0
    for stint in stints:
        degradation = (stint.worst_lap - stint.best_lap) / stint.lap_count
        threshold = 0.12 * (1 + stint.lap_count / target)
        total += max(0.0, 10 - (degradation / threshold) * 10)
    return min(10.0, total / len(stints))


def _trend_score(trend: float, finish_index: int) -> float:
    position_factor = max(0.8, 1 - finish_index * 0.02)
    normalized = trend * position_factor
    if normalized > 0:
        return max(0.0, 10 - normalized * 4)
    return min(10.0, 8.5 + abs(normalized * 3))


def _range_score(lap_times: Sequence[float], finish_index: int) -> float:
    expected_range = 2.0 + finish_index * 0.15
    total_range = max(lap_times) - min(lap_times)
    return max(0.0, 10 - (total_range / expected_range) * 5)


def _position_score(start_pos: int, finish_pos: int) -> float:
    gained = start_pos - finish_pos
    if gained > 0:
        return min(10.0, 7.0 + gained * 0.5)
    if gained < 0:
        return max(4.0, 7.0 + gained * 0.4)
    return 7.0


def _position_bonus(start_pos: int, finish_pos: int) -> float:
    if finish_pos <= 3 and start_pos <= 3:
        return HELD_PODIUM_BONUS
    if finish_pos <= 3:
        return GAINED_PODIUM_BONUS
    if finish_pos <= 10 and start_pos > 10:
        return INTO_TOP_TEN_BONUS
    return 1.0


def tire_management_score(
    lap_times: Sequence[float],
    start_pos: int,
    finish_pos: int,
    stints: Sequence[Stint],
    trend: float,
    finish_index: int,
) -> float:
    """Composite 0-10 heuristic for how well a driver managed their tires.

    Args:
        lap_times: All valid lap times for the driver.
        start_pos: Effective grid position.
        finish_pos: Finishing position used for scoring.
        stints: The driver's stints.
        trend: Overall pace trend (second-half minus first-half mean).
        finish_index: 0-based finishing index.

    Returns:
        Score in [0, 10]; 5.0 when there are no laps to judge.
    """
    if not lap_times:
        return NEUTRAL_SCORE

    if stints:
        target = target_stint_length(max(stint.end_lap for stint in stints))
        stint_length = _stint_length_score(stints, target)
        consistency = _stint_consistency_score(stints, target)
    else:
        stint_length = consistency = NEUTRAL_SCORE

    score = (
        stint_length * SCORE_WEIGHTS["stint_length"]
        + consistency * SCORE_WEIGHTS["consistency"]
        + _trend_score(trend, finish_index) * SCORE_WEIGHTS["trend"]
        + _range_score(lap_times, finish_index) * SCORE_WEIGHTS["range"]
        + _position_score(start_pos, finish_pos) * SCORE_WEIGHTS["position"]
    )
    score *= _position_bonus(start_pos, finish_pos)
    return min(10.0, max(0.0, score))


def rank_pace_profiles(
    profiles: Sequence[DriverPaceProfile],
    results: Mapping[str, RaceResult],
    field_size: int,
) -> list[DriverPaceProfile]:
    """Order profiles by average pace and attach scores and ratings.

    The pace rank doubles as the finishing index for scoring. ``results``
    is keyed by ``driver_key``.
    """
    ordered = sorted(profiles, key=lambda profile: profile.avg_time)
    if not ordered:
        return []

    fastest_avg = ordered[0].avg_time
    scored = []
    for index, profile in enumerate(ordered):
        result = results.get(driver_key(profile.driver_id))
        start_pos = result.effective_grid(field_size) if result else field_size + 1
        finish_pos = index + 1
        relative_pace = profile.avg_time - fastest_avg
        tire_score = tire_management_score(
            profile.times_in_seconds,
            start_pos,
            finish_pos,
            profile.stints,
            profile.trend,
            index,
        )
        scored.append(
            replace(
                profile,
                constructor_name=result.constructor_name if result else "",
                grid_position=result.grid_position if result else 0,
                finish_position=result.finish_position if result else 0,
                pace_rank=finish_pos,
                relative_pace=relative_pace,
                pace_rating=RACE_PACE.rate(relative_pace),
                tire_score=tire_score,
                tire_rating=TIRE_SCORE.rate(tire_score),
                trend_rating=rate_trend(profile.trend, finish_pos, start_pos),
            )
        )

    logger.debug(f"Scored pace for {len(scored)} drivers")
    return scored
