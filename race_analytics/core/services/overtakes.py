"""Overtake reconstruction from lap times.

Positions are estimated by ranking every driver's time for a single lap
number, not by accumulating race time. This diverges from the real running
order after pit stops or in lapped traffic; it is a known approximation of
the timing feed, kept as-is.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import replace

from ..domain import LapRecord, Overtake, OvertakeRecord, PositionLoss, RaceResult
from .ratings import OVERTAKES, rate_defence
from .time_codec import driver_key

logger = logging.getLogger(__name__)

# A lap this much faster than the previous one suggests a DRS-assisted pass.
DRS_TIME_GAIN_THRESHOLD = -0.6


def laps_by_driver(records: Iterable[LapRecord]) -> dict[str, dict[int, float]]:
    """``{driver_key: {lap_number: seconds}}``; later duplicates win."""
    laps: dict[str, dict[int, float]] = {}
    for record in records:
        driver_laps = laps.setdefault(driver_key(record.driver_id), {})
        driver_laps[record.lap_number] = record.lap_time_seconds
    return laps


def lap_rankings(laps: Mapping[str, Mapping[int, float]]) -> dict[int, dict[str, int]]:
    """Per lap number, the 1-based rank of each driver's time on that lap.

    Drivers without a time on a lap are absent from that lap's ranking.
    Equal times keep the input order of ``laps``.
    """
    entries: dict[int, list[tuple[float, str]]] = {}
    for key, driver_laps in laps.items():
        for lap_number, seconds in driver_laps.items():
            entries.setdefault(lap_number, []).append((seconds, key))

    rankings: dict[int, dict[str, int]] = {}
    for lap_number, lap_entries in entries.items():
        ordered = sorted(lap_entries, key=lambda entry: entry[0])
        rankings[lap_number] = {key: rank for rank, (_, key) in enumerate(ordered, start=1)}
    return rankings


def is_drs_gain(driver_laps: Mapping[int, float], lap_number: int) -> bool:
    current = driver_laps.get(lap_number)
    previous = driver_laps.get(lap_number - 1)
    if current is None or previous is None:
        return False
    return current - previous < DRS_TIME_GAIN_THRESHOLD


def reconstruct_overtakes(
    result: RaceResult,
    driver_laps: Mapping[int, float],
    rankings: Mapping[int, Mapping[str, int]],
    max_lap: int,
    field_size: int,
) -> OvertakeRecord:
    """Walk laps 1..max_lap and record reconstructed position changes.

    Lap 1 seeds the previous position with the grid slot; every later lap
    the driver has a time for is compared with the last known position.

    Args:
        result: The driver's race classification.
        driver_laps: The driver's ``{lap_number: seconds}``.
        rankings: Output of ``lap_rankings`` for the whole field.
        max_lap: Highest lap number in the session.
        field_size: Number of race result entries, for pit-lane starts.
    """
    key = driver_key(result.driver_id)
    start_pos = result.effective_grid(field_size)
    overtakes: list[Overtake] = []
    losses: list[PositionLoss] = []

    previous = start_pos
    for lap_number in range(2, max_lap + 1):
        current = rankings.get(lap_number, {}).get(key)
        if current is None:
            continue
        if current < previous:
            overtakes.append(
                Overtake(
                    lap=lap_number,
                    positions_gained=previous - current,
                    is_drs=is_drs_gain(driver_laps, lap_number),
                )
            )
        elif current > previous:
            losses.append(PositionLoss(lap=lap_number, positions_lost=current - previous))
        previous = current

    net_gain = start_pos - result.finish_position
    record = OvertakeRecord(
        driver_id=result.driver_id,
        start_pos=start_pos,
        finish_pos=result.finish_position,
        overtakes=tuple(overtakes),
        total_positions_gained=max(0, net_gain),
        position_losses=tuple(losses),
        constructor_name=result.constructor_name,
    )
    logger.debug(
        f"{result.driver_id}: {record.total_moves} places gained, {record.total_losses} lost"
    )
    return replace(
        record,
        overtake_rating=OVERTAKES.rate(record.total_moves),
        defence_rating=rate_defence(record.total_losses, net_gain),
    )
