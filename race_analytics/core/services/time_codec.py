"""Lap-time parsing, formatting and validity windows.

Raw lap times arrive as ``"M:SS.sss"`` strings (or bare seconds). Anything
that does not parse is reported as ``None`` rather than raised, so callers
can drop the record and carry on.
"""

import logging
import math
import re
from collections.abc import Iterable
from enum import Enum

from ..domain import LapRecord

logger = logging.getLogger(__name__)

_TIME_PATTERN = re.compile(r"^(?:(?P<minutes>\d+):)?(?P<seconds>\d+(?:\.\d+)?)$")

RACE_LAP_LIMIT_SECONDS = 120.0
STATS_LAP_LIMIT_SECONDS = 300.0


class LapWindow(Enum):
    """Plausible lap-time ranges for the different analysis contexts.

    RACE accepts ``0 < t <= 120`` and is used for pace/stint work, where
    safety-car and in/out laps would distort the statistics. STATS accepts
    ``0 < t < 300`` and is used for gaps, overtakes and charts.
    """

    RACE = "race"
    STATS = "stats"

    def accepts(self, seconds: float | None) -> bool:
        if seconds is None or not math.isfinite(seconds) or seconds <= 0:
            return False
        if self is LapWindow.RACE:
            return seconds <= RACE_LAP_LIMIT_SECONDS
        return seconds < STATS_LAP_LIMIT_SECONDS


def parse_time(raw: str | float | None) -> float | None:
    """Parse a lap time into seconds.

    Args:
        raw: ``"1:31.447"``, ``"91.447"`` or a number.

    Returns:
        Seconds as a float, or None when the value is empty, non-numeric,
        negative, or has a seconds field of 60 or more.
    """
    if raw is None:
        return None
    if isinstance(raw, int | float) and not isinstance(raw, bool):
        value = float(raw)
        return value if math.isfinite(value) and value >= 0 else None

    match = _TIME_PATTERN.match(str(raw).strip())
    if not match:
        return None

    seconds = float(match.group("seconds"))
    minutes = match.group("minutes")
    if minutes is None:
        return seconds
    if seconds >= 60:
        return None
    return int(minutes) * 60 + seconds


def format_time(seconds: float) -> str:
    """Format seconds as ``M:SS.sss``.

    The value is rounded to the millisecond before splitting so that
    ``59.9996`` becomes ``1:00.000`` rather than ``0:60.000``.
    """
    sign = "-" if seconds < 0 else ""
    millis = round(abs(seconds) * 1000)
    minutes, remainder = divmod(millis, 60_000)
    return f"{sign}{minutes}:{remainder / 1000:06.3f}"


def build_lap_record(
    driver_id: str, lap_number: int | str, raw_time: str | None
) -> LapRecord | None:
    """Create a LapRecord from raw data source fields, or None if unusable."""
    try:
        lap = int(lap_number)
    except (TypeError, ValueError):
        logger.debug(f"Dropping lap with bad lap number {lap_number!r} for {driver_id}")
        return None

    seconds = parse_time(raw_time)
    if lap < 1 or seconds is None or seconds <= 0:
        logger.debug(f"Dropping lap {lap_number} for {driver_id}: unusable time {raw_time!r}")
        return None
    return LapRecord(driver_id=driver_id, lap_number=lap, lap_time_seconds=seconds)


def normalize_laps(records: Iterable[LapRecord], window: LapWindow) -> list[LapRecord]:
    """Keep the records inside ``window``, ordered by driver and lap number.

    Returns a new list; the input records are never modified.
    """
    kept = [record for record in records if window.accepts(record.lap_time_seconds)]
    kept.sort(key=lambda record: (driver_key(record.driver_id), record.lap_number))
    return kept


def driver_key(driver_id: str) -> str:
    """Case-insensitive key; timing feeds and results disagree on driver id casing."""
    return driver_id.casefold()


def group_laps_by_driver(records: Iterable[LapRecord]) -> dict[str, list[LapRecord]]:
    """Group records by driver key, preserving each driver's input order."""
    grouped: dict[str, list[LapRecord]] = {}
    for record in records:
        grouped.setdefault(driver_key(record.driver_id), []).append(record)
    return grouped
