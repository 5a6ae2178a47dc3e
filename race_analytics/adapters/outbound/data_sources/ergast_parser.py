"""Parse Ergast/Jolpica ``MRData`` payloads into domain records.

Malformed entries are skipped with a debug log rather than failing the
whole payload, mirroring how the timing feed is consumed upstream.
"""

import logging
from typing import Any

from ....core.domain import LapRecord, QualifyingResult, RaceResult
from ....core.services.time_codec import build_lap_record

logger = logging.getLogger(__name__)


def _first_race(payload: dict[str, Any]) -> dict[str, Any]:
    try:
        races = payload["MRData"]["RaceTable"]["Races"]
    except (KeyError, TypeError) as e:
        logger.debug(f"Payload has no RaceTable: {e}")
        return {}
    return races[0] if races else {}


def _to_int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def parse_race_results(payload: dict[str, Any]) -> list[RaceResult]:
    """Build RaceResults from a ``/{season}/{round}/results`` payload."""
    results = []
    for entry in _first_race(payload).get("Results", []):
        try:
            driver = entry["Driver"]
            results.append(
                RaceResult(
                    driver_id=driver["driverId"],
                    grid_position=_to_int(entry.get("grid")),
                    finish_position=int(entry["position"]),
                    constructor_name=entry.get("Constructor", {}).get("name", ""),
                    nationality=driver.get("nationality", ""),
                    is_fastest_lap=entry.get("FastestLap", {}).get("rank") == "1",
                    position_text=entry.get("positionText"),
                    status=entry.get("status", "Finished"),
                )
            )
        except (KeyError, TypeError, ValueError) as e:
            logger.debug(f"Skipping malformed result entry: {e}")
    return results


def parse_lap_times(payload: dict[str, Any], driver_id: str | None = None) -> list[LapRecord]:
    """Build LapRecords from a ``/{season}/{round}/laps`` payload.

    Args:
        payload: The decoded JSON envelope.
        driver_id: If given, keep only this driver's laps (case-insensitive).
    """
    wanted = driver_id.casefold() if driver_id else None
    records = []
    for lap in _first_race(payload).get("Laps", []):
        lap_number = lap.get("number")
        for timing in lap.get("Timings", []):
            timing_driver = timing.get("driverId")
            if not timing_driver:
                continue
            if wanted and timing_driver.casefold() != wanted:
                continue
            record = build_lap_record(timing_driver, lap_number, timing.get("time"))
            if record is not None:
                records.append(record)
    return records


def parse_qualifying_results(payload: dict[str, Any]) -> list[QualifyingResult]:
    """Build QualifyingResults from a ``/{season}/{round}/qualifying`` payload."""
    results = []
    for entry in _first_race(payload).get("QualifyingResults", []):
        try:
            results.append(
                QualifyingResult(
                    driver_id=entry["Driver"]["driverId"],
                    position=int(entry["position"]),
                    q1=entry.get("Q1") or None,
                    q2=entry.get("Q2") or None,
                    q3=entry.get("Q3") or None,
                )
            )
        except (KeyError, TypeError, ValueError) as e:
            logger.debug(f"Skipping malformed qualifying entry: {e}")
    return results
