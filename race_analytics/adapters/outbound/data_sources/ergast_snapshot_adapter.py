"""Offline data source reading Ergast/Jolpica JSON snapshots from disk.

Snapshots are the raw API responses saved per race:

    <data_dir>/<season>/<round>/results.json
    <data_dir>/<season>/<round>/laps.json
    <data_dir>/<season>/<round>/qualifying.json
"""

import json
import logging
from pathlib import Path
from typing import Any

from ....core.domain import LapRecord, QualifyingResult, RaceResult
from ....core.domain.exceptions import DataValidationError, SnapshotNotFoundError
from ....core.ports.data_source_port import RaceDataSourcePort
from .ergast_parser import parse_lap_times, parse_qualifying_results, parse_race_results

logger = logging.getLogger(__name__)


class ErgastSnapshotSource(RaceDataSourcePort):
    """RaceDataSourcePort backed by saved Ergast/Jolpica responses."""

    def __init__(self, data_dir: Path) -> None:
        """Initialize the source.

        Args:
            data_dir: Root directory containing ``<season>/<round>/`` folders.
        """
        self.data_dir = Path(data_dir)

    def _load(self, season: int, round_num: int, name: str) -> dict[str, Any]:
        path = self.data_dir / str(season) / str(round_num) / f"{name}.json"
        context = {"season": season, "round": round_num, "path": str(path)}
        try:
            text = path.read_text(encoding="utf-8-sig")
        except FileNotFoundError as e:
            raise SnapshotNotFoundError(
                f"No {name} snapshot for {season} round {round_num}", cause=e, context=context
            ) from e

        try:
            payload = json.loads(text)
        except json.JSONDecodeError as e:
            raise DataValidationError(
                f"Snapshot {path.name} is not valid JSON", cause=e, context=context
            ) from e

        if not isinstance(payload, dict):
            raise DataValidationError(
                f"Snapshot {path.name} is not an MRData object", context=context
            )
        logger.debug(f"Loaded {path}")
        return payload

    def get_race_results(self, season: int, round_num: int) -> list[RaceResult]:
        results = parse_race_results(self._load(season, round_num, "results"))
        logger.info(f"Loaded {len(results)} race results for {season} round {round_num}")
        return results

    def get_lap_times(
        self, season: int, round_num: int, driver_id: str | None = None
    ) -> list[LapRecord]:
        laps = parse_lap_times(self._load(season, round_num, "laps"), driver_id=driver_id)
        logger.info(f"Loaded {len(laps)} lap records for {season} round {round_num}")
        return laps

    def get_qualifying_results(self, season: int, round_num: int) -> list[QualifyingResult]:
        results = parse_qualifying_results(self._load(season, round_num, "qualifying"))
        logger.info(f"Loaded {len(results)} qualifying results for {season} round {round_num}")
        return results
