"""Analysis entry points.

Each entry point takes already-fetched results and laps, normalizes them
through the time codec, runs one analysis and returns plain value objects.
Entry points never call each other and keep no state between calls.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import replace
from typing import TypeVar

from ...common.exception_handler import handle_exception
from ..domain import (
    ChartResult,
    DriverPaceProfile,
    GapProfile,
    InsufficientData,
    LapRecord,
    OvertakeRecord,
    QualifyingResult,
    RaceResult,
    SectorAnalysis,
)
from ..domain.exceptions import DriverAnalysisError, MixedDriverLapsError
from .chart import lap_points, render_chart
from .gaps import analyze_driver_gaps, finishing_order
from .overtakes import lap_rankings, laps_by_driver, reconstruct_overtakes
from .pace import build_pace_profile, rank_pace_profiles
from .sectors import build_sector_profile, summarize_sectors
from .time_codec import LapWindow, driver_key, group_laps_by_driver, normalize_laps

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RaceAnalysisService:
    """Stateless facade over the five race analyses.

    A failure while analyzing one driver is logged and that driver is left
    out; the rest of the field is still returned.
    """

    def _for_driver(
        self, operation: str, driver_id: str, compute: Callable[..., T], *args: object
    ) -> T | None:
        try:
            return compute(*args)
        except Exception as e:  # noqa: BLE001
            error = DriverAnalysisError(
                f"{operation} analysis failed for {driver_id}",
                cause=e,
                context={"operation": operation, "driver": driver_id},
            )
            handle_exception(error, reraise=False, log=logger, level=logging.WARNING)
            return None

    def pace(
        self, race_results: Sequence[RaceResult], lap_records: Sequence[LapRecord]
    ) -> list[DriverPaceProfile]:
        """Race pace profiles ordered from fastest to slowest average lap.

        Uses race-lap validity (``0 < t <= 120``) so safety-car and pit laps
        do not skew the statistics.
        """
        laps = group_laps_by_driver(normalize_laps(lap_records, LapWindow.RACE))
        profiles = []
        for result in race_results:
            profile = self._for_driver(
                "pace",
                result.driver_id,
                build_pace_profile,
                result.driver_id,
                laps.get(driver_key(result.driver_id), []),
            )
            if profile is not None:
                profiles.append(profile)

        results_by_key = {driver_key(result.driver_id): result for result in race_results}
        ranked = rank_pace_profiles(profiles, results_by_key, field_size=len(race_results))
        logger.info(f"Pace analysis produced {len(ranked)} driver profiles")
        return ranked

    def gap(
        self, race_results: Sequence[RaceResult], lap_records: Sequence[LapRecord]
    ) -> list[GapProfile]:
        """Gap profiles for every driver with laps, in finishing order.

        Retired drivers are included; their shorter lap series truncate the
        index-aligned deltas.
        """
        laps = group_laps_by_driver(normalize_laps(lap_records, LapWindow.STATS))
        times_by_driver = {
            key: [record.lap_time_seconds for record in records] for key, records in laps.items()
        }
        finishers = finishing_order(race_results)
        if not finishers:
            logger.info("No race results; gap analysis is empty")
            return []

        profiles = []
        for result in finishers:
            profile = self._for_driver(
                "gap", result.driver_id, analyze_driver_gaps, result, finishers, times_by_driver
            )
            if profile is not None:
                profiles.append(profile)
        return profiles

    def sector(self, qualifying_results: Sequence[QualifyingResult]) -> SectorAnalysis:
        """Estimated sector times, tiers and the session's theoretical best lap."""
        profiles = []
        for result in qualifying_results:
            profile = self._for_driver("sector", result.driver_id, build_sector_profile, result)
            if profile is not None:
                profiles.append(profile)
        return summarize_sectors(profiles)

    def overtake(
        self, race_results: Sequence[RaceResult], lap_records: Sequence[LapRecord]
    ) -> list[OvertakeRecord]:
        """Reconstructed overtakes per driver, in the order of ``race_results``."""
        laps = laps_by_driver(normalize_laps(lap_records, LapWindow.STATS))
        rankings = lap_rankings(laps)
        max_lap = max(rankings, default=0)

        records = []
        for result in race_results:
            record = self._for_driver(
                "overtake",
                result.driver_id,
                reconstruct_overtakes,
                result,
                laps.get(driver_key(result.driver_id), {}),
                rankings,
                max_lap,
                len(race_results),
            )
            if record is not None:
                records.append(record)
        return records

    def plot(
        self, lap_records: Sequence[LapRecord], driver_id: str | None = None
    ) -> ChartResult | InsufficientData:
        """Lap-time progression chart for one driver.

        Args:
            lap_records: The driver's laps. A full-field list is accepted
                when ``driver_id`` selects the driver to plot.
            driver_id: Optional driver filter.

        Raises:
            MixedDriverLapsError: If no ``driver_id`` is given and the laps
                belong to more than one driver.
        """
        if driver_id is not None:
            wanted = driver_key(driver_id)
            lap_records = [
                record for record in lap_records if driver_key(record.driver_id) == wanted
            ]

        drivers = {driver_key(record.driver_id) for record in lap_records}
        if len(drivers) > 1:
            raise MixedDriverLapsError(
                "plot expects laps for a single driver",
                context={"drivers": sorted(drivers)},
            )

        chart = render_chart(list(lap_points(lap_records)))
        if isinstance(chart, InsufficientData):
            plotted = driver_id or (lap_records[0].driver_id if lap_records else None)
            return replace(chart, driver_id=plotted)
        return chart
