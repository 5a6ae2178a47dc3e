"""Qualifying sector estimation.

The data source carries no real sector timing, so each sector is taken as
a fixed share of the driver's best qualifying lap. Swap the proportion
table for measured splits if they ever become available.
"""

import logging
from collections.abc import Sequence
from dataclasses import replace

from ..domain import (
    QualifyingResult,
    SectorAnalysis,
    SectorProfile,
    SectorTiers,
    SectorTimes,
)
from .ratings import SECTOR_TIME_LOST, classify_against_best, rate_improvement
from .time_codec import parse_time

logger = logging.getLogger(__name__)

SECTOR_PROPORTIONS = {"s1": 0.31, "s2": 0.36, "s3": 0.33}


def _valid_seconds(raw: str | None) -> float | None:
    seconds = parse_time(raw)
    return seconds if seconds is not None and seconds > 0 else None


def best_session_lap(result: QualifyingResult) -> tuple[str, float] | None:
    """The lap from the furthest session reached: Q3, else Q2, else Q1."""
    for raw in (result.q3, result.q2, result.q1):
        seconds = _valid_seconds(raw)
        if seconds is not None:
            return str(raw).strip(), seconds
    return None


def qualifying_improvement(result: QualifyingResult) -> float:
    """Percentage gained from Q1 to the driver's personal best; 0 if none."""
    q1 = _valid_seconds(result.q1)
    if q1 is None:
        return 0.0
    times = [t for t in (_valid_seconds(raw) for raw in (result.q1, result.q2, result.q3)) if t]
    personal_best = min(times)
    if personal_best >= q1:
        return 0.0
    return (q1 - personal_best) / q1 * 100


def estimate_sectors(lap_seconds: float) -> SectorTimes:
    return SectorTimes(
        s1=lap_seconds * SECTOR_PROPORTIONS["s1"],
        s2=lap_seconds * SECTOR_PROPORTIONS["s2"],
        s3=lap_seconds * SECTOR_PROPORTIONS["s3"],
    )


def build_sector_profile(result: QualifyingResult) -> SectorProfile:
    best = best_session_lap(result)
    improvement = qualifying_improvement(result)
    if best is None:
        return SectorProfile(
            driver_id=result.driver_id,
            position=result.position,
            sectors=None,
            best_lap=None,
            best_lap_seconds=None,
            improvement=improvement,
            improvement_rating=rate_improvement(improvement),
        )

    raw, seconds = best
    return SectorProfile(
        driver_id=result.driver_id,
        position=result.position,
        sectors=estimate_sectors(seconds),
        best_lap=raw,
        best_lap_seconds=seconds,
        improvement=improvement,
        improvement_rating=rate_improvement(improvement),
    )


def theoretical_best(profiles: Sequence[SectorProfile]) -> SectorTimes | None:
    """Sum of the fastest estimate in each sector, whoever set it."""
    estimates = [profile.sectors for profile in profiles if profile.sectors is not None]
    if not estimates:
        return None
    return SectorTimes(
        s1=min(sectors.s1 for sectors in estimates),
        s2=min(sectors.s2 for sectors in estimates),
        s3=min(sectors.s3 for sectors in estimates),
    )


def compare_to_session(profiles: Sequence[SectorProfile], best: SectorTimes) -> list[SectorProfile]:
    """Attach sector tiers, time lost and performance rating to each profile."""
    compared = []
    for profile in profiles:
        if profile.sectors is None:
            compared.append(profile)
            continue
        time_lost = profile.sectors.total - best.total
        compared.append(
            replace(
                profile,
                tiers=SectorTiers(
                    s1=classify_against_best(profile.sectors.s1, best.s1),
                    s2=classify_against_best(profile.sectors.s2, best.s2),
                    s3=classify_against_best(profile.sectors.s3, best.s3),
                ),
                time_lost=time_lost,
                performance_rating=SECTOR_TIME_LOST.rate(time_lost),
            )
        )
    return compared


def summarize_sectors(profiles: Sequence[SectorProfile]) -> SectorAnalysis:
    """Combine per-driver profiles with the session theoretical best."""
    best = theoretical_best(profiles)
    if best is None:
        logger.info("No valid qualifying times; sector analysis is empty")
        return SectorAnalysis(profiles=tuple(profiles), theoretical_best=None)
    return SectorAnalysis(
        profiles=tuple(compare_to_session(profiles, best)),
        theoretical_best=best,
    )
