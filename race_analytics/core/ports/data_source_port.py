"""Data Source Port Interface."""

from abc import ABC, abstractmethod

from ..domain import LapRecord, QualifyingResult, RaceResult


class RaceDataSourcePort(ABC):
    """Abstract interface for a race data source.

    Implementations own any fetching, retrying and caching; the analysis
    service only ever sees the completed collections.
    """

    @abstractmethod
    def get_race_results(self, season: int, round_num: int) -> list[RaceResult]:
        """Get the race classification."""
        ...

    @abstractmethod
    def get_lap_times(
        self, season: int, round_num: int, driver_id: str | None = None
    ) -> list[LapRecord]:
        """Get lap times, optionally for a single driver."""
        ...

    @abstractmethod
    def get_qualifying_results(self, season: int, round_num: int) -> list[QualifyingResult]:
        """Get qualifying classification with Q1/Q2/Q3 times."""
        ...
