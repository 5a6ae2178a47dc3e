"""Input records supplied by the data source for one session."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LapRecord:
    """One timed lap for one driver.

    Attributes:
        driver_id: Data source driver identifier (e.g. "max_verstappen").
        lap_number: 1-based lap number.
        lap_time_seconds: Lap time in seconds, always positive.
    """

    driver_id: str
    lap_number: int
    lap_time_seconds: float


@dataclass(frozen=True)
class RaceResult:
    """Final classification entry for one driver in a race.

    Attributes:
        driver_id: Data source driver identifier.
        grid_position: Starting slot; 0 means a pit-lane start.
        finish_position: Final classified (or ordered) position.
        constructor_name: Team name.
        nationality: Driver nationality.
        is_fastest_lap: Whether the driver set the race's fastest lap.
        position_text: Raw classification text ("1", "R", "D", ...).
        status: Finishing status ("Finished", "+1 Lap", "Engine", ...).
    """

    driver_id: str
    grid_position: int
    finish_position: int
    constructor_name: str
    nationality: str
    is_fastest_lap: bool = False
    position_text: str | None = None
    status: str = "Finished"

    @property
    def is_pit_lane_start(self) -> bool:
        return self.grid_position == 0

    def effective_grid(self, field_size: int) -> int:
        """Grid slot used for position arithmetic; pit-lane starts go behind the field."""
        return field_size + 1 if self.is_pit_lane_start else self.grid_position


@dataclass(frozen=True)
class QualifyingResult:
    """Qualifying classification with raw session times.

    Times are kept as the raw strings the data source supplied ("1:29.708")
    or None when the driver did not set a time in that session.
    """

    driver_id: str
    position: int
    q1: str | None = None
    q2: str | None = None
    q3: str | None = None
