"""
Pytest configuration and shared fixtures.
"""

import json
import logging
import shutil
import tempfile
from pathlib import Path

import pytest

from race_analytics.core.domain import LapRecord, QualifyingResult, RaceResult


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (read snapshot files)")
    config.addinivalue_line("markers", "slow: Slow tests")


def make_laps(driver_id, times, start=1):
    """LapRecords for consecutive laps starting at ``start``."""
    return [
        LapRecord(driver_id=driver_id, lap_number=start + i, lap_time_seconds=t)
        for i, t in enumerate(times)
    ]


@pytest.fixture
def lap_factory():
    """Build consecutive LapRecords: `lap_factory("leclerc", [90.1, 90.3])`."""
    return make_laps


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test data."""
    dir_path = Path(tempfile.mkdtemp(prefix="race_analytics_test_"))
    yield dir_path
    if dir_path.exists():
        shutil.rmtree(dir_path)


@pytest.fixture
def sample_race_results():
    """Three classified finishers (one from the pit lane) and a retirement."""
    return [
        RaceResult("max_verstappen", 1, 1, "Red Bull", "Dutch", position_text="1"),
        RaceResult("leclerc", 3, 2, "Ferrari", "Monegasque", position_text="2"),
        RaceResult("hamilton", 0, 3, "Mercedes", "British", position_text="3"),
        RaceResult("sainz", 2, 4, "Ferrari", "Spanish", position_text="R", status="Engine"),
    ]


@pytest.fixture
def sample_laps():
    """Short race: Verstappen fastest, Leclerc 0.5s off, Hamilton 1s off with 2 laps."""
    return (
        make_laps("max_verstappen", [90.0, 90.0, 90.0])
        + make_laps("leclerc", [90.5, 90.5, 90.5])
        + make_laps("hamilton", [91.0, 91.0])
        + make_laps("sainz", [90.2])
    )


@pytest.fixture
def sample_qualifying():
    """Qualifying with Q3, Q2-only, Q1-only and no valid time entries."""
    return [
        QualifyingResult("max_verstappen", 1, q1="1:30.000", q2="1:29.500", q3="1:29.000"),
        QualifyingResult("leclerc", 2, q1="1:30.200", q2="1:29.400"),
        QualifyingResult("hamilton", 3, q1="1:31.000"),
        QualifyingResult("sargeant", 20, q1="abc"),
    ]


def _envelope(race):
    return {"MRData": {"RaceTable": {"season": "2024", "round": "1", "Races": [race]}}}


@pytest.fixture
def results_payload():
    """Ergast results response for a three-car race."""
    return _envelope(
        {
            "raceName": "Bahrain Grand Prix",
            "Results": [
                {
                    "position": "1",
                    "positionText": "1",
                    "grid": "1",
                    "status": "Finished",
                    "Driver": {
                        "driverId": "max_verstappen",
                        "givenName": "Max",
                        "familyName": "Verstappen",
                        "nationality": "Dutch",
                    },
                    "Constructor": {"name": "Red Bull"},
                    "FastestLap": {"rank": "1", "Time": {"time": "1:32.608"}},
                },
                {
                    "position": "2",
                    "positionText": "2",
                    "grid": "0",
                    "status": "Finished",
                    "Driver": {
                        "driverId": "perez",
                        "givenName": "Sergio",
                        "familyName": "Pérez",
                        "nationality": "Mexican",
                    },
                    "Constructor": {"name": "Red Bull"},
                    "FastestLap": {"rank": "4"},
                },
                {
                    "position": "3",
                    "positionText": "R",
                    "grid": "2",
                    "status": "Brakes",
                    "Driver": {"driverId": "sainz", "nationality": "Spanish"},
                    "Constructor": {"name": "Ferrari"},
                },
            ],
        }
    )


@pytest.fixture
def laps_payload():
    """Ergast laps response with one unparsable timing row."""
    laps = []
    for number, (ver, per, sai) in enumerate(
        [
            ("1:37.284", "1:39.011", "1:38.100"),
            ("1:36.500", "1:36.912", "1:36.800"),
            ("1:36.400", "1:36.700", "bad"),
            ("1:36.300", "1:36.650", "1:36.500"),
        ],
        start=1,
    ):
        laps.append(
            {
                "number": str(number),
                "Timings": [
                    {"driverId": "max_verstappen", "position": "1", "time": ver},
                    {"driverId": "perez", "position": "2", "time": per},
                    {"driverId": "sainz", "position": "3", "time": sai},
                ],
            }
        )
    return _envelope({"raceName": "Bahrain Grand Prix", "Laps": laps})


@pytest.fixture
def qualifying_payload():
    """Ergast qualifying response."""
    return _envelope(
        {
            "raceName": "Bahrain Grand Prix",
            "QualifyingResults": [
                {
                    "position": "1",
                    "Driver": {"driverId": "max_verstappen"},
                    "Q1": "1:30.031",
                    "Q2": "1:29.374",
                    "Q3": "1:29.179",
                },
                {
                    "position": "2",
                    "Driver": {"driverId": "perez"},
                    "Q1": "1:30.221",
                    "Q2": "",
                },
                {"position": "x", "Driver": {"driverId": "broken"}},
            ],
        }
    )


@pytest.fixture
def snapshot_dir(temp_dir, results_payload, laps_payload, qualifying_payload):
    """Snapshot root containing 2024 round 1."""
    race_dir = temp_dir / "2024" / "1"
    race_dir.mkdir(parents=True)
    for name, payload in (
        ("results", results_payload),
        ("laps", laps_payload),
        ("qualifying", qualifying_payload),
    ):
        (race_dir / f"{name}.json").write_text(json.dumps(payload), encoding="utf-8")
    return temp_dir


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers added by setup_logging so they never outlive a test's streams."""
    yield
    logger = logging.getLogger("race_analytics")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
