"""ASCII lap-time progression chart for a single driver."""

import logging
import math
from collections.abc import Iterable, Iterator, Sequence

from ..domain import (
    ChartPoint,
    ChartResult,
    InsufficientData,
    LapRecord,
    LapStatistics,
    PerformanceTier,
)
from . import lap_stats
from .ratings import LAP_CONSISTENCY, classify_against_best
from .time_codec import LapWindow

logger = logging.getLogger(__name__)

CHART_WIDTH = 60
CHART_HEIGHT = 20
Y_AXIS_COLUMN = 6
PLOT_ORIGIN_X = Y_AXIS_COLUMN + 1
TICK_COUNT = 5
LABEL_WIDTH = 5
PADDING_RATIO = 0.1
FLAT_PADDING_SECONDS = 1.0
MIN_CHART_LAPS = 3

MARKERS = {
    PerformanceTier.FASTEST: "#",
    PerformanceTier.WITHIN_1_PERCENT: "*",
    PerformanceTier.WITHIN_2_PERCENT: "+",
    PerformanceTier.SLOWER: "o",
}


def lap_points(records: Iterable[LapRecord]) -> Iterator[tuple[int, float]]:
    """Yield ``(lap, seconds)`` in lap order, skipping implausible times."""
    for record in sorted(records, key=lambda record: record.lap_number):
        if LapWindow.STATS.accepts(record.lap_time_seconds):
            yield record.lap_number, record.lap_time_seconds


def lap_statistics(times: Sequence[float]) -> LapStatistics:
    consistency = lap_stats.std_dev(times)
    return LapStatistics(
        best_lap=min(times),
        average=lap_stats.mean(times),
        median=lap_stats.median(times),
        range=max(times) - min(times),
        consistency=consistency,
        consistency_rating=LAP_CONSISTENCY.rate(consistency),
    )


def _write(row: list[str], start: int, text: str) -> None:
    for offset, char in enumerate(text):
        if 0 <= start + offset < len(row):
            row[start + offset] = char


def render_chart(
    points: Sequence[tuple[int, float]],
    width: int = CHART_WIDTH,
    height: int = CHART_HEIGHT,
) -> ChartResult | InsufficientData:
    """Plot lap times onto a fixed character grid.

    The y-axis spans the fastest to slowest lap with 10% padding either
    side; the fastest lap and laps within 1% / 2% of it get distinct
    markers.

    Args:
        points: ``(lap, seconds)`` pairs in lap order.
        width: Grid width in characters.
        height: Grid height in rows, including the x-axis row.

    Returns:
        The chart, or InsufficientData when fewer than three laps remain.
    """
    if len(points) < MIN_CHART_LAPS:
        logger.info(f"Not enough laps to chart: {len(points)} < {MIN_CHART_LAPS}")
        return InsufficientData(
            reason="Not enough valid lap times to generate plot",
            valid_laps=len(points),
            required=MIN_CHART_LAPS,
        )

    times = [seconds for _, seconds in points]
    fastest, slowest = min(times), max(times)
    time_range = slowest - fastest
    padding = time_range * PADDING_RATIO if time_range > 0 else FLAT_PADDING_SECONDS
    axis_low = fastest - padding
    axis_span = time_range + 2 * padding
    plot_rows = height - 2

    grid = [[" "] * width for _ in range(height)]
    for row in grid:
        row[Y_AXIS_COLUMN] = "|"
    for column in range(Y_AXIS_COLUMN, width):
        grid[height - 1][column] = "-"

    y_ticks = []
    for index in range(TICK_COUNT):
        value = axis_low + axis_span * (TICK_COUNT - 1 - index) / (TICK_COUNT - 1)
        y = math.floor(index / (TICK_COUNT - 1) * plot_rows)
        _write(grid[y], 0, f"{value:>{LABEL_WIDTH}.1f}"[:LABEL_WIDTH])
        grid[y][Y_AXIS_COLUMN - 1] = "+"
        y_ticks.append(value)

    chart_points = []
    last_index = len(points) - 1
    for index, (lap, seconds) in enumerate(points):
        x = PLOT_ORIGIN_X + math.floor((width - PLOT_ORIGIN_X - 1) * index / last_index)
        normalized = (seconds - axis_low) / axis_span
        y = math.floor((1 - normalized) * plot_rows)
        tier = classify_against_best(seconds, fastest)
        if 0 <= y < height - 1:
            grid[y][x] = MARKERS[tier]
        chart_points.append(ChartPoint(lap=lap, time=seconds, x=x, y=y, tier=tier))

    label_indexes = dict.fromkeys((0, len(points) // 2, last_index))
    x_labels = []
    for index in label_indexes:
        lap = points[index][0]
        label = str(lap)
        _write(grid[height - 1], min(chart_points[index].x, width - len(label)), label)
        x_labels.append(lap)

    return ChartResult(
        rows=tuple("".join(row) for row in grid),
        points=tuple(chart_points),
        y_ticks=tuple(y_ticks),
        x_labels=tuple(x_labels),
        statistics=lap_statistics(times),
        width=width,
        height=height,
    )
