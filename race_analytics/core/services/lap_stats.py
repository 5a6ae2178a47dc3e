"""Small descriptive statistics used across the analyzers.

Medians and quartiles use nearest-rank indexing on the sorted sample
(no interpolation), matching how the timing screens report them.
"""

import math
from collections.abc import Sequence
from statistics import fmean, pstdev


def mean(values: Sequence[float]) -> float:
    return fmean(values)


def median(values: Sequence[float]) -> float:
    """Upper median: ``sorted(values)[n // 2]``."""
    ordered = sorted(values)
    return ordered[len(ordered) // 2]


def std_dev(values: Sequence[float]) -> float:
    """Population standard deviation; 0.0 for a single value."""
    if len(values) < 2:
        return 0.0
    return pstdev(values)


def interquartile_range(values: Sequence[float]) -> float:
    ordered = sorted(values)
    q1 = ordered[math.floor(len(ordered) * 0.25)]
    q3 = ordered[math.floor(len(ordered) * 0.75)]
    return q3 - q1


def half_trend(values: Sequence[float]) -> float:
    """Mean of the second half minus mean of the first half.

    Negative values mean the later laps were faster. Samples shorter than
    two laps have no trend.
    """
    if len(values) < 2:
        return 0.0
    split = len(values) // 2
    return fmean(values[split:]) - fmean(values[:split])
