"""Unit tests for stint segmentation and lap statistics."""

import pytest

from race_analytics.core.services import lap_stats
from race_analytics.core.services.stints import MIN_STINT_LAPS, segment_stints

pytestmark = pytest.mark.unit


class TestSegmentStints:
    """Tests for segment_stints."""

    def test_single_stint(self):
        """Four steady laps form one stint."""
        stints = segment_stints([(1, 90.000), (2, 90.200), (3, 89.800), (4, 90.100)])

        assert len(stints) == 1
        stint = stints[0]
        assert stint.number == 1
        assert (stint.start_lap, stint.end_lap, stint.lap_count) == (1, 4, 4)
        assert stint.best_lap == pytest.approx(89.8)
        assert stint.worst_lap == pytest.approx(90.2)
        assert stint.avg_time == pytest.approx(90.025)
        assert stint.consistency > 0

    def test_lap_number_gap_starts_new_stint(self):
        """Skipping more than three lap numbers splits the stint at the new lap."""
        stints = segment_stints([(1, 90.0), (2, 90.1), (3, 90.0), (7, 91.0), (8, 90.9), (9, 91.1)])

        assert [(s.start_lap, s.end_lap, s.lap_count) for s in stints] == [(1, 3, 3), (7, 9, 3)]
        assert [s.number for s in stints] == [1, 2]

    def test_gap_of_exactly_three_laps_continues(self):
        stints = segment_stints([(1, 90.0), (2, 90.1), (5, 90.2)])
        assert len(stints) == 1

    def test_lap_time_jump_starts_new_stint(self):
        laps = [(1, 90.0), (2, 90.1), (3, 90.2), (4, 94.0), (5, 93.8), (6, 93.9)]
        stints = segment_stints(laps)
        assert [(s.start_lap, s.lap_count) for s in stints] == [(1, 3), (4, 3)]

    def test_short_fragments_are_discarded(self):
        """Two-lap fragments are dropped, not merged into the next stint."""
        laps = [(1, 90.0), (2, 90.1), (8, 91.0), (9, 91.1), (10, 91.0)]
        stints = segment_stints(laps)

        assert len(stints) == 1
        assert stints[0].start_lap == 8
        assert stints[0].number == 1

    def test_two_laps_produce_no_stints(self):
        assert segment_stints([(1, 90.0), (2, 90.1)]) == []

    def test_empty_input(self):
        assert segment_stints([]) == []

    def test_every_stint_meets_minimum_and_never_exceeds_laps(self):
        laps = [(n, 90.0 + (n % 5) * 0.3) for n in range(1, 40) if n not in (12, 13, 14, 15, 26)]
        stints = segment_stints(laps)

        assert all(stint.lap_count >= MIN_STINT_LAPS for stint in stints)
        assert sum(stint.lap_count for stint in stints) <= len(laps)

    def test_identical_laps_have_zero_consistency(self):
        stint = segment_stints([(1, 90.0), (2, 90.0), (3, 90.0)])[0]
        assert stint.consistency == 0.0
        assert stint.range == 0.0
        assert stint.trend == 0.0
        assert stint.consistency_rating == "High"

    def test_trend_negative_when_improving(self):
        stint = segment_stints([(1, 91.0), (2, 90.8), (3, 90.4), (4, 90.2)])[0]
        assert stint.trend == pytest.approx(-0.6)


class TestLapStats:
    """Tests for the shared statistics helpers."""

    def test_upper_median(self):
        assert lap_stats.median([4.0, 1.0, 3.0, 2.0]) == 3.0
        assert lap_stats.median([2.0, 1.0, 3.0]) == 2.0

    def test_population_std_dev(self):
        assert lap_stats.std_dev([1.0, 3.0]) == pytest.approx(1.0)
        assert lap_stats.std_dev([5.0]) == 0.0

    def test_interquartile_range_nearest_rank(self):
        values = [float(v) for v in range(1, 9)]
        # floor(8 * 0.25) = 2 -> 3.0, floor(8 * 0.75) = 6 -> 7.0
        assert lap_stats.interquartile_range(values) == 4.0

    def test_half_trend_odd_length(self):
        # first half [1], second half [2, 3]
        assert lap_stats.half_trend([1.0, 2.0, 3.0]) == pytest.approx(1.5)
        assert lap_stats.half_trend([1.0]) == 0.0
