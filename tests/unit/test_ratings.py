"""Unit tests for the qualitative rating tables."""

import pytest

from race_analytics.core.domain import PerformanceTier
from race_analytics.core.services.ratings import (
    GAP_CONSISTENCY,
    OVERTAKES,
    RACE_PACE,
    STINT_CONSISTENCY,
    TIRE_SCORE,
    classify_against_best,
    rate_defence,
    rate_improvement,
    rate_trend,
)

pytestmark = pytest.mark.unit


class TestRatingScales:
    """Tests for threshold tables."""

    @pytest.mark.parametrize(
        "score,label",
        [
            (10.0, "Outstanding"),
            (9.5, "Outstanding"),
            (8.0, "Good"),
            (5.0, "Moderate"),
            (4.9, "Poor"),
        ],
    )
    def test_tire_score(self, score, label):
        assert TIRE_SCORE.rate(score) == label

    @pytest.mark.parametrize("stddev,label", [(0.49, "High"), (0.5, "Medium"), (1.0, "Low")])
    def test_stint_consistency_is_strict(self, stddev, label):
        assert STINT_CONSISTENCY.rate(stddev) == label

    def test_race_pace(self):
        assert RACE_PACE.rate(0.0) == "Fastest"
        assert RACE_PACE.rate(0.15) == "Outstanding"
        assert RACE_PACE.rate(1.0) == "Midfield"
        assert RACE_PACE.rate(1.5) == "Poor"

    def test_gap_consistency(self):
        assert GAP_CONSISTENCY.rate(0.2) == "Outstanding"
        assert GAP_CONSISTENCY.rate(2.0) == "Poor"

    def test_overtakes(self):
        assert OVERTAKES.rate(0) == "Limited"
        assert OVERTAKES.rate(3) == "Strong"
        assert OVERTAKES.rate(7) == "Exceptional"


class TestTrendRating:
    """Tests for rate_trend."""

    def test_winner_table(self):
        assert rate_trend(-0.4, 1, 1) == "Exceptional Pace"
        assert rate_trend(0.5, 1, 1) == "Conservative Pace"

    def test_podium_table(self):
        assert rate_trend(-0.25, 2, 3) == "Strong Pace"
        assert rate_trend(0.5, 3, 3) == "Steady Pace"

    def test_general_table_shifts_with_result(self):
        # points finish after gaining places tightens the cutoffs
        assert rate_trend(0.2, 5, 8) == "Slight Decline"
        # outside the points without a big recovery loosens them
        assert rate_trend(0.2, 15, 10) == "Stable"

    def test_general_improvement(self):
        assert rate_trend(-0.6, 8, 10) == "Exceptional Improvement"
        assert rate_trend(0.9, 12, 12) == "Strong Decline"


class TestOtherRatings:
    """Tests for improvement, defence and tier classification."""

    @pytest.mark.parametrize(
        "improvement,label",
        [(0.0, "None"), (0.1, "Slight"), (0.3, "Good"), (0.6, "Strong"), (1.2, "Outstanding")],
    )
    def test_rate_improvement(self, improvement, label):
        assert rate_improvement(improvement) == label

    def test_rate_defence(self):
        assert rate_defence(0, 2) == "Clean Race"
        assert rate_defence(0, 0) == "Solid"
        assert rate_defence(3, 0) == "Under Pressure"
        assert rate_defence(5, -3) == "Defensive"

    def test_classify_against_best(self):
        assert classify_against_best(100.0, 100.0) is PerformanceTier.FASTEST
        assert classify_against_best(100.9, 100.0) is PerformanceTier.WITHIN_1_PERCENT
        assert classify_against_best(101.5, 100.0) is PerformanceTier.WITHIN_2_PERCENT
        assert classify_against_best(103.0, 100.0) is PerformanceTier.SLOWER

    def test_tier_rank(self):
        assert [tier.rank for tier in PerformanceTier] == [1, 2, 3, 4]
        assert PerformanceTier.FASTEST == "fastest"
