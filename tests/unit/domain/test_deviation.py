"""
Unit tests for app.domain.deviation.

Severity tiers are fractions of the violated bound:
< 0.10 ignored, [0.10, 0.50) info, [0.50, 0.70) warning, >= 0.70 critical.
"""

import math

import pytest

from app.domain.deviation import DeviationResult, SeverityThresholds, classify_deviation
from app.enums.common import AlertSeverity, DeviationDirection


class TestLowDeviation:
    """Readings below the minimum (min = 100 makes fractions easy to read)."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (95, None),  # 0.05
            (85, AlertSeverity.INFO),  # 0.15
            (45, AlertSeverity.WARNING),  # 0.55
            (25, AlertSeverity.CRITICAL),  # 0.75
        ],
    )
    def test_tiers(self, value, expected):
        result = classify_deviation(value, 100, 200)
        if expected is None:
            assert result is None
        else:
            assert result == DeviationResult(expected, DeviationDirection.LOW)

    def test_tier_boundaries_are_inclusive_at_lower_edge(self):
        assert classify_deviation(90, 100).severity is AlertSeverity.INFO
        assert classify_deviation(50, 100).severity is AlertSeverity.WARNING
        assert classify_deviation(30, 100).severity is AlertSeverity.CRITICAL

    def test_soil_example(self):
        result = classify_deviation(30, 35, 55)
        assert result == DeviationResult(AlertSeverity.INFO, DeviationDirection.LOW)

    def test_zero_minimum_never_reports_low(self):
        assert classify_deviation(-5, 0, 10) is None


class TestHighDeviation:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (105, None),
            (115, AlertSeverity.INFO),
            (155, AlertSeverity.WARNING),
            (175, AlertSeverity.CRITICAL),
        ],
    )
    def test_tiers(self, value, expected):
        result = classify_deviation(value, 50, 100)
        if expected is None:
            assert result is None
        else:
            assert result == DeviationResult(expected, DeviationDirection.HIGH)

    def test_mirrored_deviation_has_same_tier(self):
        low = classify_deviation(85, 100, 100)
        high = classify_deviation(115, 100, 100)
        assert low.severity == high.severity
        assert low.direction is DeviationDirection.LOW
        assert high.direction is DeviationDirection.HIGH

    def test_missing_maximum_means_no_ceiling(self):
        assert classify_deviation(1000, 6) is None
        assert classify_deviation(1000, 6, None) is None


class TestUnclassifiable:
    @pytest.mark.parametrize("value", [None, "wet", True, math.nan, math.inf, [], {}])
    def test_non_numeric_reading(self, value):
        assert classify_deviation(value, 35, 55) is None

    @pytest.mark.parametrize("minimum", [None, "low", False, math.nan])
    def test_non_numeric_minimum(self, minimum):
        assert classify_deviation(10, minimum, 55) is None

    def test_numeric_strings_are_coerced(self):
        assert classify_deviation("30", "35", "55").severity is AlertSeverity.INFO

    def test_within_range(self):
        assert classify_deviation(45, 35, 55) is None


class TestSeverityThresholds:
    def test_custom_thresholds(self):
        strict = SeverityThresholds(tolerance=0.0, warning=0.2, critical=0.4)
        assert classify_deviation(99, 100, thresholds=strict).severity is AlertSeverity.INFO
        assert classify_deviation(75, 100, thresholds=strict).severity is AlertSeverity.WARNING

    def test_rejects_misordered_tiers(self):
        with pytest.raises(ValueError):
            SeverityThresholds(tolerance=0.6, warning=0.5, critical=0.7)
        with pytest.raises(ValueError):
            SeverityThresholds(tolerance=-0.1)

    def test_to_dict(self):
        result = DeviationResult(AlertSeverity.WARNING, DeviationDirection.HIGH)
        assert result.to_dict() == {"severity": "warning", "direction": "high"}
