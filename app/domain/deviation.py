"""
Deviation Classifier
====================
Decide whether a reading deviates from its ideal, in which direction, and how
badly.

Severity is based on the *relative* deviation (fraction of the violated
bound) so the same cut-offs work for percent, hours and degrees. A dead-band
below ``tolerance`` absorbs sensor noise.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from app.enums.common import AlertSeverity, DeviationDirection


@dataclass(frozen=True)
class SeverityThresholds:
    """
    Fractional cut-offs for the severity tiers.

    Attributes:
        tolerance: Deviations below this fraction are ignored (default 0.10)
        warning: Start of the warning tier (default 0.50)
        critical: Start of the critical tier (default 0.70)
    """

    tolerance: float = 0.10
    warning: float = 0.50
    critical: float = 0.70

    def __post_init__(self):
        if not (0 <= self.tolerance <= self.warning <= self.critical):
            raise ValueError(
                "Severity thresholds must satisfy 0 <= tolerance <= warning <= critical, "
                f"got {self.tolerance}/{self.warning}/{self.critical}"
            )

    def tier(self, fraction: float) -> AlertSeverity | None:
        """Map a relative deviation to a severity tier."""
        if fraction < self.tolerance:
            return None
        if fraction < self.warning:
            return AlertSeverity.INFO
        if fraction < self.critical:
            return AlertSeverity.WARNING
        return AlertSeverity.CRITICAL


DEFAULT_THRESHOLDS = SeverityThresholds()


@dataclass(frozen=True)
class DeviationResult:
    """A reading outside tolerance."""

    severity: AlertSeverity
    direction: DeviationDirection

    def to_dict(self) -> dict[str, str]:
        return {"severity": self.severity.value, "direction": self.direction.value}


def classify_deviation(
    value: Any,
    min_ideal: Any,
    max_ideal: Any = None,
    thresholds: SeverityThresholds = DEFAULT_THRESHOLDS,
) -> DeviationResult | None:
    """
    Classify ``value`` against ``[min_ideal, max_ideal]``.

    Args:
        value: Current reading (coerced to float)
        min_ideal: Lower bound, or the goal for goal-only metrics
        max_ideal: Upper bound; ``None`` means no ceiling is enforced
        thresholds: Severity cut-offs

    Returns:
        DeviationResult, or None when within tolerance or not classifiable
    """
    current = _finite(value)
    low = _finite(min_ideal)
    if current is None or low is None:
        return None

    if low > 0 and current < low:
        severity = thresholds.tier((low - current) / low)
        if severity is None:
            return None
        return DeviationResult(severity=severity, direction=DeviationDirection.LOW)

    high = _finite(max_ideal)
    if high is not None and high > 0 and current > high:
        severity = thresholds.tier((current - high) / high)
        if severity is None:
            return None
        return DeviationResult(severity=severity, direction=DeviationDirection.HIGH)

    return None


def _finite(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number
