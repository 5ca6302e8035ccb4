"""
Ideal Range Value Objects
=========================
Parse human-authored ideal descriptors ("35–55%", "6h", "20–28°C") into
structured ranges or single goals.

The parser has no error path: anything it cannot read becomes ``None`` and
callers treat that as "cannot evaluate this metric".
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Union

_NUMBER_RE = re.compile(r"[\d.]+")


@dataclass(frozen=True)
class IdealRange:
    """Acceptable interval for a metric (first number is ``min``)."""

    min: float
    max: float

    def to_dict(self) -> dict[str, float]:
        return {"min": self.min, "max": self.max}

    def describe(self, unit: str = "") -> str:
        return f"{format_number(self.min)}–{format_number(self.max)}{unit}"

    @staticmethod
    def from_dict(data: Any) -> IdealRange | None:
        """Build from ``{"min": .., "max": ..}``; ``None`` if either bound is missing."""
        if not isinstance(data, dict):
            return None
        low = _to_float(data.get("min"))
        high = _to_float(data.get("max"))
        if low is None or high is None:
            return None
        return IdealRange(min=low, max=high)


@dataclass(frozen=True)
class IdealGoal:
    """Single target value (e.g. hours of light per day)."""

    goal: float

    def to_dict(self) -> dict[str, float]:
        return {"goal": self.goal}


ParsedIdeal = Union[IdealRange, IdealGoal]


def parse_ideal(text: str | None) -> ParsedIdeal | None:
    """
    Parse an ideal descriptor string.

    Two or more numeric tokens give ``IdealRange(first, second)``; the pair is
    not reordered. One token gives ``IdealGoal``. No tokens, or empty input,
    give ``None``.

    Examples:
        >>> parse_ideal("35–55%")
        IdealRange(min=35.0, max=55.0)
        >>> parse_ideal("6h")
        IdealGoal(goal=6.0)
    """
    if not text or not isinstance(text, str):
        return None

    numbers: list[float] = []
    for token in _NUMBER_RE.findall(text):
        value = _to_float(token)
        if value is not None:
            numbers.append(value)

    if len(numbers) >= 2:
        return IdealRange(min=numbers[0], max=numbers[1])
    if len(numbers) == 1:
        return IdealGoal(goal=numbers[0])
    return None


def ideal_bounds(ideal: ParsedIdeal | None) -> tuple[float, float | None] | None:
    """Return ``(min, max)`` for the classifier; goals have no upper bound."""
    if isinstance(ideal, IdealRange):
        return ideal.min, ideal.max
    if isinstance(ideal, IdealGoal):
        return ideal.goal, None
    return None


def format_number(value: Any) -> str:
    """Render a reading the way the dashboard shows it (``30`` not ``30.0``)."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _to_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None
