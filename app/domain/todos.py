"""
Todo Builder
============
Enumerate today's care tasks from a plant snapshot.

Sensor-backed tasks (watering, light, temperature, humidity) go through the
deviation classifier when the ideal is a range. Goal-only ideals are only
checked for "below goal". Trimming and pruning come straight from the manual
flags on the row. The builder keeps no state and is re-run on every refresh.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from app.domain.deviation import DEFAULT_THRESHOLDS, SeverityThresholds, classify_deviation
from app.domain.ideal_range import IdealGoal, IdealRange, ParsedIdeal, format_number, parse_ideal
from app.domain.plant_snapshot import PlantSnapshot, TodayFlags
from app.enums.common import DeviationDirection, TodoKind


@dataclass(frozen=True)
class TodoItem:
    """One open care task; ``id`` is the kind, so at most one per kind."""

    id: TodoKind
    label: str
    description: str

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id.value, "label": self.label, "description": self.description}


@dataclass(frozen=True)
class TodoPartition:
    active: tuple[TodoItem, ...]
    done: tuple[TodoItem, ...]

    @property
    def total(self) -> int:
        return len(self.active) + len(self.done)


def build_todos(snapshot: PlantSnapshot, thresholds: SeverityThresholds = DEFAULT_THRESHOLDS) -> list[TodoItem]:
    """Return today's todos in display order; never raises."""
    todos: list[TodoItem] = []
    metrics = snapshot.metrics

    watering = _watering_todo(metrics.soil_moisture.value, metrics.soil_moisture.ideal, thresholds)
    if watering:
        todos.append(watering)

    light = _light_todo(metrics.light_today.value, metrics.light_today.ideal, thresholds)
    if light:
        todos.append(light)

    temperature = _temperature_todo(metrics.temperature.value, metrics.temperature.ideal, thresholds)
    if temperature:
        todos.append(temperature)

    humidity = _humidity_todo(snapshot, thresholds)
    if humidity:
        todos.append(humidity)

    if snapshot.today.needs_trimming:
        todos.append(
            TodoItem(TodoKind.TRIMMING, "Trim plant", "Remove dead or overgrown branches")
        )
    if snapshot.today.needs_pruning:
        todos.append(
            TodoItem(TodoKind.PRUNING, "Prune plant", "Prune lower leaves for better air circulation")
        )

    return todos


def partition_todos(
    todos: Iterable[TodoItem],
    submitted: Iterable[TodoKind],
    today: TodayFlags,
) -> TodoPartition:
    """
    Split todos into active and done.

    A todo is done when it was submitted this cycle, or when it is a manual
    kind (trimming, pruning) whose logged flag is already set.
    """
    submitted_kinds = set(submitted)
    active: list[TodoItem] = []
    done: list[TodoItem] = []
    for todo in todos:
        if todo.id in submitted_kinds or (todo.id.is_manual and today.is_logged(todo.id)):
            done.append(todo)
        else:
            active.append(todo)
    return TodoPartition(active=tuple(active), done=tuple(done))


# ---------------------------------------------------------------------------
# Per-kind builders
# ---------------------------------------------------------------------------


def _direction(
    value: Any, ideal: ParsedIdeal | None, thresholds: SeverityThresholds
) -> tuple[DeviationDirection | None, float | None]:
    """Return the deviation direction and the numeric reading (if any)."""
    if ideal is None:
        return None, None
    try:
        current = float(value)
    except (TypeError, ValueError):
        return None, None

    if isinstance(ideal, IdealRange):
        result = classify_deviation(current, ideal.min, ideal.max, thresholds)
        return (result.direction if result else None), current
    if isinstance(ideal, IdealGoal) and current < ideal.goal:
        return DeviationDirection.LOW, current
    return None, current


def _watering_todo(value: Any, ideal_text: str, thresholds: SeverityThresholds) -> TodoItem | None:
    direction, current = _direction(value, parse_ideal(ideal_text), thresholds)
    if direction is DeviationDirection.LOW:
        return TodoItem(
            TodoKind.WATERING,
            "Water plant",
            f"Soil at {format_number(current)}%, below ideal ({ideal_text})",
        )
    if direction is DeviationDirection.HIGH:
        return TodoItem(
            TodoKind.WATERING,
            "Reduce watering",
            f"Soil at {format_number(current)}%, above ideal ({ideal_text})",
        )
    return None


def _light_todo(value: Any, ideal_text: str, thresholds: SeverityThresholds) -> TodoItem | None:
    ideal = parse_ideal(ideal_text)
    direction, current = _direction(value, ideal, thresholds)
    if direction is DeviationDirection.LOW:
        target = ideal.min if isinstance(ideal, IdealRange) else ideal.goal
        remaining = round(target - current, 2)
        return TodoItem(
            TodoKind.LIGHT,
            "Light goal",
            f"{format_number(remaining)}h remaining, currently {format_number(current)}h (ideal: {ideal_text})",
        )
    if direction is DeviationDirection.HIGH:
        return TodoItem(
            TodoKind.LIGHT,
            "Reduce light exposure",
            f"{format_number(current)}h today, above ideal ({ideal_text})",
        )
    return None


def _temperature_todo(value: Any, ideal_text: str, thresholds: SeverityThresholds) -> TodoItem | None:
    direction, current = _direction(value, parse_ideal(ideal_text), thresholds)
    if direction is DeviationDirection.LOW:
        return TodoItem(
            TodoKind.TEMPERATURE,
            "Increase temperature",
            f"Currently {format_number(current)}°C, below ideal ({ideal_text})",
        )
    if direction is DeviationDirection.HIGH:
        return TodoItem(
            TodoKind.TEMPERATURE,
            "Reduce temperature",
            f"Currently {format_number(current)}°C, above ideal ({ideal_text})",
        )
    return None


def _humidity_todo(snapshot: PlantSnapshot, thresholds: SeverityThresholds) -> TodoItem | None:
    ideal = snapshot.now.humidity_ideal
    direction, current = _direction(snapshot.now.air_humidity, ideal, thresholds)
    if ideal is None or direction is None:
        return None
    if direction is DeviationDirection.LOW:
        return TodoItem(
            TodoKind.HUMIDITY,
            "Increase humidity",
            f"Currently {format_number(current)}%, below ideal ({ideal.describe('%')})",
        )
    return TodoItem(
        TodoKind.HUMIDITY,
        "Reduce humidity",
        f"Currently {format_number(current)}%, above ideal ({ideal.describe('%')})",
    )
