"""
Plant Schemas
=============

Boundary schemas for plant rows coming out of the table store and for the
plant/dashboard request bodies.

The table store may hand back structured columns (``metrics``, ``now``,
``today`` ...) either as objects or as JSON-encoded strings. Decoding happens
here, once, so the domain layer only ever sees :class:`PlantSnapshot`.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.domain.ideal_range import IdealRange
from app.domain.plant_snapshot import (
    CareGuide,
    GrowCycle,
    Metric,
    NowReadings,
    PlantMetrics,
    PlantSnapshot,
    SeedAlert,
    TodayFlags,
    TrendPoint,
)
from app.enums.common import TodoKind

_CAMEL = ConfigDict(populate_by_name=True, extra="ignore")


def _decode_json_column(value: Any, default: Any) -> Any:
    """Decode a column that may be a JSON string; ``None`` becomes ``default``."""
    if value is None:
        return default
    if isinstance(value, str):
        try:
            return json.loads(value)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Column is not valid JSON: {exc.msg}") from exc
    return value


# ============================================================================
# Row columns
# ============================================================================


class MetricSchema(BaseModel):
    model_config = _CAMEL

    value: Any = None
    ideal: str = ""


class PlantMetricsSchema(BaseModel):
    model_config = _CAMEL

    soil_moisture: MetricSchema = Field(default_factory=MetricSchema, alias="soilMoisture")
    light_today: MetricSchema = Field(default_factory=MetricSchema, alias="lightToday")
    temperature: MetricSchema = Field(default_factory=MetricSchema)


class NowSchema(BaseModel):
    """Ideals stay loose dicts: an incomplete ``{min}`` is ignored, not rejected."""

    model_config = _CAMEL

    soil_moisture: Any = Field(default=None, alias="soilMoisture")
    soil_moisture_ideal: dict[str, Any] | None = Field(default=None, alias="soilMoistureIdeal")
    light_today: Any = Field(default=None, alias="lightToday")
    light_goal: Any = Field(default=None, alias="lightGoal")
    temperature: Any = None
    temperature_ideal: dict[str, Any] | None = Field(default=None, alias="temperatureIdeal")
    air_humidity: Any = Field(default=None, alias="airHumidity")
    humidity_ideal: dict[str, Any] | None = Field(default=None, alias="humidityIdeal")

    def to_domain(self) -> NowReadings:
        return NowReadings(
            soil_moisture=self.soil_moisture,
            soil_moisture_ideal=IdealRange.from_dict(self.soil_moisture_ideal),
            light_today=self.light_today,
            light_goal=self.light_goal,
            temperature=self.temperature,
            temperature_ideal=IdealRange.from_dict(self.temperature_ideal),
            air_humidity=self.air_humidity,
            humidity_ideal=IdealRange.from_dict(self.humidity_ideal),
        )


class TodaySchema(BaseModel):
    model_config = _CAMEL

    needs_watering: bool = Field(default=False, alias="needsWatering")
    next_watering: str = Field(default="", alias="nextWatering")
    light_remaining: float = Field(default=0, alias="lightRemaining")
    needs_trimming: bool = Field(default=False, alias="needsTrimming")
    needs_pruning: bool = Field(default=False, alias="needsPruning")
    logged: dict[str, bool] = Field(default_factory=dict)

    def to_domain(self) -> TodayFlags:
        return TodayFlags(
            needs_watering=self.needs_watering,
            next_watering=self.next_watering,
            light_remaining=self.light_remaining,
            needs_trimming=self.needs_trimming,
            needs_pruning=self.needs_pruning,
            logged=frozenset(kind for kind in TodoKind if self.logged.get(kind.value)),
        )


class CycleSchema(BaseModel):
    model_config = _CAMEL

    phase: str = "vegetative"
    progress: float = 0
    next_milestone: str = Field(default="", alias="nextMilestone")


class TrendPointSchema(BaseModel):
    day: str
    value: float


class GuideSchema(BaseModel):
    model_config = _CAMEL

    plant_type: str = Field(default="", alias="plantType")
    watering_info: str = Field(default="", alias="wateringInfo")
    light_info: str = Field(default="", alias="lightInfo")
    notes: str = ""


class SeedAlertSchema(BaseModel):
    id: str | int
    severity: str
    message: str


# ============================================================================
# Plant row
# ============================================================================


class PlantRowSchema(BaseModel):
    """One row of the plant table, in the shape the store returns it."""

    model_config = _CAMEL

    row_id: int | str | None = Field(default=None, alias="id")
    plant_id: str = Field(..., min_length=1, alias="plantId")
    user_id: str = Field(default="", alias="userId")
    name: str = ""
    illustration: str = ""
    status: str = "ok"
    status_message: str = Field(default="", alias="statusMessage")
    metrics: PlantMetricsSchema
    now: NowSchema = Field(default_factory=NowSchema)
    today: TodaySchema = Field(default_factory=TodaySchema)
    cycle: CycleSchema = Field(default_factory=CycleSchema)
    trend_moisture: list[TrendPointSchema] = Field(default_factory=list, alias="trendMoisture")
    trend_light: list[TrendPointSchema] = Field(default_factory=list, alias="trendLight")
    guide: GuideSchema = Field(default_factory=GuideSchema)
    alerts: list[SeedAlertSchema] = Field(default_factory=list)

    @field_validator("metrics", "now", "today", "cycle", "guide", mode="before")
    @classmethod
    def decode_object_column(cls, v):
        """Accept objects or JSON-encoded objects."""
        return _decode_json_column(v, {})

    @field_validator("trend_moisture", "trend_light", "alerts", mode="before")
    @classmethod
    def decode_list_column(cls, v):
        """Accept lists or JSON-encoded lists."""
        return _decode_json_column(v, [])

    def to_snapshot(self) -> PlantSnapshot:
        metrics = self.metrics
        return PlantSnapshot(
            plant_id=self.plant_id,
            user_id=self.user_id,
            name=self.name,
            illustration=self.illustration,
            status=self.status,
            status_message=self.status_message,
            metrics=PlantMetrics(
                soil_moisture=Metric(metrics.soil_moisture.value, metrics.soil_moisture.ideal),
                light_today=Metric(metrics.light_today.value, metrics.light_today.ideal),
                temperature=Metric(metrics.temperature.value, metrics.temperature.ideal),
            ),
            now=self.now.to_domain(),
            today=self.today.to_domain(),
            cycle=GrowCycle(
                phase=self.cycle.phase,
                progress=self.cycle.progress,
                next_milestone=self.cycle.next_milestone,
            ),
            trend_moisture=tuple(TrendPoint(p.day, p.value) for p in self.trend_moisture),
            trend_light=tuple(TrendPoint(p.day, p.value) for p in self.trend_light),
            guide=CareGuide(
                plant_type=self.guide.plant_type,
                watering_info=self.guide.watering_info,
                light_info=self.guide.light_info,
                notes=self.guide.notes,
            ),
            alerts=tuple(SeedAlert(str(a.id), a.severity, a.message) for a in self.alerts),
        )


# ============================================================================
# Requests
# ============================================================================


class CompleteTodosRequest(BaseModel):
    """Request schema for logging completed todos on a plant."""

    model_config = _CAMEL

    plant_id: str = Field(..., min_length=1, alias="plantId", description="Plant row id")
    completed_todos: list[TodoKind] = Field(..., min_length=1, alias="completedTodos")

    @field_validator("completed_todos", mode="before")
    @classmethod
    def check_todo_kinds(cls, v):
        """Reject unknown kinds with the list of valid ones."""
        if not isinstance(v, list):
            return v
        valid = [kind.value for kind in TodoKind]
        invalid = [str(item) for item in v if item not in valid]
        if invalid:
            raise ValueError(f"Invalid todo types: {', '.join(invalid)}. Valid: {', '.join(valid)}")
        return v


class SelectPlantRequest(BaseModel):
    model_config = _CAMEL

    plant_id: str = Field(..., min_length=1, alias="plantId")


class CheckTodoRequest(BaseModel):
    """Request schema for ticking or unticking a todo on the dashboard."""

    todo: TodoKind
    checked: bool = True


class ToggleNoteRequest(BaseModel):
    note: str = Field(..., min_length=1, description="Predefined or free-form note")
