"""
Plant Snapshot Domain Objects
=============================
Canonical, already-decoded form of one plant row.

Snapshots are immutable and replaced wholesale on every refresh. They are
built by ``app.schemas.plants.PlantRowSchema.to_snapshot`` after the boundary
has decoded any JSON-encoded columns, so nothing in the derivation engine has
to care how the row store delivered them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from app.domain.ideal_range import IdealRange, format_number
from app.enums.common import TodoKind


@dataclass(frozen=True)
class Metric:
    """Current reading plus its human-readable ideal descriptor."""

    value: Any
    ideal: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"value": self.value, "ideal": self.ideal}


@dataclass(frozen=True)
class PlantMetrics:
    soil_moisture: Metric
    light_today: Metric
    temperature: Metric

    def to_dict(self) -> dict[str, Any]:
        return {
            "soilMoisture": self.soil_moisture.to_dict(),
            "lightToday": self.light_today.to_dict(),
            "temperature": self.temperature.to_dict(),
        }


@dataclass(frozen=True)
class NowReadings:
    """The "right now" block: structured ideals plus the humidity reading."""

    soil_moisture: Any = None
    soil_moisture_ideal: IdealRange | None = None
    light_today: Any = None
    light_goal: Any = None
    temperature: Any = None
    temperature_ideal: IdealRange | None = None
    air_humidity: Any = None
    humidity_ideal: IdealRange | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "soilMoisture": self.soil_moisture,
            "lightToday": self.light_today,
            "lightGoal": self.light_goal,
            "temperature": self.temperature,
            "airHumidity": self.air_humidity,
        }
        if self.soil_moisture_ideal is not None:
            payload["soilMoistureIdeal"] = self.soil_moisture_ideal.to_dict()
        if self.temperature_ideal is not None:
            payload["temperatureIdeal"] = self.temperature_ideal.to_dict()
        if self.humidity_ideal is not None:
            payload["humidityIdeal"] = self.humidity_ideal.to_dict()
        return payload


@dataclass(frozen=True)
class TodayFlags:
    """Manual task flags and the per-kind "logged" markers."""

    needs_watering: bool = False
    next_watering: str = ""
    light_remaining: float = 0
    needs_trimming: bool = False
    needs_pruning: bool = False
    logged: frozenset[TodoKind] = frozenset()

    def is_logged(self, kind: TodoKind) -> bool:
        return kind in self.logged

    def to_dict(self) -> dict[str, Any]:
        return {
            "needsWatering": self.needs_watering,
            "nextWatering": self.next_watering,
            "lightRemaining": self.light_remaining,
            "needsTrimming": self.needs_trimming,
            "needsPruning": self.needs_pruning,
            "logged": {kind.value: kind in self.logged for kind in TodoKind},
        }


@dataclass(frozen=True)
class GrowCycle:
    phase: str = "vegetative"
    progress: float = 0
    next_milestone: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"phase": self.phase, "progress": self.progress, "nextMilestone": self.next_milestone}


@dataclass(frozen=True)
class TrendPoint:
    day: str
    value: float

    def to_dict(self) -> dict[str, Any]:
        return {"day": self.day, "value": self.value}


@dataclass(frozen=True)
class CareGuide:
    plant_type: str = ""
    watering_info: str = ""
    light_info: str = ""
    notes: str = ""

    def to_dict(self) -> dict[str, str]:
        return {
            "plantType": self.plant_type,
            "wateringInfo": self.watering_info,
            "lightInfo": self.light_info,
            "notes": self.notes,
        }


@dataclass(frozen=True)
class SeedAlert:
    """Alert stored on the row at seed time; unrelated to generated alerts."""

    id: str
    severity: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "severity": self.severity, "message": self.message}


@dataclass(frozen=True)
class PlantSnapshot:
    """One plant as the dashboard evaluates it."""

    plant_id: str
    metrics: PlantMetrics
    now: NowReadings = field(default_factory=NowReadings)
    today: TodayFlags = field(default_factory=TodayFlags)
    user_id: str = ""
    name: str = ""
    illustration: str = ""
    status: str = "ok"
    status_message: str = ""
    cycle: GrowCycle = field(default_factory=GrowCycle)
    trend_moisture: tuple[TrendPoint, ...] = ()
    trend_light: tuple[TrendPoint, ...] = ()
    guide: CareGuide = field(default_factory=CareGuide)
    alerts: tuple[SeedAlert, ...] = ()

    def metrics_fingerprint(self) -> str:
        """Raw soil|light|temperature|airHumidity values, used to clear todo suppression."""
        parts = (
            self.metrics.soil_moisture.value,
            self.metrics.light_today.value,
            self.metrics.temperature.value,
            self.now.air_humidity,
        )
        return "|".join(format_number(part) for part in parts)

    def to_dict(self) -> dict[str, Any]:
        return {
            "plantId": self.plant_id,
            "userId": self.user_id,
            "name": self.name,
            "illustration": self.illustration,
            "status": self.status,
            "statusMessage": self.status_message,
            "metrics": self.metrics.to_dict(),
            "now": self.now.to_dict(),
            "today": self.today.to_dict(),
            "cycle": self.cycle.to_dict(),
            "trendMoisture": [point.to_dict() for point in self.trend_moisture],
            "trendLight": [point.to_dict() for point in self.trend_light],
            "guide": self.guide.to_dict(),
            "alerts": [alert.to_dict() for alert in self.alerts],
        }
