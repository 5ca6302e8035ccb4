"""
Alert Generator
===============
Turn a plant snapshot into a severity-ranked list of alerts.

Each alert carries an explicit :class:`AlertKey`. History bookkeeping compares
keys structurally; the ``id`` string is only an opaque handle for clients.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from app.domain.deviation import DEFAULT_THRESHOLDS, SeverityThresholds, classify_deviation
from app.domain.ideal_range import IdealRange, ParsedIdeal, ideal_bounds, parse_ideal
from app.domain.plant_snapshot import PlantSnapshot
from app.enums.common import AlertSeverity, DeviationDirection, MonitoredMetric
from app.utils.time import to_epoch_ms, utc_now

METRIC_LABELS: dict[MonitoredMetric, str] = {
    MonitoredMetric.SOIL_MOISTURE: "Soil moisture",
    MonitoredMetric.LIGHT: "Light",
    MonitoredMetric.TEMPERATURE: "Temperature",
    MonitoredMetric.AIR_HUMIDITY: "Air humidity",
}

INTENSITY_PHRASES: dict[tuple[DeviationDirection, AlertSeverity], str] = {
    (DeviationDirection.LOW, AlertSeverity.INFO): "slightly below ideal",
    (DeviationDirection.LOW, AlertSeverity.WARNING): "too low",
    (DeviationDirection.LOW, AlertSeverity.CRITICAL): "critically low",
    (DeviationDirection.HIGH, AlertSeverity.INFO): "slightly above ideal",
    (DeviationDirection.HIGH, AlertSeverity.WARNING): "too high",
    (DeviationDirection.HIGH, AlertSeverity.CRITICAL): "critically high",
}


@dataclass(frozen=True)
class AlertKey:
    """Structural identity of an alert."""

    metric: MonitoredMetric
    direction: DeviationDirection
    severity: AlertSeverity
    generated_at: datetime

    @property
    def metric_key(self) -> tuple[MonitoredMetric, DeviationDirection, AlertSeverity]:
        """The key without the generation timestamp; history supersedes on this."""
        return self.metric, self.direction, self.severity

    def slug(self) -> str:
        return f"{self.metric.value}-{self.direction.value}-{self.severity.value}"

    def compose_id(self) -> str:
        return f"{self.slug()}-{to_epoch_ms(self.generated_at)}"


@dataclass(frozen=True)
class Alert:
    id: str
    severity: AlertSeverity
    message: str
    date: datetime
    key: AlertKey

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "severity": self.severity.value,
            "message": self.message,
            "date": self.date.isoformat(),
            "metric": self.key.metric.value,
            "direction": self.key.direction.value,
        }


def alert_message(metric: MonitoredMetric, direction: DeviationDirection, severity: AlertSeverity) -> str:
    return f"{METRIC_LABELS[metric]} is {INTENSITY_PHRASES[(direction, severity)]}"


def generate_alerts(
    snapshot: PlantSnapshot,
    now: datetime | None = None,
    thresholds: SeverityThresholds = DEFAULT_THRESHOLDS,
) -> list[Alert]:
    """
    Classify every monitored metric and return the resulting alerts.

    All alerts of one call share ``now`` as their date. Output is stably
    sorted critical, warning, info; ties keep the metric enumeration order.
    """
    generated_at = now or utc_now()
    alerts: list[Alert] = []

    for metric, value, bounds in _monitored_readings(snapshot):
        if bounds is None:
            continue
        low, high = bounds
        result = classify_deviation(value, low, high, thresholds)
        if result is None:
            continue
        key = AlertKey(metric, result.direction, result.severity, generated_at)
        alerts.append(
            Alert(
                id=key.compose_id(),
                severity=result.severity,
                message=alert_message(metric, result.direction, result.severity),
                date=generated_at,
                key=key,
            )
        )

    alerts.sort(key=lambda alert: alert.severity.rank)
    return alerts


def _monitored_readings(snapshot: PlantSnapshot):
    """Yield ``(metric, value, (min, max) | None)`` in enumeration order."""
    metrics = snapshot.metrics
    now = snapshot.now

    yield (
        MonitoredMetric.SOIL_MOISTURE,
        metrics.soil_moisture.value,
        _resolve(now.soil_moisture_ideal, parse_ideal(metrics.soil_moisture.ideal)),
    )

    # Light has no ceiling: excess light never alerts.
    light_bounds = None
    if now.light_goal is not None:
        light_bounds = (now.light_goal, None)
    else:
        parsed = ideal_bounds(parse_ideal(metrics.light_today.ideal))
        if parsed is not None:
            light_bounds = (parsed[0], None)
    yield MonitoredMetric.LIGHT, metrics.light_today.value, light_bounds

    yield (
        MonitoredMetric.TEMPERATURE,
        metrics.temperature.value,
        _resolve(now.temperature_ideal, parse_ideal(metrics.temperature.ideal)),
    )

    yield MonitoredMetric.AIR_HUMIDITY, now.air_humidity, ideal_bounds(now.humidity_ideal)


def _resolve(structured: IdealRange | None, parsed: ParsedIdeal | None) -> tuple[float, float | None] | None:
    if structured is not None:
        return structured.min, structured.max
    return ideal_bounds(parsed)
