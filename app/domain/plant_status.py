"""
Plant Status Helpers
====================
Small derived values for the plant card and the "right now" card.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from app.domain.alerts import Alert
from app.enums.common import AlertSeverity, MetricStatus, MonitoredMetric, PlantStatus


def light_progress(light_today: Any, light_goal: Any) -> float:
    """Percent of today's light goal reached, 0-100."""
    try:
        today = float(light_today)
        goal = float(light_goal)
    except (TypeError, ValueError):
        return 0.0
    if goal <= 0:
        return 0.0
    return round(min(max(today / goal * 100, 0.0), 100.0), 1)


def metric_statuses(alerts: Sequence[Alert]) -> dict[str, str]:
    """Badge status per monitored metric, from the current generation."""
    statuses = {metric.value: MetricStatus.OK.value for metric in MonitoredMetric}
    for alert in alerts:
        if alert.severity is AlertSeverity.CRITICAL:
            status = MetricStatus.CRITICAL
        else:
            status = MetricStatus.ATTENTION
        statuses[alert.key.metric.value] = status.value
    return statuses


def overall_status(alerts: Sequence[Alert]) -> PlantStatus:
    if any(alert.severity is AlertSeverity.CRITICAL for alert in alerts):
        return PlantStatus.CRITICAL
    if alerts:
        return PlantStatus.WARNING
    return PlantStatus.OK
