"""
Enums Module
============

This module provides enumeration types for the plant care dashboard.
Enums ensure type safety and consistency across the codebase.
"""

from app.enums.common import (
    AlertSeverity,
    DeviationDirection,
    MetricStatus,
    MonitoredMetric,
    NotificationType,
    PlantStatus,
    TodoKind,
)

__all__ = [
    "AlertSeverity",
    "DeviationDirection",
    "MetricStatus",
    "MonitoredMetric",
    "NotificationType",
    "PlantStatus",
    "TodoKind",
]
