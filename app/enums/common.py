"""
Common Enumerations
====================

Enums shared by the derivation engine, the dashboard session and the API.
"""

from enum import Enum


class TodoKind(str, Enum):
    """
    Care task categories the todo builder can emit.
    Used by: todo builder, completion tracker, plant repository
    """
    WATERING = "watering"
    LIGHT = "light"
    HUMIDITY = "humidity"
    TEMPERATURE = "temperature"
    TRIMMING = "trimming"
    PRUNING = "pruning"

    def __str__(self) -> str:
        return self.value

    @property
    def is_manual(self) -> bool:
        """Trimming and pruning come from flags, not sensor readings."""
        return self in (TodoKind.TRIMMING, TodoKind.PRUNING)


class AlertSeverity(str, Enum):
    """
    Severity tiers for deviations and alerts.
    Used by: deviation classifier, alert generator, notifications
    """
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"

    def __str__(self) -> str:
        return self.value

    @property
    def rank(self) -> int:
        """Sort rank, most severe first."""
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {
    AlertSeverity.CRITICAL: 0,
    AlertSeverity.WARNING: 1,
    AlertSeverity.INFO: 2,
}


class DeviationDirection(str, Enum):
    """Which side of the ideal a reading falls on."""
    LOW = "low"
    HIGH = "high"

    def __str__(self) -> str:
        return self.value


class MonitoredMetric(str, Enum):
    """
    Metrics evaluated by the alert generator, in enumeration order.
    """
    SOIL_MOISTURE = "soilMoisture"
    LIGHT = "lightToday"
    TEMPERATURE = "temperature"
    AIR_HUMIDITY = "airHumidity"

    def __str__(self) -> str:
        return self.value


class NotificationType(str, Enum):
    """Source of a notification item."""
    TODO = "todo"
    ALERT = "alert"

    def __str__(self) -> str:
        return self.value


class PlantStatus(str, Enum):
    """
    Overall plant status shown on the plant card.
    """
    OK = "ok"
    WARNING = "warning"
    CRITICAL = "critical"

    def __str__(self) -> str:
        return self.value


class MetricStatus(str, Enum):
    """Per-metric badge status."""
    OK = "ok"
    ATTENTION = "attention"
    CRITICAL = "critical"

    def __str__(self) -> str:
        return self.value

