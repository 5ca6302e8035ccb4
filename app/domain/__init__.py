"""
Domain Package
==============
The metrics-to-signal derivation engine and its value objects.

Everything here is pure: given a plant snapshot (and, for the trackers, the
state they own) the output is fully determined. Nothing in this package does
I/O.
"""

from .alert_history import AlertHistoryTracker, alert_fingerprint
from .alerts import Alert, AlertKey, generate_alerts
from .deviation import DEFAULT_THRESHOLDS, DeviationResult, SeverityThresholds, classify_deviation
from .ideal_range import IdealGoal, IdealRange, parse_ideal
from .notifications import NotificationFeed, NotificationItem
from .plant_notes import PREDEFINED_PLANT_NOTES, PlantNotes
from .plant_snapshot import Metric, NowReadings, PlantMetrics, PlantSnapshot, TodayFlags
from .todo_completion import TodoCompletionTracker
from .todos import TodoItem, build_todos, partition_todos

__all__ = [
    # Range parsing
    "IdealRange",
    "IdealGoal",
    "parse_ideal",
    # Classification
    "SeverityThresholds",
    "DEFAULT_THRESHOLDS",
    "DeviationResult",
    "classify_deviation",
    # Snapshot
    "Metric",
    "PlantMetrics",
    "NowReadings",
    "TodayFlags",
    "PlantSnapshot",
    # Todos
    "TodoItem",
    "build_todos",
    "partition_todos",
    "TodoCompletionTracker",
    # Alerts
    "Alert",
    "AlertKey",
    "generate_alerts",
    "AlertHistoryTracker",
    "alert_fingerprint",
    # Notifications and notes
    "NotificationItem",
    "NotificationFeed",
    "PlantNotes",
    "PREDEFINED_PLANT_NOTES",
]
