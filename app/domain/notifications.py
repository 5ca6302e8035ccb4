"""
Notification Feed
=================
Bell-menu projection of open todos and current alerts with unread tracking.

Notification ids are stable per condition (``todo-watering``,
``alert-soilMoisture-low-info``) so a condition that keeps firing is counted
unread once. When an id drops out of the feed it is forgotten from the seen
set, so the same condition coming back later is unread again.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from app.domain.alerts import Alert
from app.domain.todos import TodoItem
from app.enums.common import AlertSeverity, NotificationType, TodoKind


@dataclass(frozen=True)
class NotificationItem:
    id: str
    type: NotificationType
    title: str
    description: str
    severity: AlertSeverity | None = None
    todo_type: TodoKind | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "id": self.id,
            "type": self.type.value,
            "title": self.title,
            "description": self.description,
        }
        if self.severity is not None:
            payload["severity"] = self.severity.value
        if self.todo_type is not None:
            payload["todoType"] = self.todo_type.value
        return payload


def todo_notification(todo: TodoItem) -> NotificationItem:
    return NotificationItem(
        id=f"todo-{todo.id.value}",
        type=NotificationType.TODO,
        title=todo.label,
        description=todo.description,
        todo_type=todo.id,
    )


def alert_notification(alert: Alert) -> NotificationItem:
    return NotificationItem(
        id=f"alert-{alert.key.slug()}",
        type=NotificationType.ALERT,
        title=alert.message,
        description=f"{alert.severity.value.capitalize()} alert",
        severity=alert.severity,
    )


class NotificationFeed:
    """Todo and alert notifications plus the ids the user has already seen."""

    def __init__(self) -> None:
        self._todo_items: list[NotificationItem] = []
        self._alert_items: list[NotificationItem] = []
        self._seen: set[str] = set()

    @property
    def notifications(self) -> list[NotificationItem]:
        return [*self._todo_items, *self._alert_items]

    @property
    def unread_count(self) -> int:
        return sum(1 for item in self.notifications if item.id not in self._seen)

    def set_todo_items(self, items: Iterable[NotificationItem]) -> None:
        self._todo_items = self._replace(self._todo_items, list(items))

    def set_alert_items(self, items: Iterable[NotificationItem]) -> None:
        self._alert_items = self._replace(self._alert_items, list(items))

    def mark_all_as_read(self) -> None:
        self._seen = {item.id for item in self.notifications}

    def reset(self) -> None:
        self._todo_items = []
        self._alert_items = []
        self._seen = set()

    def _replace(self, previous: list[NotificationItem], items: list[NotificationItem]) -> list[NotificationItem]:
        current_ids = {item.id for item in items}
        for item in previous:
            if item.id not in current_ids:
                self._seen.discard(item.id)
        return items
