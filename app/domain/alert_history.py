"""
Alert History Tracker
=====================
Rolling, bounded, newest-first history of generated alerts.

History is only touched when the *set* of alert conditions changes
(fingerprint of ``message|severity`` pairs), so polling the same state every
few seconds does not re-merge anything. When a condition re-fires, its older
entries with the same metric key are replaced rather than accumulated.
Entries for conditions that stopped firing are kept.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from app.domain.alerts import Alert

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 20


def alert_fingerprint(alerts: Sequence[Alert]) -> str:
    """Order-independent summary of an alert set."""
    return ";".join(sorted(f"{alert.message}|{alert.severity.value}" for alert in alerts))


class AlertHistoryTracker:
    """Owns the alert history of the plant currently on screen."""

    def __init__(self, limit: int = DEFAULT_HISTORY_LIMIT) -> None:
        if limit < 1:
            raise ValueError(f"History limit must be positive, got {limit}")
        self.limit = limit
        self._history: list[Alert] = []
        self._fingerprint: str | None = None

    @property
    def history(self) -> tuple[Alert, ...]:
        return tuple(self._history)

    @property
    def fingerprint(self) -> str | None:
        return self._fingerprint

    def apply(self, alerts: Sequence[Alert]) -> bool:
        """
        Merge a fresh generation into history.

        Returns:
            True if history was updated, False if the alert set was unchanged
        """
        fingerprint = alert_fingerprint(alerts)
        if fingerprint == self._fingerprint:
            return False

        fresh_keys = {alert.key.metric_key for alert in alerts}
        kept = [entry for entry in self._history if entry.key.metric_key not in fresh_keys]
        merged = list(alerts) + kept
        # sort() is stable, so alerts of one generation keep their severity order
        merged.sort(key=lambda alert: alert.date, reverse=True)

        self._history = merged[: self.limit]
        self._fingerprint = fingerprint
        logger.debug("Alert history updated: %d new, %d total", len(alerts), len(self._history))
        return True

    def reset(self, alerts: Sequence[Alert] = ()) -> None:
        """Drop all history and reseed from ``alerts`` (plant switch)."""
        seeded = sorted(alerts, key=lambda alert: alert.date, reverse=True)
        self._history = seeded[: self.limit]
        self._fingerprint = alert_fingerprint(alerts)
