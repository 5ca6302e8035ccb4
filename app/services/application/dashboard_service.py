"""Dashboard Session Service
===========================

Per-user dashboard state and the refresh cycle that drives it.

A :class:`PlantDashboardSession` owns everything the dashboard shows for one
user: the fetched plants, the selected plant, alert history, the todo
completion sets, the notification feed and the user's notes. Every refresh
replaces the plant snapshots wholesale and re-runs the derivation engine.

:class:`DashboardService` keeps one session per user and a
:class:`~app.workers.refresh_poller.RefreshPoller` for each open session.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import TYPE_CHECKING, Any, Callable, Optional

from app.domain.alert_history import DEFAULT_HISTORY_LIMIT, AlertHistoryTracker
from app.domain.alerts import Alert, generate_alerts
from app.domain.deviation import DEFAULT_THRESHOLDS, SeverityThresholds
from app.domain.exceptions import ConflictError, NotFoundError, ServiceError, ValidationError
from app.domain.ideal_range import ideal_bounds, parse_ideal
from app.domain.notifications import NotificationFeed, alert_notification, todo_notification
from app.domain.plant_notes import PlantNotes
from app.domain.plant_snapshot import PlantSnapshot
from app.domain.plant_status import light_progress, metric_statuses, overall_status
from app.domain.todo_completion import TodoCompletionTracker
from app.domain.todos import TodoItem, TodoPartition, build_todos, partition_todos
from app.enums.common import TodoKind
from app.utils.time import utc_now
from app.workers.refresh_poller import RefreshPoller

if TYPE_CHECKING:
    from app.services.application.plant_service import PlantService

logger = logging.getLogger(__name__)


# =====================================================================
# PlantDashboardSession
# =====================================================================


class PlantDashboardSession:
    """Dashboard state for one user.

    Network calls (listing plants, submitting completions) run outside the
    session lock, so a refresh tick is never blocked by a pending submission.
    """

    def __init__(
        self,
        user_id: str,
        plant_service: "PlantService",
        *,
        thresholds: SeverityThresholds = DEFAULT_THRESHOLDS,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.user_id = user_id
        self._plant_service = plant_service
        self._thresholds = thresholds
        self._clock = clock
        self._lock = threading.RLock()

        self._plants: list[PlantSnapshot] = []
        self._selected_id: Optional[str] = None
        self._todos: list[TodoItem] = []
        self._alerts: list[Alert] = []
        self._history = AlertHistoryTracker(limit=history_limit)
        self._completion = TodoCompletionTracker()
        self._feed = NotificationFeed()
        self._notes: dict[str, PlantNotes] = {}
        # Bumped on plant switch so a submission started for the previous plant is not settled on the new one
        self._generation = 0

        self.loaded = False
        self.last_refreshed_at: Optional[datetime] = None
        self.last_error: Optional[str] = None

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    @property
    def selected_plant(self) -> Optional[PlantSnapshot]:
        with self._lock:
            return self._find(self._selected_id)

    @property
    def alerts(self) -> tuple[Alert, ...]:
        with self._lock:
            return tuple(self._alerts)

    @property
    def alert_history(self) -> tuple[Alert, ...]:
        with self._lock:
            return self._history.history

    @property
    def unread_count(self) -> int:
        with self._lock:
            return self._feed.unread_count

    # ------------------------------------------------------------------
    # Refresh cycle
    # ------------------------------------------------------------------

    def refresh(self) -> bool:
        """
        Fetch the user's plants and re-derive todos, alerts and notifications.

        A fetch failure keeps the previous state and records ``last_error``.

        Returns:
            True if fresh data was applied
        """
        try:
            plants = self._plant_service.list_plants(self.user_id)
        except ServiceError as exc:
            logger.warning("Dashboard refresh for %s failed, keeping previous state: %s", self.user_id, exc)
            with self._lock:
                self.last_error = str(exc)
            return False

        with self._lock:
            self._plants = plants
            self.loaded = True
            self.last_error = None
            self.last_refreshed_at = self._clock()

            if self._find(self._selected_id) is None:
                # Selected plant vanished (or first load): fall back to the first plant
                first = plants[0].plant_id if plants else None
                self._switch_to(first)
            else:
                self._evaluate()
        return True

    def select_plant(self, plant_id: str) -> None:
        with self._lock:
            if self._find(plant_id) is None:
                raise NotFoundError(f"Plant {plant_id} not found", detail={"plantId": plant_id})
            if plant_id == self._selected_id:
                return
            logger.info("User %s switched dashboard to plant %s", self.user_id, plant_id)
            self._switch_to(plant_id)

    # ------------------------------------------------------------------
    # Todos
    # ------------------------------------------------------------------

    def toggle_todo(self, kind: TodoKind, checked: bool) -> frozenset[TodoKind]:
        with self._lock:
            self._require_plant()
            if checked and kind not in {todo.id for todo in self._partition().active}:
                raise ValidationError(f"Todo '{kind.value}' is not open for this plant")
            self._completion.toggle(kind, checked)
            return self._completion.checked

    def submit_completions(self) -> tuple[TodoKind, ...]:
        """
        Send the checked todos to the plant table as one batch.

        Returns:
            The submitted kinds; empty when nothing was checked or a
            submission was already in flight

        Raises:
            ConflictError: no plant selected
            ServiceError: the batch was rejected; checked items are kept.
                Any error re-enables submitting.
        """
        with self._lock:
            plant = self._require_plant()
            batch = self._completion.begin_submission()
            if batch is None:
                return ()
            generation = self._generation

        try:
            self._plant_service.complete_todos(self.user_id, plant.plant_id, batch)
        except Exception:
            # Any failure settles the batch so the submit control comes back
            with self._lock:
                if generation == self._generation:
                    self._completion.finish_submission(False)
            raise

        with self._lock:
            if generation == self._generation:
                self._completion.finish_submission(True)
                self._evaluate()

        # Pick up the logged flags the table now carries
        self.refresh()
        return batch

    # ------------------------------------------------------------------
    # Notifications and notes
    # ------------------------------------------------------------------

    def mark_notifications_read(self) -> None:
        with self._lock:
            self._feed.mark_all_as_read()

    def toggle_note(self, note: str) -> dict[str, Any]:
        with self._lock:
            plant = self._require_plant()
            notes = self._notes.setdefault(plant.plant_id, PlantNotes())
            selected = notes.toggle(note)
            text = note.strip()
            return {
                "note": text,
                "selected": selected,
                "predefined": PlantNotes.is_predefined(text),
                "notes": notes.notes,
            }

    # ------------------------------------------------------------------
    # View
    # ------------------------------------------------------------------

    def view(self) -> dict[str, Any]:
        """Render the dashboard payload."""
        with self._lock:
            plant = self._find(self._selected_id)
            partition = self._partition()
            notes = self._notes.get(plant.plant_id) if plant else None
            return {
                "empty": self.loaded and not self._plants,
                "plant": plant.to_dict() if plant else None,
                "plants": [{"plantId": p.plant_id, "name": p.name} for p in self._plants],
                "selectedPlantId": self._selected_id,
                "todos": {
                    "active": [todo.to_dict() for todo in partition.active],
                    "done": [todo.to_dict() for todo in partition.done],
                    "checked": sorted(kind.value for kind in self._completion.checked),
                    "total": partition.total,
                    "doneCount": len(partition.done),
                    "allLogged": partition.total > 0 and not partition.active,
                    "nothingToDo": partition.total == 0,
                    "submitting": self._completion.in_flight,
                },
                "alerts": [alert.to_dict() for alert in self._alerts],
                "alertHistory": [alert.to_dict() for alert in self._history.history],
                "notifications": [item.to_dict() for item in self._feed.notifications],
                "unreadCount": self._feed.unread_count,
                "metricStatus": metric_statuses(self._alerts),
                "overallStatus": overall_status(self._alerts).value,
                "lightProgress": _light_progress(plant) if plant else 0.0,
                "notes": notes.notes if notes else [],
                "lastRefreshedAt": self.last_refreshed_at.isoformat() if self.last_refreshed_at else None,
                "lastError": self.last_error,
            }

    # ------------------------------------------------------------------
    # Internals (call with the lock held)
    # ------------------------------------------------------------------

    def _find(self, plant_id: Optional[str]) -> Optional[PlantSnapshot]:
        if plant_id is None:
            return None
        return next((p for p in self._plants if p.plant_id == plant_id), None)

    def _require_plant(self) -> PlantSnapshot:
        plant = self._find(self._selected_id)
        if plant is None:
            raise ConflictError("No plant selected")
        return plant

    def _partition(self) -> TodoPartition:
        plant = self._find(self._selected_id)
        if plant is None:
            return TodoPartition(active=(), done=())
        return partition_todos(self._todos, self._completion.submitted, plant.today)

    def _switch_to(self, plant_id: Optional[str]) -> None:
        self._selected_id = plant_id
        self._generation += 1
        self._completion.reset()
        self._feed.reset()
        self._evaluate(reseed_history=True)

    def _evaluate(self, reseed_history: bool = False) -> None:
        plant = self._find(self._selected_id)
        if plant is None:
            self._todos = []
            self._alerts = []
            self._history.reset()
            self._feed.set_todo_items([])
            self._feed.set_alert_items([])
            return

        if self._completion.observe_metrics(plant.metrics_fingerprint()):
            logger.debug("Metrics changed for %s, todo suppression cleared", plant.plant_id)

        self._todos = build_todos(plant, self._thresholds)
        self._alerts = generate_alerts(plant, self._clock(), self._thresholds)
        if reseed_history:
            self._history.reset(self._alerts)
        else:
            self._history.apply(self._alerts)

        partition = self._partition()
        self._feed.set_todo_items(todo_notification(todo) for todo in partition.active)
        self._feed.set_alert_items(alert_notification(alert) for alert in self._alerts)


def _light_progress(plant: PlantSnapshot) -> float:
    today = plant.now.light_today
    if today is None:
        today = plant.metrics.light_today.value
    goal = plant.now.light_goal
    if goal is None:
        bounds = ideal_bounds(parse_ideal(plant.metrics.light_today.ideal))
        goal = bounds[0] if bounds else None
    return light_progress(today, goal)


# =====================================================================
# DashboardService
# =====================================================================


class DashboardService:
    """Open dashboard sessions, one per user, each with its refresh poller."""

    def __init__(
        self,
        plant_service: "PlantService",
        *,
        thresholds: SeverityThresholds = DEFAULT_THRESHOLDS,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        poll_interval: float = 5.0,
        polling_enabled: bool = True,
    ) -> None:
        self._plant_service = plant_service
        self._thresholds = thresholds
        self._history_limit = history_limit
        self._poll_interval = poll_interval
        self._polling_enabled = polling_enabled
        self._sessions: dict[str, PlantDashboardSession] = {}
        self._pollers: dict[str, RefreshPoller] = {}
        self._lock = threading.Lock()

    def get_session(self, user_id: str) -> PlantDashboardSession:
        """Return the user's session, opening it (and its poller) on first use."""
        with self._lock:
            session = self._sessions.get(user_id)
            if session is not None:
                return session

            session = PlantDashboardSession(
                user_id,
                self._plant_service,
                thresholds=self._thresholds,
                history_limit=self._history_limit,
            )
            self._sessions[user_id] = session
            if self._polling_enabled:
                poller = RefreshPoller(session.refresh, self._poll_interval, name=f"DashboardPoller-{user_id}")
                self._pollers[user_id] = poller
                poller.start()
            logger.info("Opened dashboard session for %s", user_id)
            return session

    def find_session(self, user_id: str) -> Optional[PlantDashboardSession]:
        with self._lock:
            return self._sessions.get(user_id)

    def close_session(self, user_id: str) -> bool:
        """Drop the user's session and stop its poller; False if none was open."""
        with self._lock:
            session = self._sessions.pop(user_id, None)
            poller = self._pollers.pop(user_id, None)
        if poller is not None:
            poller.stop()
        if session is not None:
            logger.info("Closed dashboard session for %s", user_id)
        return session is not None

    def is_polling(self, user_id: str) -> bool:
        with self._lock:
            poller = self._pollers.get(user_id)
        return poller is not None and poller.is_running()

    def shutdown(self) -> None:
        with self._lock:
            user_ids = list(self._sessions)
        for user_id in user_ids:
            self.close_session(user_id)
