"""
Todo Completion Tracker
=======================
Client-side bookkeeping between "user ticked a todo" and "row store confirmed
it".

Submitted kinds stay hidden from the active list until the metrics
fingerprint changes. The fingerprint covers all four raw readings together,
so a change in any one of them clears suppression for every kind.
"""

from __future__ import annotations

import logging

from app.enums.common import TodoKind

logger = logging.getLogger(__name__)


class TodoCompletionTracker:
    """Checked and submitted todo kinds for the plant on screen."""

    def __init__(self) -> None:
        self._checked: set[TodoKind] = set()
        self._submitted: set[TodoKind] = set()
        self._pending: tuple[TodoKind, ...] = ()
        self._in_flight = False
        self._fingerprint: str | None = None

    @property
    def checked(self) -> frozenset[TodoKind]:
        return frozenset(self._checked)

    @property
    def submitted(self) -> frozenset[TodoKind]:
        return frozenset(self._submitted)

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    def toggle(self, kind: TodoKind, checked: bool) -> None:
        if checked:
            self._checked.add(kind)
        else:
            self._checked.discard(kind)

    def begin_submission(self) -> tuple[TodoKind, ...] | None:
        """
        Claim the checked batch for submission.

        Returns:
            The kinds to submit, or None if nothing is checked or a
            submission is already in flight
        """
        if not self._checked or self._in_flight:
            return None
        self._in_flight = True
        self._pending = tuple(sorted(self._checked, key=lambda kind: kind.value))
        return self._pending

    def finish_submission(self, success: bool) -> None:
        """Settle the in-flight batch; on failure the checked set is left as-is."""
        if not self._in_flight:
            return
        if success:
            self._submitted.update(self._pending)
            self._checked.clear()
        else:
            logger.info("Todo submission failed, keeping %d checked item(s)", len(self._checked))
        self._pending = ()
        self._in_flight = False

    def observe_metrics(self, fingerprint: str) -> bool:
        """
        Record the latest metrics fingerprint.

        Returns:
            True if the fingerprint changed and suppression was cleared
        """
        if self._fingerprint is None:
            self._fingerprint = fingerprint
            return False
        if fingerprint == self._fingerprint:
            return False
        self._fingerprint = fingerprint
        if self._submitted:
            logger.debug("Metrics changed, clearing %d submitted todo(s)", len(self._submitted))
        self._submitted.clear()
        return True

    def reset(self) -> None:
        self._checked.clear()
        self._submitted.clear()
        self._pending = ()
        self._in_flight = False
        self._fingerprint = None
