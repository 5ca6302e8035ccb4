"""
Unit tests for app.domain.todo_completion.
"""

from app.domain.todo_completion import TodoCompletionTracker
from app.enums.common import TodoKind


class TestToggle:
    def test_check_and_uncheck(self):
        tracker = TodoCompletionTracker()
        tracker.toggle(TodoKind.WATERING, True)
        tracker.toggle(TodoKind.LIGHT, True)
        tracker.toggle(TodoKind.LIGHT, False)
        assert tracker.checked == {TodoKind.WATERING}

    def test_unchecking_unknown_kind_is_harmless(self):
        tracker = TodoCompletionTracker()
        tracker.toggle(TodoKind.PRUNING, False)
        assert tracker.checked == frozenset()


class TestSubmission:
    def test_nothing_checked_is_a_no_op(self):
        tracker = TodoCompletionTracker()
        assert tracker.begin_submission() is None
        assert tracker.in_flight is False

    def test_batch_is_sorted_and_guarded(self):
        tracker = TodoCompletionTracker()
        tracker.toggle(TodoKind.WATERING, True)
        tracker.toggle(TodoKind.LIGHT, True)
        assert tracker.begin_submission() == (TodoKind.LIGHT, TodoKind.WATERING)
        assert tracker.in_flight is True
        # second submit while the first is pending
        assert tracker.begin_submission() is None

    def test_success_moves_checked_to_submitted(self):
        tracker = TodoCompletionTracker()
        tracker.toggle(TodoKind.WATERING, True)
        tracker.begin_submission()
        tracker.finish_submission(True)
        assert tracker.submitted == {TodoKind.WATERING}
        assert tracker.checked == frozenset()
        assert tracker.in_flight is False

    def test_failure_keeps_checked(self):
        tracker = TodoCompletionTracker()
        tracker.toggle(TodoKind.WATERING, True)
        tracker.begin_submission()
        tracker.finish_submission(False)
        assert tracker.checked == {TodoKind.WATERING}
        assert tracker.submitted == frozenset()
        assert tracker.in_flight is False

    def test_finish_without_begin_is_ignored(self):
        tracker = TodoCompletionTracker()
        tracker.toggle(TodoKind.WATERING, True)
        tracker.finish_submission(True)
        assert tracker.submitted == frozenset()
        assert tracker.checked == {TodoKind.WATERING}

    def test_only_pending_batch_is_submitted(self):
        tracker = TodoCompletionTracker()
        tracker.toggle(TodoKind.WATERING, True)
        tracker.begin_submission()
        tracker.toggle(TodoKind.LIGHT, True)
        tracker.finish_submission(True)
        assert tracker.submitted == {TodoKind.WATERING}


class TestMetricsFingerprint:
    def test_first_observation_only_records(self):
        tracker = TodoCompletionTracker()
        assert tracker.observe_metrics("45|6|24|") is False

    def test_change_clears_suppression_for_every_kind(self):
        tracker = TodoCompletionTracker()
        tracker.observe_metrics("30|6|24|")
        tracker.toggle(TodoKind.WATERING, True)
        tracker.toggle(TodoKind.TEMPERATURE, True)
        tracker.begin_submission()
        tracker.finish_submission(True)

        assert tracker.observe_metrics("30|6|24|") is False
        assert len(tracker.submitted) == 2
        assert tracker.observe_metrics("30|6.5|24|") is True
        assert tracker.submitted == frozenset()

    def test_reset(self):
        tracker = TodoCompletionTracker()
        tracker.observe_metrics("a")
        tracker.toggle(TodoKind.WATERING, True)
        tracker.begin_submission()
        tracker.reset()
        assert tracker.in_flight is False
        assert tracker.checked == frozenset()
        assert tracker.observe_metrics("b") is False
