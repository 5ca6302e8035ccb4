"""
Unit tests for plant notes and the plant status helpers.
"""

from datetime import datetime, timezone

import pytest

from app.domain.alerts import generate_alerts
from app.domain.exceptions import ValidationError
from app.domain.plant_notes import MAX_NOTE_LENGTH, PREDEFINED_PLANT_NOTES, PlantNotes
from app.domain.plant_status import light_progress, metric_statuses, overall_status
from app.enums.common import PlantStatus

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


class TestPlantNotes:
    def test_toggle_adds_then_removes(self):
        notes = PlantNotes()
        assert notes.toggle("Watered") is True
        assert notes.toggle("Pruned") is True
        assert notes.notes == ["Watered", "Pruned"]
        assert notes.toggle("Watered") is False
        assert notes.notes == ["Pruned"]

    def test_free_text_is_trimmed(self):
        notes = PlantNotes()
        notes.toggle("  looks happy  ")
        assert notes.notes == ["looks happy"]

    @pytest.mark.parametrize("note", ["", "   ", None])
    def test_empty_note_rejected(self, note):
        with pytest.raises(ValidationError):
            PlantNotes().toggle(note)

    def test_too_long_note_rejected(self):
        with pytest.raises(ValidationError):
            PlantNotes().toggle("x" * (MAX_NOTE_LENGTH + 1))

    def test_predefined_vocabulary(self):
        assert len(PREDEFINED_PLANT_NOTES) == 20
        assert PlantNotes.is_predefined("Watered")
        assert not PlantNotes.is_predefined("looks happy")
        assert PlantNotes.is_predefined("Pest detected — treating")
        assert PlantNotes.is_predefined("Root check — healthy")


class TestLightProgress:
    @pytest.mark.parametrize(
        "today, goal, expected",
        [
            (3, 6, 50.0),
            (6, 6, 100.0),
            (9, 6, 100.0),
            (-1, 6, 0.0),
            (2, 0, 0.0),
            (None, 6, 0.0),
            ("4", "8", 50.0),
        ],
    )
    def test_clamped_percent(self, today, goal, expected):
        assert light_progress(today, goal) == expected


class TestStatuses:
    def test_healthy(self, make_snapshot):
        alerts = generate_alerts(make_snapshot(), NOW)
        assert overall_status(alerts) is PlantStatus.OK
        assert set(metric_statuses(alerts).values()) == {"ok"}

    def test_warning_and_critical(self, make_snapshot):
        alerts = generate_alerts(make_snapshot(soil=10, temp=40), NOW)
        statuses = metric_statuses(alerts)
        assert statuses["soilMoisture"] == "critical"
        assert statuses["temperature"] == "attention"
        assert statuses["lightToday"] == "ok"
        assert overall_status(alerts) is PlantStatus.CRITICAL

    def test_info_only_is_warning(self, make_snapshot):
        assert overall_status(generate_alerts(make_snapshot(soil=30), NOW)) is PlantStatus.WARNING
