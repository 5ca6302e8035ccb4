"""
Plant Notes
===========
Quick notes a user pins on a plant card: a predefined vocabulary plus
free-form text.
"""

from __future__ import annotations

from app.domain.exceptions import ValidationError

MAX_NOTE_LENGTH = 200

PREDEFINED_PLANT_NOTES: tuple[str, ...] = (
    "Watered",
    "Rotated pot",
    "Pruned",
    "Leaves turning yellow",
    "New growth spotted",
    "Moved to a sunnier spot",
    "Repotted into larger container",
    "Added fertilizer",
    "Pest detected — treating",
    "Misted the leaves",
    "Soil feels too dry",
    "Soil feels too wet",
    "Leaves drooping",
    "Flowers starting to bloom",
    "Adjusted watering schedule",
    "Moved to a shadier spot",
    "Root check — healthy",
    "Added support stake",
    "Noticed brown leaf tips",
    "Applied neem oil treatment",
)


class PlantNotes:
    """Ordered, de-duplicated notes for one plant."""

    def __init__(self) -> None:
        self._notes: list[str] = []

    @property
    def notes(self) -> list[str]:
        return list(self._notes)

    def toggle(self, note: str) -> bool:
        """
        Add ``note`` if absent, remove it if present.

        Returns:
            True if the note is now selected
        """
        text = (note or "").strip()
        if not text:
            raise ValidationError("Note must not be empty")
        if len(text) > MAX_NOTE_LENGTH:
            raise ValidationError(f"Note must be at most {MAX_NOTE_LENGTH} characters")

        if text in self._notes:
            self._notes.remove(text)
            return False
        self._notes.append(text)
        return True

    @staticmethod
    def is_predefined(note: str) -> bool:
        return note in PREDEFINED_PLANT_NOTES
