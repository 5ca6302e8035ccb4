"""
Plant Service
=============
Application-level service for plant rows.

This service provides:
- Listing a user's plants as decoded snapshots
- Seeding the demo plant
- Logging completed todos on a plant row

Rows that fail schema validation are skipped with a warning so one bad row
never hides the rest of a user's plants.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, Optional

from pydantic import ValidationError as SchemaValidationError

from app.domain.exceptions import ServiceError
from app.domain.plant_snapshot import PlantSnapshot
from app.enums.common import TodoKind
from app.schemas.plants import PlantRowSchema

if TYPE_CHECKING:
    from infrastructure.logging.audit import AuditLogger
    from infrastructure.repositories.plants import PlantRepository

logger = logging.getLogger(__name__)


class PlantService:
    """Application service for plant rows owned by a user."""

    def __init__(self, repository: "PlantRepository", audit_logger: Optional["AuditLogger"] = None) -> None:
        self.repository = repository
        self.audit_logger = audit_logger

    def list_plants(self, user_id: str) -> list[PlantSnapshot]:
        """
        Fetch and decode the user's plants.

        Raises:
            ExternalServiceError: the table store could not be reached
        """
        snapshots: list[PlantSnapshot] = []
        for row in self.repository.list_by_user(user_id):
            try:
                snapshots.append(PlantRowSchema.model_validate(row).to_snapshot())
            except SchemaValidationError as exc:
                logger.warning(
                    "Skipping invalid plant row %s: %d validation error(s)",
                    row.get("plantId", row.get("id")) if isinstance(row, dict) else "?",
                    exc.error_count(),
                )
        return snapshots

    def seed_demo_plant(self, user_id: str) -> dict[str, Any]:
        result = self.repository.seed_demo(user_id)
        if self.audit_logger:
            self.audit_logger.log_seed(user_id, result["plantId"], result["alreadyExisted"])
        return result

    def complete_todos(self, user_id: str, plant_id: str, kinds: Iterable[TodoKind]) -> dict[str, Any]:
        """
        Persist completed todos for a plant.

        Raises:
            NotFoundError: unknown plant
            ServiceError: the table store rejected the update or the row is unusable
        """
        kinds = list(kinds)
        try:
            result = self.repository.complete_todos(plant_id, kinds)
        except ServiceError:
            if self.audit_logger:
                self.audit_logger.log_todo_completion(user_id, plant_id, kinds, success=False)
            raise
        if self.audit_logger:
            self.audit_logger.log_todo_completion(user_id, plant_id, kinds, success=True)
        return result
