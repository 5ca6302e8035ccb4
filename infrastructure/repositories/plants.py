"""
Plant Repository
================
Data access layer for plant rows in the hosted plant table.

Rows are returned raw (structured columns may still be JSON strings);
decoding into snapshots is the schema layer's job.
"""

from __future__ import annotations

import copy
import json
import logging
from collections.abc import Iterable
from typing import Any

from app.domain.exceptions import NotFoundError, RepositoryError
from app.enums.common import TodoKind
from infrastructure.tables.client import TableClient

logger = logging.getLogger(__name__)

DEMO_PLANT_ID = "basil-001"


def demo_plant_row(user_id: str) -> dict[str, Any]:
    """The demo Basil row inserted by the seed action."""
    return {
        "plantId": DEMO_PLANT_ID,
        "userId": user_id,
        "name": "Basil",
        "illustration": "🌿",
        "status": "ok",
        "statusMessage": "Growing well! Keep it up.",
        "metrics": {
            "soilMoisture": {"value": 45, "ideal": "35–55%"},
            "lightToday": {"value": 6, "ideal": "6h"},
            "temperature": {"value": 24, "ideal": "20–28°C"},
        },
        "cycle": {
            "phase": "vegetative",
            "progress": 60,
            "nextMilestone": "Flowering starts in ~2 weeks",
        },
        "trendMoisture": [
            {"day": "Mon", "value": 42},
            {"day": "Tue", "value": 38},
            {"day": "Wed", "value": 50},
            {"day": "Thu", "value": 45},
            {"day": "Fri", "value": 43},
            {"day": "Sat", "value": 47},
            {"day": "Sun", "value": 45},
        ],
        "trendLight": [
            {"day": "Mon", "value": 5},
            {"day": "Tue", "value": 7},
            {"day": "Wed", "value": 6},
            {"day": "Thu", "value": 5.5},
            {"day": "Fri", "value": 6.5},
            {"day": "Sat", "value": 7},
            {"day": "Sun", "value": 6},
        ],
        "today": {
            "needsWatering": True,
            "nextWatering": "Tomorrow at 8 AM",
            "lightRemaining": 0,
        },
        "alerts": [
            {
                "id": "1",
                "severity": "critical",
                "message": "Consider pruning lower leaves for better air circulation",
            }
        ],
        "now": {
            "soilMoisture": 45,
            "soilMoistureIdeal": {"min": 35, "max": 55},
            "lightToday": 6,
            "lightGoal": 6,
            "temperature": 24,
            "airHumidity": 65,
        },
        "guide": {
            "plantType": "Basil",
            "wateringInfo": "Keep soil moist, water when top layer is dry. Avoid waterlogging.",
            "lightInfo": "6-8h of direct sunlight per day. Tolerates partial shade in hot climates.",
            "notes": "Prune regularly to encourage growth. Remove flowers to prolong harvest.",
        },
    }


class PlantRepository:
    """Repository for plant table operations."""

    def __init__(self, client: TableClient, row_limit: int = 50):
        """
        Initialize repository.

        Args:
            client: Table client (HTTP or in-memory)
            row_limit: Maximum rows returned per user
        """
        self.client = client
        self.row_limit = row_limit

    def list_by_user(self, user_id: str) -> list[dict[str, Any]]:
        return self.client.find_rows({"userId": user_id}, limit=self.row_limit)

    def find_by_plant_id(self, plant_id: str) -> dict[str, Any] | None:
        rows = self.client.find_rows({"plantId": plant_id}, limit=1)
        return rows[0] if rows else None

    def seed_demo(self, user_id: str) -> dict[str, Any]:
        """Insert the demo Basil row unless it already exists."""
        if self.find_by_plant_id(DEMO_PLANT_ID) is not None:
            logger.info("Demo plant %s already present, skipping seed", DEMO_PLANT_ID)
            return {"success": True, "plantId": DEMO_PLANT_ID, "alreadyExisted": True}

        self.client.create_rows([demo_plant_row(user_id)])
        logger.info("Seeded demo plant %s for user %s", DEMO_PLANT_ID, user_id)
        return {"success": True, "plantId": DEMO_PLANT_ID, "alreadyExisted": False}

    def complete_todos(self, plant_id: str, kinds: Iterable[TodoKind]) -> dict[str, Any]:
        """
        Mark todo kinds as logged for today on the plant row.

        Watering completion also clears the legacy ``needsWatering`` flag.

        Raises:
            NotFoundError: no row with ``plant_id``
            RepositoryError: the row carries no id to update
            ExternalServiceError: the table store rejected the update
        """
        row = self.find_by_plant_id(plant_id)
        if row is None:
            raise NotFoundError(f"Plant {plant_id} not found", detail={"plantId": plant_id})
        row_id = row.get("id")
        if row_id is None:
            raise RepositoryError(f"Plant row {plant_id} has no row id", detail={"plantId": plant_id})

        completed = [TodoKind(kind) for kind in kinds]
        today = _object_column(row.get("today"))
        logged = dict(today.get("logged") or {})
        for kind in completed:
            logged[kind.value] = True
        today["logged"] = logged
        if TodoKind.WATERING in completed:
            today["needsWatering"] = False

        self.client.update_rows([{"id": row_id, "today": today}])
        logger.info("Logged todos %s for plant %s", [kind.value for kind in completed], plant_id)
        return {"success": True, "plantId": plant_id, "completedTodos": [kind.value for kind in completed]}


def _object_column(value: Any) -> dict[str, Any]:
    """Copy a structured column, decoding it if the store returned a JSON string."""
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError:
            logger.warning("Discarding undecodable 'today' column")
            return {}
    return copy.deepcopy(value) if isinstance(value, dict) else {}
