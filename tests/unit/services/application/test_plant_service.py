"""
Unit tests for PlantService.
"""

from unittest.mock import MagicMock

import pytest

from app.domain.exceptions import ExternalServiceError, NotFoundError
from app.enums.common import TodoKind
from app.services.application.plant_service import PlantService
from infrastructure.repositories.plants import DEMO_PLANT_ID, PlantRepository
from infrastructure.tables.client import InMemoryTableClient


class TestListPlants:
    def test_rows_become_snapshots(self, make_row):
        service = PlantService(PlantRepository(InMemoryTableClient([make_row(soil=30)])))
        plants = service.list_plants("demo-user")
        assert [p.plant_id for p in plants] == ["basil-001"]
        assert plants[0].metrics.soil_moisture.value == 30

    def test_invalid_rows_are_skipped(self, make_row, caplog):
        bad = make_row(plant_id="broken")
        bad["metrics"] = "{not json"
        service = PlantService(PlantRepository(InMemoryTableClient([bad, make_row(plant_id="ok")])))
        with caplog.at_level("WARNING", logger="app.services.application.plant_service"):
            plants = service.list_plants("demo-user")
        assert [p.plant_id for p in plants] == ["ok"]
        assert "Skipping invalid plant row broken" in caplog.text

    def test_store_failure_propagates(self):
        repo = MagicMock()
        repo.list_by_user.side_effect = ExternalServiceError("Plant table is unreachable")
        with pytest.raises(ExternalServiceError):
            PlantService(repo).list_plants("demo-user")


class TestSeed:
    def test_seed_is_audited(self, plant_service, mock_audit_logger):
        result = plant_service.seed_demo_plant("demo-user")
        assert result["alreadyExisted"] is False
        mock_audit_logger.log_seed.assert_called_once_with("demo-user", DEMO_PLANT_ID, False)

    def test_works_without_audit_logger(self, plant_repo):
        assert PlantService(plant_repo).seed_demo_plant("demo-user")["success"] is True


class TestCompleteTodos:
    def test_success_is_audited(self, plant_service, mock_audit_logger):
        plant_service.seed_demo_plant("demo-user")
        result = plant_service.complete_todos("demo-user", DEMO_PLANT_ID, [TodoKind.WATERING])
        assert result["completedTodos"] == ["watering"]
        mock_audit_logger.log_todo_completion.assert_called_once_with(
            "demo-user", DEMO_PLANT_ID, [TodoKind.WATERING], success=True
        )

    def test_store_failure_is_audited_and_raised(self, mock_audit_logger):
        repo = MagicMock()
        repo.complete_todos.side_effect = ExternalServiceError("rejected")
        service = PlantService(repo, mock_audit_logger)
        with pytest.raises(ExternalServiceError):
            service.complete_todos("demo-user", "p1", [TodoKind.LIGHT])
        mock_audit_logger.log_todo_completion.assert_called_once_with(
            "demo-user", "p1", [TodoKind.LIGHT], success=False
        )

    def test_unknown_plant(self, plant_service, mock_audit_logger):
        with pytest.raises(NotFoundError):
            plant_service.complete_todos("demo-user", "missing", [TodoKind.WATERING])
        mock_audit_logger.log_todo_completion.assert_not_called()
