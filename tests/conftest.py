"""
Shared test fixtures for the plant care dashboard test suite.

Provides:
- Snapshot and raw-row factories for the derivation engine
- An in-memory plant table and repository
- Mock audit logger
- Flask app / test client wired to the in-memory table

Usage:
    def test_example(make_snapshot):
        snapshot = make_snapshot(soil=30)
        assert build_todos(snapshot)
"""

from __future__ import annotations

import logging
from typing import Any
from unittest.mock import MagicMock

import pytest

from app.domain.ideal_range import IdealRange
from app.domain.plant_snapshot import Metric, NowReadings, PlantMetrics, PlantSnapshot, TodayFlags
from infrastructure.repositories.plants import PlantRepository
from infrastructure.tables.client import InMemoryTableClient, reset_table_client

# ---------------------------------------------------------------------------
# Logging: quiet test output
# ---------------------------------------------------------------------------
logging.getLogger("infrastructure").setLevel(logging.WARNING)
logging.getLogger("app").setLevel(logging.WARNING)


# ========================== Snapshot Factories =============================


def build_snapshot(
    *,
    plant_id: str = "basil-001",
    soil: Any = 45,
    soil_ideal: str = "35–55%",
    light: Any = 6,
    light_ideal: str = "6h",
    temp: Any = 24,
    temp_ideal: str = "20–28°C",
    air_humidity: Any = None,
    humidity_ideal: IdealRange | None = None,
    soil_moisture_ideal: IdealRange | None = None,
    light_goal: Any = None,
    temperature_ideal: IdealRange | None = None,
    today: TodayFlags | None = None,
    name: str = "Basil",
) -> PlantSnapshot:
    """Plant snapshot with Basil-like defaults; every reading can be overridden."""
    return PlantSnapshot(
        plant_id=plant_id,
        user_id="demo-user",
        name=name,
        metrics=PlantMetrics(
            soil_moisture=Metric(soil, soil_ideal),
            light_today=Metric(light, light_ideal),
            temperature=Metric(temp, temp_ideal),
        ),
        now=NowReadings(
            soil_moisture=soil,
            soil_moisture_ideal=soil_moisture_ideal,
            light_today=light,
            light_goal=light_goal,
            temperature=temp,
            temperature_ideal=temperature_ideal,
            air_humidity=air_humidity,
            humidity_ideal=humidity_ideal,
        ),
        today=today or TodayFlags(),
    )


def build_row(
    *,
    plant_id: str = "basil-001",
    user_id: str = "demo-user",
    name: str = "Basil",
    soil: Any = 45,
    light: Any = 6,
    temp: Any = 24,
    air_humidity: Any = 65,
    today: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Raw plant row as the table store returns it."""
    return {
        "plantId": plant_id,
        "userId": user_id,
        "name": name,
        "illustration": "🌿",
        "status": "ok",
        "statusMessage": "Growing well! Keep it up.",
        "metrics": {
            "soilMoisture": {"value": soil, "ideal": "35–55%"},
            "lightToday": {"value": light, "ideal": "6h"},
            "temperature": {"value": temp, "ideal": "20–28°C"},
        },
        "now": {
            "soilMoisture": soil,
            "soilMoistureIdeal": {"min": 35, "max": 55},
            "lightToday": light,
            "lightGoal": 6,
            "temperature": temp,
            "airHumidity": air_humidity,
        },
        "today": today if today is not None else {"needsWatering": False, "nextWatering": "", "lightRemaining": 0},
    }


@pytest.fixture()
def make_snapshot():
    """Factory for PlantSnapshot objects (see build_snapshot)."""
    return build_snapshot


@pytest.fixture()
def make_row():
    """Factory for raw plant rows (see build_row)."""
    return build_row


# ========================== Table / Repository Fixtures ====================


@pytest.fixture()
def table_client():
    """Fresh in-memory plant table per test."""
    return InMemoryTableClient()


@pytest.fixture()
def plant_repo(table_client):
    """PlantRepository over the in-memory table."""
    return PlantRepository(table_client)


@pytest.fixture(autouse=True)
def _reset_table_singleton():
    """No process-wide table client leaks between tests."""
    reset_table_client()
    yield
    reset_table_client()


# ========================== Mock Service Fixtures ==========================


@pytest.fixture()
def mock_audit_logger():
    """Mock AuditLogger."""
    logger = MagicMock()
    logger.log_event = MagicMock()
    logger.log_seed = MagicMock()
    logger.log_todo_completion = MagicMock()
    return logger


@pytest.fixture()
def plant_service(plant_repo, mock_audit_logger):
    """PlantService over the in-memory repository."""
    from app.services.application.plant_service import PlantService

    return PlantService(plant_repo, mock_audit_logger)


# ========================== Flask Fixtures =================================


@pytest.fixture()
def app(tmp_path, monkeypatch, table_client):
    monkeypatch.setenv("PLANTCARE_SECRET_KEY", "test-secret")
    monkeypatch.setenv("PLANTCARE_LOG_DIR", str(tmp_path / "logs"))
    app = create_test_app(tmp_path, table_client)
    yield app
    app.config["CONTAINER"].shutdown()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def make_app(tmp_path, monkeypatch):
    """Factory for extra apps over a given table client; containers are shut down afterwards."""
    monkeypatch.setenv("PLANTCARE_SECRET_KEY", "test-secret")
    monkeypatch.setenv("PLANTCARE_LOG_DIR", str(tmp_path / "logs"))
    created = []

    def _make(table_client, **overrides):
        app = create_test_app(tmp_path, table_client, **overrides)
        created.append(app)
        return app

    yield _make
    for app in created:
        app.config["CONTAINER"].shutdown()


def create_test_app(tmp_path, table_client, **overrides):
    from app import create_app

    config = {
        "audit_log_path": str(tmp_path / "audit.log"),
        "polling_enabled": False,
    }
    config.update(overrides)
    app = create_app(config, table_client=table_client)
    app.config["TESTING"] = True
    return app
