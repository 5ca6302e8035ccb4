from __future__ import annotations

import logging
from dataclasses import dataclass

from app.config import AppConfig
from app.services.application.dashboard_service import DashboardService
from app.services.application.plant_service import PlantService
from infrastructure.logging.audit import AuditLogger
from infrastructure.repositories.plants import PlantRepository
from infrastructure.tables.client import TableClient, get_table_client

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Aggregate and manage core backend services."""

    config: AppConfig
    table_client: TableClient
    plant_repo: PlantRepository
    audit_logger: AuditLogger
    plant_service: PlantService
    dashboard_service: DashboardService

    @classmethod
    def build(cls, config: AppConfig, *, table_client: TableClient | None = None) -> "ServiceContainer":
        """Construct the service container with all dependencies.

        Args:
            config: Application configuration
            table_client: Use this client instead of the process-wide one
        """
        logger.info("Building ServiceContainer (store backend: %s)", config.store_backend)
        client = table_client if table_client is not None else get_table_client(config)
        plant_repo = PlantRepository(client, row_limit=config.table_row_limit)
        audit_logger = AuditLogger(config.audit_log_path, config.log_level)
        plant_service = PlantService(plant_repo, audit_logger)
        dashboard_service = DashboardService(
            plant_service,
            thresholds=config.severity_thresholds(),
            history_limit=config.alert_history_limit,
            poll_interval=config.poll_interval_seconds,
            polling_enabled=config.polling_enabled,
        )

        logger.info("ServiceContainer built successfully.")
        return cls(
            config=config,
            table_client=client,
            plant_repo=plant_repo,
            audit_logger=audit_logger,
            plant_service=plant_service,
            dashboard_service=dashboard_service,
        )

    def shutdown(self) -> None:
        """Release external resources before process exit."""
        self.dashboard_service.shutdown()
        logger.info("ServiceContainer shutdown complete.")
