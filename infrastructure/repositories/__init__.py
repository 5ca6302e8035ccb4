"""Repositories over the plant table."""

from infrastructure.repositories.plants import DEMO_PLANT_ID, PlantRepository

__all__ = ["PlantRepository", "DEMO_PLANT_ID"]
