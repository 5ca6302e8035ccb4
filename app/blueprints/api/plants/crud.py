"""
Plant Row Operations
====================

Endpoints for reading the user's plants and seeding the demo plant.
"""

from __future__ import annotations

import logging

from flask import Response

from app.blueprints.api._common import (
    get_plant_service as _plant_service,
    get_user_id,
    success as _success,
)
from app.utils.http import safe_route

from . import plants_api

logger = logging.getLogger("plants_api.crud")


@plants_api.get("")
@safe_route("Failed to fetch plants")
def list_plants() -> Response:
    """List the current user's plants as decoded rows"""
    user_id = get_user_id()
    plants = _plant_service().list_plants(user_id)
    logger.info("Found %s plants for user %s", len(plants), user_id)

    return _success({"plants": [plant.to_dict() for plant in plants], "count": len(plants)})


@plants_api.post("/seed")
@safe_route("Failed to seed plant data")
def seed_plants() -> Response:
    """Insert the demo Basil plant for the current user"""
    user_id = get_user_id()
    result = _plant_service().seed_demo_plant(user_id)
    status = 200 if result["alreadyExisted"] else 201
    return _success(result, status)
