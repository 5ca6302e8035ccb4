"""
Plant Todo Logging
==================

Direct completion endpoint: mark care todos as done on a plant row.
"""

from __future__ import annotations

import logging

from flask import Response
from pydantic import ValidationError

from app.blueprints.api._common import (
    get_json,
    get_plant_service as _plant_service,
    get_user_id,
    invalid_request,
    success as _success,
)
from app.schemas import CompleteTodosRequest
from app.utils.http import safe_route

from . import plants_api

logger = logging.getLogger("plants_api.todos")


@plants_api.patch("/todo")
@safe_route("Failed to complete todos")
def complete_todos() -> Response:
    """
    Log completed todos.

    Request body:
    - plantId: Plant row id
    - completedTodos: Non-empty list of todo kinds
    """
    try:
        body = CompleteTodosRequest.model_validate(get_json())
    except ValidationError as ve:
        return invalid_request(ve)

    result = _plant_service().complete_todos(get_user_id(), body.plant_id, body.completed_todos)
    return _success(result)
