"""
Shared helpers for the API blueprints: who is asking, which services to use,
how to read the body and how to answer.

Usage:
    from app.blueprints.api._common import get_json, get_user_id, success
"""
from __future__ import annotations

import logging

from flask import current_app, request, session
from pydantic import ValidationError

from app.utils.http import error_response, success_response

logger = logging.getLogger("api._common")


def get_user_id() -> str:
    """Session user, or the configured default user (there is no login flow)."""
    user_id = session.get("user_id")
    if user_id:
        return str(user_id)
    return get_container().config.default_user_id


def get_container():
    """
    The ServiceContainer built by ``create_app``.

    Raises:
        RuntimeError: the app was built without a container
    """
    container = current_app.config.get("CONTAINER")
    if not container:
        raise RuntimeError("ServiceContainer not found in app config")
    return container


def get_plant_service():
    return get_container().plant_service


def get_dashboard_service():
    return get_container().dashboard_service


def get_json() -> dict:
    """Request body if it is a JSON object, else ``{}`` so schema validation reports missing fields."""
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def success(data: dict | list | None = None, status: int = 200, *, message: str | None = None):
    """``{"ok": true, "data": data, "error": null}``"""
    return success_response(data, status, message=message)


def fail(message: str, status: int = 400, *, details: dict | None = None):
    """``{"ok": false, "data": null, "error": {"message": ..., **details}}``"""
    return error_response(message, status, details=details)


def invalid_request(ve: ValidationError):
    """400 listing each pydantic message, e.g. ``"Value error, Invalid todo types: ..."``."""
    errors = [err.get("msg", "invalid value") for err in ve.errors()]
    logger.info("Rejected %s %s: %s", request.method, request.path, "; ".join(errors))
    return fail("Invalid request", 400, details={"errors": errors})
