"""Dashboard API
=================

Per-user dashboard session: view, refresh, plant selection, todo
check/submit, notifications and notes.
"""
import logging

from flask import Blueprint, request
from pydantic import ValidationError

from app.blueprints.api._common import (
    get_dashboard_service,
    get_json,
    get_user_id,
    invalid_request,
    success as _success,
)
from app.domain.plant_notes import MAX_NOTE_LENGTH, PREDEFINED_PLANT_NOTES
from app.schemas import CheckTodoRequest, SelectPlantRequest, ToggleNoteRequest
from app.utils.http import safe_route

logger = logging.getLogger(__name__)

# Create blueprint for dashboard API
dashboard_api = Blueprint('dashboard_api', __name__, url_prefix='/api/dashboard')

_TRUTHY = {"1", "true", "yes", "on"}


def _session():
    return get_dashboard_service().get_session(get_user_id())


@dashboard_api.get("")
@safe_route("Failed to build dashboard")
def get_dashboard():
    """Dashboard view; loads plants on first call or with ?refresh=1"""
    session = _session()
    if not session.loaded or request.args.get("refresh", "").lower() in _TRUTHY:
        session.refresh()
    return _success(session.view())


@dashboard_api.post("/refresh")
@safe_route("Failed to refresh dashboard")
def refresh_dashboard():
    session = _session()
    session.refresh()
    return _success(session.view())


@dashboard_api.post("/select")
@safe_route("Failed to select plant")
def select_plant():
    try:
        body = SelectPlantRequest.model_validate(get_json())
    except ValidationError as ve:
        return invalid_request(ve)

    session = _session()
    if not session.loaded:
        session.refresh()
    session.select_plant(body.plant_id)
    return _success(session.view())


@dashboard_api.post("/todos/check")
@safe_route("Failed to update todo")
def check_todo():
    try:
        body = CheckTodoRequest.model_validate(get_json())
    except ValidationError as ve:
        return invalid_request(ve)

    checked = _session().toggle_todo(body.todo, body.checked)
    return _success({"checked": sorted(kind.value for kind in checked)})


@dashboard_api.post("/todos/submit")
@safe_route("Failed to log todos")
def submit_todos():
    """Submit checked todos; collaborator failures surface as 502"""
    session = _session()
    submitted = session.submit_completions()
    if submitted:
        logger.info("User %s logged %s", session.user_id, [kind.value for kind in submitted])
    return _success({"submitted": [kind.value for kind in submitted], "dashboard": session.view()})


@dashboard_api.post("/notifications/read")
@safe_route("Failed to mark notifications as read")
def mark_notifications_read():
    session = _session()
    session.mark_notifications_read()
    return _success({"unreadCount": session.unread_count})


@dashboard_api.get("/notes/predefined")
def predefined_notes():
    return _success({"notes": list(PREDEFINED_PLANT_NOTES), "maxLength": MAX_NOTE_LENGTH})


@dashboard_api.post("/notes/toggle")
@safe_route("Failed to update notes")
def toggle_note():
    try:
        body = ToggleNoteRequest.model_validate(get_json())
    except ValidationError as ve:
        return invalid_request(ve)

    return _success(_session().toggle_note(body.note))


@dashboard_api.delete("")
@safe_route("Failed to close dashboard")
def close_dashboard():
    closed = get_dashboard_service().close_session(get_user_id())
    return _success({"closed": closed})
