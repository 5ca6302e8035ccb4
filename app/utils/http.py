"""
JSON envelopes and error mapping for the API blueprints.

Every API response has the shape ``{"ok": bool, "data": ..., "error": ...}``.
Errors carry ``{"message", "timestamp", ...details}`` in ``error`` and repeat
the message at the top level for older clients.
"""

from __future__ import annotations

import functools
import logging
from typing import Any, Callable

from flask import Response, jsonify
from werkzeug.exceptions import HTTPException

from app.utils.time import iso_now

_log = logging.getLogger(__name__)

# What a client sees for a 5xx; the real cause only goes to the log.
_GENERIC_MESSAGES: dict[int, str] = {
    500: "An internal error occurred",
    502: "Upstream service unavailable",
    503: "Service temporarily unavailable",
}


def success_response(
    data: dict | list | None = None,
    status: int = 200,
    *,
    message: str | None = None,
) -> Response:
    payload: dict[str, Any] = {"ok": True, "data": data, "error": None}
    if message is not None:
        payload["message"] = message
    response = jsonify(payload)
    response.status_code = status
    return response


def error_response(
    message: str,
    status: int = 500,
    *,
    details: dict | None = None,
) -> Response:
    error: dict[str, Any] = {"message": message, "timestamp": iso_now(), **(details or {})}
    body: dict[str, Any] = {"ok": False, "data": None, "error": error, "message": message}
    if details:
        body["details"] = details
    response = jsonify(body)
    response.status_code = status
    return response


def safe_error(exc: BaseException, status: int = 500, *, context: str = "") -> Response:
    """Log ``exc`` with its traceback and answer with a generic message for ``status``."""
    _log.error("API error [%s] %s: %s", status, context, exc, exc_info=exc)
    return error_response(_GENERIC_MESSAGES.get(status, _GENERIC_MESSAGES[500]), status)


def exception_response(exc: Exception, *, context: str = "", fallback_status: int = 500) -> Response:
    """
    Turn any exception raised while serving an API request into an envelope.

    - ``PlantCareError``: its own ``http_status``; 4xx messages are returned
      verbatim, 5xx ones are replaced by a generic message.
    - werkzeug ``HTTPException`` (routing 404/405, bad JSON ...): its code
      and description.
    - anything else: ``fallback_status`` with a generic message.
    """
    from app.domain.exceptions import PlantCareError

    if isinstance(exc, PlantCareError):
        if exc.is_client_error:
            _log.info("API %s [%s] %s: %s", type(exc).__name__, exc.http_status, context, exc)
            return error_response(str(exc) or context or "Request failed", exc.http_status)
        if exc.detail:
            context = f"{context} {exc.detail}".strip()
        return safe_error(exc, exc.http_status, context=context)

    if isinstance(exc, HTTPException):
        status = int(exc.code or 500)
        if status >= 500:
            return safe_error(exc, status, context=context or "http-exception")
        return error_response(exc.description or "Request failed", status)

    return safe_error(exc, fallback_status, context=context or "unhandled")


def safe_route(error_message: str = "An internal error occurred", *, error_status: int = 500) -> Callable:
    """Wrap a route so that raised exceptions become JSON error envelopes.

    Usage::

        @dashboard_api.post("/todos/submit")
        @safe_route("Failed to log todos")
        def submit_todos():
            ...

    ``error_message`` is logged as context for 5xx errors; ``error_status``
    is used for exceptions outside the ``PlantCareError`` hierarchy.
    """

    def decorator(fn: Callable) -> Callable:
        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Response:
            try:
                return fn(*args, **kwargs)
            except Exception as exc:
                return exception_response(exc, context=error_message, fallback_status=error_status)

        return wrapper

    return decorator
