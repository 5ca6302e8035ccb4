"""
Plant Care Dashboard
====================
Flask application factory.

``create_app`` loads :class:`~app.config.AppConfig` from the environment,
wires the :class:`~app.services.container.ServiceContainer` and registers the
``/api/plants`` and ``/api/dashboard`` blueprints. Dashboard pollers are
stopped once, on whichever comes first: ``atexit`` or an explicit call of
``app.extensions["plantcare_shutdown"]``.
"""

from __future__ import annotations

import atexit
import logging
import threading
from typing import Any

from flask import Flask, request
from werkzeug.exceptions import HTTPException

from app.blueprints.api.dashboard import dashboard_api
from app.blueprints.api.plants import plants_api
from app.config import load_config, setup_logging

logger = logging.getLogger(__name__)


def create_app(config_overrides: dict[str, Any] | None = None, *, table_client: Any = None) -> Flask:
    """Build the Flask app.

    Args:
        config_overrides: AppConfig attribute overrides (keys are lower-cased)
        table_client: Use this table client instead of the process-wide one
    """
    config = load_config()
    for key, value in (config_overrides or {}).items():
        setattr(config, key.lower(), value)

    setup_logging(debug=config.DEBUG, level=config.log_level)

    flask_app = Flask(__name__)
    flask_app.config.update(config.as_flask_config())
    flask_app.config.update(
        SESSION_COOKIE_HTTPONLY=True,
        SESSION_COOKIE_SAMESITE="Lax",
        SESSION_COOKIE_SECURE=config.environment == "production",
    )

    from app.services.container import ServiceContainer

    container = ServiceContainer.build(config, table_client=table_client)
    flask_app.config["CONTAINER"] = container
    flask_app.extensions["plantcare_shutdown"] = _shutdown_hook(container)

    @flask_app.errorhandler(Exception)
    def _handle_unhandled(exc):
        # Outside /api/ keep Flask's own behaviour
        if not request.path.startswith("/api/"):
            if isinstance(exc, HTTPException):
                return exc
            raise exc
        from app.utils.http import exception_response

        return exception_response(exc, context=f"{request.method} {request.path}")

    flask_app.register_blueprint(plants_api, url_prefix="/api/plants")
    flask_app.register_blueprint(dashboard_api, url_prefix="/api/dashboard")
    logger.info("Registered blueprints: %s", ", ".join(flask_app.blueprints))
    logger.info(
        "Plant care dashboard initialized (%s, store=%s, polling=%s)",
        config.environment,
        config.store_backend,
        "every %ss" % config.poll_interval_seconds if config.polling_enabled else "off",
    )
    return flask_app


def _shutdown_hook(container):
    """Idempotent shutdown callable, also registered with ``atexit``."""
    lock = threading.Lock()
    done = False

    def _shutdown(reason: str = "unknown") -> None:
        nonlocal done
        with lock:
            if done:
                return
            done = True
        logger.info("Graceful shutdown initiated (%s)", reason)
        container.shutdown()

    atexit.register(_shutdown, "atexit")
    return _shutdown


__all__ = ["create_app"]
