"""
Configuration for the Plant Care Dashboard
==========================================
Application runtime settings: table store credentials, polling cadence,
alert thresholds. Sets up the logging configuration as well.
"""

import logging
import os
import sys
from contextlib import suppress
from dataclasses import dataclass, field
from logging.handlers import RotatingFileHandler
from typing import Any, Callable

from app.domain.deviation import SeverityThresholds


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in {"1", "true", "t", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"Environment variable {name} must be an integer.") from None


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"Environment variable {name} must be a number.") from None


STORE_BACKENDS = ("memory", "botpress")


@dataclass
class AppConfig:
    """Runtime configuration loaded from environment variables."""

    environment: str = field(default_factory=lambda: os.getenv("PLANTCARE_ENV", "development"))
    secret_key: str = field(default_factory=lambda: os.getenv("PLANTCARE_SECRET_KEY", "PlantCareDevSecretKey"))

    DEBUG: bool = field(default_factory=lambda: _env_bool("PLANTCARE_DEBUG", False))
    audit_log_path: str = field(default_factory=lambda: os.getenv("PLANTCARE_AUDIT_LOG_PATH", "logs/audit.log"))
    log_level: str = field(default_factory=lambda: os.getenv("PLANTCARE_LOG_LEVEL", "INFO"))

    # Plant table store
    store_backend: str = field(default_factory=lambda: os.getenv("PLANTCARE_STORE_BACKEND", "memory").lower())
    table_api_url: str = field(default_factory=lambda: os.getenv("BOTPRESS_API_URL", "https://api.botpress.cloud"))
    table_token: str = field(default_factory=lambda: os.getenv("BOTPRESS_TOKEN", ""))
    table_bot_id: str = field(default_factory=lambda: os.getenv("BOTPRESS_BOT_ID", ""))
    table_name: str = field(default_factory=lambda: os.getenv("PLANTCARE_TABLE_NAME", "PlantTable"))
    table_timeout_seconds: int = field(default_factory=lambda: _env_int("PLANTCARE_TABLE_TIMEOUT", 10))
    table_row_limit: int = field(default_factory=lambda: _env_int("PLANTCARE_TABLE_ROW_LIMIT", 50))

    # Dashboard refresh
    polling_enabled: bool = field(default_factory=lambda: _env_bool("PLANTCARE_POLLING_ENABLED", True))
    poll_interval_seconds: float = field(default_factory=lambda: _env_float("PLANTCARE_POLL_INTERVAL_SECONDS", 5.0))
    alert_history_limit: int = field(default_factory=lambda: _env_int("PLANTCARE_ALERT_HISTORY_LIMIT", 20))

    # Deviation tiers, as fractions of the violated bound (min or goal when below, max when above)
    severity_tolerance: float = field(default_factory=lambda: _env_float("PLANTCARE_SEVERITY_TOLERANCE", 0.10))
    severity_warning: float = field(default_factory=lambda: _env_float("PLANTCARE_SEVERITY_WARNING", 0.50))
    severity_critical: float = field(default_factory=lambda: _env_float("PLANTCARE_SEVERITY_CRITICAL", 0.70))

    # No login flow: requests without a session user act as this user
    default_user_id: str = field(default_factory=lambda: os.getenv("PLANTCARE_DEFAULT_USER_ID", "demo-user"))

    # Default insecure secret key - used only for detection
    _DEFAULT_SECRET_KEY: str = field(default="PlantCareDevSecretKey", init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.environment == "production" and self.secret_key == self._DEFAULT_SECRET_KEY:
            raise RuntimeError(
                "SECURITY ERROR: Cannot use default secret key in production!\n"
                "Set PLANTCARE_SECRET_KEY environment variable to a secure random value.\n"
                'Generate one with: python -c "import secrets; print(secrets.token_hex(32))"'
            )
        if self.store_backend not in STORE_BACKENDS:
            raise ValueError(
                f"PLANTCARE_STORE_BACKEND must be one of {', '.join(STORE_BACKENDS)}, got {self.store_backend!r}"
            )
        if self.poll_interval_seconds <= 0:
            raise ValueError("PLANTCARE_POLL_INTERVAL_SECONDS must be positive.")
        if self.alert_history_limit < 1:
            raise ValueError("PLANTCARE_ALERT_HISTORY_LIMIT must be at least 1.")
        # Raises on mis-ordered tiers
        self.severity_thresholds()

    def severity_thresholds(self) -> SeverityThresholds:
        return SeverityThresholds(
            tolerance=self.severity_tolerance,
            warning=self.severity_warning,
            critical=self.severity_critical,
        )

    def as_flask_config(self) -> dict[str, Any]:
        """Render configuration values for Flask application."""
        return {
            "ENV": self.environment,
            "SECRET_KEY": self.secret_key,
            "AUDIT_LOG_PATH": self.audit_log_path,
            "DEBUG": self.DEBUG,
            "JSON_AS_ASCII": False,
        }


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_CONSOLE_HANDLER = "plantcare_console"
_FILE_HANDLER = "plantcare_file"


def _ensure_handler(root: logging.Logger, name: str, factory: Callable[[], logging.Handler]) -> bool:
    """Attach the handler built by ``factory`` unless one called ``name`` exists."""
    if any(getattr(handler, "name", "") == name for handler in root.handlers):
        return False
    handler = factory()
    handler.name = name
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    return True


def _console_handler() -> logging.Handler:
    # Ideal strings carry "–" and "°"
    stream = sys.stdout
    with suppress(AttributeError, ValueError):
        stream.reconfigure(encoding="utf-8", errors="replace")
    return logging.StreamHandler(stream=stream)


def _file_handler(log_dir: str) -> logging.Handler:
    os.makedirs(log_dir, exist_ok=True)
    return RotatingFileHandler(
        os.path.join(log_dir, "plantcare.log"),
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )


def setup_logging(debug: bool = False, level: str = "INFO", log_dir: str | None = None) -> None:
    """
    Configure the root logger: console plus ``<log_dir>/plantcare.log``.

    Safe to call once per ``create_app``; handlers are only added once and
    their level follows the latest call.
    """
    log_level = logging.DEBUG if debug else logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO
    log_dir = log_dir or os.getenv("PLANTCARE_LOG_DIR", "logs")

    root = logging.getLogger()
    root.setLevel(log_level)
    added = _ensure_handler(root, _CONSOLE_HANDLER, _console_handler)
    added = _ensure_handler(root, _FILE_HANDLER, lambda: _file_handler(log_dir)) or added

    for handler in root.handlers:
        if getattr(handler, "name", "") in {_CONSOLE_HANDLER, _FILE_HANDLER}:
            handler.setLevel(log_level)
    if added:
        root.info("Logging initialized at level: %s", logging.getLevelName(log_level))

    if _env_bool("PLANTCARE_SILENCE_WERKZEUG", True):
        logging.getLogger("werkzeug").setLevel(logging.WARNING)
    # Per-request connection chatter from the table client
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def load_config() -> AppConfig:
    """Helper for callers to load and validate configuration."""
    return AppConfig()
