import json
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Iterable


class AuditLogger:
    """Structured audit logger that writes append-only JSON records of user actions."""

    def __init__(self, log_path: str, level: str = "INFO") -> None:
        self.log_path = Path(log_path)
        self.log_path.parent.mkdir(parents=True, exist_ok=True)

        self.logger = logging.getLogger("plantcare.audit")
        self.logger.setLevel(getattr(logging, level.upper(), logging.INFO))
        self.logger.propagate = False

        # One handler per target file; create_app may run more than once per process
        target = str(self.log_path.resolve())
        if not any(
            isinstance(handler, RotatingFileHandler) and handler.baseFilename == target
            for handler in self.logger.handlers
        ):
            handler = RotatingFileHandler(
                filename=target,
                maxBytes=10 * 1024 * 1024,  # 10 MB
                backupCount=30,
                encoding="utf-8",
                delay=True,
            )
            formatter = logging.Formatter(
                fmt="%(asctime)sZ | %(levelname)s | %(message)s",
                datefmt="%Y-%m-%dT%H:%M:%S",
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def log_event(self, actor: str, action: str, resource: str, outcome: str, **metadata: Any) -> None:
        payload: Dict[str, Any] = {
            "actor": actor,
            "action": action,
            "resource": resource,
            "outcome": outcome,
        }
        if metadata:
            payload["meta"] = metadata

        self.logger.info(json.dumps(payload, ensure_ascii=False, default=str))

    def log_seed(self, user_id: str, plant_id: str, already_existed: bool) -> None:
        self.log_event(
            user_id,
            "plant.seed",
            f"plant:{plant_id}",
            "noop" if already_existed else "created",
        )

    def log_todo_completion(self, user_id: str, plant_id: str, kinds: Iterable[Any], success: bool) -> None:
        self.log_event(
            user_id,
            "plant.todos.complete",
            f"plant:{plant_id}",
            "success" if success else "failure",
            todos=[getattr(kind, "value", kind) for kind in kinds],
        )
