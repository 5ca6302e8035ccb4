"""
Plant Table Client
==================
Thin client for the hosted table store that holds plant rows.

Two interchangeable backends:

- :class:`HttpTableClient` talks to the Botpress tables API over HTTPS.
- :class:`InMemoryTableClient` keeps rows in a dict; used for development
  and tests.

The process-wide client is built lazily by :func:`get_table_client` from the
application config. The HTTP backend refuses to start without credentials.
"""

from __future__ import annotations

import copy
import itertools
import logging
import threading
from typing import Any, Optional, Protocol

import requests

from app.domain.exceptions import ConfigurationError, ExternalServiceError

logger = logging.getLogger(__name__)

Row = dict[str, Any]


class TableClient(Protocol):
    """Operations the plant repository needs from a table store."""

    def find_rows(self, filter: Row, limit: int = 50) -> list[Row]: ...

    def create_rows(self, rows: list[Row]) -> list[Row]: ...

    def update_rows(self, rows: list[Row]) -> list[Row]: ...


class HttpTableClient:
    """Botpress tables API client backed by a ``requests.Session``."""

    def __init__(
        self,
        base_url: str,
        token: str,
        bot_id: str,
        table: str,
        timeout: float = 10,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.table = table
        self.timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "x-bot-id": bot_id,
                "Content-Type": "application/json",
            }
        )

    @property
    def rows_url(self) -> str:
        return f"{self.base_url}/v1/tables/{self.table}/rows"

    def find_rows(self, filter: Row, limit: int = 50) -> list[Row]:
        data = self._request("POST", f"{self.rows_url}/find", {"filter": filter, "limit": limit})
        return list(data.get("rows") or [])

    def create_rows(self, rows: list[Row]) -> list[Row]:
        data = self._request("POST", self.rows_url, {"rows": rows})
        return list(data.get("rows") or [])

    def update_rows(self, rows: list[Row]) -> list[Row]:
        data = self._request("PUT", self.rows_url, {"rows": rows})
        return list(data.get("rows") or [])

    def close(self) -> None:
        self._session.close()

    def _request(self, method: str, url: str, payload: Row) -> Row:
        try:
            response = self._session.request(method, url, json=payload, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("Table request %s %s failed: %s", method, url, exc)
            raise ExternalServiceError(
                "Plant table is unreachable", detail={"table": self.table}
            ) from exc

        if not response.ok:
            logger.warning("Table request %s %s returned HTTP %s", method, url, response.status_code)
            raise ExternalServiceError(
                f"Plant table request failed with HTTP {response.status_code}",
                detail={"table": self.table, "status": response.status_code},
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise ExternalServiceError("Plant table returned a non-JSON body") from exc
        if data is None:
            return {}
        if not isinstance(data, dict):
            logger.warning("Table request %s %s returned %s instead of an object", method, url, type(data).__name__)
            raise ExternalServiceError(
                "Plant table returned an unexpected body", detail={"table": self.table}
            )
        return data


class InMemoryTableClient:
    """Dict-backed table with numeric row ids and equality filters."""

    def __init__(self, rows: Optional[list[Row]] = None) -> None:
        self._rows: dict[int, Row] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()
        if rows:
            self.create_rows(rows)

    def find_rows(self, filter: Row, limit: int = 50) -> list[Row]:
        with self._lock:
            matches = [
                copy.deepcopy(row)
                for row in self._rows.values()
                if all(row.get(key) == value for key, value in filter.items())
            ]
        return matches[:limit]

    def create_rows(self, rows: list[Row]) -> list[Row]:
        created = []
        with self._lock:
            for row in rows:
                row_id = next(self._ids)
                stored = {**copy.deepcopy(row), "id": row_id}
                self._rows[row_id] = stored
                created.append(copy.deepcopy(stored))
        return created

    def update_rows(self, rows: list[Row]) -> list[Row]:
        updated = []
        with self._lock:
            for row in rows:
                row_id = row.get("id")
                if row_id not in self._rows:
                    raise ExternalServiceError(f"Row {row_id} does not exist", detail={"id": row_id})
                self._rows[row_id].update(copy.deepcopy(row))
                updated.append(copy.deepcopy(self._rows[row_id]))
        return updated


# Singleton instance
_table_client: Optional[TableClient] = None
_table_client_lock = threading.Lock()


def build_table_client(config) -> TableClient:
    """Create a client for ``config.store_backend``."""
    if config.store_backend == "botpress":
        if not config.table_token or not config.table_bot_id:
            raise ConfigurationError(
                "Missing BOTPRESS_TOKEN or BOTPRESS_BOT_ID environment variables "
                "required by the botpress store backend."
            )
        logger.info("Using Botpress table %s at %s", config.table_name, config.table_api_url)
        return HttpTableClient(
            base_url=config.table_api_url,
            token=config.table_token,
            bot_id=config.table_bot_id,
            table=config.table_name,
            timeout=config.table_timeout_seconds,
        )
    logger.info("Using in-memory plant table")
    return InMemoryTableClient()


def get_table_client(config) -> TableClient:
    """Get or create the process-wide table client."""
    global _table_client
    with _table_client_lock:
        if _table_client is None:
            _table_client = build_table_client(config)
        return _table_client


def reset_table_client() -> None:
    """Drop the process-wide client so the next call rebuilds it."""
    global _table_client
    with _table_client_lock:
        client, _table_client = _table_client, None
    if isinstance(client, HttpTableClient):
        client.close()
