"""Exceptions raised by the plant care services and API.

Every error carries the HTTP status it maps to, so the API layer never needs
a lookup table of its own::

    PlantCareError            500
    ├── ValidationError       400  bad request body, note too long, todo not open
    ├── NotFoundError         404  unknown plantId
    ├── ConflictError         409  dashboard action with no plant selected
    ├── ServiceError          500
    │   ├── RepositoryError   500  plant row unusable (e.g. no row id)
    │   └── ExternalServiceError 502  plant table unreachable or rejected the call
    └── ConfigurationError    500  missing table credentials

Messages of 4xx errors are written for the caller and returned as-is;
5xx messages only reach the server log.

The derivation engine does not raise any of these: an unparseable ideal or a
non-numeric reading just skips the metric.
"""

from __future__ import annotations

from typing import Any


class PlantCareError(Exception):
    """Base class; ``detail`` is structured context for the log."""

    http_status: int = 500

    def __init__(self, message: str = "", *, detail: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.detail = detail or {}

    @property
    def is_client_error(self) -> bool:
        return self.http_status < 500


class ValidationError(PlantCareError):
    http_status: int = 400


class NotFoundError(PlantCareError):
    http_status: int = 404


class ConflictError(PlantCareError):
    http_status: int = 409


class ServiceError(PlantCareError):
    http_status: int = 500


class RepositoryError(ServiceError):
    http_status: int = 500


class ExternalServiceError(ServiceError):
    http_status: int = 502


class ConfigurationError(PlantCareError):
    http_status: int = 500
