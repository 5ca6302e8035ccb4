"""Row-store clients for the plant table."""

from infrastructure.tables.client import (
    HttpTableClient,
    InMemoryTableClient,
    TableClient,
    get_table_client,
    reset_table_client,
)

__all__ = [
    "TableClient",
    "HttpTableClient",
    "InMemoryTableClient",
    "get_table_client",
    "reset_table_client",
]
