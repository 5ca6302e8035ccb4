"""
Schemas Module
==============

This module provides Pydantic models for request validation and for decoding
plant rows at the table-store boundary.
"""

from app.schemas.plants import (
    CheckTodoRequest,
    CompleteTodosRequest,
    PlantRowSchema,
    SelectPlantRequest,
    ToggleNoteRequest,
)

__all__ = [
    "PlantRowSchema",
    "CompleteTodosRequest",
    "SelectPlantRequest",
    "CheckTodoRequest",
    "ToggleNoteRequest",
]
