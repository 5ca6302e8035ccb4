"""
Plants API (``/api/plants``)
============================

- crud.py: list the user's plants, seed the demo plant
- todos.py: log completed care todos directly on a plant row
"""

from flask import Blueprint

plants_api = Blueprint("plants_api", __name__)

# Route modules import plants_api, so they are loaded after it exists
from . import crud, todos  # noqa: E402,F401

__all__ = ["plants_api"]
