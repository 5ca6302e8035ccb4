"""
Service Organization
====================
Services are organized by their lifecycle and instantiation pattern:

**application/**
  Services managed by ServiceContainer. One instance per application.
  Examples: PlantService, DashboardService

The container itself lives in ``container.py``.
"""
