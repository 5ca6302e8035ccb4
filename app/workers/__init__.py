"""
Workers module for background services.

This module contains:
- refresh_poller: Per-session dashboard refresh loop
"""

__all__ = ["RefreshPoller"]

from app.workers.refresh_poller import RefreshPoller
