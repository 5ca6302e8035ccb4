"""
Background refresh loop for one dashboard session.

One daemon thread per open session calls the session's ``refresh`` every
``interval`` seconds. The loop sleeps on an ``Event`` so ``stop()`` returns
promptly instead of waiting out the interval.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable

logger = logging.getLogger(__name__)


class RefreshPoller:
    """Call ``callback`` periodically on a daemon thread until stopped."""

    def __init__(self, callback: Callable[[], object], interval: float, *, name: str = "RefreshPoller") -> None:
        if interval <= 0:
            raise ValueError(f"Poll interval must be positive, got {interval}")
        self._callback = callback
        self._interval = interval
        self._name = name
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self.tick_count = 0

    @property
    def interval(self) -> float:
        return self._interval

    def start(self) -> None:
        """Start the poller background thread."""
        if self.is_running():
            logger.warning("%s already running", self._name)
            return

        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run_loop, daemon=True, name=self._name)
        self._thread.start()
        logger.debug("%s started (every %.1fs)", self._name, self._interval)

    def stop(self, wait: bool = True, timeout: float = 5.0) -> None:
        """
        Stop the poller.

        Args:
            wait: Wait for the poller thread to finish
            timeout: Maximum wait time in seconds
        """
        self._stop_event.set()
        thread = self._thread
        if wait and thread is not None and thread is not threading.current_thread():
            thread.join(timeout=timeout)
        self._thread = None
        logger.debug("%s stopped", self._name)

    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _run_loop(self) -> None:
        while not self._stop_event.wait(self._interval):
            try:
                self._callback()
            except Exception as e:
                logger.error("Error in %s tick: %s", self._name, e, exc_info=True)
            self.tick_count += 1
