"""
Unit tests for RefreshPoller.
"""

import threading

import pytest

from app.workers.refresh_poller import RefreshPoller


def test_rejects_non_positive_interval():
    with pytest.raises(ValueError):
        RefreshPoller(lambda: None, 0)


def test_calls_callback_until_stopped():
    ticked = threading.Event()
    poller = RefreshPoller(ticked.set, 0.01, name="TestPoller")
    poller.start()
    try:
        assert ticked.wait(2.0)
        assert poller.is_running() is True
    finally:
        poller.stop()
    assert poller.is_running() is False
    assert poller.tick_count >= 1


def test_tick_errors_do_not_stop_the_loop():
    calls = []
    second = threading.Event()

    def callback():
        calls.append(1)
        if len(calls) == 1:
            raise RuntimeError("table down")
        second.set()

    poller = RefreshPoller(callback, 0.01)
    poller.start()
    try:
        assert second.wait(2.0)
    finally:
        poller.stop()
    assert len(calls) >= 2


def test_stop_is_prompt_with_long_interval():
    poller = RefreshPoller(lambda: None, 3600)
    poller.start()
    poller.stop(timeout=2.0)
    assert poller.is_running() is False
    assert poller.tick_count == 0


def test_start_twice_keeps_one_thread():
    poller = RefreshPoller(lambda: None, 3600, name="Twice")
    poller.start()
    try:
        thread = poller._thread
        poller.start()
        assert poller._thread is thread
    finally:
        poller.stop()


def test_stop_before_start_is_harmless():
    poller = RefreshPoller(lambda: None, 1)
    poller.stop()
    assert poller.interval == 1
