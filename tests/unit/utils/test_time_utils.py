from datetime import datetime, timedelta, timezone

from app.utils.time import iso_now, to_epoch_ms, utc_now


def test_utc_now_is_timezone_aware():
    now = utc_now()
    assert now.tzinfo is not None
    assert now.utcoffset() == timedelta(0)


def test_iso_now_carries_utc_offset():
    assert iso_now().endswith("+00:00")
    assert iso_now(timespec="seconds").endswith("+00:00")


def test_to_epoch_ms_for_aware_datetime():
    dt = datetime(2026, 1, 1, 0, 0, 0, 250000, tzinfo=timezone.utc)
    assert to_epoch_ms(dt) == 1767225600250


def test_to_epoch_ms_treats_naive_as_utc():
    naive = datetime(2026, 1, 1)
    aware = datetime(2026, 1, 1, tzinfo=timezone.utc)
    assert to_epoch_ms(naive) == to_epoch_ms(aware)
