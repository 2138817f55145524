from __future__ import annotations

import time
from datetime import datetime, timedelta, timezone, tzinfo

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_MILLISECOND = timedelta(milliseconds=1)

MINUTE_MS = 60_000
HOUR_MS = 3_600_000


def now_ms() -> int:
    return time.time_ns() // 1_000_000


def to_datetime(value_ms: int, tz: tzinfo = timezone.utc) -> datetime:
    return (_EPOCH + timedelta(milliseconds=value_ms)).astimezone(tz)


def to_ms(value: datetime) -> int:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return (value - _EPOCH) // _MILLISECOND


def floor_to_day(value_ms: int, tz: tzinfo) -> int:
    local = to_datetime(value_ms, tz)
    midnight = datetime(local.year, local.month, local.day, tzinfo=tz)
    return to_ms(midnight)


def floor_to_hour(value_ms: int, tz: tzinfo) -> int:
    # replace() keeps ``fold`` so the repeated hour at a DST fall-back resolves
    # to the instant we started from.
    local = to_datetime(value_ms, tz)
    return to_ms(local.replace(minute=0, second=0, microsecond=0))


def hour_key(value_ms: int, tz: tzinfo) -> str:
    return to_datetime(value_ms, tz).strftime("%Y-%m-%d %H")


def isoformat_utc(value_ms: int) -> str:
    value = to_datetime(value_ms)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"
