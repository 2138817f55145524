from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import tzinfo

from ..utils.time import MINUTE_MS, floor_to_day, floor_to_hour, hour_key
from .models import DeltaEvent, FlowTotals, WindowName

WINDOWS: tuple[WindowName, ...] = ("day", "hour", "now")
SHORT_WINDOW_MINUTES = 15
SHORT_WINDOW_MS = SHORT_WINDOW_MINUTES * MINUTE_MS


def sum_window(deltas: Sequence[DeltaEvent], from_ms: int, to_ms: int) -> int:
    """Net change of the events with ``from_ms <= t <= to_ms``.

    ``deltas`` must be in ascending time order; the scan walks back from the
    newest event and stops at the first one older than ``from_ms``.
    """
    net = 0
    for event in reversed(deltas):
        if event.t < from_ms:
            break
        if event.t <= to_ms:
            net += event.delta
    return net


def window_start(window: WindowName, now: int, tz: tzinfo) -> int:
    if window == "day":
        return floor_to_day(now, tz)
    if window == "hour":
        return floor_to_hour(now, tz)
    if window == "now":
        return now - SHORT_WINDOW_MS
    raise ValueError(f"Unknown window: {window}")


def window_bounds(now: int, tz: tzinfo) -> dict[WindowName, tuple[int, int]]:
    return {window: (window_start(window, now, tz), now) for window in WINDOWS}


def window_nets(
    deltas: Sequence[DeltaEvent], now: int, tz: tzinfo
) -> dict[WindowName, int]:
    return {
        window: sum_window(deltas, start, end)
        for window, (start, end) in window_bounds(now, tz).items()
    }


def hourly_buckets(
    deltas_by_station: Iterable[Sequence[DeltaEvent]], tz: tzinfo
) -> dict[str, FlowTotals]:
    buckets: dict[str, FlowTotals] = {}
    for deltas in deltas_by_station:
        for event in deltas:
            buckets.setdefault(hour_key(event.t, tz), FlowTotals()).add(event.delta)
    return buckets
