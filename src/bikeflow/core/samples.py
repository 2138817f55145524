from __future__ import annotations

from collections.abc import Mapping
from typing import TypeGuard

from ..utils.time import HOUR_MS, MINUTE_MS
from .models import History, Sample

DEFAULT_RETENTION_HOURS = 36
DEDUP_WINDOW_MS = MINUTE_MS


def is_valid_count(value: object) -> TypeGuard[int]:
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return value >= 0


def append(history: History, station_id: str, bikes: int, now: int) -> bool:
    """Record ``bikes`` for ``station_id`` at ``now``.

    A second call less than a minute after the last recorded sample is a
    no-op, so a run triggered twice in quick succession leaves the series
    as it was after the first.
    """
    series = history.stations.setdefault(station_id, [])
    if series and series[-1].t >= now - DEDUP_WINDOW_MS:
        return False
    series.append(Sample(t=now, bikes=bikes))
    return True


def ingest(history: History, counts: Mapping[str, object], now: int) -> int:
    appended = 0
    for station_id, bikes in counts.items():
        if not is_valid_count(bikes):
            continue
        if append(history, station_id, bikes, now):
            appended += 1
    return appended


def prune(
    history: History, now: int, retention_hours: int = DEFAULT_RETENTION_HOURS
) -> int:
    cutoff = now - retention_hours * HOUR_MS
    removed = 0
    for station_id in list(history.stations):
        series = history.stations[station_id]
        kept = [sample for sample in series if sample.t >= cutoff]
        removed += len(series) - len(kept)
        if kept:
            history.stations[station_id] = kept
        else:
            del history.stations[station_id]
    return removed
