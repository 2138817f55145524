from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import tzinfo

from ..utils.time import isoformat_utc
from . import samples
from .deltas import derive_by_station
from .models import FlowTotals, History, Snapshot, StationNet, WindowName
from .windows import SHORT_WINDOW_MINUTES, WINDOWS, hourly_buckets, window_nets

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuildResult:
    snapshot: Snapshot
    appended: int
    pruned: int


def build_snapshot(
    history: History,
    station_ids: Iterable[str],
    now: int,
    window: WindowName,
    tz: tzinfo,
) -> Snapshot:
    if window not in WINDOWS:
        raise ValueError(f"Unknown window: {window}")

    deltas_by_station = derive_by_station(history, station_ids)

    stations: list[StationNet] = []
    totals = FlowTotals()
    for station_id, deltas in deltas_by_station.items():
        net = window_nets(deltas, now, tz)[window]
        if net == 0:
            continue
        stations.append(StationNet(id=station_id, net=net))
        totals.add(net)

    hourly = hourly_buckets(deltas_by_station.values(), tz)

    return Snapshot(
        generated_at=isoformat_utc(now),
        window=window,
        short_window_minutes=SHORT_WINDOW_MINUTES,
        stations=stations,
        totals=totals,
        hourly=dict(sorted(hourly.items())),
    )


def run_build(
    history: History,
    counts: Mapping[str, object],
    now: int,
    *,
    window: WindowName,
    tz: tzinfo,
    retention_hours: int = samples.DEFAULT_RETENTION_HOURS,
) -> BuildResult:
    """Ingest one batch of counts, build the snapshot, then prune.

    Pruning happens only after the snapshot is built so no sample a window
    needs is discarded first. ``now`` is used for every step.
    """
    appended = samples.ingest(history, counts, now)
    snapshot = build_snapshot(history, counts.keys(), now, window, tz)
    pruned = samples.prune(history, now, retention_hours)
    logger.info(
        "Built %s snapshot: %d stations published, %d pickups, %d returns "
        "(%d samples appended, %d pruned)",
        window,
        len(snapshot.stations),
        snapshot.totals.pickups,
        snapshot.totals.returns,
        appended,
        pruned,
    )
    return BuildResult(snapshot=snapshot, appended=appended, pruned=pruned)
