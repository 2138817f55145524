from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from pydantic import BaseModel, TypeAdapter, ValidationError

from ..core.models import FlowTotals, History, Sample, Snapshot
from .models import (
    FlowTotalsRecord,
    HistoryDocument,
    SampleRecord,
    SnapshotDocument,
    StationNetRecord,
)

logger = logging.getLogger(__name__)

_series_adapter = TypeAdapter(list[SampleRecord])


class PersistenceError(Exception):
    pass


def read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def load_history(path: Path) -> History:
    """Read the history file, falling back to an empty history.

    A missing or unreadable file yields an empty history. A single station
    whose series does not validate is dropped so that it starts over as a
    fresh series.
    """
    if not path.exists():
        logger.info("No history at %s, starting empty", path)
        return History()
    try:
        raw = read_json(path)
    except (OSError, ValueError):
        logger.warning("Unreadable history at %s, starting empty", path, exc_info=True)
        return History()

    stations = raw.get("stations") if isinstance(raw, dict) else None
    if not isinstance(stations, dict):
        logger.warning("History at %s has no stations mapping, starting empty", path)
        return History()

    history = History()
    for station_id, raw_series in stations.items():
        series = _parse_series(raw_series)
        if series is None:
            logger.debug("Dropping malformed history for station %s", station_id)
            continue
        if series:
            history.stations[str(station_id)] = series
    return history


def _parse_series(raw_series: object) -> list[Sample] | None:
    try:
        records = _series_adapter.validate_python(raw_series)
    except ValidationError:
        return None
    series = [Sample(t=record.t, bikes=record.bikes) for record in records]
    if any(later.t < earlier.t for earlier, later in zip(series, series[1:])):
        return None
    return series


def load_snapshot(path: Path) -> SnapshotDocument | None:
    if not path.exists():
        return None
    try:
        return SnapshotDocument.model_validate_json(path.read_bytes())
    except (OSError, ValidationError):
        logger.warning("Unreadable snapshot at %s", path, exc_info=True)
        return None


def history_document(history: History) -> HistoryDocument:
    return HistoryDocument(
        stations={
            station_id: [
                SampleRecord(t=sample.t, bikes=sample.bikes) for sample in series
            ]
            for station_id, series in history.stations.items()
        }
    )


def snapshot_document(snapshot: Snapshot) -> SnapshotDocument:
    return SnapshotDocument(
        generated_at=snapshot.generated_at,
        window=snapshot.window,
        short_window_minutes=snapshot.short_window_minutes,
        stations=[
            StationNetRecord(id=station.id, net=station.net)
            for station in snapshot.stations
        ],
        totals=_totals_record(snapshot.totals),
        hourly={key: _totals_record(value) for key, value in snapshot.hourly.items()},
    )


def _totals_record(totals: FlowTotals) -> FlowTotalsRecord:
    return FlowTotalsRecord(pickups=totals.pickups, returns=totals.returns)


def write_outputs(
    snapshot_path: Path,
    snapshot: Snapshot,
    history_path: Path,
    history: History,
) -> None:
    """Write the snapshot and the history together.

    Both documents are written and flushed to temporary files next to their
    targets before either target is replaced, so a failure while writing
    leaves the previous pair untouched.
    """
    documents: list[tuple[Path, BaseModel]] = [
        (snapshot_path, snapshot_document(snapshot)),
        (history_path, history_document(history)),
    ]
    staged: list[tuple[Path, Path]] = []
    try:
        for target, document in documents:
            staged.append((_stage(target, document), target))
        for temp_path, target in staged:
            os.replace(temp_path, target)
    except OSError as exc:
        for temp_path, _ in staged:
            temp_path.unlink(missing_ok=True)
        raise PersistenceError(f"Failed to persist outputs: {exc}") from exc
    logger.info("Wrote %s and %s", snapshot_path, history_path)


def _file_mode() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def _stage(target: Path, document: BaseModel) -> Path:
    target.parent.mkdir(parents=True, exist_ok=True)
    handle = tempfile.NamedTemporaryFile(
        "w",
        encoding="utf-8",
        dir=target.parent,
        prefix=f".{target.name}.",
        suffix=".tmp",
        delete=False,
    )
    temp_path = Path(handle.name)
    try:
        with handle:
            handle.write(document.model_dump_json())
            handle.flush()
            os.fsync(handle.fileno())
        # NamedTemporaryFile creates 0600; published files follow the umask.
        os.chmod(temp_path, _file_mode())
    except OSError:
        temp_path.unlink(missing_ok=True)
        raise
    return temp_path
