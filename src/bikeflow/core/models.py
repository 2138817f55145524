from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

WindowName = Literal["day", "hour", "now"]


@dataclass(frozen=True)
class Sample:
    t: int
    bikes: int


@dataclass(frozen=True)
class DeltaEvent:
    t: int
    delta: int


@dataclass(frozen=True)
class StationNet:
    id: str
    net: int


@dataclass
class FlowTotals:
    pickups: int = 0
    returns: int = 0

    def add(self, delta: int) -> None:
        if delta < 0:
            self.pickups += -delta
        else:
            self.returns += delta


@dataclass
class History:
    """Per-station sample series, keyed by station id.

    Loaded at the start of a run, mutated by the sample store and written
    back at the end. Nothing else holds on to it between runs.
    """

    stations: dict[str, list[Sample]] = field(default_factory=dict)

    def series(self, station_id: str) -> list[Sample]:
        return self.stations.get(station_id, [])

    def sample_count(self) -> int:
        return sum(len(series) for series in self.stations.values())


@dataclass
class Snapshot:
    generated_at: str
    window: WindowName
    short_window_minutes: int
    stations: list[StationNet]
    totals: FlowTotals
    hourly: dict[str, FlowTotals]
