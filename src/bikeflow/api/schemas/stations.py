from __future__ import annotations

from pydantic import BaseModel


class StationSummary(BaseModel):
    station_id: str
    samples: int
    latest_t: int
    latest_bikes: int


class DeltaEventOut(BaseModel):
    t: int
    delta: int


class WindowNets(BaseModel):
    day: int
    hour: int
    now: int


class StationFlow(BaseModel):
    station_id: str
    latest_t: int
    latest_bikes: int
    deltas: list[DeltaEventOut]
    nets: WindowNets
