from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, StrictInt


class SampleRecord(BaseModel):
    t: StrictInt
    bikes: StrictInt = Field(ge=0)


class HistoryDocument(BaseModel):
    stations: dict[str, list[SampleRecord]] = Field(default_factory=dict)


class StationNetRecord(BaseModel):
    id: str
    net: int


class FlowTotalsRecord(BaseModel):
    pickups: int
    returns: int


class SnapshotDocument(BaseModel):
    generated_at: str
    window: Literal["day", "hour", "now"]
    short_window_minutes: int
    stations: list[StationNetRecord]
    totals: FlowTotalsRecord
    hourly: dict[str, FlowTotalsRecord]
