from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from ...core.deltas import derive
from ...core.windows import window_nets
from ...store.persistence import load_history
from ...utils.time import now_ms
from ..schemas.stations import DeltaEventOut, StationFlow, StationSummary, WindowNets


router = APIRouter()


@router.get("/stations")
def list_stations(request: Request) -> list[StationSummary]:
    history = load_history(request.app.state.settings.history_path)
    return [
        StationSummary(
            station_id=station_id,
            samples=len(series),
            latest_t=series[-1].t,
            latest_bikes=series[-1].bikes,
        )
        for station_id, series in sorted(history.stations.items())
    ]


@router.get("/stations/{station_id}/flow")
def get_station_flow(station_id: str, request: Request) -> StationFlow:
    settings = request.app.state.settings
    series = load_history(settings.history_path).series(station_id)
    if not series:
        raise HTTPException(status_code=404, detail=f"Unknown station: {station_id}")

    deltas = derive(series)
    nets = window_nets(deltas, now_ms(), settings.tz)
    return StationFlow(
        station_id=station_id,
        latest_t=series[-1].t,
        latest_bikes=series[-1].bikes,
        deltas=[DeltaEventOut(t=event.t, delta=event.delta) for event in deltas],
        nets=WindowNets(**nets),
    )
