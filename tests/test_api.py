from __future__ import annotations

import json

from fastapi.testclient import TestClient

from bikeflow.app.main import create_app
from bikeflow.ingest.config import Settings
from bikeflow.utils.time import now_ms

MINUTE = 60_000


def test_root_reports_status(settings: Settings) -> None:
    client = TestClient(create_app(settings))

    assert client.get("/").json() == {"status": "ok", "service": "bikeflow"}


def test_snapshot_missing_is_404(settings: Settings) -> None:
    client = TestClient(create_app(settings))

    assert client.get("/snapshot").status_code == 404


def test_snapshot_served_from_file(settings: Settings) -> None:
    document = {
        "generated_at": "2024-01-15T10:30:00.000Z",
        "window": "hour",
        "short_window_minutes": 15,
        "stations": [{"id": "a", "net": 2}],
        "totals": {"pickups": 0, "returns": 2},
        "hourly": {"2024-01-15 10": {"pickups": 0, "returns": 2}},
    }
    settings.snapshot_path.write_text(json.dumps(document))
    client = TestClient(create_app(settings))

    response = client.get("/snapshot")

    assert response.status_code == 200
    assert response.json() == document


def test_stations_and_flow(settings: Settings) -> None:
    now = now_ms()
    settings.history_path.write_text(
        json.dumps(
            {
                "stations": {
                    "b": [{"t": now - 2 * MINUTE, "bikes": 4}],
                    "a": [
                        {"t": now - 10 * MINUTE, "bikes": 6},
                        {"t": now - 5 * MINUTE, "bikes": 3},
                    ],
                }
            }
        )
    )
    client = TestClient(create_app(settings))

    stations = client.get("/stations").json()
    flow = client.get("/stations/a/flow").json()

    assert [station["station_id"] for station in stations] == ["a", "b"]
    assert stations[0]["samples"] == 2
    assert flow["latest_bikes"] == 3
    assert flow["deltas"] == [{"t": now - 5 * MINUTE, "delta": -3}]
    assert flow["nets"]["now"] == -3


def test_flow_unknown_station_is_404(settings: Settings) -> None:
    client = TestClient(create_app(settings))

    assert client.get("/stations/nope/flow").status_code == 404


def test_corrupt_snapshot_is_404(settings: Settings) -> None:
    settings.snapshot_path.write_text('{"window": "day"')
    client = TestClient(create_app(settings))

    response = client.get("/snapshot")

    assert response.status_code == 404
