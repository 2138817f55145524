from __future__ import annotations

from pathlib import Path
from zoneinfo import ZoneInfo

import pytest

from bikeflow.ingest import config


def test_load_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "BIKEFLOW_HISTORY_PATH",
        "BIKEFLOW_SNAPSHOT_PATH",
        "BIKEFLOW_PUBLISH_WINDOW",
        "BIKEFLOW_RETENTION_HOURS",
        "BIKEFLOW_TIMEZONE",
        "GBFS_STATION_STATUS_URL",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = config.load_settings()

    assert settings.history_path == Path("history.json")
    assert settings.snapshot_path == Path("snapshot.json")
    assert settings.window == "day"
    assert settings.retention_hours == 36
    assert settings.tz == ZoneInfo("America/New_York")
    assert settings.station_status_url.endswith("/station_status.json")


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BIKEFLOW_PUBLISH_WINDOW", "now")
    monkeypatch.setenv("BIKEFLOW_RETENTION_HOURS", "48")
    monkeypatch.setenv("BIKEFLOW_TIMEZONE", "Europe/Paris")

    settings = config.load_settings()

    assert settings.window == "now"
    assert settings.retention_hours == 48
    assert settings.tz == ZoneInfo("Europe/Paris")


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("BIKEFLOW_PUBLISH_WINDOW", "week"),
        ("BIKEFLOW_RETENTION_HOURS", "0"),
        ("BIKEFLOW_RETENTION_HOURS", "many"),
        ("BIKEFLOW_TIMEZONE", "Mars/Olympus_Mons"),
    ],
)
def test_invalid_settings_raise(monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)

    with pytest.raises(ValueError):
        config.load_settings()
