from __future__ import annotations

from pathlib import Path
from zoneinfo import ZoneInfo

import pytest

from bikeflow.ingest.config import Settings


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        station_information_url="https://example.test/station_information.json",
        station_status_url="https://example.test/station_status.json",
        user_agent="bikeflow-test",
        history_path=tmp_path / "history.json",
        snapshot_path=tmp_path / "snapshot.json",
        window="day",
        retention_hours=36,
        stale_after_seconds=300,
        tz=ZoneInfo("UTC"),
    )
