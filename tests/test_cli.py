from __future__ import annotations

from typing import Any

import pytest

from bikeflow.ingest import cli
from bikeflow.ingest.config import Settings
from bikeflow.ingest.gbfs_client import FeedFetchError


def test_main_returns_zero_on_success(
    monkeypatch: pytest.MonkeyPatch, settings: Settings
) -> None:
    calls: list[Settings] = []
    monkeypatch.setattr(cli, "load_settings", lambda: settings)
    monkeypatch.setattr(cli, "run_once", lambda value: calls.append(value))

    assert cli.main() == 0
    assert calls == [settings]


def test_main_returns_non_zero_and_logs_failure(
    monkeypatch: pytest.MonkeyPatch, settings: Settings, caplog: pytest.LogCaptureFixture
) -> None:
    def failing(_: Settings) -> Any:
        raise FeedFetchError("Fetch failed 503")

    monkeypatch.setattr(cli, "load_settings", lambda: settings)
    monkeypatch.setattr(cli, "run_once", failing)

    assert cli.main() == 1
    assert "Snapshot run failed" in caplog.text
