from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import cast
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.models import WindowName
from ..core.samples import DEFAULT_RETENTION_HOURS
from ..core.windows import WINDOWS


def _get_env(name: str, default: str | None = None) -> str:
    value = os.getenv(name, default)
    if value is None:
        raise ValueError(f"Missing required environment variable: {name}")
    return value


def _positive_int(name: str, default: str) -> int:
    raw = _get_env(name, default)
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


def station_information_url() -> str:
    return _get_env(
        "GBFS_STATION_INFORMATION_URL",
        "https://gbfs.citibikenyc.com/gbfs/en/station_information.json",
    )


def station_status_url() -> str:
    return _get_env(
        "GBFS_STATION_STATUS_URL",
        "https://gbfs.citibikenyc.com/gbfs/en/station_status.json",
    )


def user_agent() -> str:
    return _get_env("GBFS_USER_AGENT", "bikeflow/0.1")


def history_path() -> Path:
    return Path(_get_env("BIKEFLOW_HISTORY_PATH", "history.json"))


def snapshot_path() -> Path:
    return Path(_get_env("BIKEFLOW_SNAPSHOT_PATH", "snapshot.json"))


def publish_window() -> WindowName:
    value = _get_env("BIKEFLOW_PUBLISH_WINDOW", "day")
    if value not in WINDOWS:
        raise ValueError(
            f"BIKEFLOW_PUBLISH_WINDOW must be one of {', '.join(WINDOWS)}, got {value!r}"
        )
    return cast(WindowName, value)


def retention_hours() -> int:
    return _positive_int("BIKEFLOW_RETENTION_HOURS", str(DEFAULT_RETENTION_HOURS))


def stale_after_seconds() -> int:
    return _positive_int("BIKEFLOW_STALE_AFTER_SECONDS", "300")


def timezone() -> ZoneInfo:
    name = _get_env("BIKEFLOW_TIMEZONE", "America/New_York")
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"BIKEFLOW_TIMEZONE is not a known zone: {name!r}") from exc


def log_level() -> str:
    return _get_env("LOG_LEVEL", "INFO").upper()


@dataclass(frozen=True)
class Settings:
    station_information_url: str
    station_status_url: str
    user_agent: str
    history_path: Path
    snapshot_path: Path
    window: WindowName
    retention_hours: int
    stale_after_seconds: int
    tz: ZoneInfo


def load_settings() -> Settings:
    return Settings(
        station_information_url=station_information_url(),
        station_status_url=station_status_url(),
        user_agent=user_agent(),
        history_path=history_path(),
        snapshot_path=snapshot_path(),
        window=publish_window(),
        retention_hours=retention_hours(),
        stale_after_seconds=stale_after_seconds(),
        tz=timezone(),
    )
