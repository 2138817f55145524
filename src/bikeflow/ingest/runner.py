from __future__ import annotations

import logging
from typing import Any, Callable

from ..core.snapshot import BuildResult, run_build
from ..store.persistence import load_history, write_outputs
from ..utils.time import now_ms
from .config import Settings
from .gbfs_client import fetch_feeds
from .monitoring import compute_status
from .parser import station_counts, station_information_data, station_status_data
from .validators import feed_timestamp

logger = logging.getLogger(__name__)

FeedFetcher = Callable[[Settings], tuple[dict[str, Any], dict[str, Any]]]


def fetch_from_settings(settings: Settings) -> tuple[dict[str, Any], dict[str, Any]]:
    return fetch_feeds(
        settings.station_information_url,
        settings.station_status_url,
        settings.user_agent,
    )


def run_once(
    settings: Settings,
    now: int | None = None,
    fetcher: FeedFetcher = fetch_from_settings,
) -> BuildResult:
    """Run one fetch, build and persist cycle.

    Feeds are fetched before anything is written, so a fetch failure leaves
    the existing history and snapshot files as they were.
    """
    if now is None:
        now = now_ms()

    info, status = fetcher(settings)
    information = station_information_data(info)
    statuses = station_status_data(status)
    logger.info(
        "Fetched %d stations and %d status rows", len(information), len(statuses)
    )

    feed_status = compute_status(
        now, feed_timestamp(status), settings.stale_after_seconds
    )
    if feed_status.is_stale:
        logger.warning(
            "station_status feed is %.0f seconds old", feed_status.lag_seconds
        )

    history = load_history(settings.history_path)
    logger.info(
        "Loaded history: %d stations, %d samples",
        len(history.stations),
        history.sample_count(),
    )
    result = run_build(
        history,
        station_counts(information, statuses),
        now,
        window=settings.window,
        tz=settings.tz,
        retention_hours=settings.retention_hours,
    )
    write_outputs(
        settings.snapshot_path, result.snapshot, settings.history_path, history
    )
    return result
