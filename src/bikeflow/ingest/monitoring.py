from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..utils.time import to_datetime


@dataclass(frozen=True)
class FeedStatus:
    lag_seconds: float | None
    is_stale: bool


def compute_status(
    now: int, feed_ts: datetime | None, stale_after: float = 300
) -> FeedStatus:
    if feed_ts is None:
        return FeedStatus(lag_seconds=None, is_stale=False)
    lag_seconds = (to_datetime(now) - feed_ts).total_seconds()
    return FeedStatus(lag_seconds=lag_seconds, is_stale=lag_seconds > stale_after)
