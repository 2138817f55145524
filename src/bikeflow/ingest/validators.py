from __future__ import annotations

from datetime import datetime, timezone
from typing import Any


def feed_timestamp(payload: dict[str, Any]) -> datetime | None:
    timestamp = payload.get("last_updated")
    if timestamp is None or isinstance(timestamp, bool):
        return None
    if isinstance(timestamp, (int, float)):
        try:
            return datetime.fromtimestamp(int(timestamp), tz=timezone.utc)
        except (ValueError, OverflowError, OSError):
            return None
    if isinstance(timestamp, str):
        try:
            parsed = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
        except ValueError:
            return None
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed
    return None
