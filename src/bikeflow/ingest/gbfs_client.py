from __future__ import annotations

import json
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable
from urllib.request import Request, urlopen

logger = logging.getLogger(__name__)

FetchJson = Callable[[str, str], dict[str, Any]]


class FeedFetchError(Exception):
    pass


def fetch_json(url: str, user_agent: str) -> dict[str, Any]:
    request = Request(url, headers={"User-Agent": user_agent})
    try:
        # urlopen raises HTTPError (a URLError) for any non-2xx status.
        with urlopen(request, timeout=30) as response:
            payload = response.read()
    except OSError as exc:
        raise FeedFetchError(f"Fetch failed for {url}: {exc}") from exc
    try:
        document = json.loads(payload)
    except ValueError as exc:
        raise FeedFetchError(f"Invalid JSON from {url}") from exc
    if not isinstance(document, dict):
        raise FeedFetchError(f"Unexpected payload from {url}")
    logger.debug("Fetched %s (%d bytes)", url, len(payload))
    return document


def fetch_feeds(
    information_url: str,
    status_url: str,
    user_agent: str,
    fetch: FetchJson = fetch_json,
) -> tuple[dict[str, Any], dict[str, Any]]:
    with ThreadPoolExecutor(max_workers=2) as executor:
        information = executor.submit(fetch, information_url, user_agent)
        status = executor.submit(fetch, status_url, user_agent)
        return information.result(), status.result()
