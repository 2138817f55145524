from __future__ import annotations

import logging

from .config import load_settings, log_level
from .runner import run_once

logger = logging.getLogger(__name__)


def main() -> int:
    logging.basicConfig(
        level=log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        run_once(load_settings())
    except Exception:
        logger.exception("Snapshot run failed")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
