from __future__ import annotations

import asyncio
import logging
import sys

from stats_monitor.collectors import Poller
from stats_monitor.config import settings

logger = logging.getLogger(__name__)


async def run() -> None:
    poller = Poller(settings)
    await poller.run_forever()


def main() -> None:
    # Alert lines own stdout; diagnostics go to stderr.
    logging.basicConfig(
        level=logging.INFO,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")


if __name__ == "__main__":
    main()
