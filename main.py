"""
Bazar.com client entry point.
Interactive search, lookup and purchase against replicated catalog/order services.
"""

import asyncio
import signal
import sys

from loguru import logger

from bazar.session import ClientSession
from bazar.settings import global_settings
from bazar.shell import InteractiveShell


async def main() -> None:
    """Run one interactive session."""
    logger.remove()
    logger.add(sys.stderr, level=global_settings.log_level.upper())

    # asyncio.run() turns Ctrl-C into task cancellation, which a blocking prompt never sees
    signal.signal(signal.SIGINT, signal.default_int_handler)

    logger.info(
        f"Catalog replicas: {global_settings.catalog_replicas}, "
        f"order replicas: {global_settings.order_replicas}"
    )

    async with ClientSession.from_settings(global_settings) as session:
        await InteractiveShell(session).run()

    logger.info("Bazar client stopped")


def run() -> None:
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Bazar client interrupted")


if __name__ == "__main__":
    run()
