"""Console entry point: poll the status API and print each rendered view."""

import asyncio
import logging
import signal
import sys
from typing import Optional

import httpx

from .config import ClientSettings
from .models import ViewState
from .observability import setup_structured_logging
from .poller import StatusPoller
from .view import render_view

logger = logging.getLogger(__name__)


def _print_view(state: ViewState) -> None:
    sys.stdout.write(render_view(state) + "\n\n")
    sys.stdout.flush()


async def serve(settings: ClientSettings, client: Optional[httpx.AsyncClient] = None) -> None:
    """
    Run the poller until SIGINT or SIGTERM.

    The poller is stopped before returning, so no fetch is issued afterwards.
    """
    poller = StatusPoller(
        settings.api_url,
        interval_seconds=settings.poll_interval_seconds,
        client=client,
        timeout_seconds=settings.request_timeout_seconds,
    )
    poller.subscribe(_print_view)

    stop_requested = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, stop_requested.set)

    await poller.start()
    try:
        await stop_requested.wait()
        logger.info("Stop requested, tearing down status view")
    finally:
        await poller.stop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.remove_signal_handler(sig)


def main() -> None:
    settings = ClientSettings()
    setup_structured_logging(settings)
    asyncio.run(serve(settings))


if __name__ == "__main__":
    main()
