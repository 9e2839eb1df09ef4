"""Polling loop that keeps a view state in sync with the status API."""

import asyncio
import logging
from dataclasses import replace
from typing import Callable, List, Optional, Set

import httpx

from .models import HealthSnapshot, ViewState

logger = logging.getLogger(__name__)

Listener = Callable[[ViewState], None]


class FetchError(Exception):
    """The status API answered with a non-2xx status."""


class StatusPoller:
    """
    Fetches the health report on mount and then on a fixed interval.

    The timer does not wait for the previous fetch: if a fetch is slower than
    the interval, cycles overlap and whichever resolves last writes the state.
    ``stop()`` cancels the timer, so no fetch starts after teardown, and then
    waits for fetches already in flight.
    """

    def __init__(
        self,
        base_url: str,
        interval_seconds: float = 30.0,
        path: str = "/health",
        client: Optional[httpx.AsyncClient] = None,
        timeout_seconds: float = 10.0,
    ):
        """
        Initialize the poller.

        Args:
            base_url: Base URL of the status API
            interval_seconds: Seconds between fetch cycles
            path: Path of the report to fetch
            client: HTTP client to use; one is created (and closed) if omitted
            timeout_seconds: Timeout for a client created by the poller
        """
        self.base_url = base_url.rstrip("/")
        self.interval_seconds = interval_seconds
        self.path = path
        self.timeout_seconds = timeout_seconds
        self.state = ViewState()

        self._client = client
        self._owns_client = client is None
        self._listeners: List[Listener] = []
        self._running = False
        self._timer: Optional[asyncio.Task] = None
        self._cycles: Set[asyncio.Task] = set()

    @property
    def url(self) -> str:
        return f"{self.base_url}{self.path}"

    @property
    def running(self) -> bool:
        return self._running

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a callback invoked with every new view state.

        Returns:
            A function that removes the listener again
        """
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    async def start(self) -> None:
        """Fetch once immediately, then start the repeating timer."""
        if self._running:
            logger.warning("Status poller is already running")
            return

        self._running = True
        self._spawn_cycle()
        self._timer = asyncio.create_task(self._tick())
        logger.info(
            "Status poller started",
            extra={"url": self.url, "interval_seconds": self.interval_seconds},
        )

    async def stop(self) -> None:
        """Cancel the timer and wait for fetches already in flight."""
        if not self._running:
            logger.warning("Status poller is not running")
            return

        self._running = False

        if self._timer:
            self._timer.cancel()
            try:
                await self._timer
            except asyncio.CancelledError:
                pass
            self._timer = None

        if self._cycles:
            await asyncio.gather(*self._cycles, return_exceptions=True)

        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

        logger.info("Status poller stopped")

    async def refresh(self) -> ViewState:
        """
        Run one fetch cycle.

        Failures become the view's error text; they never propagate.

        Returns:
            The view state after the cycle
        """
        self._set_state(loading=True, error=None)

        try:
            response = await self._get_client().get(self.url)
            if not response.is_success:
                raise FetchError(f"HTTP error! status: {response.status_code}")
            report = HealthSnapshot.model_validate(response.json())
        except FetchError as e:
            self._fail(str(e))
        except httpx.HTTPError as e:
            self._fail(str(e) or e.__class__.__name__)
        except ValueError as e:
            # Malformed JSON or a body that is not a report
            self._fail(f"Invalid response from {self.url}: {e}")
        else:
            self._set_state(report=report, error=None)
        finally:
            self._set_state(loading=False)

        return self.state

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout_seconds)
            self._owns_client = True
        return self._client

    def _spawn_cycle(self) -> None:
        task = asyncio.create_task(self.refresh())
        self._cycles.add(task)
        task.add_done_callback(self._cycles.discard)

    async def _tick(self) -> None:
        """Repeating timer."""
        while self._running:
            await asyncio.sleep(self.interval_seconds)
            if not self._running:
                break
            self._spawn_cycle()

    def _fail(self, message: str) -> None:
        logger.warning("Error fetching backend status", extra={"url": self.url, "error": message})
        self._set_state(error=message)

    def _set_state(self, **changes) -> None:
        self.state = replace(self.state, **changes)
        for listener in list(self._listeners):
            try:
                listener(self.state)
            except Exception:
                # Listener faults stay inside the cycle
                logger.exception("Status listener failed", extra={"url": self.url})
