"""Test configuration and fixtures."""

import asyncio

import httpx
import pytest
import pytest_asyncio


@pytest.fixture
def health_payload():
    """Sample health report as served by the status API."""
    return {
        "status": "ok",
        "timestamp": 1_700_000_000_000,
        "version": "0.1.0",
        "environment": "development",
        "uptime": 3600,
        "memory": {"rss": 52428800, "vms": 104857600, "maxRss": 60000000},
        "pid": 12345,
    }


class RecordingHandler:
    """MockTransport handler that replays scripted responses and counts calls."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        index = min(len(self.requests), len(self.responses)) - 1
        outcome = self.responses[index]
        if callable(outcome):
            outcome = outcome(request)
            if asyncio.iscoroutine(outcome):
                outcome = await outcome
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    @property
    def calls(self) -> int:
        return len(self.requests)


@pytest_asyncio.fixture
async def make_http_client():
    """Build AsyncClients backed by a RecordingHandler; closed after the test."""
    clients = []

    def factory(handler: RecordingHandler) -> httpx.AsyncClient:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield factory

    for client in clients:
        await client.aclose()


@pytest.fixture
def wait_until():
    """Coroutine that polls a predicate until it holds or the timeout elapses."""

    async def wait(predicate, timeout: float = 1.0) -> None:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        while not predicate():
            if loop.time() > deadline:
                raise AssertionError("condition not met before timeout")
            await asyncio.sleep(0.005)

    return wait


@pytest.fixture
def recording_handler():
    """The RecordingHandler class, for building scripted transports."""
    return RecordingHandler
