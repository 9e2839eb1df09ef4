"""Test configuration and fixtures."""

import logging

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from status_api.core.config import Settings
from status_api.core.dependencies import get_process_snapshot, get_runtime_info
from status_api.core.introspection import ProcessSnapshot, RuntimeInfo
from status_api.main import create_app


@pytest.fixture
def test_settings():
    """Development settings: verbose errors, console logs."""
    return Settings(environment="development", log_level="INFO", port=3001)


@pytest.fixture
def production_settings():
    """Production settings: redacted errors, JSON logs."""
    return Settings(environment="production", log_level="INFO", port=3001)


@pytest.fixture
def fixed_snapshot():
    """Process vitals with known values."""
    return ProcessSnapshot(
        timestamp_ms=1_700_000_000_000,
        uptime_seconds=3600.5,
        pid=12345,
        memory={"rss": 52428800, "vms": 104857600, "maxRss": 60000000},
    )


@pytest.fixture
def fixed_runtime():
    """Runtime description with known values."""
    return RuntimeInfo(runtime_version="Python 3.12.1", platform="linux", architecture="x86_64")


@pytest.fixture
def test_app(test_settings, fixed_snapshot, fixed_runtime):
    """Application with introspection dependencies pinned to fixed values."""
    app = create_app(test_settings)
    app.dependency_overrides[get_process_snapshot] = lambda: fixed_snapshot
    app.dependency_overrides[get_runtime_info] = lambda: fixed_runtime

    yield app

    app.dependency_overrides.clear()


@pytest.fixture
def live_app(test_settings):
    """Application reading the real process introspection."""
    return create_app(test_settings)


@pytest_asyncio.fixture
async def test_client(test_app):
    """Create a test HTTP client."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def live_client(live_app):
    """HTTP client for the application without dependency overrides."""
    transport = ASGITransport(app=live_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def restore_logging():
    """Put the root logger back the way the test found it."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level

    yield

    root.handlers[:] = handlers
    root.setLevel(level)
