"""Property-based tests for the route table."""

from fastapi.testclient import TestClient
from hypothesis import given, settings as hypothesis_settings
from hypothesis import strategies as st

from status_api.core.config import Settings
from status_api.main import create_app

KNOWN_PATHS = {"/", "/health", "/api/status", "/api/info", "/metrics"}

client = TestClient(create_app(Settings(_env_file=None, environment="production")))

path_segments = st.text(
    alphabet=st.characters(whitelist_categories=("Ll", "Lu", "Nd"), max_codepoint=127),
    min_size=1,
    max_size=12,
)
paths = st.lists(path_segments, min_size=1, max_size=4).map(lambda parts: "/" + "/".join(parts))


@hypothesis_settings(max_examples=50, deadline=None)
@given(path=paths.filter(lambda p: p not in KNOWN_PATHS))
def test_undefined_paths_are_not_found(path):
    """Every path outside the route table answers 404 with the valid routes."""
    response = client.get(path)

    assert response.status_code == 404
    data = response.json()
    assert data["error"] == "Not Found"
    assert data["message"] == f"Endpoint GET {path} not found"
    assert len(data["availableEndpoints"]) == 4


@hypothesis_settings(max_examples=10, deadline=None)
@given(calls=st.integers(min_value=2, max_value=5))
def test_status_only_timestamp_varies(calls):
    """Any number of status calls agree on name, endpoints and features."""
    bodies = [client.get("/api/status").json() for _ in range(calls)]

    for body in bodies:
        assert body["name"] == bodies[0]["name"]
        assert body["endpoints"] == bodies[0]["endpoints"]
        assert body["features"] == bodies[0]["features"]
