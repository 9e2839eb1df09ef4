"""Tests for the client data models."""

import pytest

from status_client.models import HealthSnapshot, ViewState


@pytest.mark.parametrize("value", [None, ""])
def test_blank_version_and_environment_use_defaults(value):
    snapshot = HealthSnapshot.model_validate({"status": "ok", "version": value, "environment": value})

    assert snapshot.version == "0.1.0"
    assert snapshot.environment == "development"


def test_reported_values_are_kept(health_payload):
    snapshot = HealthSnapshot.model_validate({**health_payload, "version": "2.3.4", "environment": "staging"})

    assert snapshot.version == "2.3.4"
    assert snapshot.environment == "staging"


def test_unknown_fields_are_tolerated(health_payload):
    snapshot = HealthSnapshot.model_validate({**health_payload, "region": "eu-west-1"})

    assert snapshot.status == "ok"


def test_view_state_starts_loading():
    assert ViewState() == ViewState(loading=True, error=None, report=None)
