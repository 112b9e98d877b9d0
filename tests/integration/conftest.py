"""Command-surface fixtures: app factory with test settings, respx for upstream LLMs."""

from __future__ import annotations

import pytest
import respx
from fastapi.testclient import TestClient
from prometheus_client import CollectorRegistry

from deskbridge.app import create_app


@pytest.fixture
def providers_yaml(tmp_path):
    path = tmp_path / "providers.yaml"
    path.write_text(
        "providers:\n"
        "  Lab:\n"
        "    base_url: http://lab.local/v1\n"
        "    model: tiny\n"
        "    api_key: never-exposed\n"
    )
    return str(path)


@pytest.fixture
def settings(providers_yaml):
    return {
        "providers_config_path": providers_yaml,
        "log_level": "WARNING",
        "max_body_size": 64_000,
    }


@pytest.fixture
def app(settings):
    return create_app(settings_override=settings, metrics_registry=CollectorRegistry())


@pytest.fixture
def llm_mock():
    """Mock all outbound httpx requests via respx."""
    with respx.mock(assert_all_called=False) as router:
        yield router


@pytest.fixture
def client(app, llm_mock):
    with TestClient(app) as c:
        yield c
