"""Integration tests for /providers, /health, /version and /metrics."""

from __future__ import annotations

from deskbridge import __version__


class TestProviders:
    def test_lists_builtin_and_configured(self, client):
        resp = client.get("/providers")

        assert resp.status_code == 200
        names = [p["name"] for p in resp.json()["data"]]
        assert names == ["Local LLM", "OpenAI", "Custom", "Lab"]

    def test_api_keys_not_exposed(self, client):
        resp = client.get("/providers/Lab")

        assert resp.status_code == 200
        data = resp.json()
        assert data["base_url"] == "http://lab.local/v1"
        assert data["model"] == "tiny"
        assert data["api_key"] is None

    def test_unknown_provider(self, client):
        resp = client.get("/providers/Nope")
        assert resp.status_code == 404
        assert resp.json()["error"]["code"] == "not_found"


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_version(client):
    assert client.get("/version").json() == {"version": __version__}


def test_metrics_counts_commands(client):
    client.post("/invoke/greet", json={"name": "A"})
    body = client.get("/metrics").text
    assert 'deskbridge_commands_total{command="greet"} 1.0' in body
