"""Integration tests for POST /invoke/<command>."""

from __future__ import annotations

import httpx

URL = "https://api.example.com/v1/chat/completions"

SUCCESS = {
    "id": "chatcmpl-1",
    "choices": [{"index": 0, "message": {"role": "assistant", "content": "Hello!"}, "finish_reason": "stop"}],
}


def _request(**overrides):
    request = {
        "base_url": "https://api.example.com/v1",
        "api_key": "secret123",
        "model": "gpt-3.5-turbo",
        "messages": [{"role": "user", "content": "Hi"}],
        "temperature": 0.3,
        "max_tokens": 1000,
    }
    request.update(overrides)
    return {"request": request}


class TestGreet:
    def test_greet(self, client):
        resp = client.post("/invoke/greet", json={"name": "World"})
        assert resp.status_code == 200
        assert resp.json() == "Hello, World! You've been greeted!"

    def test_greet_missing_name(self, client):
        resp = client.post("/invoke/greet", json={})
        assert resp.status_code == 400
        assert resp.json()["error"]["type"] == "validation_error"


class TestCallLlmApi:
    def test_success(self, client, llm_mock):
        route = llm_mock.post(URL).mock(return_value=httpx.Response(200, json=SUCCESS))

        resp = client.post("/invoke/call_llm_api", json=_request())

        assert resp.status_code == 200
        assert resp.json() == {"choices": [{"message": {"role": "assistant", "content": "Hello!"}}]}
        assert route.calls.last.request.headers["Authorization"] == "Bearer secret123"

    def test_camel_case_request(self, client, llm_mock):
        llm_mock.post(URL).mock(return_value=httpx.Response(200, json=SUCCESS))
        body = {"request": {
            "baseUrl": "https://api.example.com/v1",
            "model": "gpt-3.5-turbo",
            "messages": [{"role": "user", "content": "Hi"}],
            "temperature": 0.3,
            "maxTokens": 1000,
        }}

        resp = client.post("/invoke/call_llm_api", json=body)
        assert resp.status_code == 200

    def test_upstream_401(self, client, llm_mock):
        llm_mock.post(URL).mock(return_value=httpx.Response(401, text="invalid key"))

        resp = client.post("/invoke/call_llm_api", json=_request())

        assert resp.status_code == 502
        error = resp.json()["error"]
        assert error["code"] == "upstream"
        assert error["upstream_status"] == 401
        assert "401" in error["message"]
        assert "invalid key" in error["message"]
        assert error["trace_id"].startswith("req_")

    def test_parse_error(self, client, llm_mock):
        llm_mock.post(URL).mock(return_value=httpx.Response(200, json={"id": "x"}))

        resp = client.post("/invoke/call_llm_api", json=_request())

        assert resp.status_code == 502
        assert resp.json()["error"]["code"] == "parse"

    def test_transport_error(self, client, llm_mock):
        llm_mock.post(URL).mock(side_effect=httpx.ConnectError("Connection refused"))

        resp = client.post("/invoke/call_llm_api", json=_request())

        assert resp.status_code == 502
        assert resp.json()["error"]["code"] == "transport"

    def test_bad_api_key_is_local_error(self, client, llm_mock):
        route = llm_mock.post(URL)

        resp = client.post("/invoke/call_llm_api", json=_request(api_key="bad\nkey"))

        assert resp.status_code == 400
        assert resp.json()["error"]["type"] == "local_error"
        assert resp.json()["error"]["code"] == "header"
        assert not route.called

    def test_missing_fields(self, client):
        resp = client.post("/invoke/call_llm_api", json={"request": {"model": "m"}})
        assert resp.status_code == 400
        locs = [d["loc"] for d in resp.json()["error"]["details"]]
        assert all(loc[:2] == ["body", "request"] for loc in locs)
        assert len(locs) == 4

    def test_malformed_base_url(self, client):
        resp = client.post("/invoke/call_llm_api", json=_request(base_url="http://[::1/v1"))

        assert resp.status_code == 502
        error = resp.json()["error"]
        assert error["code"] == "transport"
        assert error["message"].startswith("HTTP request failed: ")

    def test_error_trace_id_matches_request_id(self, client, llm_mock):
        llm_mock.post(URL).mock(return_value=httpx.Response(401, text="invalid key"))

        resp = client.post("/invoke/call_llm_api", json=_request())

        assert resp.status_code == 502
        assert resp.json()["error"]["trace_id"] == resp.headers["X-Request-ID"]

    def test_error_trace_id_uses_caller_request_id(self, client, llm_mock):
        llm_mock.post(URL).mock(return_value=httpx.Response(500, text="boom"))

        resp = client.post("/invoke/call_llm_api", json=_request(), headers={"X-Request-ID": "req_frontend1"})

        assert resp.headers["X-Request-ID"] == "req_frontend1"
        assert resp.json()["error"]["trace_id"] == "req_frontend1"


class TestTestConnection:
    def test_ok(self, client, llm_mock):
        llm_mock.post("http://lab.local/v1/chat/completions").mock(return_value=httpx.Response(200, json=SUCCESS))

        resp = client.post("/invoke/test_connection", json={"provider": {"name": "Lab", "baseUrl": "http://lab.local/v1"}})

        assert resp.status_code == 200
        assert resp.json() == {"ok": True, "message": "Connection successful! LLM is responding properly."}

    def test_failure_is_reported_not_raised(self, client, llm_mock):
        llm_mock.post("http://lab.local/v1/chat/completions").mock(return_value=httpx.Response(500, text="boom"))

        resp = client.post("/invoke/test_connection", json={"provider": {"base_url": "http://lab.local/v1"}})

        assert resp.status_code == 200
        assert resp.json()["ok"] is False
        assert "boom" in resp.json()["message"]


class TestNoteCommands:
    provider = {"name": "Lab", "base_url": "http://lab.local/v1", "model": "tiny"}

    def _reply(self, llm_mock, content):
        return llm_mock.post("http://lab.local/v1/chat/completions").mock(
            return_value=httpx.Response(200, json={"choices": [{"message": {"role": "assistant", "content": content}}]})
        )

    def test_extract_todos(self, client, llm_mock):
        self._reply(llm_mock, '["Call client", "Book room"]')
        resp = client.post("/invoke/extract_todos", json={"provider": self.provider, "text": "notes"})
        assert resp.status_code == 200
        assert resp.json() == ["Call client", "Book room"]

    def test_generate_tldr(self, client, llm_mock):
        self._reply(llm_mock, "Short summary.")
        resp = client.post("/invoke/generate_tldr", json={"provider": self.provider, "text": "notes"})
        assert resp.json() == "Short summary."

    def test_extract_action_points(self, client, llm_mock):
        self._reply(llm_mock, "- Send invoice")
        resp = client.post("/invoke/extract_action_points", json={"provider": self.provider, "text": "notes"})
        assert resp.json() == ["Send invoice"]

    def test_assistant_failure(self, client, llm_mock):
        llm_mock.post("http://lab.local/v1/chat/completions").mock(side_effect=httpx.ConnectError("refused"))
        resp = client.post("/invoke/generate_tldr", json={"provider": self.provider, "text": "notes"})
        assert resp.status_code == 502
        assert resp.json()["error"]["message"] == "Failed to generate summary. Please check your LLM connection."


def test_oversized_body_rejected(client):
    resp = client.post("/invoke/greet", json={"name": "x" * 70_000})
    assert resp.status_code == 413
    assert resp.json()["error"]["code"] == "request_too_large"
    assert resp.json()["error"]["trace_id"] == resp.headers["X-Request-ID"]


def test_request_id_echoed(client):
    resp = client.post("/invoke/greet", json={"name": "A"}, headers={"X-Request-ID": "req_custom"})
    assert resp.headers["X-Request-ID"] == "req_custom"


def test_validation_error_trace_id(client):
    resp = client.post("/invoke/greet", json={}, headers={"X-Request-ID": "req_badargs"})
    assert resp.status_code == 400
    assert resp.json()["error"]["trace_id"] == "req_badargs"
