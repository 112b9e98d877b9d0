"""Async HTTP client forwarding chat completions to an OpenAI-compatible endpoint."""

from __future__ import annotations

import logging
import math
import re
import time

import httpx
from pydantic import ValidationError

from deskbridge.gateway.errors import (
    GatewayError,
    HeaderConstructionError,
    ParseError,
    SerializationError,
    TransportError,
    UpstreamError,
)
from deskbridge.gateway.schemas import ChatCompletionPayload, ChatRequest, ChatResponse
from deskbridge.observability.metrics import Metrics

logger = logging.getLogger("deskbridge.gateway")

# Field-value grammar: visible ASCII, with inner spaces or tabs only.
_HEADER_VALUE_RE = re.compile(r"[\x21-\x7e](?:[\t\x20-\x7e]*[\x21-\x7e])?")


def completions_url(base_url: str) -> str:
    # Literal join: callers pass the base URL without a trailing slash.
    return f"{base_url}/chat/completions"


def build_headers(api_key: str | None) -> dict[str, str]:
    headers = {"Content-Type": "application/json"}
    if api_key:
        value = f"Bearer {api_key}"
        if not _HEADER_VALUE_RE.fullmatch(value):
            raise HeaderConstructionError(
                "Invalid authorization header: API key contains characters not allowed in an HTTP header"
            )
        headers["Authorization"] = value
    return headers


def build_payload(request: ChatRequest) -> ChatCompletionPayload:
    if not math.isfinite(request.temperature):
        raise SerializationError(
            f"Failed to serialize temperature: {request.temperature!r} is not a finite number"
        )
    return ChatCompletionPayload(
        model=request.model,
        messages=request.messages,
        temperature=request.temperature,
        max_tokens=request.max_tokens,
    )


def _error_body(resp: httpx.Response) -> str:
    try:
        return resp.text
    except Exception as exc:
        logger.debug("Could not decode error body: %s", exc)
        return ""


async def send_chat_completion(client: httpx.AsyncClient, request: ChatRequest) -> ChatResponse:
    """Run one chat-completion round trip on ``client``.

    Raises a :class:`GatewayError` subclass for every failure; nothing is retried.
    """
    headers = build_headers(request.api_key)
    payload = build_payload(request)
    url = completions_url(request.base_url)

    try:
        resp = await client.post(url, headers=headers, json=payload.model_dump())
    except (httpx.RequestError, httpx.InvalidURL) as exc:
        raise TransportError(f"HTTP request failed: {exc}") from exc

    if not resp.is_success:
        raise UpstreamError(resp.status_code, resp.reason_phrase, _error_body(resp))

    try:
        return ChatResponse.model_validate_json(resp.content)
    except ValidationError as exc:
        raise ParseError(f"Failed to parse response: {exc}") from exc


class ChatCompletionClient:
    def __init__(
        self,
        timeout: float | None = None,
        connect_timeout: float | None = None,
        metrics: Metrics | None = None,
    ) -> None:
        self.timeout = timeout
        self.connect_timeout = connect_timeout
        self.metrics = metrics
        self._client: httpx.AsyncClient | None = None

    async def start(self) -> None:
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout, connect=self.connect_timeout),
        )

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise RuntimeError("ChatCompletionClient not started. Call start() first.")
        return self._client

    async def __aenter__(self) -> ChatCompletionClient:
        await self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def call_chat_completion(self, request: ChatRequest) -> ChatResponse:
        start = time.perf_counter()
        try:
            response = await send_chat_completion(self.client, request)
        except GatewayError as exc:
            logger.warning("Chat completion to %s failed (%s): %s", request.base_url, exc.kind, exc)
            if self.metrics:
                self.metrics.completion_errors.labels(kind=exc.kind).inc()
            raise
        finally:
            if self.metrics:
                self.metrics.completions_total.inc()
                self.metrics.completion_latency.observe(time.perf_counter() - start)

        logger.debug("Chat completion from %s returned %d choice(s)", request.base_url, len(response.choices))
        return response


async def call_chat_completion(request: ChatRequest) -> ChatResponse:
    """One-off call with a short-lived client."""
    async with ChatCompletionClient() as client:
        return await client.call_chat_completion(request)
