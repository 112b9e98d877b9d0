"""Shared fixtures: an isolated metrics registry and a started gateway client."""

from __future__ import annotations

import pytest
import pytest_asyncio
from prometheus_client import CollectorRegistry

from deskbridge.gateway.client import ChatCompletionClient
from deskbridge.observability.metrics import Metrics

BASE_URL = "https://api.example.com/v1"


@pytest.fixture
def metrics():
    return Metrics(CollectorRegistry())


@pytest_asyncio.fixture
async def gateway(metrics):
    async with ChatCompletionClient(metrics=metrics) as client:
        yield client


@pytest.fixture
def success_body():
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "created": 0,
        "model": "gpt-3.5-turbo",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": "Hi there!"},
                "finish_reason": "stop",
            }
        ],
        "usage": {"prompt_tokens": 3, "completion_tokens": 3, "total_tokens": 6},
    }


@pytest.fixture
def chat_request_data():
    return {
        "base_url": BASE_URL,
        "api_key": None,
        "model": "gpt-3.5-turbo",
        "messages": [{"role": "user", "content": "Hello"}],
        "temperature": 0.3,
        "max_tokens": 1000,
    }
