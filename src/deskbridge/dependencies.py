"""FastAPI dependency injection wiring."""

from __future__ import annotations

from fastapi import Request

from deskbridge.gateway.client import ChatCompletionClient
from deskbridge.observability.metrics import Metrics
from deskbridge.providers import ProviderRegistry


def get_gateway(request: Request) -> ChatCompletionClient:
    return request.app.state.gateway


def get_metrics(request: Request) -> Metrics:
    return request.app.state.metrics


def get_providers(request: Request) -> ProviderRegistry:
    return request.app.state.providers
