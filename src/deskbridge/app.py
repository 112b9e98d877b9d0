"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from prometheus_client import CollectorRegistry

from deskbridge import __version__
from deskbridge.api.errors import ErrorDetail, request_trace_id, validation_error
from deskbridge.api.routes_commands import router as commands_router
from deskbridge.api.routes_health import router as health_router
from deskbridge.api.routes_providers import router as providers_router
from deskbridge.config import Settings
from deskbridge.gateway.client import ChatCompletionClient
from deskbridge.middleware.body_limit import BodyLimitMiddleware
from deskbridge.middleware.request_id import RequestIDMiddleware
from deskbridge.observability.logging import setup_logging
from deskbridge.observability.metrics import Metrics, get_metrics
from deskbridge.providers import ProviderRegistry

logger = logging.getLogger("deskbridge.app")


async def _validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        ErrorDetail(loc=list(err.get("loc", ())), msg=err.get("msg", ""), type=err.get("type", ""))
        for err in exc.errors()
    ]
    return validation_error("Command arguments failed validation.", details=details, trace_id=request_trace_id(request))


def create_app(
    settings_override: dict[str, Any] | None = None,
    metrics_registry: CollectorRegistry | None = None,
) -> FastAPI:
    settings = Settings(**(settings_override or {}))
    setup_logging(settings.log_level)
    metrics = Metrics(metrics_registry) if metrics_registry is not None else get_metrics()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        # --- Startup ---
        providers = ProviderRegistry()
        providers.load_from_yaml(settings.providers_config_path)
        app.state.providers = providers

        gateway = ChatCompletionClient(
            timeout=settings.llm_timeout,
            connect_timeout=settings.llm_connect_timeout,
            metrics=metrics,
        )
        await gateway.start()
        app.state.gateway = gateway

        logger.info("deskbridge %s listening for commands, %d provider presets", __version__, len(providers.list_presets()))
        yield

        # --- Shutdown ---
        await gateway.close()

    app = FastAPI(title="deskbridge", version=__version__, lifespan=lifespan)
    app.state.metrics = metrics
    app.add_exception_handler(RequestValidationError, _validation_handler)

    # Middleware: the last one added runs outermost, so every response gets a request id
    app.add_middleware(BodyLimitMiddleware, max_bytes=settings.max_body_size)
    app.add_middleware(RequestIDMiddleware)

    # Routes
    app.include_router(health_router)
    app.include_router(commands_router)
    app.include_router(providers_router)

    return app
