"""GET /providers: presets for the settings screen."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request

from deskbridge.api.errors import not_found_error, request_trace_id
from deskbridge.api.schemas import ProviderModel
from deskbridge.dependencies import get_providers
from deskbridge.providers import ProviderRegistry

router = APIRouter(prefix="/providers")


@router.get("")
async def list_providers(providers: ProviderRegistry = Depends(get_providers)) -> dict:
    return {
        "object": "list",
        "data": [ProviderModel.from_preset(p).model_dump() for p in providers.list_presets()],
    }


@router.get("/{name}")
async def get_provider(name: str, request: Request, providers: ProviderRegistry = Depends(get_providers)) -> Any:
    preset = providers.get(name)
    if preset is None:
        return not_found_error(request.url.path, trace_id=request_trace_id(request))
    return ProviderModel.from_preset(preset).model_dump()
