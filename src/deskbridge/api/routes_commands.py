"""POST /invoke/<command>: the commands the front-end calls."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request

from deskbridge.api.errors import assistant_error, gateway_error, request_trace_id
from deskbridge.api.schemas import CallLlmApiArgs, GreetArgs, NoteArgs, TestConnectionArgs
from deskbridge.dependencies import get_gateway, get_metrics
from deskbridge.gateway.client import ChatCompletionClient
from deskbridge.gateway.errors import GatewayError
from deskbridge.gateway.probe import ConnectionCheck, check_connection
from deskbridge.gateway.schemas import ChatResponse
from deskbridge.greeter import greet as _greet
from deskbridge.notes.assistant import AssistantError, NoteAssistant
from deskbridge.observability.metrics import Metrics

logger = logging.getLogger("deskbridge.api.commands")

router = APIRouter(prefix="/invoke")


@router.post("/greet")
async def greet(args: GreetArgs, metrics: Metrics = Depends(get_metrics)) -> str:
    metrics.commands_total.labels(command="greet").inc()
    return _greet(args.name)


@router.post("/call_llm_api", response_model=ChatResponse)
async def call_llm_api(
    args: CallLlmApiArgs,
    request: Request,
    gateway: ChatCompletionClient = Depends(get_gateway),
    metrics: Metrics = Depends(get_metrics),
) -> Any:
    metrics.commands_total.labels(command="call_llm_api").inc()
    try:
        return await gateway.call_chat_completion(args.request)
    except GatewayError as exc:
        return gateway_error(exc, trace_id=request_trace_id(request))


@router.post("/test_connection")
async def test_connection(
    args: TestConnectionArgs,
    gateway: ChatCompletionClient = Depends(get_gateway),
    metrics: Metrics = Depends(get_metrics),
) -> ConnectionCheck:
    metrics.commands_total.labels(command="test_connection").inc()
    return await check_connection(gateway, args.provider.to_preset())


@router.post("/extract_todos")
async def extract_todos(
    args: NoteArgs,
    request: Request,
    gateway: ChatCompletionClient = Depends(get_gateway),
    metrics: Metrics = Depends(get_metrics),
) -> Any:
    metrics.commands_total.labels(command="extract_todos").inc()
    assistant = NoteAssistant(gateway, args.provider.to_preset())
    try:
        return await assistant.extract_todos(args.text)
    except AssistantError as exc:
        logger.error("extract_todos failed: %s (%s)", exc, exc.__cause__)
        return assistant_error(str(exc), trace_id=request_trace_id(request))


@router.post("/generate_tldr")
async def generate_tldr(
    args: NoteArgs,
    request: Request,
    gateway: ChatCompletionClient = Depends(get_gateway),
    metrics: Metrics = Depends(get_metrics),
) -> Any:
    metrics.commands_total.labels(command="generate_tldr").inc()
    assistant = NoteAssistant(gateway, args.provider.to_preset())
    try:
        return await assistant.generate_tldr(args.text)
    except AssistantError as exc:
        logger.error("generate_tldr failed: %s (%s)", exc, exc.__cause__)
        return assistant_error(str(exc), trace_id=request_trace_id(request))


@router.post("/extract_action_points")
async def extract_action_points(
    args: NoteArgs,
    request: Request,
    gateway: ChatCompletionClient = Depends(get_gateway),
    metrics: Metrics = Depends(get_metrics),
) -> Any:
    metrics.commands_total.labels(command="extract_action_points").inc()
    assistant = NoteAssistant(gateway, args.provider.to_preset())
    try:
        return await assistant.extract_action_points(args.text)
    except AssistantError as exc:
        logger.error("extract_action_points failed: %s (%s)", exc, exc.__cause__)
        return assistant_error(str(exc), trace_id=request_trace_id(request))
