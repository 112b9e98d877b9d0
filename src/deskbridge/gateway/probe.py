"""Connection test against a provider preset."""

from __future__ import annotations

import logging

from pydantic import BaseModel

from deskbridge.gateway.client import ChatCompletionClient
from deskbridge.gateway.errors import GatewayError
from deskbridge.gateway.schemas import ChatMessage
from deskbridge.providers import ProviderPreset

logger = logging.getLogger("deskbridge.gateway.probe")

PROBE_MESSAGE = "Hello, this is a test message."


class ConnectionCheck(BaseModel):
    ok: bool
    message: str


async def check_connection(client: ChatCompletionClient, provider: ProviderPreset) -> ConnectionCheck:
    request = provider.chat_request(
        [ChatMessage(role="user", content=PROBE_MESSAGE)],
        temperature=0.1,
        max_tokens=10,
    )
    try:
        response = await client.call_chat_completion(request)
    except GatewayError as exc:
        return ConnectionCheck(ok=False, message=f"Connection failed: {exc}")

    if not response.choices:
        logger.info("Provider %r answered without choices", provider.name)
        return ConnectionCheck(ok=False, message="Connection established but response format is unexpected.")
    return ConnectionCheck(ok=True, message="Connection successful! LLM is responding properly.")
