"""Pydantic models for the chat-completion command and its wire bodies."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

MAX_TOKENS_LIMIT = 2**32 - 1


class ChatMessage(BaseModel):
    role: str
    content: str


class ChatRequest(BaseModel):
    """Chat-completion request as sent by the front-end.

    Accepts both ``base_url`` and ``baseUrl`` style keys.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    base_url: str
    api_key: str | None = None
    model: str
    messages: list[ChatMessage]
    temperature: float
    max_tokens: int = Field(ge=0, le=MAX_TOKENS_LIMIT)


class ChatCompletionPayload(BaseModel):
    """Outbound body for ``POST {base_url}/chat/completions``."""

    model: str
    messages: list[ChatMessage]
    temperature: float
    max_tokens: int


class ChatChoice(BaseModel):
    message: ChatMessage


class ChatResponse(BaseModel):
    choices: list[ChatChoice]
