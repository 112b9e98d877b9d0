from .client import ChatCompletionClient, call_chat_completion
from .errors import (
    GatewayError,
    HeaderConstructionError,
    ParseError,
    SerializationError,
    TransportError,
    UpstreamError,
)
from .schemas import ChatChoice, ChatMessage, ChatRequest, ChatResponse

__all__ = [
    "ChatCompletionClient", "call_chat_completion",
    "GatewayError", "HeaderConstructionError", "SerializationError",
    "TransportError", "UpstreamError", "ParseError",
    "ChatRequest", "ChatMessage", "ChatChoice", "ChatResponse",
]
