"""Failure kinds raised by the chat-completion gateway."""

from __future__ import annotations


class GatewayError(Exception):
    """Base class for every chat-completion failure.

    ``kind`` lets callers branch on the failure without parsing the message.
    """

    kind = "gateway"


class HeaderConstructionError(GatewayError):
    kind = "header"


class SerializationError(GatewayError):
    kind = "serialization"


class TransportError(GatewayError):
    kind = "transport"


class UpstreamError(GatewayError):
    kind = "upstream"

    def __init__(self, status_code: int, reason: str, body: str) -> None:
        self.status_code = status_code
        self.reason = reason
        self.body = body
        status = f"{status_code} {reason}".rstrip()
        super().__init__(f"LLM API error {status}: {body}")


class ParseError(GatewayError):
    kind = "parse"


LOCAL_ERRORS = (HeaderConstructionError, SerializationError)
