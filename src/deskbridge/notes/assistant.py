"""Note helpers built on the chat-completion gateway."""

from __future__ import annotations

import json
import logging
from typing import Any

from deskbridge.gateway.client import ChatCompletionClient
from deskbridge.gateway.errors import GatewayError
from deskbridge.gateway.schemas import ChatMessage, ChatResponse
from deskbridge.notes.parsing import bullet_lines, clean_json_response, fallback_extraction
from deskbridge.providers import ProviderPreset

logger = logging.getLogger("deskbridge.notes")

TEMPERATURE = 0.3
MAX_TOKENS = 1000

TODO_PROMPT = """Extract action items from the text below. Return ONLY a valid JSON array of strings.

RULES:
- Find tasks, commitments, assignments, follow-ups
- Look for: "will do", "need to", "should", "must", "assign", "due", "deadline"
- Each item must be actionable and clear
- Return simple task descriptions as strings

JSON FORMAT:
[
  "Call client about project update",
  "Schedule team meeting for next week",
  "Review and approve budget proposal"
]

TEXT:
{text}

JSON:"""

TLDR_PROMPT = """Summarize the following note in 1-2 sentences. Focus on the key points and main takeaways.

Note content: "{text}"

Return only the summary, no additional formatting or explanations."""

ACTION_POINTS_PROMPT = """Extract action points and next steps from the following note content. Return only the action points as a JSON array of strings. Each item should be a clear, actionable task. If no action points are found, return an empty array.

Note content: "{text}"

Return format: ["action point 1", "action point 2", ...]"""


class AssistantError(Exception):
    """User-facing failure of a note helper; the gateway error is the cause."""


def _first_content(response: ChatResponse) -> str | None:
    if not response.choices:
        return None
    return response.choices[0].message.content


def _as_text(item: Any) -> str:
    # JSON spelling for non-strings: true, null, {"a": 1}
    return item if isinstance(item, str) else json.dumps(item, ensure_ascii=False)


def _todo_item(item: Any) -> str:
    if isinstance(item, dict) and item.get("task"):
        return _as_text(item["task"])
    return _as_text(item)


class NoteAssistant:
    def __init__(self, client: ChatCompletionClient, provider: ProviderPreset) -> None:
        self.client = client
        self.provider = provider

    def update_provider(self, provider: ProviderPreset) -> None:
        self.provider = provider

    async def _complete(self, prompt: str) -> ChatResponse:
        request = self.provider.chat_request(
            [ChatMessage(role="user", content=prompt)],
            temperature=TEMPERATURE,
            max_tokens=MAX_TOKENS,
        )
        return await self.client.call_chat_completion(request)

    async def extract_todos(self, text: str) -> list[str]:
        try:
            response = await self._complete(TODO_PROMPT.format(text=text))
        except GatewayError as exc:
            raise AssistantError("Failed to extract action items. Please check your LLM connection.") from exc

        content = (_first_content(response) or "").strip() or "[]"
        try:
            parsed = json.loads(clean_json_response(content))
        except json.JSONDecodeError:
            logger.warning("Todo reply is not valid JSON, falling back to line extraction")
            return fallback_extraction(content)

        if not isinstance(parsed, list):
            return []
        items = [_todo_item(item) for item in parsed]
        return [item for item in items if item.strip()]

    async def generate_tldr(self, text: str) -> str:
        try:
            response = await self._complete(TLDR_PROMPT.format(text=text))
        except GatewayError as exc:
            raise AssistantError("Failed to generate summary. Please check your LLM connection.") from exc

        return (_first_content(response) or "").strip() or "No summary available"

    async def extract_action_points(self, text: str) -> list[str]:
        try:
            response = await self._complete(ACTION_POINTS_PROMPT.format(text=text))
        except GatewayError as exc:
            raise AssistantError("Failed to extract action points. Please check your LLM connection.") from exc

        content = _first_content(response) or "[]"
        try:
            parsed = json.loads(clean_json_response(content))
        except json.JSONDecodeError:
            return bullet_lines(content)

        if not isinstance(parsed, list):
            return []
        items = [_as_text(item) for item in parsed]
        return [item for item in items if item.strip()]
