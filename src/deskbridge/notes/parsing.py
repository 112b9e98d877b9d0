"""Tolerant parsing of list-shaped LLM replies."""

from __future__ import annotations

import re

_FENCE_JSON_RE = re.compile(r"```json\s*", re.IGNORECASE)
_FENCE_RE = re.compile(r"```\s*")
_TASK_RE = re.compile(r'"task":\s*"([^"]+)"')
_QUOTED_RE = re.compile(r'"([^"]+)"')
_BULLET_RE = re.compile(r"^[-•*]\s*(.+)")
_NUMBERED_RE = re.compile(r"^\d+\.\s*(.+)")
_LEADING_BULLET_RE = re.compile(r"^[-•*]\s*")

# Shorter fragments are usually keys or stray words, not tasks.
_MIN_ITEM_LENGTH = 5


def clean_json_response(content: str) -> str:
    """Cut a reply down to the JSON array/object it contains.

    Markdown code fences are removed, then everything before the first ``[``
    or ``{`` and after the last ``]`` or ``}``.
    """
    content = _FENCE_RE.sub("", _FENCE_JSON_RE.sub("", content))

    starts = [i for i in (content.find("["), content.find("{")) if i >= 0]
    if starts:
        content = content[min(starts):]

    end = max(content.rfind("]"), content.rfind("}"))
    if end >= 0:
        content = content[: end + 1]

    return content.strip()


def fallback_extraction(content: str) -> list[str]:
    """Pull task-like items out of a reply that is not valid JSON."""
    items: list[str] = []
    for line in content.split("\n"):
        trimmed = line.strip()

        match = _TASK_RE.search(trimmed)
        if match:
            items.append(match.group(1))
            continue

        match = _QUOTED_RE.search(trimmed)
        if match and len(match.group(1)) > _MIN_ITEM_LENGTH:
            items.append(match.group(1))
            continue

        match = _BULLET_RE.match(trimmed) or _NUMBERED_RE.match(trimmed)
        if match and len(match.group(1)) > _MIN_ITEM_LENGTH:
            items.append(match.group(1))

    return [item for item in items if item.strip()]


def bullet_lines(content: str) -> list[str]:
    lines = [line for line in content.split("\n") if line.strip()]
    items = [
        _LEADING_BULLET_RE.sub("", line).strip()
        for line in lines
        if "-" in line or "•" in line or "*" in line
    ]
    return [item for item in items if item]
