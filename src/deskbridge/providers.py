"""LLM provider presets, built in and loaded from YAML config."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from pathlib import Path

import yaml

from deskbridge.gateway.schemas import ChatMessage, ChatRequest

logger = logging.getLogger("deskbridge.providers")

DEFAULT_MODEL = "gpt-3.5-turbo"


@dataclass
class ProviderPreset:
    name: str
    base_url: str
    model: str | None = DEFAULT_MODEL
    api_key: str | None = None

    def chat_request(
        self,
        messages: list[ChatMessage],
        temperature: float,
        max_tokens: int,
    ) -> ChatRequest:
        return ChatRequest(
            base_url=self.base_url,
            api_key=self.api_key or None,
            model=self.model or DEFAULT_MODEL,
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens,
        )


BUILTIN_PRESETS = (
    ProviderPreset(name="Local LLM", base_url="http://localhost:8091/v1"),
    ProviderPreset(name="OpenAI", base_url="https://api.openai.com/v1"),
    ProviderPreset(name="Custom", base_url=""),
)


class ProviderRegistry:
    def __init__(self, presets: tuple[ProviderPreset, ...] = BUILTIN_PRESETS) -> None:
        self._presets: dict[str, ProviderPreset] = {p.name: replace(p) for p in presets}

    def load_from_yaml(self, path: str | Path) -> None:
        path = Path(path)
        if not path.exists():
            logger.warning("Provider config not found: %s", path)
            return
        with open(path) as f:
            data = yaml.safe_load(f) or {}

        for name, info in (data.get("providers") or {}).items():
            info = info or {}
            self._presets[name] = ProviderPreset(
                name=name,
                base_url=info.get("base_url", ""),
                model=info.get("model", DEFAULT_MODEL),
                api_key=info.get("api_key"),
            )
        logger.info("Loaded %d provider presets from %s", len(self._presets), path)

    def get(self, name: str) -> ProviderPreset | None:
        return self._presets.get(name)

    def list_presets(self) -> list[ProviderPreset]:
        return list(self._presets.values())

    def exists(self, name: str) -> bool:
        return name in self._presets
