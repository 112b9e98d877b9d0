"""Argument models for the invoke commands."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from deskbridge.gateway.schemas import ChatRequest
from deskbridge.providers import DEFAULT_MODEL, ProviderPreset


class ProviderModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str = "Custom"
    base_url: str
    api_key: str | None = None
    model: str | None = DEFAULT_MODEL

    def to_preset(self) -> ProviderPreset:
        return ProviderPreset(name=self.name, base_url=self.base_url, model=self.model, api_key=self.api_key)

    @classmethod
    def from_preset(cls, preset: ProviderPreset) -> ProviderModel:
        return cls(name=preset.name, base_url=preset.base_url, model=preset.model)


class GreetArgs(BaseModel):
    name: str


class CallLlmApiArgs(BaseModel):
    request: ChatRequest


class TestConnectionArgs(BaseModel):
    provider: ProviderModel


class NoteArgs(BaseModel):
    provider: ProviderModel
    text: str
