"""Bridge configuration via Pydantic Settings."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="DESKBRIDGE_", env_file=".env", extra="ignore")

    # Server
    host: str = "127.0.0.1"
    port: int = 8765
    log_level: str = "INFO"

    # Outbound LLM calls; None disables the timeout
    llm_timeout: float | None = None
    llm_connect_timeout: float | None = None

    # Provider presets
    providers_config_path: str = str(_PROJECT_ROOT / "config" / "providers.yaml")

    # Body limit
    max_body_size: int = 1_048_576


@lru_cache
def get_settings() -> Settings:
    return Settings()
