"""Command-line launcher for the bridge."""

from __future__ import annotations

import asyncio
import dataclasses

import typer
import uvicorn

from deskbridge.config import get_settings
from deskbridge.gateway.client import ChatCompletionClient
from deskbridge.gateway.probe import check_connection
from deskbridge.greeter import greet as _greet
from deskbridge.providers import ProviderRegistry

app = typer.Typer(help="Desktop shell command bridge")


def _registry() -> ProviderRegistry:
    registry = ProviderRegistry()
    registry.load_from_yaml(get_settings().providers_config_path)
    return registry


@app.command()
def serve(host: str = typer.Option(None), port: int = typer.Option(None)) -> None:
    """Run the command surface with uvicorn."""

    from deskbridge.app import create_app

    settings = get_settings()
    uvicorn.run(
        create_app(settings.model_dump()),
        host=host or settings.host,
        port=port or settings.port,
        log_level=settings.log_level.lower(),
    )


@app.command()
def greet(name: str) -> None:
    """Print the greeting the front-end receives."""

    typer.echo(_greet(name))


@app.command()
def providers() -> None:
    """List provider presets."""

    for preset in _registry().list_presets():
        typer.echo(f"{preset.name}\t{preset.base_url or '-'}\t{preset.model}")


@app.command()
def ping(name: str, api_key: str = typer.Option(None, envvar="DESKBRIDGE_PING_API_KEY")) -> None:
    """Send a test completion to a provider preset."""

    preset = _registry().get(name)
    if preset is None:
        typer.echo(f"Unknown provider '{name}'", err=True)
        raise typer.Exit(code=1)
    if api_key:
        preset = dataclasses.replace(preset, api_key=api_key)

    async def _run():
        settings = get_settings()
        async with ChatCompletionClient(settings.llm_timeout, settings.llm_connect_timeout) as client:
            return await check_connection(client, preset)

    result = asyncio.run(_run())
    typer.echo(result.message)
    if not result.ok:
        raise typer.Exit(code=1)


if __name__ == "__main__":  # pragma: no cover
    app()
