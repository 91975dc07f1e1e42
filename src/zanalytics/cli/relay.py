from __future__ import annotations

import logging

import typer

from ..config import configure_logging
from ..relay.app import create_app
from ..relay.settings import RelaySettings
from .common import console, handle_cli_errors

app = typer.Typer(help="Run the HTTP relay for browser clients")


@app.command("serve")
@handle_cli_errors
def serve(
    host: str | None = typer.Option(None, help="Bind address (defaults to RELAY_HOST)"),
    port: int | None = typer.Option(None, help="Listen port (defaults to PORT or 3000)"),
    origins: str | None = typer.Option(
        None, help="Comma-separated CORS origins (defaults to RELAY_ALLOWED_ORIGINS)"
    ),
    rate_limit: str | None = typer.Option(
        None, "--rate-limit", help="Per-client limit such as 100/minute"
    ),
) -> None:
    """Serve the relay with uvicorn until interrupted."""

    import uvicorn

    overrides = {
        "host": host,
        "port": port,
        "allowed_origins": origins,
        "rate_limit": rate_limit,
    }
    settings = RelaySettings(
        **{key: value for key, value in overrides.items() if value is not None}
    )
    configure_logging(logging.DEBUG if settings.debug else logging.INFO)
    relay = create_app(settings)
    console.print(f"[green]Relay listening on[/green] http://{settings.host}:{settings.port}")
    uvicorn.run(relay, host=settings.host, port=settings.port, log_level="info")


__all__ = ["app"]
