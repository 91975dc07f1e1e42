from __future__ import annotations

from pathlib import Path

import typer

from .common import get_client, handle_cli_errors, parse_config_options, print_json


def register(app: typer.Typer) -> None:
    app.command("api")(api)


@handle_cli_errors
def api(
    ctx: typer.Context,
    method: str = typer.Argument(..., help="HTTP method, e.g. GET"),
    path: str = typer.Argument(..., help="API path such as /restapi/v2/orgs"),
    config: list[str] | None = typer.Option(
        None, "--config", help="CONFIG attribute as KEY=VALUE (repeatable)"
    ),
    header: list[str] | None = typer.Option(
        None, "--header", "-H", help="Extra request header as NAME=VALUE (repeatable)"
    ),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Write the raw response body to this file"
    ),
) -> None:
    """Send an arbitrary request through the authenticated pipeline.

    The token refresh-and-retry rule applies just as it does for the typed
    commands. With ``--output`` the body is saved verbatim instead of being
    decoded as JSON.
    """

    headers: dict[str, str] = {}
    for item in header or []:
        name, sep, value = item.partition("=")
        if not sep or not name.strip():
            raise typer.BadParameter(f"Expected NAME=VALUE, got {item!r}")
        headers[name.strip()] = value
    http = get_client(ctx).http
    cfg = parse_config_options(config)
    if output is not None:
        http.export(path, config=cfg, headers=headers, target=output, method=method)
        typer.echo(f"Saved response to {output}")
        return
    print_json(http.request(method, path, config=cfg, headers=headers))


__all__ = ["register", "api"]
