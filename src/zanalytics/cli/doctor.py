from __future__ import annotations

"""Diagnostic command for verifying Zoho Analytics credentials."""

import typer
from rich import print

from ..config import (
    ACCESS_TOKEN_ENV,
    analytics_base_url,
    accounts_token_url,
    initial_access_token,
    load_credentials,
)
from ..errors import ZAnalyticsError
from .common import get_client, handle_cli_errors


def register(app: typer.Typer) -> None:
    app.command("doctor")(doctor)


@handle_cli_errors
def doctor(
    ctx: typer.Context,
    check_api: bool = typer.Option(
        True,
        help="List organizations to prove the token works (disable with --no-check-api)",
    ),
) -> None:
    """Validate credentials, token refresh and API reachability.

    Args:
        ctx: Active Typer context holding the cached client.
        check_api: When ``True`` performs a ``GET /restapi/v2/orgs`` call.
    """

    ok = True
    try:
        credentials = load_credentials()
    except ZAnalyticsError as exc:
        print(f"[red]Configuration error:[/red] {exc}")
        raise typer.Exit(code=1) from None
    print(f"[green]Client id:[/green] {credentials.client_id}")
    print(f"[green]API host:[/green] {analytics_base_url()}")
    print(f"[green]Token endpoint:[/green] {accounts_token_url()}")
    if initial_access_token():
        print(f"[green]{ACCESS_TOKEN_ENV} seed detected.[/green]")

    client = get_client(ctx)
    try:
        client.token_provider.get_token()
    except ZAnalyticsError as exc:
        print(f"[red]Token acquisition failed:[/red] {exc}")
        ok = False
    else:
        print("[green]Token acquisition successful.[/green]")

    if ok and check_api:
        try:
            orgs = client.get_orgs() or []
        except ZAnalyticsError as exc:
            print(f"[red]API check failed:[/red] {exc}")
            ok = False
        else:
            print(f"[green]API reachable:[/green] {len(orgs)} organization(s) visible")

    raise typer.Exit(code=0 if ok else 1)


__all__ = ["register", "doctor"]
