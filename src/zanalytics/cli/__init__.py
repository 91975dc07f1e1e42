from __future__ import annotations

import logging

import typer

from ..config import configure_logging
from . import api, data, doctor, relay, views, workspaces
from .common import console, get_client, handle_cli_errors, print_named

app = typer.Typer(help="Zoho Analytics command line client")


def _register_sub_app(name: str, sub_app: typer.Typer) -> None:
    app.add_typer(sub_app, name=name)


_register_sub_app("workspaces", workspaces.app)
_register_sub_app("views", views.app)
_register_sub_app("data", data.app)
_register_sub_app("relay", relay.app)

doctor.register(app)
api.register(app)


@app.callback()
def common(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log HTTP activity to stderr"),
) -> None:
    """Initialize shared Typer context state."""

    ctx.ensure_object(dict)
    ctx.obj.setdefault("client", None)
    if verbose:
        configure_logging(logging.DEBUG)


@app.command("orgs")
@handle_cli_errors
def list_orgs(ctx: typer.Context) -> None:
    """List the organizations the refresh token can access."""

    print_named(get_client(ctx).get_orgs(), "orgName", "orgId")


@app.command("dashboards")
@handle_cli_errors
def list_dashboards(
    ctx: typer.Context,
    owned: bool = typer.Option(False, "--owned", help="Only dashboards you own"),
    shared: bool = typer.Option(False, "--shared", help="Only dashboards shared with you"),
) -> None:
    """List accessible dashboards."""

    if owned and shared:
        raise typer.BadParameter("--owned and --shared are mutually exclusive.")
    client = get_client(ctx)
    if owned:
        print_named(client.get_owned_dashboards(), "viewName", "viewId")
        return
    if shared:
        print_named(client.get_shared_dashboards(), "viewName", "viewId")
        return
    payload = client.get_dashboards() or {}
    for group in ("ownedViews", "sharedViews"):
        console.print(f"[cyan]{group}[/cyan]")
        print_named(payload.get(group) or [], "viewName", "viewId")


__all__ = ["app", "api", "data", "doctor", "relay", "views", "workspaces"]
