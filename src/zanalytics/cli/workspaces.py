from __future__ import annotations

import typer

from .common import (
    ORG_OPTION,
    console,
    get_client,
    handle_cli_errors,
    parse_config_options,
    print_json,
    print_named,
)

app = typer.Typer(help="Workspace discovery and management")


@app.command("list")
@handle_cli_errors
def list_workspaces(
    ctx: typer.Context,
    owned: bool = typer.Option(False, "--owned", help="Only workspaces you own"),
    shared: bool = typer.Option(False, "--shared", help="Only workspaces shared with you"),
) -> None:
    """List accessible workspaces."""

    if owned and shared:
        raise typer.BadParameter("--owned and --shared are mutually exclusive.")
    client = get_client(ctx)
    if owned:
        print_named(client.get_owned_workspaces(), "workspaceName", "workspaceId")
        return
    if shared:
        print_named(client.get_shared_workspaces(), "workspaceName", "workspaceId")
        return
    payload = client.get_workspaces() or {}
    for group in ("ownedWorkspaces", "sharedWorkspaces"):
        console.print(f"[cyan]{group}[/cyan]")
        print_named(payload.get(group) or [], "workspaceName", "workspaceId")


@app.command("details")
@handle_cli_errors
def workspace_details(
    ctx: typer.Context,
    workspace_id: str = typer.Argument(..., help="Workspace id"),
) -> None:
    """Show metadata for one workspace."""

    print_json(get_client(ctx).get_workspace_details(workspace_id))


@app.command("create")
@handle_cli_errors
def create_workspace(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Name of the new workspace"),
    org_id: str = ORG_OPTION,
    config: list[str] | None = typer.Option(
        None, "--config", help="Extra CONFIG attribute as KEY=VALUE (repeatable)"
    ),
) -> None:
    """Create an empty workspace and print its id."""

    org = get_client(ctx).get_org_instance(org_id)
    workspace_id = org.create_workspace(name, parse_config_options(config))
    console.print(f"[green]Created workspace[/green] {name} id={workspace_id}")


@app.command("views")
@handle_cli_errors
def list_views(
    ctx: typer.Context,
    workspace_id: str = typer.Argument(..., help="Workspace id"),
    org_id: str = ORG_OPTION,
) -> None:
    """List the views (tables, reports, dashboards) of a workspace."""

    workspace = get_client(ctx).get_workspace_instance(org_id, workspace_id)
    print_named(workspace.get_views(), "viewName", "viewId")


@app.command("folders")
@handle_cli_errors
def list_folders(
    ctx: typer.Context,
    workspace_id: str = typer.Argument(..., help="Workspace id"),
    org_id: str = ORG_OPTION,
) -> None:
    """List the folders of a workspace."""

    workspace = get_client(ctx).get_workspace_instance(org_id, workspace_id)
    print_named(workspace.get_folders(), "folderName", "folderId")


__all__ = ["app"]
