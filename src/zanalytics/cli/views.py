from __future__ import annotations

import typer

from .common import (
    ORG_OPTION,
    console,
    get_client,
    handle_cli_errors,
    parse_config_options,
    parse_json_object,
    print_json,
)

app = typer.Typer(help="Read and modify individual views")

CONFIG_OPTION = typer.Option(
    None, "--config", help="Extra CONFIG attribute as KEY=VALUE (repeatable)"
)


@app.command("get")
@handle_cli_errors
def get_view(
    ctx: typer.Context,
    workspace_id: str = typer.Argument(..., help="Workspace id"),
    view_id: str = typer.Argument(..., help="View id"),
) -> None:
    """Fetch a view of a workspace as raw JSON (same call the relay's /report makes)."""

    print_json(get_client(ctx).get_view(workspace_id, view_id))


@app.command("details")
@handle_cli_errors
def view_details(
    ctx: typer.Context,
    view_id: str = typer.Argument(..., help="View id"),
    config: list[str] | None = CONFIG_OPTION,
) -> None:
    """Show metadata for a view; pass ``--config withInvolvedMetaInfo=true`` for columns."""

    print_json(get_client(ctx).get_view_details(view_id, parse_config_options(config)))


@app.command("add-row")
@handle_cli_errors
def add_row(
    ctx: typer.Context,
    workspace_id: str = typer.Argument(..., help="Workspace id"),
    view_id: str = typer.Argument(..., help="Table id"),
    columns: str = typer.Option(..., "--columns", help='Row values as JSON, e.g. {"Name": "x"}'),
    org_id: str = ORG_OPTION,
) -> None:
    """Append one row to a table."""

    view = get_client(ctx).get_view_instance(org_id, workspace_id, view_id)
    print_json(view.add_row(parse_json_object(columns, label="--columns")))


@app.command("delete-rows")
@handle_cli_errors
def delete_rows(
    ctx: typer.Context,
    workspace_id: str = typer.Argument(..., help="Workspace id"),
    view_id: str = typer.Argument(..., help="Table id"),
    criteria: str | None = typer.Option(
        None, "--criteria", help='Filter such as "Region"=\'East\'; omit to delete every row'
    ),
    org_id: str = ORG_OPTION,
    yes: bool = typer.Option(False, "--yes", help="Skip the confirmation when no criteria is given"),
) -> None:
    """Delete rows matching a criteria."""

    if not criteria and not yes:
        typer.confirm("No criteria given; delete every row?", abort=True)
    view = get_client(ctx).get_view_instance(org_id, workspace_id, view_id)
    deleted = view.delete_row(criteria)
    console.print(f"[green]Deleted rows:[/green] {deleted}")


__all__ = ["app"]
