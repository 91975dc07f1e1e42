from __future__ import annotations

from pathlib import Path

import typer

from ..clients.analytics import default_download_path
from .common import (
    ORG_OPTION,
    console,
    get_client,
    handle_cli_errors,
    parse_config_options,
    print_json,
)

app = typer.Typer(help="Import and export table data")

CONFIG_OPTION = typer.Option(
    None, "--config", help="Extra CONFIG attribute as KEY=VALUE (repeatable)"
)


@app.command("import")
@handle_cli_errors
def import_file(
    ctx: typer.Context,
    workspace_id: str = typer.Argument(..., help="Workspace id"),
    file: Path = typer.Argument(..., help="CSV or JSON file to upload"),
    view_id: str | None = typer.Option(None, "--view", help="Existing table id to import into"),
    table_name: str | None = typer.Option(
        None, "--new-table", help="Create a new table with this name instead"
    ),
    import_type: str = typer.Option(
        "append", "--import-type", help="append, truncateadd or updateadd"
    ),
    file_type: str = typer.Option("csv", "--file-type", help="csv or json"),
    auto_identify: bool = typer.Option(True, help="Let the server detect column types"),
    bulk: bool = typer.Option(False, "--bulk", help="Run as an asynchronous bulk job"),
    org_id: str = ORG_OPTION,
    config: list[str] | None = CONFIG_OPTION,
) -> None:
    """Upload a file into an existing table (``--view``) or a new one (``--new-table``)."""

    if bool(view_id) == bool(table_name):
        raise typer.BadParameter("Pass exactly one of --view or --new-table.")
    bulk_api = get_client(ctx).get_bulk_instance(org_id, workspace_id)
    identify = "true" if auto_identify else "false"
    extra = parse_config_options(config)
    if table_name:
        if bulk:
            result = bulk_api.import_bulk_data_in_new_table(
                table_name, file_type, identify, file, extra
            )
        else:
            result = bulk_api.import_data_in_new_table(
                table_name, file_type, identify, file, extra
            )
    elif bulk:
        result = bulk_api.import_bulk_data(view_id, import_type, file_type, identify, file, extra)
    else:
        result = bulk_api.import_data(view_id, import_type, file_type, identify, file, extra)
    if bulk:
        console.print(f"[green]Import job started:[/green] {result}")
    else:
        print_json(result)


@app.command("import-batch")
@handle_cli_errors
def import_batches(
    ctx: typer.Context,
    workspace_id: str = typer.Argument(..., help="Workspace id"),
    file: Path = typer.Argument(..., help="CSV file whose first line is the header"),
    batch_size: int = typer.Option(
        5000, "--batch-size", min=1, help="Data lines per uploaded chunk"
    ),
    view_id: str | None = typer.Option(None, "--view", help="Existing table id to import into"),
    table_name: str | None = typer.Option(
        None, "--new-table", help="Create a new table with this name instead"
    ),
    import_type: str = typer.Option(
        "append", "--import-type", help="append, truncateadd or updateadd"
    ),
    auto_identify: bool = typer.Option(True, help="Let the server detect column types"),
    org_id: str = ORG_OPTION,
    config: list[str] | None = CONFIG_OPTION,
) -> None:
    """Upload a large CSV as a chain of batches and print the resulting job id."""

    if bool(view_id) == bool(table_name):
        raise typer.BadParameter("Pass exactly one of --view or --new-table.")
    bulk_api = get_client(ctx).get_bulk_instance(org_id, workspace_id)
    identify = "true" if auto_identify else "false"
    extra = parse_config_options(config)
    if table_name:
        job_id = bulk_api.import_data_in_new_table_as_batches(
            table_name, identify, file, batch_size, extra
        )
    else:
        job_id = bulk_api.import_bulk_data_as_batches(
            view_id, import_type, identify, file, batch_size, extra
        )
    if job_id is None:
        console.print("[yellow]No data rows found; nothing was imported.[/yellow]")
        return
    console.print(f"[green]Import job:[/green] {job_id}")


@app.command("export")
@handle_cli_errors
def export_view(
    ctx: typer.Context,
    workspace_id: str = typer.Argument(..., help="Workspace id"),
    view_id: str = typer.Argument(..., help="Table or report id"),
    response_format: str = typer.Option(
        "csv", "--format", help="csv, json, xml, xls, pdf, html or image"
    ),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Destination file (defaults to <view>.<format>)"
    ),
    org_id: str = ORG_OPTION,
    config: list[str] | None = CONFIG_OPTION,
) -> None:
    """Download a view's data to a file."""

    target = output or Path(default_download_path(view_id, response_format))
    bulk_api = get_client(ctx).get_bulk_instance(org_id, workspace_id)
    bulk_api.export_data(view_id, response_format, target, parse_config_options(config))
    console.print(f"[green]Exported[/green] {view_id} to {target}")


@app.command("job")
@handle_cli_errors
def job_status(
    ctx: typer.Context,
    workspace_id: str = typer.Argument(..., help="Workspace id"),
    job_id: str = typer.Argument(..., help="Bulk job id"),
    export: bool = typer.Option(False, "--export", help="Treat the id as an export job"),
    download: Path | None = typer.Option(
        None, "--download", help="Fetch the finished export job's data into this file"
    ),
    org_id: str = ORG_OPTION,
) -> None:
    """Show the status of a bulk import or export job."""

    bulk_api = get_client(ctx).get_bulk_instance(org_id, workspace_id)
    if download is not None:
        bulk_api.export_bulk_data(job_id, download)
        console.print(f"[green]Downloaded[/green] job {job_id} to {download}")
        return
    if export:
        print_json(bulk_api.get_export_job_details(job_id))
    else:
        print_json(bulk_api.get_import_job_details(job_id))


__all__ = ["app"]
