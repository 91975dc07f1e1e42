from __future__ import annotations

import json
from collections.abc import Callable, Iterable
from functools import wraps
from typing import Any, ParamSpec, TypeVar, cast

import typer
from rich.console import Console

from ..clients import AnalyticsClient
from ..config import DEBUG_ENV, debug_enabled
from ..errors import ApiError, AuthError, ConfigError, FileAccessError, ZAnalyticsError

console = Console()

ORG_ID_ENV = "ZOHO_ORG_ID"

ORG_OPTION = typer.Option(
    ...,
    "--org",
    envvar=ORG_ID_ENV,
    help="Organization id sent as ZANALYTICS-ORGID (defaults to ZOHO_ORG_ID)",
)


def _render_api_error(exc: ApiError) -> None:
    console.print(f"[red]Error:[/red] {exc}")
    details = getattr(exc, "details", None)
    if details:
        snippet = details
        if isinstance(details, dict):
            snippet = json.dumps(details, indent=2)
        console.print(str(snippet))


CommandParams = ParamSpec("CommandParams")
CommandReturn = TypeVar("CommandReturn")


def handle_cli_errors(
    func: Callable[CommandParams, CommandReturn],
) -> Callable[CommandParams, CommandReturn]:
    @wraps(func)
    def wrapper(*args: CommandParams.args, **kwargs: CommandParams.kwargs) -> CommandReturn:
        try:
            return func(*args, **kwargs)
        except typer.BadParameter:
            raise
        except typer.Exit:
            raise
        except ApiError as exc:
            _render_api_error(exc)
            raise typer.Exit(1) from None
        except ConfigError as exc:
            console.print(f"[red]Error:[/red] {exc}")
            console.print(
                "Export ZOHO_REFRESH_TOKEN, ZOHO_CLIENT_ID and ZOHO_CLIENT_SECRET before rerunning the command."
            )
            raise typer.Exit(1) from None
        except AuthError as exc:
            console.print(f"[red]Error:[/red] Authentication failed: {exc}")
            console.print(
                "Check that the refresh token is still valid and was issued for this client id."
            )
            raise typer.Exit(1) from None
        except FileAccessError as exc:
            console.print(f"[red]Error:[/red] {exc}")
            raise typer.Exit(1) from None
        except ZAnalyticsError as exc:
            console.print(f"[red]Error:[/red] {exc}")
            raise typer.Exit(1) from None
        except Exception as exc:
            if debug_enabled():
                raise
            console.print(f"[red]Error:[/red] Unexpected failure: {exc}")
            console.print(f"Set {DEBUG_ENV}=1 for a stack trace.")
            raise typer.Exit(1) from exc

    return wrapper


def get_client(ctx: typer.Context) -> AnalyticsClient:
    """Return the client cached on the root context, building it from the environment once."""

    ctx_obj = cast(dict[str, Any], ctx.ensure_object(dict))
    client = ctx_obj.get("client")
    if client is None:
        client = AnalyticsClient.from_env()
        ctx_obj["client"] = client
        ctx.find_root().call_on_close(client.close)
    return cast(AnalyticsClient, client)


def print_json(data: Any) -> None:
    if data is None:
        console.print("[green]Done.[/green]")
        return
    console.print_json(data=data)


def print_named(items: Iterable[Any], name_key: str, id_key: str) -> None:
    rows = list(items or [])
    if not rows:
        console.print("Nothing found.")
        return
    for item in rows:
        if not isinstance(item, dict):
            console.print(str(item))
            continue
        label = item.get(name_key) or "(unnamed)"
        console.print(f"[bold]{label}[/bold] id={item.get(id_key, '?')}")


def _coerce(raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def parse_config_options(values: list[str] | None) -> dict[str, Any]:
    """Turn repeated ``KEY=VALUE`` options into a CONFIG mapping.

    Values are parsed as JSON when possible so ``--config columns='{"Name": "x"}'``
    yields a nested object; anything else is kept as a string.
    """

    config: dict[str, Any] = {}
    for item in values or []:
        key, sep, raw = item.partition("=")
        if not sep or not key.strip():
            raise typer.BadParameter(f"Expected KEY=VALUE, got {item!r}")
        config[key.strip()] = _coerce(raw)
    return config


def parse_json_object(raw: str, *, label: str) -> dict[str, Any]:
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"Invalid JSON for {label}: {exc}") from exc
    if not isinstance(payload, dict):
        raise typer.BadParameter(f"{label} must be a JSON object.")
    return payload


__all__ = [
    "ORG_OPTION",
    "console",
    "get_client",
    "handle_cli_errors",
    "parse_config_options",
    "parse_json_object",
    "print_json",
    "print_named",
]
