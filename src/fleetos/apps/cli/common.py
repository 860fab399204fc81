from __future__ import annotations

import json
import os
import traceback
from typing import Any, Awaitable, Iterable, Sequence, TypeVar

import typer

from fleetos.sdk import Fleet
from fleetos.sdk.compat import run_sync
from fleetos.services.api.client import ApiHttpError
from fleetos.services.api.errors import FleetError

T = TypeVar("T")


def get_fleet() -> Fleet:
    return Fleet.from_settings()


def print_error(message: str) -> None:
    typer.secho(message, fg=typer.colors.RED, err=True)


def run(awaitable: Awaitable[T]) -> T:
    """Run one SDK call; domain and HTTP errors end the command with exit code 1."""
    try:
        return run_sync(awaitable)
    except (FleetError, ApiHttpError) as exc:
        if os.getenv("FLEETOS_CLI_DEBUG") == "1":
            traceback.print_exc()
        print_error(str(exc))
        raise typer.Exit(1)


def echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, ensure_ascii=False, indent=2, default=str))


def echo_table(headers: Sequence[str], rows: Iterable[Sequence[Any]]) -> None:
    rows = [[("-" if cell is None else str(cell)) for cell in row] for row in rows]
    if not rows:
        typer.echo("No entries found.")
        return
    widths = [max(len(str(row[i])) for row in [list(headers)] + rows) for i in range(len(headers))]
    typer.echo("  ".join(headers[i].ljust(widths[i]) for i in range(len(headers))))
    typer.echo("  ".join("-" * widths[i] for i in range(len(headers))))
    for row in rows:
        typer.echo("  ".join(row[i].ljust(widths[i]) for i in range(len(headers))))
