"""``faultwarden inspect FILE`` — decode and render a serialized fault record."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from faultwarden.core.codec import decode_record
from faultwarden.errors import RecordDecodeError
from faultwarden.routing.sinks._formatting import render_record

console = Console()


def inspect_cmd(
    path: Path = typer.Argument(
        ...,
        help="File holding a JSON fault record.",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Pretty-print the record as JSON instead of a traceback.",
    ),
) -> None:
    """Decode a serialized fault record and render it."""
    if not path.is_file():
        console.print(f"[bold red]File not found:[/bold red] {path}")
        raise typer.Exit(code=1)

    try:
        record = decode_record(path.read_bytes())
    except RecordDecodeError as exc:
        console.print(f"[bold red]Cannot decode record:[/bold red] {exc}")
        raise typer.Exit(code=1)

    if as_json:
        console.print_json(record.model_dump_json())
        return

    console.print(
        Panel(
            Text(render_record(record).rstrip("\n")),
            title=f"Fault {record.fault_id}",
            subtitle=record.captured_at.isoformat(),
        )
    )
