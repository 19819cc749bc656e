"""``faultwarden config`` — show the effective reporter configuration.

Settings come from FAULTWARDEN_* environment variables and ``.env``.
Credentials are never printed.
"""

from __future__ import annotations

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from faultwarden.config import load_settings

console = Console()


def config_cmd() -> None:
    """Show the effective reporter configuration."""
    try:
        settings = load_settings()
        configuration = settings.to_configuration()
    except ValidationError as exc:
        console.print(f"[bold red]Invalid configuration:[/bold red] {exc}")
        raise typer.Exit(code=1)

    table = Table(title="Faultwarden configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    table.add_row("console_enabled", str(configuration.console_enabled))
    table.add_row("remote_enabled", str(configuration.remote_enabled))
    table.add_row("remote_endpoint", configuration.remote_endpoint or "[dim]none[/dim]")
    table.add_row("http_method", configuration.http_method)
    table.add_row(
        "credentials",
        f"{settings.remote_username} / ****"
        if configuration.has_credentials
        else "[dim]none[/dim]",
    )
    table.add_row("force_handled", configuration.force_handled.value)
    table.add_row("log_level", settings.log_level)

    console.print(table)

    if configuration.remote_enabled and configuration.remote_endpoint is None:
        console.print(
            "[yellow]Remote delivery is enabled but no endpoint is set; "
            "remote reports will be skipped.[/yellow]"
        )
