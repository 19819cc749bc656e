"""``faultwarden send-test`` — push a synthetic fault through the pipeline.

Builds a chained exception, reports it with the effective configuration
(command-line options override the environment) and prints the handled
hint the reporter returned.  Useful for checking that a collector
endpoint is reachable and accepts the payload.
"""

from __future__ import annotations

import typer
from pydantic import ValidationError
from rich.console import Console

from faultwarden.config import load_settings
from faultwarden.core.reporter import FaultReporter
from faultwarden.models.config import HandledHint

console = Console()


def _synthetic_fault(message: str) -> BaseException:
    try:
        try:
            raise ConnectionError("synthetic upstream failure")
        except ConnectionError as exc:
            raise RuntimeError(message) from exc
    except RuntimeError as exc:
        return exc


def send_test_cmd(
    message: str = typer.Option(
        "faultwarden test fault",
        "--message",
        "-m",
        help="Message of the synthetic fault.",
    ),
    endpoint: str = typer.Option(
        None,
        "--endpoint",
        "-e",
        help="Collector URL; enables remote delivery.",
    ),
    method: str = typer.Option(
        None,
        "--method",
        "-X",
        help="HTTP method for remote delivery.",
    ),
    console_output: bool = typer.Option(
        None,
        "--console/--no-console",
        help="Render the fault to stderr.",
    ),
    force_handled: HandledHint = typer.Option(
        None,
        "--force-handled",
        help="Override the handled hint.",
    ),
) -> None:
    """Report a synthetic chained fault and print the handled hint."""
    overrides: dict[str, object] = {}
    if endpoint:
        overrides["remote_enabled"] = True
        overrides["remote_endpoint"] = endpoint
    if method:
        overrides["http_method"] = method
    if console_output is not None:
        overrides["console_enabled"] = console_output
    if force_handled is not None:
        overrides["force_handled"] = force_handled

    try:
        configuration = load_settings().to_configuration(**overrides)
    except ValidationError as exc:
        console.print(f"[bold red]Invalid configuration:[/bold red] {exc}")
        raise typer.Exit(code=1)

    with FaultReporter(configuration) as reporter:
        sinks = ", ".join(s.sink_name for s in reporter.sinks) or "none"
        console.print(f"Reporting synthetic fault to: [cyan]{sinks}[/cyan]")
        hint = reporter.report(
            _synthetic_fault(message), metadata={"synthetic": True}
        )

    console.print(f"Handled hint: [bold]{hint.value}[/bold]")
