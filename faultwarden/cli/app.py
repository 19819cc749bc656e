"""Main Typer application — imports and registers all CLI commands.

Entry point: ``faultwarden`` (configured via pyproject.toml scripts).
"""

from __future__ import annotations

import logging

import typer

from faultwarden.cli.commands.config_cmd import config_cmd
from faultwarden.cli.commands.inspect_cmd import inspect_cmd
from faultwarden.cli.commands.send_test import send_test_cmd

app = typer.Typer(
    name="faultwarden",
    help="Faultwarden: unhandled-exception interception and reporting.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

# Register subcommands
app.command(name="config", help="Show the effective reporter configuration.")(config_cmd)
app.command(name="send-test", help="Report a synthetic fault through the pipeline.")(send_test_cmd)
app.command(name="inspect", help="Decode and render a serialized fault record.")(inspect_cmd)


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        None,
        "--log-level",
        help="Internal log level (defaults to FAULTWARDEN_LOG_LEVEL).",
    ),
) -> None:
    """Configure internal logging before any command runs."""
    if log_level is None:
        from pydantic import ValidationError

        from faultwarden.config import load_settings

        try:
            log_level = load_settings().log_level
        except ValidationError:
            log_level = "WARNING"
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
