"""Faultwarden CLI — Typer-based command-line interface.

Provides the ``faultwarden`` command with subcommands for showing the
effective configuration, sending a synthetic fault through the reporting
pipeline, and inspecting serialized fault records.

All output uses Rich for formatted terminal display.
"""
