"""Unit tests for the CLI — Typer command registration and behaviour."""

from __future__ import annotations

import pytest
from typer.testing import CliRunner

from faultwarden.cli.app import app
from faultwarden.core.codec import encode_record
from faultwarden.models.fault import FaultRecord

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    for name in ("CONSOLE_ENABLED", "REMOTE_ENABLED", "REMOTE_ENDPOINT", "FORCE_HANDLED"):
        monkeypatch.delenv(f"FAULTWARDEN_{name}", raising=False)
    monkeypatch.chdir(tmp_path)


class TestCliApp:
    def test_help_lists_commands(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "config" in result.output
        assert "send-test" in result.output
        assert "inspect" in result.output

    def test_no_args_shows_help(self):
        result = runner.invoke(app, [])
        # Typer's no_args_is_help may exit with 0 or 2 depending on version
        assert result.exit_code in (0, 2)
        assert "usage" in result.output.lower()


class TestConfigCommand:
    def test_shows_defaults(self):
        result = runner.invoke(app, ["config"])
        assert result.exit_code == 0
        assert "console_enabled" in result.output
        assert "POST" in result.output

    def test_masks_password(self, monkeypatch):
        monkeypatch.setenv("FAULTWARDEN_REMOTE_USERNAME", "svc")
        monkeypatch.setenv("FAULTWARDEN_REMOTE_PASSWORD", "hunter2")
        result = runner.invoke(app, ["config"])
        assert result.exit_code == 0
        assert "hunter2" not in result.output

    def test_invalid_endpoint_exits_nonzero(self, monkeypatch):
        monkeypatch.setenv("FAULTWARDEN_REMOTE_ENDPOINT", "not-a-url")
        result = runner.invoke(app, ["config"])
        assert result.exit_code == 1


class TestSendTestCommand:
    def test_console_only(self):
        result = runner.invoke(app, ["send-test", "--message", "cli smoke"])
        assert result.exit_code == 0
        assert "Handled hint: unset" in result.output

    def test_force_handled(self):
        result = runner.invoke(
            app, ["send-test", "--no-console", "--force-handled", "handled"]
        )
        assert result.exit_code == 0
        assert "Handled hint: handled" in result.output

    def test_no_sinks(self):
        result = runner.invoke(app, ["send-test", "--no-console"])
        assert result.exit_code == 0
        assert "none" in result.output

    def test_bad_endpoint(self):
        result = runner.invoke(app, ["send-test", "--endpoint", "ftp://x"])
        assert result.exit_code == 1


class TestInspectCommand:
    def test_renders_record(self, tmp_path):
        path = tmp_path / "fault.json"
        path.write_bytes(encode_record(FaultRecord.from_message("stored fault")))

        result = runner.invoke(app, ["inspect", str(path)])

        assert result.exit_code == 0
        assert "stored fault" in result.output

    def test_json_output(self, tmp_path):
        path = tmp_path / "fault.json"
        path.write_bytes(encode_record(FaultRecord.from_message("stored fault")))

        result = runner.invoke(app, ["inspect", "--json", str(path)])

        assert result.exit_code == 0
        assert '"schema_version": 1' in result.output

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["inspect", str(tmp_path / "absent.json")])
        assert result.exit_code == 1

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{}")
        result = runner.invoke(app, ["inspect", str(path)])
        assert result.exit_code == 1
        assert "Cannot decode" in result.output
