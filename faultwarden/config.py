"""Environment-driven settings.

Centralized config using pydantic-settings.  Reads from a .env file and
FAULTWARDEN_* environment variables, and converts to the immutable
``ReporterConfiguration`` a ``FaultReporter`` consumes.
"""

from __future__ import annotations

from typing import Any

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from faultwarden.models.config import HandledHint, ReporterConfiguration


class ReporterSettings(BaseSettings):
    """Reporter settings with environment variable overrides.

    Examples
    --------
    Override via environment::

        export FAULTWARDEN_REMOTE_ENABLED=true
        export FAULTWARDEN_REMOTE_ENDPOINT=https://errors.example.com/api/faults
        export FAULTWARDEN_FORCE_HANDLED=handled

    Or via .env file::

        FAULTWARDEN_CONSOLE_ENABLED=false
        FAULTWARDEN_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="FAULTWARDEN_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Internal logging
    log_level: str = "WARNING"

    # Sinks
    console_enabled: bool = True
    remote_enabled: bool = False
    remote_endpoint: str | None = None
    http_method: str = "POST"

    # Basic-auth credentials, passed through to the collector
    remote_username: str = ""
    remote_password: SecretStr = SecretStr("")

    # Handled-hint policy
    force_handled: HandledHint = HandledHint.UNSET

    @property
    def credentials(self) -> tuple[str, str] | None:
        if not self.remote_username:
            return None
        return (self.remote_username, self.remote_password.get_secret_value())

    def to_configuration(self, **overrides: Any) -> ReporterConfiguration:
        """Build a ``ReporterConfiguration``; *overrides* win over settings."""
        values: dict[str, Any] = {
            "console_enabled": self.console_enabled,
            "remote_enabled": self.remote_enabled,
            "remote_endpoint": self.remote_endpoint or None,
            "http_method": self.http_method,
            "credentials": self.credentials,
            "force_handled": self.force_handled,
        }
        values.update(overrides)
        return ReporterConfiguration(**values)


def load_settings(**overrides: Any) -> ReporterSettings:
    """Read settings from the environment, with keyword *overrides*."""
    return ReporterSettings(**overrides)
