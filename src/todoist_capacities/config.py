"""Configuration for the relay and the webhook registration utility."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, ClassVar, Literal, get_args

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

CAPACITIES_API_URL = "https://api.capacities.io/save-to-daily-note"
DEFAULT_ENV_FILE = ".env.local"

LogLevel = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]
_LOG_LEVELS: frozenset[str] = frozenset(get_args(LogLevel))


def _env_value(environ: Mapping[str, str], name: str) -> str | None:
    """Return a stripped env value, treating empty strings as unset."""
    value = environ.get(name, "").strip()
    return value or None


class RelayConfig(BaseModel):
    """Settings the webhook relay needs at request time."""

    model_config = ConfigDict(frozen=True)

    todoist_client_secret: str | None = None
    capacities_api_token: str | None = None
    capacities_space_id: str | None = None
    capacities_api_url: str = Field(default=CAPACITIES_API_URL)
    timezone: str = Field(default="UTC")
    log_level: LogLevel = Field(default="INFO")

    # field name -> environment variable
    REQUIRED_ENV: ClassVar[dict[str, str]] = {
        "todoist_client_secret": "TODOIST_CLIENT_SECRET",
        "capacities_api_token": "CAPACITIES_API_TOKEN",
        "capacities_space_id": "CAPACITIES_SPACE_ID",
    }

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: Any) -> Any:
        """Accept any casing; unknown names fall back to INFO."""
        if not isinstance(value, str):
            return value
        level = value.strip().upper()
        return level if level in _LOG_LEVELS else "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> RelayConfig:
        """Build a config from the process environment (or *environ*)."""
        if environ is None:
            environ = os.environ
        values: dict[str, str] = {}
        for field_name, env_name in cls.REQUIRED_ENV.items():
            value = _env_value(environ, env_name)
            if value is not None:
                values[field_name] = value
        optional = {
            "capacities_api_url": "CAPACITIES_API_URL",
            "timezone": "RELAY_TIMEZONE",
            "log_level": "LOG_LEVEL",
        }
        for field_name, env_name in optional.items():
            value = _env_value(environ, env_name)
            if value is not None:
                values[field_name] = value
        return cls(**values)

    def missing_settings(self) -> list[str]:
        """Return the environment names of required settings that are unset."""
        return [
            env_name
            for field_name, env_name in self.REQUIRED_ENV.items()
            if not getattr(self, field_name)
        ]

    @property
    def is_complete(self) -> bool:
        return not self.missing_settings()


class RegistrationConfig(BaseModel):
    """Credentials for registering the webhook with Todoist."""

    model_config = ConfigDict(frozen=True)

    todoist_client_id: str | None = None
    todoist_client_secret: str | None = None
    webhook_url: str | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> RegistrationConfig:
        if environ is None:
            environ = os.environ
        return cls(
            todoist_client_id=_env_value(environ, "TODOIST_CLIENT_ID"),
            todoist_client_secret=_env_value(environ, "TODOIST_CLIENT_SECRET"),
            webhook_url=_env_value(environ, "WEBHOOK_URL"),
        )


def load_env_file(path: str | Path = DEFAULT_ENV_FILE) -> bool:
    """Load variables from *path* without overriding the existing environment.

    Returns True when the file existed and defined at least one variable.
    """
    env_path = Path(path)
    if not env_path.is_file():
        return False
    return load_dotenv(env_path, override=False)
