"""Configuration management for the gcloud MCP server."""

from __future__ import annotations

import logging
import os
import re
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError

_config_logger = logging.getLogger(__name__)

DEFAULT_GCLOUD_PATH = "gcloud"
DEFAULT_COMMAND_TIMEOUT_SECONDS = 5 * 60.0

_DEFAULT_INSTRUCTIONS = (
    "GCloud MCP Server provides tools for managing Google Cloud Platform resources.\n\n"
    "Before using tools, ensure:\n"
    "1. gcloud CLI is installed and configured\n"
    "2. You are authenticated (gcloud auth login)\n"
    "3. A default project is set, or specify project in each tool call\n\n"
    "Tools follow the pattern: gcp_{service}_{resource}_{action}"
)


class GCloudSettings(BaseModel):
    """Process-wide defaults applied to every gcloud invocation.

    Empty ``project``/``region``/``zone`` mean "unset": gcloud falls back to
    its own ambient configuration.
    """

    model_config = ConfigDict(frozen=True)

    project: str = Field(default="", description="Default GCP project ID")
    region: str = Field(default="", description="Default region for regional resources")
    zone: str = Field(default="", description="Default zone for zonal resources")
    gcloud_path: str = Field(default=DEFAULT_GCLOUD_PATH, description="Path to the gcloud binary")
    command_timeout_seconds: float = Field(default=DEFAULT_COMMAND_TIMEOUT_SECONDS)


class LoggingSettings(BaseModel):
    level: str = Field(default="INFO", description="Python logging level name")
    file: str | None = Field(default=None, description="Optional log file path")
    execution_level: str | None = Field(
        default=None,
        description="Level for gcloud_mcp.execution, which logs every command line at DEBUG",
    )


class ServerSettings(BaseModel):
    instructions: str = Field(default=_DEFAULT_INSTRUCTIONS)


class Settings(BaseModel):
    gcloud: GCloudSettings = Field(default_factory=GCloudSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)


ENV_KEYS = {
    "project": "GCLOUD_PROJECT",
    "region": "GCLOUD_REGION",
    "zone": "GCLOUD_ZONE",
    "gcloud_path": "GCLOUD_PATH",
    "timeout": "GCLOUD_TIMEOUT",
    "log_level": "LOG_LEVEL",
    "log_file": "LOG_FILE",
    "execution_log_level": "GCLOUD_LOG_LEVEL",
    "instructions": "MCP_INSTRUCTIONS",
}

_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_DURATION_PART = r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)"
_DURATION_RE = re.compile(rf"([-+]?)((?:{_DURATION_PART})+)")
_DURATION_PART_RE = re.compile(_DURATION_PART)


def parse_duration(value: str) -> float | None:
    """Parse a duration such as ``30s``, ``10m`` or ``1h30m`` into seconds.

    Returns ``None`` when the value does not follow the grammar.
    """
    text = value.strip()
    if text in {"0", "+0", "-0"}:
        return 0.0
    match = _DURATION_RE.fullmatch(text)
    if match is None:
        return None
    total = sum(
        float(number) * _DURATION_UNITS[unit]
        for number, unit in _DURATION_PART_RE.findall(match.group(2))
    )
    return -total if match.group(1) == "-" else total


def _project_root() -> Path:
    return Path(__file__).resolve().parents[2]


def _env_str(key: str, default: str) -> str:
    value = os.getenv(key)
    if not value:
        return default
    return value


def _env_duration(key: str, default: float) -> float:
    value = os.getenv(key)
    if value is None or value.strip() == "":
        return default
    seconds = parse_duration(value)
    if seconds is None or seconds <= 0:
        _config_logger.warning(
            "Invalid duration value for %s: %r, using default %ss", key, value, default
        )
        return default
    return seconds


def load_gcloud_settings() -> GCloudSettings:
    """Read the gcloud defaults from the environment. Never fails."""
    return GCloudSettings(
        project=_env_str(ENV_KEYS["project"], ""),
        region=_env_str(ENV_KEYS["region"], ""),
        zone=_env_str(ENV_KEYS["zone"], ""),
        gcloud_path=_env_str(ENV_KEYS["gcloud_path"], DEFAULT_GCLOUD_PATH),
        command_timeout_seconds=_env_duration(
            ENV_KEYS["timeout"], DEFAULT_COMMAND_TIMEOUT_SECONDS
        ),
    )


def load_settings() -> Settings:
    """Load configuration and cache the result."""

    return _load_settings_cached()


@lru_cache(maxsize=1)
def _load_settings_cached() -> Settings:
    load_dotenv(dotenv_path=_project_root() / ".env")

    settings_data: dict[str, object] = {
        "gcloud": load_gcloud_settings(),
        "logging": {
            "level": _env_str(ENV_KEYS["log_level"], LoggingSettings().level),
            "file": os.getenv(ENV_KEYS["log_file"]) or None,
            "execution_level": os.getenv(ENV_KEYS["execution_log_level"]) or None,
        },
        "server": {
            "instructions": _env_str(ENV_KEYS["instructions"], ServerSettings().instructions),
        },
    }

    try:
        return Settings.model_validate(settings_data)
    except ValidationError as exc:
        raise RuntimeError(f"Invalid configuration: {exc}") from exc
