"""CLI settings: flags over environment over config file over defaults."""

import os
from dataclasses import dataclass
from pathlib import Path

import yaml

from skcfctl.api.client import DEFAULT_API_URL
from skcfctl.duration import parse_duration
from skcfctl.errors import SkcfError
from skcfctl.wait.types import DEFAULT_POLL_INTERVAL

DEFAULT_CONFIG_PATH = Path("~/.config/skcfctl/config.yaml")
DEFAULT_WAIT_TIMEOUT = "45m"
OUTPUT_FORMATS = ("text", "json", "yaml")

# Config file keys and the env vars that override them
_ENV_VARS = {
    "project_id": "SKCF_PROJECT_ID",
    "api_url": "SKCF_API_URL",
    "token": "SKCF_TOKEN",
}


@dataclass
class Settings:
    """Resolved settings for one CLI invocation."""

    project_id: str | None = None
    api_url: str = DEFAULT_API_URL
    token: str | None = None
    output_format: str = "text"
    wait_timeout: float | None = float(parse_duration(DEFAULT_WAIT_TIMEOUT))
    poll_interval: float = DEFAULT_POLL_INTERVAL


def config_path(explicit=None):
    """Path of the config file: *explicit*, else $SKCF_CONFIG, else the default."""
    path = explicit or os.environ.get("SKCF_CONFIG") or DEFAULT_CONFIG_PATH
    return Path(path).expanduser()


def load_config_file(path):
    """Load the YAML config file. A missing file yields an empty dict."""
    path = Path(path)
    if not path.exists():
        return {}
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise SkcfError(f"invalid config file {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise SkcfError(f"invalid config file {path}: expected a mapping")
    return data


def _seconds(value, key):
    """Config values for durations may be ``"10m"`` strings or plain numbers."""
    if value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(parse_duration(str(value)))
    except SkcfError as e:
        raise SkcfError(f"config key '{key}': {e}") from e


def resolve_settings(args):
    """Build Settings from parsed CLI args, environment and config file."""
    file_config = load_config_file(config_path(getattr(args, "config", None)))
    settings = Settings()

    for key in ("project_id", "api_url", "token", "output_format"):
        if file_config.get(key):
            setattr(settings, key, file_config[key])
    if "wait_timeout" in file_config:
        settings.wait_timeout = _seconds(file_config["wait_timeout"], "wait_timeout")
    if file_config.get("poll_interval") is not None:
        settings.poll_interval = _seconds(file_config["poll_interval"], "poll_interval")

    for key, var in _ENV_VARS.items():
        if os.environ.get(var):
            setattr(settings, key, os.environ[var])

    for key in ("project_id", "api_url", "output_format", "wait_timeout", "poll_interval"):
        value = getattr(args, key, None)
        if value is not None:
            setattr(settings, key, value)

    if settings.output_format not in OUTPUT_FORMATS:
        raise SkcfError(f"unknown output format '{settings.output_format}' (expected one of {', '.join(OUTPUT_FORMATS)})")
    if settings.poll_interval <= 0:
        raise SkcfError(f"poll interval must be positive, got {settings.poll_interval:g}s")
    if settings.wait_timeout is not None and settings.wait_timeout < 0:
        raise SkcfError(f"wait timeout must not be negative, got {settings.wait_timeout:g}s")
    return settings
