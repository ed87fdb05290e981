"""Decoder configuration — YAML file merged over defaults, then env overrides."""

import copy
import os
from dataclasses import dataclass

import yaml

from horstlog.formatter import OUTPUT_FORMATS

CONFIG_ENV = "HORST_CONFIG"

DEFAULTS = {
    "output": "text",
    "skip_invalid": False,
    "poll_interval": 0.5,
    "log_level": "INFO",
}

_ENV_KEYS = {
    "output": "HORST_OUTPUT",
    "skip_invalid": "HORST_SKIP_INVALID",
    "poll_interval": "HORST_POLL_INTERVAL",
    "log_level": "HORST_LOG_LEVEL",
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


class ConfigError(Exception):
    """Raised when the config file or an override cannot be used."""


def _to_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigError(f"'skip_invalid' must be a boolean, got {value!r}")


@dataclass(frozen=True)
class DecoderConfig:
    output: str = "text"
    skip_invalid: bool = False
    poll_interval: float = 0.5
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, d: dict) -> "DecoderConfig":
        output = d.get("output", DEFAULTS["output"])
        if output not in OUTPUT_FORMATS:
            raise ConfigError(f"'output' must be one of {list(OUTPUT_FORMATS)}, got {output!r}")
        try:
            poll_interval = float(d.get("poll_interval", DEFAULTS["poll_interval"]))
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"'poll_interval' must be a number: {exc}") from exc
        if poll_interval <= 0:
            raise ConfigError("'poll_interval' must be positive")
        return cls(
            output=output,
            skip_invalid=_to_bool(d.get("skip_invalid", DEFAULTS["skip_invalid"])),
            poll_interval=poll_interval,
            log_level=str(d.get("log_level", DEFAULTS["log_level"])).upper(),
        )


def load_yaml(path: str) -> dict:
    """Load a YAML mapping from *path*. A missing file yields an empty dict."""
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        return {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping in {path}, got {type(data).__name__}")
    return data


def load_config(path: str | None = None) -> DecoderConfig:
    """Build a DecoderConfig from defaults, the YAML file, and env vars.

    The file path is *path*, else ``$HORST_CONFIG``; with neither set only
    defaults and env vars apply.
    """
    merged = copy.deepcopy(DEFAULTS)

    path = path or os.environ.get(CONFIG_ENV)
    if path:
        merged.update(load_yaml(path))

    for key, env in _ENV_KEYS.items():
        if env in os.environ:
            merged[key] = os.environ[env]

    return DecoderConfig.from_dict(merged)
