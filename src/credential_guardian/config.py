from __future__ import annotations

import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from .errors import ConfigError

TOKEN_URL = "https://api.anthropic.com/v1/oauth/token"
DEFAULT_BUFFER_MINUTES = 10
DEFAULT_BUFFER_SECONDS = DEFAULT_BUFFER_MINUTES * 60


@dataclass
class GuardianConfig:
    token_url: str = TOKEN_URL
    buffer_minutes: float = DEFAULT_BUFFER_MINUTES
    # None leaves the transport default in place (no timeout).
    timeout_seconds: float | None = None
    log_level: str = "info"


def _resolve_env(value: Any, env: Mapping[str, str]) -> Any:
    if isinstance(value, str):
        expanded = os.path.expandvars(value)
        if expanded.startswith("${") and expanded.endswith("}"):
            key = expanded[2:-1]
            if key not in env:
                raise ConfigError(f"Environment variable {key} is required but not set")
            return env[key]
        return expanded
    if isinstance(value, list):
        return [_resolve_env(v, env) for v in value]
    if isinstance(value, dict):
        return {k: _resolve_env(v, env) for k, v in value.items()}
    return value


def _as_number(value: Any, field_name: str) -> float:
    if isinstance(value, bool):
        raise ConfigError(f"{field_name} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{field_name} must be a number, got {value!r}") from exc
    if not math.isfinite(number):
        raise ConfigError(f"{field_name} must be finite, got {value!r}")
    return number


def _validate_buffer(value: Any) -> float:
    minutes = _as_number(value, "buffer_minutes")
    if minutes < 0:
        raise ConfigError("buffer_minutes must be 0 or greater")
    return int(minutes) if minutes.is_integer() else minutes


def _validate_timeout(value: Any) -> float | None:
    if value is None:
        return None
    seconds = _as_number(value, "timeout_seconds")
    if seconds <= 0:
        raise ConfigError("timeout_seconds must be greater than 0")
    return seconds


def load_config(path: str | Path, env: Mapping[str, str] | None = None) -> GuardianConfig:
    env = env or os.environ
    raw = yaml.safe_load(Path(path).read_text()) or {}
    if not isinstance(raw, dict):
        raise ConfigError("Config file must contain a mapping")
    resolved = _resolve_env(raw, env)

    oauth_raw = resolved.get("oauth") or {}
    observability_raw = resolved.get("observability") or {}
    if not isinstance(oauth_raw, dict) or not isinstance(observability_raw, dict):
        raise ConfigError("oauth and observability sections must be mappings")

    token_url = str(oauth_raw.get("token_url") or TOKEN_URL)
    if not token_url.startswith(("https://", "http://")):
        raise ConfigError(f"token_url must be an http(s) URL, got {token_url!r}")

    return GuardianConfig(
        token_url=token_url,
        buffer_minutes=_validate_buffer(oauth_raw.get("buffer_minutes", DEFAULT_BUFFER_MINUTES)),
        timeout_seconds=_validate_timeout(oauth_raw.get("timeout_seconds")),
        log_level=str(observability_raw.get("log_level", "info")),
    )
