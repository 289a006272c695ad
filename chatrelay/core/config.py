from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_PORT = 8080
DEFAULT_MODEL_TIMEOUT_SECONDS = 45.0
API_KEY_ENV_NAMES = ("AI_KEY", "GEMINI_API_KEY", "GOOGLE_API_KEY")


class StartupError(Exception):
    pass


@dataclass(frozen=True)
class RelayConfig:
    api_key: str | None
    model: str
    host: str
    port: int
    model_timeout_seconds: float
    log_level: str
    env_file: str


def _read_optional_env(name: str) -> str | None:
    value = os.getenv(name)
    if not value:
        return None
    stripped = value.strip()
    return stripped if stripped else None


def _read_int_env(name: str, default: int) -> int:
    value = _read_optional_env(name)
    if value is None:
        return default
    try:
        parsed = int(value)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_float_env(name: str, default: float) -> float:
    value = _read_optional_env(name)
    if value is None:
        return default
    try:
        parsed = float(value)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_api_key() -> str | None:
    for name in API_KEY_ENV_NAMES:
        value = _read_optional_env(name)
        if value is not None:
            return value
    return None


def load_config() -> RelayConfig:
    return RelayConfig(
        api_key=_read_api_key(),
        model=_read_optional_env("RELAY_MODEL") or DEFAULT_MODEL,
        host=_read_optional_env("RELAY_HOST") or "0.0.0.0",
        port=_read_int_env("RELAY_PORT", default=DEFAULT_PORT),
        model_timeout_seconds=_read_float_env(
            "RELAY_MODEL_TIMEOUT_SECONDS", default=DEFAULT_MODEL_TIMEOUT_SECONDS
        ),
        log_level=(_read_optional_env("RELAY_LOG_LEVEL") or "INFO").upper(),
        env_file=_read_optional_env("RELAY_ENV_FILE") or ".env",
    )


def require_api_key(config: RelayConfig) -> str:
    if not config.api_key:
        names = ", ".join(API_KEY_ENV_NAMES)
        raise StartupError(
            f"Model provider API key is not set. Set one of: {names}."
        )
    return config.api_key
