"""Environment-driven settings for the engine's telemetry layer."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX = "LINE_ENGINE_"
_TRUTHY = {"1", "true", "yes", "on"}

DEFAULT_LOGGER_NAME = "line_engine"
DEFAULT_LEVEL = "INFO"
DEFAULT_BUFFER_SIZE = 2048


def _lookup(env: Mapping[str, str], name: str) -> Optional[str]:
    return env.get(f"{ENV_PREFIX}{name}")


def _flag(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = _lookup(env, name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def _int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = _lookup(env, name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from exc


@dataclass(frozen=True, slots=True)
class TelemetrySettings:
    """Resolved logging options.

    Every field maps onto a ``LINE_ENGINE_*`` environment variable so hosts can
    tune verbosity without touching code.
    """

    logger_name: str = DEFAULT_LOGGER_NAME
    level: str = DEFAULT_LEVEL
    log_file: str = ""
    json_format: bool = False
    console: bool = True
    colored: bool = True
    buffered: bool = False
    buffer_size: int = DEFAULT_BUFFER_SIZE

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "TelemetrySettings":
        source = os.environ if env is None else env
        return cls(
            logger_name=_lookup(source, "LOGGER") or DEFAULT_LOGGER_NAME,
            level=(_lookup(source, "LOG_LEVEL") or DEFAULT_LEVEL).upper(),
            log_file=_lookup(source, "LOG_FILE") or "",
            json_format=_flag(source, "LOG_JSON", False),
            console=not _flag(source, "DISABLE_CONSOLE", False),
            colored=not _flag(source, "NO_COLOR", False),
            buffered=_flag(source, "LOG_BUFFERED", False),
            buffer_size=_int(source, "LOG_BUFFER_SIZE", DEFAULT_BUFFER_SIZE),
        )


__all__ = ["ENV_PREFIX", "TelemetrySettings"]
