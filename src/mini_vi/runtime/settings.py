"""Environment-driven settings shared by the runtime and telemetry layers."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

ENV_PREFIX = "MINI_VI_"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True, slots=True)
class Settings:
    """Snapshot of the ``MINI_VI_*`` environment."""

    log_level: str = "INFO"
    log_file: str = ""
    log_console: bool = False
    log_json: bool = False
    strict_bounds: bool = False

    def with_overrides(
        self,
        *,
        log_level: Optional[str] = None,
        log_file: Optional[str] = None,
    ) -> "Settings":
        changes: dict[str, object] = {}
        if log_level:
            changes["log_level"] = log_level.upper()
        if log_file:
            changes["log_file"] = log_file
        return replace(self, **changes) if changes else self


def _flag(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(f"{ENV_PREFIX}{name}")
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Read settings from ``env`` (defaults to ``os.environ``)."""

    source = os.environ if env is None else env
    return Settings(
        log_level=(source.get(f"{ENV_PREFIX}LOG_LEVEL") or "INFO").upper(),
        log_file=source.get(f"{ENV_PREFIX}LOG_FILE", ""),
        log_console=_flag(source, "LOG_CONSOLE", False),
        log_json=_flag(source, "LOG_JSON", False),
        strict_bounds=_flag(source, "STRICT_BOUNDS", False),
    )


__all__ = ["ENV_PREFIX", "Settings", "load_settings"]
