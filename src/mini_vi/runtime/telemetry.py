"""Telemetry services built directly on telelog.

The editor draws over the whole terminal, so console output stays off unless
``MINI_VI_LOG_CONSOLE`` asks for it; point ``MINI_VI_LOG_FILE`` at a path to
keep a log of a session.

``configure(...)`` -- adopt settings or an explicit telelog config
``get_logger(name)`` -- fetch (and cache) a configured logger
``record_event(name, ...)`` -- emit a structured ``event::<name>`` line
``span(name, ...)`` -- profile a block, optionally as a tracked component
"""

from __future__ import annotations

from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

from .settings import Settings, load_settings

tl = cast(Any, telelog)

DEFAULT_LOGGER_NAME = "mini_vi"

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list, tuple, set)):
        return repr(value)
    return str(value)


def _build_config(settings: Settings) -> Any:
    config = tl.Config()
    config.with_min_level(settings.log_level)
    config.with_console_output(settings.log_console)
    config.with_colored_output(settings.log_console)
    config.with_json_format(settings.log_json)
    if settings.log_file:
        config.with_file_output(settings.log_file)
        config.with_buffering(True)
    config.with_profiling(True)
    return config


def configure(
    *, config: Optional[Any] = None, settings: Optional[Settings] = None
) -> None:
    """Replace the active telelog configuration and drop cached loggers.

    Pass either a ready ``tl.Config`` or ``Settings`` to build one from;
    with neither, the ``MINI_VI_*`` environment is read.
    """

    global _ACTIVE_CONFIG
    if config is not None and settings is not None:
        raise ValueError("Provide either `config` or `settings`, not both.")
    _ACTIVE_CONFIG = config if config is not None else _build_config(
        settings or load_settings()
    )
    _LOGGER_CACHE.clear()


def get_logger(name: Optional[str] = None) -> Any:
    logger_name = name or DEFAULT_LOGGER_NAME
    logger = _LOGGER_CACHE.get(logger_name)
    if logger is None:
        if _ACTIVE_CONFIG is None:
            configure()
        logger = tl.Logger.with_config(logger_name, _ACTIVE_CONFIG)
        _LOGGER_CACHE[logger_name] = logger
    return logger


def _emit(logger: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    """Log ``message`` with ``payload`` as structured pairs when supported."""

    name = level.lower()
    structured = getattr(logger, f"{name}_with", None)
    if structured is not None:
        structured(message, [(str(key), _text(val)) for key, val in payload.items()])
        return
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    _emit(
        get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})}
    )


@dataclass
class SpanHandle:
    """Yielded by ``span``; metadata added here is logged if the block fails."""

    logger: Any
    name: str
    component: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _text(value)

    def fail(self, reason: str) -> None:
        payload: Dict[str, Any] = {"span": self.name, **self.metadata}
        if self.component:
            payload["component"] = self.component
        payload["reason"] = reason
        _emit(self.logger, "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile the block as ``name``.

    ``component=True`` also tracks it as a component of the same name; a
    string names the component explicitly. ``metadata`` is attached to the
    logger context for the duration of the block. Exceptions are logged and
    re-raised.
    """

    log = get_logger(logger_name)
    component_name = name if component is True else component or None
    handle = SpanHandle(logger=log, name=name, component=component_name)

    with ExitStack() as stack:
        for key, value in (metadata or {}).items():
            handle.add_metadata(key, value)
            log.add_context(key, handle.metadata[key])
            stack.callback(log.remove_context, key)
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise


__all__ = ["SpanHandle", "configure", "get_logger", "record_event", "span"]
