"""ScriptSync configuration module."""

from __future__ import annotations

from typing import Any

from scriptsync.config.logging import configure_logging
from scriptsync.config.logging import get_logger as _get_logger
from scriptsync.config.settings import (
    ScriptSyncSettings,
    get_settings,
    set_settings,
)
from scriptsync.config.settings import (
    reset_settings as _reset_settings,
)

__all__ = [
    "ScriptSyncSettings",
    "configure_logging",
    "get_logger",
    "get_settings",
    "reset_settings",
    "set_settings",
]

_logger_cache: dict[str, Any] = {}


def get_logger(name: str) -> Any:
    """Get a logger instance.

    Loggers are cached per name so hot paths such as the classifier do not
    go back into structlog on every call. Getting a logger never configures
    logging; that is left to the host application or to
    ``configure_logging``.

    Args:
        name: Logger name (usually __name__).

    Returns:
        structlog logger backed by the stdlib logger of the same name.
    """
    if name not in _logger_cache:
        _logger_cache[name] = _get_logger(name)
    return _logger_cache[name]


def reset_settings() -> None:
    """Reset settings and clear logger cache."""
    _reset_settings()
    _logger_cache.clear()
