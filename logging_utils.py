"""Tagged console logging for magicscreen.

Every message carries a short component tag (Engine, Clear, Config, UI...)
so interleaved output from the frame loop and the UI stays readable.
"""
from __future__ import annotations

import logging
from typing import Any

_logger = logging.getLogger("magicscreen")
if not _logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s][%(tag)s] %(message)s", "%H:%M:%S"))
    _logger.addHandler(handler)
    _logger.setLevel(logging.INFO)
    _logger.propagate = False


class _TagAdapter(logging.LoggerAdapter):
    def process(self, msg: Any, kwargs: dict[str, Any]):
        kwargs.setdefault("extra", {})["tag"] = kwargs.pop("tag", "Sketch")
        return msg, kwargs


_adapter = _TagAdapter(_logger, {})


def _level_value(level: str | None) -> int:
    value = logging.getLevelName((level or "INFO").upper())
    return value if isinstance(value, int) else logging.INFO


def _format_field(value: Any) -> str:
    if isinstance(value, float):
        return f"{value:.3f}"
    return str(value)


def log_event(level: str, tag: str, message: str, **fields: Any) -> None:
    """Log ``message`` under ``tag``; keyword fields are appended as key=value."""
    if fields:
        message = message + " | " + " ".join(f"{k}={_format_field(v)}" for k, v in fields.items())
    _adapter.log(_level_value(level), message, tag=tag)


def set_log_level(level: str) -> None:
    """Set global log level (DEBUG/INFO/WARNING/ERROR). Unknown names mean INFO."""
    _logger.setLevel(_level_value(level))


def get_log_level() -> str:
    return logging.getLevelName(_logger.level)
