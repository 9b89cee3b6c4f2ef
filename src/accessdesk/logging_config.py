"""Logging configuration.

``log_format=json`` emits one JSON object per line through
``python-json-logger``; ``text`` (default) is human-readable.
"""

import logging

from pythonjsonlogger.json import JsonFormatter

from accessdesk.config import Settings

TEXT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _resolve_level(name: str) -> int:
    """Numeric level for *name*; unknown names fall back to INFO."""
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def build_formatter(log_format: str) -> logging.Formatter:
    if log_format == "json":
        return JsonFormatter(fmt=JSON_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S")
    return logging.Formatter(TEXT_FORMAT)


def setup_logging(settings: Settings) -> None:
    """Configure the root logger from settings."""
    level = _resolve_level(settings.log_level)
    root = logging.getLogger()
    root.setLevel(level)

    # Replace handlers so repeated setup does not double-log.
    root.handlers.clear()

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(build_formatter(settings.log_format))
    root.addHandler(handler)
