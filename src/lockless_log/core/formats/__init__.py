"""Line formatters.

Each formatter turns one log event into exactly one newline-terminated line.
"""

from __future__ import annotations

from ..models import ConfigurationError
from .base import LineFormatter, describe_error, escape_line_breaks, render_value
from .jsonl import JsonLinesFormatter
from .logfmt import LogfmtFormatter
from .text import TextFormatter

FORMATTERS: dict[str, type[LineFormatter]] = {
    "text": TextFormatter,
    "logfmt": LogfmtFormatter,
    "json": JsonLinesFormatter,
}


def formatter_for(name: str) -> LineFormatter:
    """Return a formatter instance for a format name."""
    try:
        return FORMATTERS[name.strip().lower()]()
    except KeyError as exc:
        allowed = ", ".join(FORMATTERS)
        raise ConfigurationError(f"Unknown log format {name!r}. Allowed: {allowed}") from exc


__all__ = [
    "FORMATTERS",
    "JsonLinesFormatter",
    "LineFormatter",
    "LogfmtFormatter",
    "TextFormatter",
    "describe_error",
    "escape_line_breaks",
    "formatter_for",
    "render_value",
]
