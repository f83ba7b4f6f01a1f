"""Formatter interface and shared rendering helpers."""

from __future__ import annotations

import traceback
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Protocol

RESERVED_KEYS = ("msg", "err")

# Everything str.splitlines() treats as a boundary, plus the escape character itself.
_ESCAPES = str.maketrans(
    {
        "\\": "\\\\",
        "\n": "\\n",
        "\r": "\\r",
        "\v": "\\v",
        "\f": "\\f",
        "\x1c": "\\x1c",
        "\x1d": "\\x1d",
        "\x1e": "\\x1e",
        "\x85": "\\x85",
        "\u2028": "\\u2028",
        "\u2029": "\\u2029",
    }
)


class LineFormatter(Protocol):
    """Formatter interface: turn one event into one newline-terminated line."""

    def format(
        self,
        label: str,
        timestamp: datetime,
        progname: str | None,
        payload: Mapping[str, Any],
    ) -> str:
        """Render an event as a single line of text."""
        ...


def escape_line_breaks(text: str) -> str:
    """Escape line separators so the text stays on one line."""
    return text.translate(_ESCAPES)


def safe_str(value: Any) -> str:
    """str() that never raises."""
    try:
        return str(value)
    except Exception:
        return f"<unprintable {type(value).__name__} object>"


def error_backtrace(exc: BaseException) -> list[str]:
    """Return the formatted traceback frames of an exception, if any."""
    if exc.__traceback__ is None:
        return []
    return [
        line.rstrip("\n")
        for line in traceback.format_list(traceback.extract_tb(exc.__traceback__))
    ]


def describe_error(exc: BaseException) -> str:
    """Render an exception as 'message (ClassName)' plus its traceback."""
    text = f"{safe_str(exc)} ({type(exc).__name__})"
    frames = error_backtrace(exc)
    if frames:
        text += "\n" + "\n".join(frames)
    return text


def render_value(value: Any) -> str:
    """Render a payload value as text (may contain line breaks)."""
    if isinstance(value, BaseException):
        return describe_error(value)
    return safe_str(value)


def render_timestamp(timestamp: datetime) -> str:
    """ISO-8601 timestamp with second precision."""
    return timestamp.isoformat(timespec="seconds")


def event_message(payload: Mapping[str, Any]) -> str:
    """Main message text of a payload: msg, or the rendered err."""
    if "err" in payload:
        return render_value(payload["err"])
    if "msg" in payload:
        return render_value(payload["msg"])
    return ""


def extra_fields(payload: Mapping[str, Any]) -> list[tuple[str, Any]]:
    """Payload items other than msg/err, in insertion order."""
    return [(safe_str(k), v) for k, v in payload.items() if k not in RESERVED_KEYS]
