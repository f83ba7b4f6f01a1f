"""Logfmt formatter."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from .base import escape_line_breaks, event_message, extra_fields, render_timestamp, render_value

_NEEDS_QUOTES = (" ", "=", '"', "\t")
_KEY_ESCAPES = str.maketrans({ch: "_" for ch in _NEEDS_QUOTES})


def clean_key(key: str) -> str:
    """Make a key safe for logfmt: no separators, quotes or line breaks."""
    return escape_line_breaks(key).translate(_KEY_ESCAPES) or "_"


def quote_value(value: str) -> str:
    """Quote a logfmt value when it would not survive a plain key=value split."""
    value = escape_line_breaks(value)
    if value and not any(ch in value for ch in _NEEDS_QUOTES):
        return value
    return '"' + value.replace('"', '\\"') + '"'


@dataclass(frozen=True, slots=True)
class LogfmtFormatter:
    """Format logfmt key=value lines."""

    def format(
        self,
        label: str,
        timestamp: datetime,
        progname: str | None,
        payload: Mapping[str, Any],
    ) -> str:
        """Render an event as a logfmt line."""
        fields: list[tuple[str, str]] = [
            ("time", render_timestamp(timestamp)),
            ("level", label.lower()),
        ]
        if progname:
            fields.append(("progname", progname))
        if "err" in payload:
            fields.append(("err", event_message(payload)))
        else:
            fields.append(("msg", event_message(payload)))
        fields.extend((key, render_value(value)) for key, value in extra_fields(payload))

        return " ".join(f"{clean_key(k)}={quote_value(v)}" for k, v in fields) + "\n"
