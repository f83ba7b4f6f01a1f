"""JSON-lines formatter."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from .base import error_backtrace, render_timestamp, render_value, safe_str

# Payload keys with these names are written as "data.<name>".
EVENT_KEYS = ("time", "level", "progname")


def _error_object(exc: BaseException) -> dict[str, Any]:
    return {
        "class": type(exc).__name__,
        "message": safe_str(exc),
        "backtrace": error_backtrace(exc),
    }


def _default(value: Any) -> Any:
    if isinstance(value, BaseException):
        return _error_object(value)
    if isinstance(value, datetime):
        return render_timestamp(value)
    return render_value(value)


@dataclass(frozen=True, slots=True)
class JsonLinesFormatter:
    """Format one JSON object per line."""

    def format(
        self,
        label: str,
        timestamp: datetime,
        progname: str | None,
        payload: Mapping[str, Any],
    ) -> str:
        """Render an event as a JSON line."""
        record: dict[str, Any] = {"time": render_timestamp(timestamp), "level": label}
        if progname:
            record["progname"] = progname
        for key, value in payload.items():
            name = safe_str(key)
            if name in EVENT_KEYS:
                name = f"data.{name}"
            record[name] = _error_object(value) if isinstance(value, BaseException) else value

        try:
            line = json.dumps(record, default=_default, ensure_ascii=True)
        except (TypeError, ValueError):
            # Circular references or non-string keys nested in values.
            line = json.dumps(
                {k: render_value(v) for k, v in record.items()},
                ensure_ascii=True,
            )
        return line + "\n"
