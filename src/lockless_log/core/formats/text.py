"""Human-readable text formatter."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from .base import escape_line_breaks, event_message, extra_fields, render_timestamp, render_value


@dataclass(frozen=True, slots=True)
class TextFormatter:
    """Format '[<time>] <LABEL>: <message> key=value ...' lines."""

    def format(
        self,
        label: str,
        timestamp: datetime,
        progname: str | None,
        payload: Mapping[str, Any],
    ) -> str:
        """Render an event as a text line."""
        head = f"[{render_timestamp(timestamp)}] {label}"
        if progname:
            head += f" {progname}"
        parts = [f"{head}: {event_message(payload)}"]
        parts.extend(f"{key}={render_value(value)}" for key, value in extra_fields(payload))
        return escape_line_breaks(" ".join(parts)) + "\n"
