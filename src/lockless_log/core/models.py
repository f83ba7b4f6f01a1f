"""Core data models for lockless logging."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, TypeAlias

_SEVERITY_ALIASES = {
    "WARNING": "WARN",
    "ERR": "ERROR",
    "CRITICAL": "FATAL",
    "CRIT": "FATAL",
}


class ConfigurationError(ValueError):
    """Raised when a logger or device is constructed with unusable settings."""


class Severity(IntEnum):
    """Ordered severity levels; an event is emitted when severity >= threshold."""

    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4
    FATAL = 5

    @property
    def label(self) -> str:
        """Short label used in formatted output."""
        return self.name

    @classmethod
    def parse(cls, value: Severity | int | str) -> Severity:
        """Parse a severity from an enum member, an int or a name."""
        if isinstance(value, cls):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError as exc:
                raise ValueError(f"Unknown severity: {value!r}") from exc
        if isinstance(value, str):
            name = value.strip().upper()
            name = _SEVERITY_ALIASES.get(name, name)
            try:
                return cls[name]
            except KeyError as exc:
                raise ValueError(f"Unknown severity: {value!r}") from exc
        raise ValueError(f"Unknown severity: {value!r}")


@dataclass(frozen=True, slots=True)
class ExistingStream:
    """An already-open writable stream supplied by the caller."""

    stream: Any


@dataclass(frozen=True, slots=True)
class FilePath:
    """A filesystem path to append to (created on first use)."""

    path: str


Destination: TypeAlias = ExistingStream | FilePath


def _is_stream(obj: Any) -> bool:
    return callable(getattr(obj, "write", None)) and callable(getattr(obj, "close", None))


def resolve_destination(obj: Any) -> Destination:
    """Resolve a loose destination argument into a Destination variant."""
    if isinstance(obj, (ExistingStream, FilePath)):
        return obj
    if _is_stream(obj):
        return ExistingStream(obj)
    if isinstance(obj, (str, os.PathLike)):
        path = os.fspath(obj)
        if isinstance(path, bytes):
            path = os.fsdecode(path)
        if not path:
            raise ConfigurationError("Log destination path must not be empty")
        return FilePath(path)
    raise ConfigurationError(
        f"Log destination must be a path or a stream with write() and close(), got {type(obj).__name__}"
    )
