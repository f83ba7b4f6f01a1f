"""Structured logger that writes through a lockless device."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import Any

from .device import LocklessLogDevice
from .formats import LineFormatter, TextFormatter
from .models import ConfigurationError, Severity


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _parse_level(value: Severity | int | str) -> Severity:
    try:
        return Severity.parse(value)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid log level: {value!r}") from exc


class Logger:
    """Severity-filtered logger composed of a formatter and an append device.

    ``destination`` may be None (null sink: every emit is a no-op), a path, or
    an open stream with ``write`` and ``close``.
    """

    def __init__(
        self,
        destination: Any = None,
        *,
        level: Severity | int | str = Severity.DEBUG,
        formatter: LineFormatter | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._level = _parse_level(level)
        self._device = LocklessLogDevice(destination) if destination is not None else None
        self.formatter: LineFormatter = formatter or TextFormatter()
        self._clock = clock or _utcnow

    @property
    def device(self) -> LocklessLogDevice | None:
        return self._device

    @property
    def level(self) -> Severity:
        return self._level

    @level.setter
    def level(self, value: Severity | int | str) -> None:
        self._level = _parse_level(value)

    def is_enabled(self, severity: Severity) -> bool:
        return self._device is not None and severity >= self._level

    def is_trace_enabled(self) -> bool:
        return self._level <= Severity.TRACE

    def emit(
        self,
        severity: Severity | int | str,
        message: Any,
        progname: str | None = None,
        data: Mapping[str, Any] | None = None,
    ) -> bool:
        """Log one event. Always returns True; write failures are not reported here."""
        if self._device is None:
            return True
        severity = Severity.parse(severity)
        if severity < self._level:
            return True

        payload = dict(data or {})
        if isinstance(message, BaseException):
            payload.pop("msg", None)
            payload["err"] = message
        else:
            payload.pop("err", None)
            payload["msg"] = message

        self._device.write(self.formatter.format(severity.label, self._clock(), progname, payload))
        return True

    add = emit

    def trace(self, message: Any, progname: str | None = None, **data: Any) -> bool:
        return self.emit(Severity.TRACE, message, progname, data)

    def debug(self, message: Any, progname: str | None = None, **data: Any) -> bool:
        return self.emit(Severity.DEBUG, message, progname, data)

    def info(self, message: Any, progname: str | None = None, **data: Any) -> bool:
        return self.emit(Severity.INFO, message, progname, data)

    def warn(self, message: Any, progname: str | None = None, **data: Any) -> bool:
        return self.emit(Severity.WARN, message, progname, data)

    warning = warn

    def error(self, message: Any, progname: str | None = None, **data: Any) -> bool:
        return self.emit(Severity.ERROR, message, progname, data)

    def fatal(self, message: Any, progname: str | None = None, **data: Any) -> bool:
        return self.emit(Severity.FATAL, message, progname, data)

    def close(self) -> None:
        """Close the underlying device, if any."""
        if self._device is not None:
            self._device.close()

    def __enter__(self) -> Logger:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
