"""Append-only log device without locking or rotation.

The device owns exactly one sink: either a stream handed in by the caller or a
file opened (and created, with a header line) from a path. Writes are not
serialized; callers sharing a device across threads may see interleaved lines.
"""

from __future__ import annotations

import io
import logging
import os
import sys
from datetime import datetime
from typing import IO, Any

from .models import ConfigurationError, Destination, ExistingStream, resolve_destination

logger = logging.getLogger(__name__)

HEADER_TEMPLATE = "# Logfile created on {created} by {progname}\n"
ENCODING = "utf-8"
ENCODING_ERRORS = "backslashreplace"


def program_name() -> str:
    """Name of the running program, as shown in file headers."""
    return os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "python"


class LocklessLogDevice:
    """Unsynchronized, unbuffered writer around a single destination."""

    def __init__(self, destination: Destination | Any) -> None:
        target = resolve_destination(destination)
        self._path: str | None = None
        self._binary = False

        if isinstance(target, ExistingStream):
            self._dev: IO[str] | Any = target.stream
            self._binary = isinstance(target.stream, (io.RawIOBase, io.BufferedIOBase))
        else:
            self._dev = self._open_logfile(target.path)
            self._path = target.path

    @property
    def path(self) -> str | None:
        """Path of the log file, or None for an adopted stream."""
        return self._path

    @property
    def closed(self) -> bool:
        return bool(getattr(self._dev, "closed", False))

    def write(self, message: str) -> None:
        """Write one line; failures are reported on the fallback logger, never raised."""
        try:
            if self._binary:
                self._dev.write(message.encode(ENCODING, ENCODING_ERRORS))
            else:
                self._dev.write(message)
            self._flush()
        except BrokenPipeError as exc:
            logger.warning("log writing failed (broken pipe): %s", exc)
        except OSError as exc:
            logger.warning("log writing failed (I/O error): %s", exc)
        except UnicodeError as exc:
            logger.warning("log writing failed (encoding error): %s", exc)
        except TypeError as exc:
            logger.warning("log writing failed (incompatible stream): %s", exc)
        except ValueError as exc:
            # Raised by io objects on write after close.
            logger.warning("log writing failed (device closed): %s", exc)

    def close(self) -> None:
        """Close the sink. Safe to call more than once."""
        try:
            self._dev.close()
        except (OSError, ValueError) as exc:
            logger.debug("closing log device failed: %s", exc)

    def _flush(self) -> None:
        flush = getattr(self._dev, "flush", None)
        if callable(flush):
            flush()

    def _open_logfile(self, filename: str) -> IO[str]:
        try:
            if os.path.exists(filename):
                return open(filename, "a", buffering=1, encoding=ENCODING, errors=ENCODING_ERRORS)
            return self._create_logfile(filename)
        except OSError as exc:
            raise ConfigurationError(f"Cannot open log file {filename!r}: {exc}") from exc

    def _create_logfile(self, filename: str) -> IO[str]:
        logdev = open(filename, "a", buffering=1, encoding=ENCODING, errors=ENCODING_ERRORS)
        try:
            self._add_log_header(logdev)
        except OSError:
            logdev.close()
            raise
        return logdev

    @staticmethod
    def _add_log_header(file: IO[str]) -> None:
        created = datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S %z")
        file.write(HEADER_TEMPLATE.format(created=created, progname=program_name()))
        file.flush()
