"""Lockless structured logging.

Usage:
    from lockless_log import Logger, Severity

    log = Logger("app.log", level=Severity.INFO)
    log.warn("disk almost full", req_id=42)
"""

from __future__ import annotations

from .core import (
    ConfigurationError,
    ExistingStream,
    FilePath,
    LocklessLogDevice,
    Logger,
    LoggerSettings,
    Severity,
    build_logger,
    resolve_settings,
)
from .core.formats import JsonLinesFormatter, LineFormatter, LogfmtFormatter, TextFormatter

__all__ = [
    "ConfigurationError",
    "ExistingStream",
    "FilePath",
    "JsonLinesFormatter",
    "LineFormatter",
    "LocklessLogDevice",
    "LogfmtFormatter",
    "Logger",
    "LoggerSettings",
    "Severity",
    "TextFormatter",
    "build_logger",
    "resolve_settings",
]
