"""Core logging components: severities, formatters, device, logger."""

from __future__ import annotations

from .config import LoggerSettings, build_logger, resolve_settings
from .device import LocklessLogDevice
from .logger import Logger
from .models import ConfigurationError, Destination, ExistingStream, FilePath, Severity, resolve_destination

__all__ = [
    "ConfigurationError",
    "Destination",
    "ExistingStream",
    "FilePath",
    "LocklessLogDevice",
    "Logger",
    "LoggerSettings",
    "Severity",
    "build_logger",
    "resolve_destination",
    "resolve_settings",
]
