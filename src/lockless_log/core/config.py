"""Logger settings and environment overrides."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .formats import formatter_for
from .logger import Logger
from .models import ConfigurationError, Severity

ENV_LEVEL = "LOCKLESS_LOG_LEVEL"
ENV_FORMAT = "LOCKLESS_LOG_FORMAT"
ENV_PATH = "LOCKLESS_LOG_PATH"


class LoggerSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: Severity = Field(default=Severity.DEBUG, description="Minimum severity written.")
    format: Literal["text", "logfmt", "json"] = Field(
        default="text", description="Line format of written events."
    )
    path: str | None = Field(default=None, description="Log file path; None disables output.")

    @field_validator("level", mode="before")
    @classmethod
    def _parse_level(cls, value: Any) -> Severity:
        return Severity.parse(value)

    @field_validator("format", mode="before")
    @classmethod
    def _normalize_format(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value


def resolve_settings(
    settings: LoggerSettings | None = None,
    env: Mapping[str, str] | None = None,
) -> LoggerSettings:
    """Return settings with optional env overrides applied."""
    if settings is None:
        settings = LoggerSettings()
    if env is None:
        env = os.environ

    overrides: dict[str, str] = {}
    for key, name in (("level", ENV_LEVEL), ("format", ENV_FORMAT), ("path", ENV_PATH)):
        value = env.get(name)
        if value is None or value == "":
            continue
        overrides[key] = value

    if not overrides:
        return settings

    try:
        return LoggerSettings.model_validate({**settings.model_dump(), **overrides})
    except ValidationError as exc:
        names = ", ".join(str(err["loc"][0]) for err in exc.errors())
        raise ConfigurationError(f"Invalid logger settings from environment: {names}") from exc


def build_logger(settings: LoggerSettings | None = None, *, destination: Any = None) -> Logger:
    """Build a Logger from resolved settings; an explicit destination wins over settings.path."""
    cfg = resolve_settings(settings)
    target = destination if destination is not None else cfg.path
    return Logger(target, level=cfg.level, formatter=formatter_for(cfg.format))
