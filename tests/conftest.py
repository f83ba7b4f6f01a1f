from __future__ import annotations

import io
from collections.abc import Callable
from datetime import UTC, datetime

import pytest

FIXED_TIME = datetime(2025, 12, 30, 8, 12, 4, tzinfo=UTC)


class RecordingStream(io.StringIO):
    """In-memory stream that counts write calls."""

    def __init__(self) -> None:
        super().__init__()
        self.writes = 0

    def write(self, s: str) -> int:
        self.writes += 1
        return super().write(s)


class BrokenStream:
    """Stream whose writes fail like a closed pipe."""

    def __init__(self, exc: Exception | None = None) -> None:
        self.exc = exc or BrokenPipeError(32, "Broken pipe")
        self.close_calls = 0

    def write(self, s: str) -> int:
        raise self.exc

    def close(self) -> None:
        self.close_calls += 1
        raise OSError("already closed")


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    return lambda: FIXED_TIME


@pytest.fixture
def stream() -> RecordingStream:
    return RecordingStream()


@pytest.fixture
def broken_stream() -> BrokenStream:
    return BrokenStream()
