from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime
from pathlib import Path
from typing import Any

import pytest

from lockless_log.core.logger import Logger
from lockless_log.core.models import ConfigurationError, Severity


class CapturingFormatter:
    """Formatter that records payloads so tests can inspect them."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, datetime, str | None, dict[str, Any]]] = []

    def format(self, label: str, timestamp: datetime, progname: str | None, payload: Mapping[str, Any]) -> str:
        self.calls.append((label, timestamp, progname, dict(payload)))
        return f"{label}\n"


class SomeError(Exception):
    pass


@pytest.fixture
def formatter() -> CapturingFormatter:
    return CapturingFormatter()


def test_null_logger_is_a_successful_noop() -> None:
    log = Logger(None)
    assert log.device is None
    assert log.emit(Severity.FATAL, "nothing") is True
    assert log.is_enabled(Severity.FATAL) is False
    log.close()


@pytest.mark.parametrize("threshold", list(Severity))
def test_writes_only_at_or_above_threshold(threshold: Severity, stream, formatter) -> None:
    log = Logger(stream, level=threshold, formatter=formatter)
    for severity in Severity:
        assert log.emit(severity, "m") is True

    expected = [s.label for s in Severity if s >= threshold]
    assert stream.writes == len(expected)
    assert [c[0] for c in formatter.calls] == expected


def test_filtered_event_skips_formatting(stream, formatter) -> None:
    log = Logger(stream, level=Severity.INFO, formatter=formatter)
    assert log.emit(Severity.DEBUG, "x") is True
    assert formatter.calls == []
    assert stream.getvalue() == ""


def test_warn_with_extra_data(stream, formatter, fixed_clock) -> None:
    log = Logger(stream, level=Severity.INFO, formatter=formatter, clock=fixed_clock)
    assert log.emit(Severity.WARN, "y", data={"req_id": 42}) is True

    assert formatter.calls == [("WARN", fixed_clock(), None, {"req_id": 42, "msg": "y"})]
    assert stream.getvalue() == "WARN\n"


def test_exception_goes_to_err(stream, formatter) -> None:
    exc = SomeError("boom")
    Logger(stream, formatter=formatter).emit(Severity.ERROR, exc)

    payload = formatter.calls[0][3]
    assert payload == {"err": exc}
    assert "msg" not in payload


@pytest.mark.parametrize("message", ["text", 42, None, {"nested": True}, ["a"]])
def test_plain_values_go_to_msg(message: object, stream, formatter) -> None:
    Logger(stream, formatter=formatter).emit(Severity.INFO, message)
    payload = formatter.calls[0][3]
    assert payload == {"msg": message}


def test_reserved_keys_in_extra_data_are_superseded(stream, formatter) -> None:
    log = Logger(stream, formatter=formatter)
    log.emit(Severity.INFO, "real", data={"msg": "fake", "err": "fake", "k": 1})
    exc = SomeError("boom")
    log.emit(Severity.ERROR, exc, data={"msg": "fake", "k": 2})

    assert formatter.calls[0][3] == {"k": 1, "msg": "real"}
    assert formatter.calls[1][3] == {"k": 2, "err": exc}


def test_caller_data_is_not_mutated(stream, formatter) -> None:
    data = {"k": 1}
    Logger(stream, formatter=formatter).emit(Severity.INFO, "m", data=data)
    assert data == {"k": 1}


def test_progname_is_forwarded(stream, formatter) -> None:
    Logger(stream, formatter=formatter).emit(Severity.INFO, "m", "worker")
    assert formatter.calls[0][2] == "worker"


def test_default_text_output(stream, fixed_clock) -> None:
    log = Logger(stream, level="info", clock=fixed_clock)
    log.warn("y", req_id=42)
    assert stream.getvalue() == "[2025-12-30T08:12:04+00:00] WARN: y req_id=42\n"


def test_level_helpers(stream, formatter) -> None:
    log = Logger(stream, level=Severity.TRACE, formatter=formatter)
    log.trace("t")
    log.debug("d")
    log.info("i", "prog", a=1)
    log.warning("w")
    log.error("e")
    log.fatal("f")

    assert [c[0] for c in formatter.calls] == ["TRACE", "DEBUG", "INFO", "WARN", "ERROR", "FATAL"]
    assert formatter.calls[2][2:] == ("prog", {"a": 1, "msg": "i"})


def test_add_is_emit(stream, formatter) -> None:
    Logger(stream, formatter=formatter).add(Severity.INFO, "m")
    assert len(formatter.calls) == 1


def test_level_is_mutable(stream, formatter) -> None:
    log = Logger(stream, level=Severity.ERROR, formatter=formatter)
    log.info("dropped")
    log.level = "debug"
    log.info("kept")

    assert log.level is Severity.DEBUG
    assert [c[3]["msg"] for c in formatter.calls] == ["kept"]


def test_is_trace_enabled(stream) -> None:
    log = Logger(stream, level=Severity.DEBUG)
    assert log.is_trace_enabled() is False
    log.level = Severity.TRACE
    assert log.is_trace_enabled() is True


def test_string_severity_is_accepted(stream, formatter) -> None:
    Logger(stream, level=Severity.INFO, formatter=formatter).emit("warning", "m")
    assert formatter.calls[0][0] == "WARN"


def test_write_failure_does_not_raise(broken_stream, caplog: pytest.LogCaptureFixture) -> None:
    log = Logger(broken_stream)
    with caplog.at_level(logging.WARNING, logger="lockless_log.core.device"):
        assert log.error("sink gone") is True

    assert len(caplog.records) == 1
    assert caplog.records[0].levelno == logging.WARNING


def test_emit_after_close_does_not_raise(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    log = Logger(tmp_path / "app.log")
    log.close()
    with caplog.at_level(logging.WARNING, logger="lockless_log.core.device"):
        assert log.info("late") is True
    assert "device closed" in caplog.text


def test_file_destination_round_trip(tmp_path: Path, fixed_clock) -> None:
    path = tmp_path / "app.log"
    with Logger(str(path), level=Severity.INFO, clock=fixed_clock) as log:
        log.debug("hidden")
        log.warn("multi\nline", req_id=42)
        log.error(SomeError("boom"))

    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 3
    assert lines[0].startswith("# Logfile created on")
    assert lines[1] == "[2025-12-30T08:12:04+00:00] WARN: multi\\nline req_id=42"
    assert lines[2] == "[2025-12-30T08:12:04+00:00] ERROR: boom (SomeError)"


def test_malformed_destination_fails_fast() -> None:
    with pytest.raises(ConfigurationError):
        Logger(3.14)


def test_invalid_level_fails_fast(tmp_path: Path) -> None:
    path = tmp_path / "app.log"
    with pytest.raises(ConfigurationError, match="loud"):
        Logger(str(path), level="loud")
    assert not path.exists()


def test_invalid_level_assignment_is_rejected(stream) -> None:
    log = Logger(stream, level=Severity.INFO)
    with pytest.raises(ConfigurationError):
        log.level = "loud"
    assert log.level is Severity.INFO
