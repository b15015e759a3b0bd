"""
Tests for timeutil/timing.py

The process-wide clock is frozen in most tests so that the logged elapsed
time is exact: the unit of work "takes" as long as it advances the clock.
"""

import logging
from datetime import datetime, timezone, timedelta

import pytest

from timeutil.now import advance_now, set_now
from timeutil.timing import elapsed_time, log_elapsed_time, timed


LOGGER_NAME = "timeutil.timing"
START = datetime(2015, 1, 5, tzinfo=timezone.utc)


@pytest.fixture
def timing_records(caplog):
    """Capture INFO records from the timing logger only."""
    caplog.set_level(logging.INFO, logger=LOGGER_NAME)

    def records():
        return [r for r in caplog.records if r.name == LOGGER_NAME]

    return records


def _work_for(milliseconds, result=None):
    """Build a task that 'takes' the given time on the frozen clock."""
    def task():
        advance_now(timedelta(milliseconds=milliseconds))
        return result

    return task


# ============================================================================
# log_elapsed_time()
# ============================================================================

def test_log_elapsed_time_returns_value(timing_records):
    result = log_elapsed_time("compute answer", lambda: 42)

    assert result == 42
    records = timing_records()
    assert len(records) == 1
    message = records[0].getMessage()
    assert message.startswith("compute answer (true) elapsed time(ms): ")
    assert int(message.rsplit(" ", 1)[1]) >= 0
    assert records[0].levelno == logging.INFO


def test_log_elapsed_time_measures_on_shared_clock(timing_records):
    set_now(START)

    result = log_elapsed_time("load rows", _work_for(250, result=[1, 2, 3]))

    assert result == [1, 2, 3]
    assert [r.getMessage() for r in timing_records()] == [
        "load rows (true) elapsed time(ms): 250"
    ]


def test_log_elapsed_time_task_without_value(timing_records):
    calls = []
    set_now(START)

    result = log_elapsed_time("flush", lambda: calls.append("ran"))

    assert result is None
    assert calls == ["ran"]
    assert [r.getMessage() for r in timing_records()] == [
        "flush (true) elapsed time(ms): 0"
    ]


def test_log_elapsed_time_reraises_same_error(timing_records):
    error = RuntimeError("disk full")
    set_now(START)

    def task():
        advance_now(timedelta(milliseconds=40))
        raise error

    try:
        log_elapsed_time("write snapshot", task)
    except RuntimeError as raised:
        assert raised is error
        # Line is already logged by the time the caller sees the error
        assert [r.getMessage() for r in timing_records()] == [
            "write snapshot (false) elapsed time(ms): 40"
        ]
    else:
        pytest.fail("log_elapsed_time swallowed the task's error")


def test_log_elapsed_time_propagates_base_exceptions(timing_records):
    def task():
        raise KeyboardInterrupt

    with pytest.raises(KeyboardInterrupt):
        log_elapsed_time("interrupted", task)

    records = timing_records()
    assert len(records) == 1
    assert "interrupted (false)" in records[0].getMessage()


def test_log_elapsed_time_runs_task_once(timing_records):
    calls = []

    log_elapsed_time("once", lambda: calls.append(1))

    assert calls == [1]


# ============================================================================
# elapsed_time()
# ============================================================================

def test_elapsed_time_context_manager_success(timing_records):
    set_now(START)

    with elapsed_time("rebuild index"):
        advance_now(timedelta(seconds=2))

    assert [r.getMessage() for r in timing_records()] == [
        "rebuild index (true) elapsed time(ms): 2000"
    ]


def test_elapsed_time_context_manager_failure(timing_records):
    set_now(START)

    with pytest.raises(ValueError, match="bad row"):
        with elapsed_time("parse"):
            advance_now(timedelta(milliseconds=5))
            raise ValueError("bad row")

    assert [r.getMessage() for r in timing_records()] == [
        "parse (false) elapsed time(ms): 5"
    ]


# ============================================================================
# timed()
# ============================================================================

def test_timed_decorator_uses_qualname_by_default(timing_records):
    set_now(START)

    @timed()
    def refresh(amount):
        advance_now(timedelta(milliseconds=amount))
        return amount * 2

    assert refresh(15) == 30
    assert refresh.__name__ == "refresh"
    messages = [r.getMessage() for r in timing_records()]
    assert len(messages) == 1
    assert messages[0].endswith("refresh (true) elapsed time(ms): 15")


def test_timed_decorator_with_explicit_tag(timing_records):
    @timed("nightly export")
    def export():
        raise OSError("no space")

    with pytest.raises(OSError):
        export()

    messages = [r.getMessage() for r in timing_records()]
    assert len(messages) == 1
    assert messages[0].startswith("nightly export (false) elapsed time(ms): ")
