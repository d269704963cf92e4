"""Tests for linelog.manager -- Logger configuration, gating and dispatch."""

import io
import sys
import threading

import pytest

import linelog
from linelog import manager as _manager_mod
from linelog.clock import fixed_clock
from linelog.decor import DEFAULT_DECOR, Decoration as D
from linelog.errors import ClockUnavailable
from linelog.levels import DEBUG, ERROR, FATAL, INFO, MAX_LEVEL, VERBOSE, WARNING
from linelog.manager import Logger, get_logger, init_logger
from linelog.sinks import CollectingSink, stdout_sink

REF_DECOR = D.TIME | D.LEVEL_TEXT | D.SENDER | D.NEWLINE


@pytest.fixture
def logger(sink, clock, pid, tid):
    """A Logger at max level 5 with the reference decorations."""
    return Logger(level=5, decor=REF_DECOR, sink=sink, clock=clock,
                  pid_func=pid, tid_func=tid)


# =============================================================================
# Defaults and configuration
# =============================================================================

class TestConfiguration:
    """Setters and getters on the Logger."""

    def test_defaults(self):
        log = Logger()
        assert log.get_level() == MAX_LEVEL
        assert log.get_decor() == DEFAULT_DECOR
        assert log.get_log_func() is stdout_sink
        assert log.get_buffer_size() == 1024

    def test_set_level_unvalidated(self, logger):
        logger.set_level(99)
        assert logger.get_level() == 99
        logger.set_level(-7)
        assert logger.get_level() == -7

    def test_set_decor_forms(self, logger):
        logger.set_decor(D.SENDER)
        assert logger.get_decor() == D.SENDER
        logger.set_decor(4)
        assert logger.get_decor() == D.TIME
        logger.set_decor("sender,newline")
        assert logger.get_decor() == D.SENDER | D.NEWLINE

    def test_set_decor_bad_spec(self, logger):
        with pytest.raises(ValueError):
            logger.set_decor("glitter")
        assert logger.get_decor() == REF_DECOR

    def test_set_log_func(self, logger):
        other = CollectingSink()
        logger.set_log_func(other)
        assert logger.get_log_func() is other

    def test_set_log_func_not_callable(self, logger):
        with pytest.raises(TypeError):
            logger.set_log_func("stdout")

    def test_buffer_size(self, logger):
        logger.set_buffer_size(128)
        assert logger.get_buffer_size() == 128
        with pytest.raises(ValueError):
            logger.set_buffer_size(8)

    def test_is_enabled(self, logger):
        logger.set_level(WARNING)
        assert logger.is_enabled(ERROR)
        assert logger.is_enabled(WARNING)
        assert not logger.is_enabled(INFO)


# =============================================================================
# Level gating
# =============================================================================

class TestLevelGate:
    """Messages above the max level cost nothing."""

    @pytest.mark.parametrize("level", [3, 4, 5, 9])
    def test_above_max_does_no_work(self, logger, sink, clock, pid, tid,
                                     level):
        logger.set_level(2)
        logger.set_decor(DEFAULT_DECOR)
        logger.log("NET", level, "x %s", ("y",))
        logger.print("NET", level, "x %s", "y")
        assert len(sink) == 0
        assert clock.calls == 0
        assert pid.calls == 0
        assert tid.calls == 0

    def test_above_max_skips_bad_format(self, logger, sink):
        """A broken format at a disabled level is never expanded."""
        logger.set_level(WARNING)
        logger.debug("NET", "%d", "not a number")
        assert len(sink) == 0

    def test_at_max_is_dispatched(self, logger, sink):
        logger.set_level(INFO)
        logger.info("NET", "at max")
        assert len(sink) == 1

    def test_negative_max_blocks_fatal(self, logger, sink):
        logger.set_level(-1)
        logger.fatal("NET", "nope")
        assert len(sink) == 0


# =============================================================================
# End-to-end scenarios
# =============================================================================

class TestEndToEnd:
    """Full pipeline through a collecting sink."""

    def test_reference_scenario(self, logger, sink):
        logger.log("NET", INFO, "conn %d ok", (7,))
        assert sink.records == [(INFO, b"07:05:09.123 I NET:conn 7 ok\n", 29)]

    def test_reference_scenario_blocked(self, logger, sink):
        logger.set_level(2)
        logger.log("NET", INFO, "conn %d ok", (7,))
        assert sink.records == []

    def test_print_matches_log(self, logger, sink):
        logger.print("NET", INFO, "conn %d ok", 7)
        assert sink.lines == [b"07:05:09.123 I NET:conn 7 ok\n"]

    def test_long_sender(self, logger, sink):
        logger.info("x" * 30, "m")
        assert sink.lines == [b"07:05:09.123 I " + b"x" * 25 + b":m\n"]

    def test_format_failure_escalates_to_error(self, logger, sink):
        logger.verbose("NET", "%d", "abc")
        level, data, length = sink.records[0]
        assert level == ERROR
        assert data == b"07:05:09.123 V NET:<logging error: msg too long>\n"
        assert length == len(data)

    def test_per_level_helpers(self, logger, sink):
        logger.fatal("T", "a")
        logger.error("T", "b")
        logger.warn("T", "c")
        logger.info("T", "d")
        logger.debug("T", "e")
        logger.verbose("T", "f")
        assert sink.levels == [FATAL, ERROR, WARNING, INFO, DEBUG, VERBOSE]
        letters = [line.split(b" ")[1] for line in sink.lines]
        assert letters == [b"F", b"E", b"W", b"I", b"D", b"V"]

    def test_out_of_range_level_text(self, logger, sink):
        logger.set_level(10)
        logger.print("NET", 8, "deep")
        assert sink.records == [(8, b"07:05:09.123 ? NET:deep\n", 24)]

    def test_thread_ids(self, logger, sink, pid, tid):
        logger.set_decor(D.THREAD_ID | D.SENDER | D.NEWLINE)
        logger.info("NET", "ids")
        assert sink.lines == [b"    42  123456 NET:ids\n"]
        assert pid.calls == 1 and tid.calls == 1

    def test_real_ids(self, sink, clock):
        logger = Logger(decor=D.THREAD_ID, sink=sink, clock=clock)
        logger.info("NET", "")
        assert len(sink.lines[0]) == 14

    def test_clock_failure_degrades(self, sink):
        def broken():
            raise ClockUnavailable("no clock")
        logger = Logger(decor=D.YEAR | D.DAY | D.TIME | D.SENDER | D.NEWLINE,
                        sink=sink, clock=broken)
        logger.info("NET", "still here")
        assert sink.lines == [b"NET:still here\n"]

    def test_no_sink_is_noop(self, logger):
        logger.set_log_func(None)
        logger.info("NET", "dropped")

    def test_sink_error_is_reported_not_raised(self, logger, capsys):
        def bad_sink(level, data, length):
            raise RuntimeError("device gone")
        logger.set_log_func(bad_sink)
        logger.info("NET", "x")
        err = capsys.readouterr().err
        assert "sink" in err
        assert "RuntimeError: device gone" in err

    def test_logging_continues_after_sink_error(self, logger, sink, capsys):
        calls = []

        def flaky(level, data, length):
            calls.append(data)
            if len(calls) == 1:
                raise OSError("busy")
            sink(level, data, length)
        logger.set_log_func(flaky)
        logger.info("NET", "first")
        logger.info("NET", "second")
        assert sink.lines == [b"07:05:09.123 I NET:second\n"]

    def test_closed_stdout_does_not_raise(self, monkeypatch, clock, capsys):
        closed = io.TextIOWrapper(io.BytesIO(), encoding="utf-8")
        closed.close()
        logger = Logger(level=5, decor=D.SENDER | D.NEWLINE, clock=clock)
        with monkeypatch.context() as m:
            m.setattr(sys, "stdout", closed)
            logger.info("NET", "up")
        assert "I/O operation on closed file" in capsys.readouterr().err

    def test_foreign_clock_error_degrades(self, sink):
        def no_rtc():
            raise OSError("no rtc")
        logger = Logger(decor=D.TIME | D.SENDER, sink=sink, clock=no_rtc)
        logger.info("NET", "up")
        assert sink.lines == [b"NET:up"]

    def test_failing_id_source_renders_zero(self, sink, clock):
        def no_tid():
            raise RuntimeError("no tid")
        logger = Logger(decor=D.THREAD_ID, sink=sink, clock=clock,
                        pid_func=lambda: 42, tid_func=no_tid)
        logger.info("NET", "")
        assert sink.lines == [b"     0       0"]

    def test_small_buffer(self, logger, sink):
        logger.set_buffer_size(64)
        logger.info("NET", "q" * 200)
        level, data, length = sink.records[0]
        assert length == 63
        assert data.endswith(b"q\n")

    def test_default_sink_writes_stdout(self, capsys, clock):
        logger = Logger(decor=D.SENDER | D.NEWLINE, clock=clock)
        logger.info("NET", "to stdout %d", 1)
        assert capsys.readouterr().out == "NET:to stdout 1\n"

    def test_real_clock(self, sink):
        logger = Logger(decor=D.YEAR | D.DAY | D.TIME, sink=sink)
        logger.info("NET", "")
        line = sink.lines[0].decode()
        assert len(line) == len("2024-03-01 07:05:09.123")
        assert line[4] == "-" and line[10] == " "


# =============================================================================
# Module-level singleton
# =============================================================================

@pytest.mark.usefixtures("reset_logger")
class TestSingleton:
    """init_logger/get_logger and the module-level helpers."""

    def test_get_logger_creates_default(self):
        log = get_logger()
        assert isinstance(log, Logger)
        assert get_logger() is log

    def test_init_logger_replaces(self):
        first = get_logger()
        second = init_logger(level=INFO)
        assert second is not first
        assert get_logger() is second
        assert linelog.get_level() == INFO

    def test_module_functions_delegate(self, sink, clock):
        init_logger(level=VERBOSE, decor=REF_DECOR, sink=sink, clock=clock)
        linelog.log("NET", INFO, "conn %d ok", (7,))
        linelog.log_print("NET", INFO, "conn %d ok", 7)
        linelog.fatal("NET", "f")
        linelog.error("NET", "e")
        linelog.warn("NET", "w")
        linelog.info("NET", "i")
        linelog.debug("NET", "d")
        linelog.verbose("NET", "v")
        assert sink.lines[0] == sink.lines[1] == b"07:05:09.123 I NET:conn 7 ok\n"
        assert sink.levels[2:] == [0, 1, 2, 3, 4, 5]

    def test_module_setters(self, sink):
        init_logger(sink=sink, clock=fixed_clock(linelog.TimeVal(0, 0)))
        linelog.set_level(WARNING)
        linelog.set_decor("sender")
        linelog.set_log_func(sink)
        assert linelog.get_level() == WARNING
        assert linelog.get_decor() == D.SENDER
        assert linelog.get_log_func() is sink
        linelog.info("NET", "hidden")
        linelog.warn("NET", "shown")
        assert sink.lines == [b"NET:shown"]

    def test_reset_fixture_isolates(self):
        assert _manager_mod._logger is None


# =============================================================================
# Concurrency
# =============================================================================

@pytest.mark.slow
class TestThreads:
    """Concurrent logging and reconfiguration."""

    def test_concurrent_lines_are_whole(self, clock):
        lock = threading.Lock()
        lines = []

        def sink(level, data, length):
            with lock:
                lines.append(data)

        logger = Logger(decor=D.SENDER | D.NEWLINE, sink=sink, clock=clock)

        def worker(n):
            for i in range(200):
                logger.info(f"T{n}", "line %d", i)

        threads = [threading.Thread(target=worker, args=(n,))
                   for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(lines) == 8 * 200
        for n in range(8):
            mine = [l for l in lines if l.startswith(f"T{n}:".encode())]
            assert mine == [f"T{n}:line {i}\n".encode() for i in range(200)]

    def test_reconfigure_while_logging(self, clock):
        sink = CollectingSink()
        logger = Logger(decor=D.SENDER | D.NEWLINE, sink=sink, clock=clock)
        stop = threading.Event()

        def flip():
            while not stop.is_set():
                logger.set_decor(D.NEWLINE)
                logger.set_decor(D.SENDER | D.NEWLINE)

        flipper = threading.Thread(target=flip)
        flipper.start()
        try:
            for _ in range(2000):
                logger.info("NET", "msg")
        finally:
            stop.set()
            flipper.join()

        assert set(sink.lines) <= {b"NET:msg\n", b"msg\n"}
        assert len(sink) == 2000
