"""
Logger -- level check, line assembly and sink dispatch.

The emit rule is: a message is formatted when level <= max level.
Anything above the max level returns before the clock is read or the
format is touched, so callers can pass expensive arguments freely at
disabled verbosity.

Pipeline per call:

    level check -> clock -> prefix -> message + terminators -> sink

Configuration (max level, decorations, sink, buffer size) lives on the
Logger and is guarded by a lock. Each call reads one consistent snapshot
of it and then works on a private line buffer, so concurrent calls never
share state. Lines from different threads may interleave in any order;
a single thread's lines reach the sink in call order.
"""

import os
import sys
import threading
import traceback
from typing import Optional

from .clock import Clock, gettimeofday, time_decode
from .compose import compose, render_prefix
from .decor import DEFAULT_DECOR, Decoration, coerce_decor
from .levels import DEBUG, ERROR, FATAL, INFO, MAX_LEVEL, VERBOSE, WARNING
from .linebuf import DEFAULT_CAPACITY, MIN_CAPACITY, LineBuffer
from .sinks import Sink, stdout_sink

_UNSET = object()


class Logger:
    """Front-end logger writing decorated lines to a sink.

    Usage::

        log = Logger(level=INFO, decor="time,level_text,sender,newline")
        log.info("NET", "conn %d ok", 7)
        log.print("NET", 4, "hidden at INFO")
        log.set_log_func(my_sink)
    """

    def __init__(
        self,
        level: int = MAX_LEVEL,
        decor=DEFAULT_DECOR,
        sink: Optional[Sink] = _UNSET,
        buffer_size: int = DEFAULT_CAPACITY,
        clock: Clock = gettimeofday,
        pid_func=os.getpid,
        tid_func=threading.get_native_id,
    ):
        self._lock = threading.Lock()
        self._level = level
        self._decor = coerce_decor(decor)
        self._sink = stdout_sink if sink is _UNSET else _check_sink(sink)
        self._buffer_size = _check_buffer_size(buffer_size)
        self.clock = clock
        self.pid_func = pid_func
        self.tid_func = tid_func

    # -- configuration ---------------------------------------------------

    def set_level(self, level: int) -> None:
        """Set the maximum level. Not validated; any int is accepted."""
        with self._lock:
            self._level = level

    def get_level(self) -> int:
        with self._lock:
            return self._level

    def set_decor(self, decor) -> None:
        """Set decorations from a Decoration, bitmask or spec string."""
        decor = coerce_decor(decor)
        with self._lock:
            self._decor = decor

    def get_decor(self) -> Decoration:
        with self._lock:
            return self._decor

    def set_log_func(self, func: Optional[Sink]) -> None:
        """Replace the sink. ``None`` turns output off."""
        func = _check_sink(func)
        with self._lock:
            self._sink = func

    def get_log_func(self) -> Optional[Sink]:
        with self._lock:
            return self._sink

    def set_buffer_size(self, size: int) -> None:
        size = _check_buffer_size(size)
        with self._lock:
            self._buffer_size = size

    def get_buffer_size(self) -> int:
        with self._lock:
            return self._buffer_size

    def is_enabled(self, level: int) -> bool:
        """True if a message at ``level`` would be formatted."""
        return level <= self.get_level()

    # -- logging ---------------------------------------------------------

    def log(self, sender: Optional[str], level: int, fmt, args: tuple = ()) -> None:
        """Format one line and hand it to the sink.

        Never raises. Formatting, clock and capacity problems give a
        degraded line; a failing sink is reported on stderr and the
        line is dropped.

        Args:
            sender: Sender tag
            level: Requested level
            fmt: printf-style format string
            args: Format arguments
        """
        with self._lock:
            max_level = self._level
            decor = self._decor
            sink = self._sink
            capacity = self._buffer_size

        if level > max_level:
            return

        ptime = self._read_clock()

        pid = tid = 0
        if decor & Decoration.THREAD_ID:
            try:
                pid, tid = self.pid_func(), self.tid_func()
            except Exception:
                pid = tid = 0

        buf = LineBuffer(capacity)
        render_prefix(buf, decor, level, sender, ptime, pid, tid)
        length, level = compose(buf, fmt, args, level, decor)

        if sink is not None:
            try:
                sink(level, buf.getvalue(), length)
            except Exception:
                _report_sink_error(sink)

    def _read_clock(self):
        """Decoded local time, or None when the clock cannot be read."""
        try:
            return time_decode(self.clock())
        except Exception:
            # ClockUnavailable, or anything an injected clock raises
            return None

    def print(self, tag: Optional[str], level: int, fmt, *args) -> None:
        """Level-checked variadic form of log()."""
        if level <= self.get_level():
            self.log(tag, level, fmt, args)

    def fatal(self, tag, fmt, *args) -> None:
        self.print(tag, FATAL, fmt, *args)

    def error(self, tag, fmt, *args) -> None:
        self.print(tag, ERROR, fmt, *args)

    def warn(self, tag, fmt, *args) -> None:
        self.print(tag, WARNING, fmt, *args)

    def info(self, tag, fmt, *args) -> None:
        self.print(tag, INFO, fmt, *args)

    def debug(self, tag, fmt, *args) -> None:
        self.print(tag, DEBUG, fmt, *args)

    def verbose(self, tag, fmt, *args) -> None:
        self.print(tag, VERBOSE, fmt, *args)


def _check_sink(func):
    if func is not None and not callable(func):
        raise TypeError(f"Sink must be callable or None, got {func!r}")
    return func


def _check_buffer_size(size: int) -> int:
    if size < MIN_CAPACITY:
        raise ValueError(
            f"Buffer size must be at least {MIN_CAPACITY}, got {size}")
    return size


def _report_sink_error(sink) -> None:
    """Print the active sink exception to stderr and carry on."""
    stream = sys.stderr
    if stream is None:
        return
    try:
        stream.write(f"--- linelog: sink {sink!r} failed ---\n")
        traceback.print_exc(file=stream)
    except (OSError, ValueError):
        # stderr is closed or gone too; nothing left to report to
        pass


# =============================================================================
# Module-level singleton
# =============================================================================

_logger: Optional[Logger] = None
_logger_lock = threading.Lock()


def init_logger(**kwargs) -> Logger:
    """Initialize the module-level Logger singleton.

    Call once at program startup. Accepts the Logger constructor's
    keyword arguments (level, decor, sink, buffer_size, clock, ...).

    Returns:
        The initialized Logger instance
    """
    global _logger
    logger = Logger(**kwargs)
    with _logger_lock:
        _logger = logger
    return logger


def get_logger() -> Logger:
    """Get the module-level Logger, creating a default if needed."""
    global _logger
    with _logger_lock:
        if _logger is None:
            _logger = Logger()
        return _logger


def set_level(level: int) -> None:
    get_logger().set_level(level)


def get_level() -> int:
    return get_logger().get_level()


def set_decor(decor) -> None:
    get_logger().set_decor(decor)


def get_decor() -> Decoration:
    return get_logger().get_decor()


def set_log_func(func: Optional[Sink]) -> None:
    get_logger().set_log_func(func)


def get_log_func() -> Optional[Sink]:
    return get_logger().get_log_func()


def log(sender, level: int, fmt, args: tuple = ()) -> None:
    get_logger().log(sender, level, fmt, args)


def log_print(tag, level: int, fmt, *args) -> None:
    """Module-level print(): level-checked variadic logging."""
    get_logger().print(tag, level, fmt, *args)


def fatal(tag, fmt, *args) -> None:
    get_logger().fatal(tag, fmt, *args)


def error(tag, fmt, *args) -> None:
    get_logger().error(tag, fmt, *args)


def warn(tag, fmt, *args) -> None:
    get_logger().warn(tag, fmt, *args)


def info(tag, fmt, *args) -> None:
    get_logger().info(tag, fmt, *args)


def debug(tag, fmt, *args) -> None:
    get_logger().debug(tag, fmt, *args)


def verbose(tag, fmt, *args) -> None:
    get_logger().verbose(tag, fmt, *args)
