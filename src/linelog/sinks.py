"""
Sink functions.

A sink receives each finished line:

    sink(level: int, data: bytes, length: int) -> None

``data`` is an immutable copy of exactly ``length`` bytes, terminators
included. Sinks run on the logging thread; serializing concurrent writes
to a shared device is the sink's job.
"""

import io
import sys
from typing import Callable, List, Optional, TextIO, Tuple

Sink = Callable[[int, bytes, int], None]


def _write(stream, data: bytes) -> None:
    binary = getattr(stream, 'buffer', None)
    if binary is not None:
        # pending text must land before the raw bytes
        stream.flush()
        binary.write(data)
        binary.flush()
    else:
        stream.write(data.decode('utf-8', errors='replace'))
        flush = getattr(stream, 'flush', None)
        if flush is not None:
            flush()


def stdout_sink(level: int, data: bytes, length: int) -> None:
    """Default sink: write the line verbatim to standard output."""
    _write(sys.stdout, data[:length])


def _is_binary(stream) -> bool:
    if isinstance(stream, (io.RawIOBase, io.BufferedIOBase)):
        return True
    mode = getattr(stream, 'mode', '')
    return isinstance(mode, str) and 'b' in mode


def stream_sink(stream: Optional[TextIO] = None) -> Sink:
    """Return a sink writing to ``stream`` (default: stderr at call time).

    Binary streams (BytesIO, files opened 'wb') get the raw bytes. Anything
    else is treated as a text writer: its ``buffer`` gets the bytes when it
    has one, otherwise ``write`` gets the line decoded as UTF-8.
    """
    def sink(level: int, data: bytes, length: int) -> None:
        target = stream if stream is not None else sys.stderr
        if _is_binary(target):
            target.write(data[:length])
            target.flush()
        else:
            _write(target, data[:length])
    return sink


class CollectingSink:
    """Sink that keeps every line in memory.

    Usage::

        sink = CollectingSink()
        logger.set_log_func(sink)
        logger.info("NET", "up")
        assert sink.lines == [b"... I NET:up\\n"]
    """

    def __init__(self):
        self.records: List[Tuple[int, bytes, int]] = []

    def __call__(self, level: int, data: bytes, length: int) -> None:
        self.records.append((level, data, length))

    @property
    def lines(self) -> List[bytes]:
        return [data for _, data, _ in self.records]

    @property
    def levels(self) -> List[int]:
        return [level for level, _, _ in self.records]

    def clear(self) -> None:
        self.records.clear()

    def __len__(self) -> int:
        return len(self.records)
