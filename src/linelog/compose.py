"""
Line assembly: decoration prefix, message body, terminators.

Field order and punctuation are fixed so that tools can parse lines
positionally:

    2024-03-01 07:05:09.123  41230  41231 I NET:conn 7 ok\\n
    |year|-day| time       |  pid  |  tid |L|sender:message

Every field is optional. A field's leading separator is only written
when something precedes it in the line.
"""

from collections.abc import Mapping
from typing import Optional, Tuple

from .clock import ParsedTime
from .decor import Decoration
from .errors import FormatExpansionFailed
from .levels import ERROR, level_text
from .linebuf import DEFAULT_CAPACITY, LineBuffer
from .numfmt import THREAD_WIDTH

SENDER_WIDTH = 25
FORMAT_ERROR_TEXT = "<logging error: msg too long>"


def render_prefix(buf: LineBuffer, decor: Decoration, level: int,
                  sender: Optional[str], ptime: Optional[ParsedTime],
                  pid: int = 0, tid: int = 0) -> int:
    """Write the decoration prefix into ``buf``.

    Args:
        buf: Empty line buffer
        decor: Decorations to render
        level: Level used for the level letter
        sender: Sender tag (None renders as an empty tag)
        ptime: Decoded local time, or None to skip year/day/time
        pid: Process id
        tid: OS thread id

    Returns:
        Bytes written
    """
    start = buf.cursor

    if ptime is not None:
        if decor & Decoration.YEAR:
            buf.write_uint(ptime.year)
        if decor & Decoration.DAY:
            if not buf.is_empty():
                buf.write(b'-')
            buf.write_uint(ptime.mon + 1, 2, '0')
            buf.write(b'-')
            buf.write_uint(ptime.day, 2, '0')
        if decor & Decoration.TIME:
            if not buf.is_empty():
                buf.write(b' ')
            buf.write_uint(ptime.hour, 2, '0')
            buf.write(b':')
            buf.write_uint(ptime.min, 2, '0')
            buf.write(b':')
            buf.write_uint(ptime.sec, 2, '0')
            buf.write(b'.')
            buf.write_uint(ptime.msec, 3, '0')

    if decor & Decoration.THREAD_ID:
        if not buf.is_empty():
            buf.write(b'  ')
        buf.write_fixed(pid, THREAD_WIDTH)
        buf.write(b'  ')
        buf.write_fixed(tid, THREAD_WIDTH)

    if decor & Decoration.LEVEL_TEXT:
        if not buf.is_empty():
            buf.write(b' ')
        buf.write(level_text(level))

    if decor & Decoration.SENDER:
        if not buf.is_empty():
            buf.write(b' ')
        buf.write((sender or '')[:SENDER_WIDTH])
        buf.write(b':')

    return buf.cursor - start


def expand_message(fmt, args: tuple = ()) -> bytes:
    """Expand a printf-style format and encode it as UTF-8.

    With no args the format is used as-is, so a literal ``%`` needs no
    escaping. A single mapping argument feeds ``%(name)s`` fields.

    Raises:
        FormatExpansionFailed: If formatting or encoding fails
    """
    try:
        if args:
            if len(args) == 1 and isinstance(args[0], Mapping) and args[0]:
                args = args[0]
            text = str(fmt) % args
        else:
            text = str(fmt)
        return text.encode('utf-8')
    except Exception as e:
        raise FormatExpansionFailed(
            f"{type(e).__name__}: {e}") from e


def compose(buf: LineBuffer, fmt, args: tuple, level: int,
            decor: Decoration) -> Tuple[int, int]:
    """Append the message and terminators after the prefix.

    A format that cannot be expanded is replaced by FORMAT_ERROR_TEXT
    and the line is escalated to ERROR. A message longer than the space
    left is cut at the byte level.

    Returns:
        (length, level): final line length without the NUL, and the
        level the line should be dispatched at
    """
    try:
        body = expand_message(fmt, args)
    except FormatExpansionFailed:
        level = ERROR
        body = FORMAT_ERROR_TEXT.encode('ascii')

    buf.write(body)
    length = buf.terminate(cr=bool(decor & Decoration.CR),
                           newline=bool(decor & Decoration.NEWLINE))
    return length, level


def format_line(sender: Optional[str], level: int, fmt, args: tuple = (),
                decor: Decoration = Decoration.NONE,
                ptime: Optional[ParsedTime] = None, pid: int = 0,
                tid: int = 0,
                capacity: int = DEFAULT_CAPACITY) -> Tuple[bytes, int, int]:
    """Build one complete line in a fresh buffer.

    Returns:
        (data, length, level) ready to hand to a sink
    """
    buf = LineBuffer(capacity)
    render_prefix(buf, decor, level, sender, ptime, pid, tid)
    length, level = compose(buf, fmt, args, level, decor)
    return buf.getvalue(), length, level
