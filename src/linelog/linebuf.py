"""
Fixed-capacity line buffer.

LineBuffer owns a bytearray of exactly ``capacity`` bytes and a cursor.
The last byte is always reserved for the NUL terminator, so at most
``capacity - 1`` bytes of text fit. Writes past that are truncated,
never grown.
"""

from typing import Union

from .errors import BufferCapacityExceeded
from .numfmt import fixed_width, utoa_pad

DEFAULT_CAPACITY = 1024
MIN_CAPACITY = 64


class LineBuffer:
    """Bounded writer for a single log line.

    Usage::

        buf = LineBuffer(128)
        buf.write_uint(7, 2, "0")
        buf.write(":")
        length = buf.terminate(cr=False, newline=True)
        data = buf.getvalue()     # b"07:\\n"
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity < MIN_CAPACITY:
            raise ValueError(
                f"Line buffer capacity must be at least {MIN_CAPACITY}, "
                f"got {capacity}")
        self._buf = bytearray(capacity)
        self._pos = 0
        self._length = None

    @property
    def capacity(self) -> int:
        return len(self._buf)

    @property
    def cursor(self) -> int:
        """Bytes written so far."""
        return self._pos

    @property
    def remaining(self) -> int:
        """Bytes that still fit before the reserved NUL."""
        return self.capacity - 1 - self._pos

    def __len__(self) -> int:
        return self._pos if self._length is None else self._length

    def is_empty(self) -> bool:
        return self._pos == 0

    def write(self, data: Union[bytes, str], strict: bool = False) -> int:
        """Append bytes, truncating to the space left.

        Args:
            data: Bytes, or text to encode as UTF-8
            strict: Raise instead of truncating

        Returns:
            Number of bytes actually written

        Raises:
            BufferCapacityExceeded: In strict mode, if data does not fit
        """
        if isinstance(data, str):
            data = data.encode('utf-8')
        n = len(data)
        room = self.remaining
        if n > room:
            if strict:
                raise BufferCapacityExceeded(
                    f"{n} bytes do not fit, {room} left of {self.capacity}")
            n = room
        self._buf[self._pos:self._pos + n] = data[:n]
        self._pos += n
        return n

    def write_uint(self, value: int, min_digits: int = 0, pad: str = " ") -> int:
        """Append an unsigned decimal number; returns bytes written."""
        return self.write(utoa_pad(value, min_digits, pad))

    def write_fixed(self, value: int, width: int) -> int:
        """Append an id in exactly ``width`` columns (see fixed_width)."""
        return self.write(fixed_width(value, width))

    def terminate(self, cr: bool = False, newline: bool = True) -> int:
        """Append the line terminators and the NUL byte.

        If the terminators fit, they follow the text. Otherwise the
        line is fixed at ``capacity - 1`` bytes and the terminators
        overwrite its last bytes: CR at ``capacity - 3``, newline at
        ``capacity - 2``.

        Returns:
            Final line length, NUL excluded, terminators included
        """
        cap = self.capacity
        n = self._pos
        if n < cap - 2:
            if cr:
                self._buf[n] = 0x0D
                n += 1
            if newline:
                self._buf[n] = 0x0A
                n += 1
        else:
            # a line ending at cap - 2 leaves one unwritten byte
            self._buf[n:cap - 1] = b' ' * (cap - 1 - n)
            n = cap - 1
            if cr:
                self._buf[cap - 3] = 0x0D
            if newline:
                self._buf[cap - 2] = 0x0A
        self._buf[n] = 0
        self._pos = n
        self._length = n
        return n

    def getvalue(self) -> bytes:
        """Return the line written so far, without the NUL."""
        return bytes(self._buf[:len(self)])

    def raw(self) -> bytes:
        """Return the line including its NUL terminator."""
        return bytes(self._buf[:len(self) + 1])
