"""
Unsigned decimal encoding for line decorations.

Digits are produced least-significant first and reversed, padding is
added on the left. No sign, no grouping.
"""

THREAD_WIDTH = 6

_DIGITS = "0123456789"


def utoa_pad(value: int, min_digits: int = 0, pad: str = " ") -> str:
    """Encode an unsigned integer, left-padded to at least min_digits.

    Args:
        value: Non-negative integer
        min_digits: Minimum length of the result
        pad: Single padding character (``"0"`` or ``" "`` in practice)

    Returns:
        Decimal text, e.g. ``utoa_pad(7, 2, "0") == "07"``

    Raises:
        ValueError: If value is negative or pad is not one character
    """
    if value < 0:
        raise ValueError(f"utoa_pad() takes an unsigned value, got {value}")
    if len(pad) != 1:
        raise ValueError(f"pad must be a single character, got {pad!r}")

    out = []
    while True:
        value, digit = divmod(value, 10)
        out.append(_DIGITS[digit])
        if value == 0:
            break
    while len(out) < min_digits:
        out.append(pad)
    return "".join(reversed(out))


def utoa(value: int) -> str:
    """Encode an unsigned integer with no padding."""
    return utoa_pad(value, 0, " ")


def fixed_width(value: int, width: int = THREAD_WIDTH) -> str:
    """Render an id in exactly ``width`` columns.

    Shorter text is space-padded on the left; longer text keeps only its
    first ``width`` characters, so ``1234567`` becomes ``"123456"``.
    """
    text = utoa(value)
    if len(text) <= width:
        return text.rjust(width)
    return text[:width]
