"""
Decoration flags and decoration spec parsing.

Decorations are the optional fields rendered in front of the message.
Their order in the line is fixed regardless of how the set is built:

    YEAR-DAY TIME  PID  TID LEVEL_TEXT SENDER:message[CR][NEWLINE]

Decoration spec syntax (compact, comma or plus separated):
    time,level_text,sender,newline     # exactly these flags
    +year,-thread_id                   # defaults, plus year, minus ids
    548                                # raw bitmask
    0x224                              # raw bitmask, hex

COLOR and THREAD_SWC are reserved: they are stored and reported but
nothing renders them.
"""

import enum
from typing import Dict


class Decoration(enum.IntFlag):
    """Bitmask of line decorations."""
    NONE = 0
    YEAR = 1            # Include year digits
    DAY = 2             # Include MM-DD
    TIME = 4            # Include HH:MM:SS.mmm
    SENDER = 8          # Include sender tag
    COLOR = 16          # Reserved
    LEVEL_TEXT = 32     # Include one-letter level
    THREAD_ID = 64      # Include process and thread ids
    THREAD_SWC = 128    # Reserved
    CR = 256            # Terminate with carriage return
    NEWLINE = 512       # Terminate with newline


DEFAULT_DECOR = (Decoration.DAY | Decoration.TIME | Decoration.SENDER
                 | Decoration.LEVEL_TEXT | Decoration.THREAD_ID
                 | Decoration.NEWLINE)

RESERVED_DECOR = Decoration.COLOR | Decoration.THREAD_SWC

ALL_DECOR = Decoration(1023)

# Spec names, in rendering order
DECOR_NAMES: Dict[str, Decoration] = {
    'year':       Decoration.YEAR,
    'day':        Decoration.DAY,
    'time':       Decoration.TIME,
    'thread_id':  Decoration.THREAD_ID,
    'level_text': Decoration.LEVEL_TEXT,
    'sender':     Decoration.SENDER,
    'cr':         Decoration.CR,
    'newline':    Decoration.NEWLINE,
    'color':      Decoration.COLOR,
    'thread_swc': Decoration.THREAD_SWC,
}

# Short aliases accepted by parse_decor_spec
DECOR_ALIASES = {
    'date': 'day',
    'tid': 'thread_id',
    'ids': 'thread_id',
    'level': 'level_text',
    'tag': 'sender',
    'nl': 'newline',
    'lf': 'newline',
}

DECOR_DESCRIPTIONS = {
    'year':       'Year digits (2024)',
    'day':        'Month and day of month (03-01)',
    'time':       'Time with milliseconds (07:05:09.123)',
    'thread_id':  'Process id and thread id, 6 columns each',
    'level_text': 'One-letter level (F E W I D V)',
    'sender':     'Sender tag, up to 25 characters, then ":"',
    'cr':         'Carriage return terminator',
    'newline':    'Newline terminator',
    'color':      'Reserved, not rendered',
    'thread_swc': 'Reserved, not rendered',
}


def _lookup(name: str) -> Decoration:
    key = name.strip().lower().replace('-', '_')
    key = DECOR_ALIASES.get(key, key)
    try:
        return DECOR_NAMES[key]
    except KeyError:
        raise ValueError(f"Unknown decoration: {name!r}") from None


def _parse_int(text: str):
    try:
        return int(text, 0)
    except ValueError:
        return None


def coerce_decor(value) -> Decoration:
    """Turn a Decoration, int or spec string into a Decoration."""
    if isinstance(value, Decoration):
        return value
    if isinstance(value, int):
        if value < 0 or value > int(ALL_DECOR):
            raise ValueError(f"Decoration bitmask out of range: {value}")
        return Decoration(value)
    if isinstance(value, str):
        return parse_decor_spec(value)
    raise TypeError(f"Cannot use {type(value).__name__} as decorations")


def parse_decor_spec(spec: str, base: Decoration = DEFAULT_DECOR) -> Decoration:
    """Parse a decoration spec string into a Decoration.

    A spec made only of ``+name``/``-name`` items edits ``base``; a spec
    with any plain name starts from nothing. ``"none"`` and ``"default"``
    are accepted as whole specs.

    Args:
        spec: Decoration spec like ``"time,sender,newline"`` or ``"+year"``
        base: Starting set for relative specs

    Returns:
        The resulting Decoration

    Raises:
        ValueError: On unknown names or an out-of-range bitmask
    """
    text = spec.strip()
    number = _parse_int(text)
    if number is not None:
        return coerce_decor(number)
    if text.lower() == 'none' or not text:
        return Decoration.NONE
    if text.lower() == 'default':
        return DEFAULT_DECOR

    items = [p for p in text.replace('+', ',+').split(',') if p.strip()]
    relative = all(p.strip()[0] in '+-' for p in items)
    result = Decoration(base) if relative else Decoration.NONE

    for item in items:
        item = item.strip()
        if item[0] == '-':
            result &= ~_lookup(item[1:])
        elif item[0] == '+':
            result |= _lookup(item[1:])
        else:
            result |= _lookup(item)
    return result


def decor_names(decor: Decoration) -> list:
    """List the flag names set in ``decor``, in rendering order."""
    return [name for name, flag in DECOR_NAMES.items() if decor & flag]


def format_decor_list(current: Decoration = DEFAULT_DECOR) -> str:
    """Format the decoration flags for display.

    Returns:
        Listing of all flags with their bit value and description;
        flags set in ``current`` are starred.
    """
    lines = ["Available decorations (* = set):"]
    max_name = max(len(name) for name in DECOR_NAMES)
    for name, flag in DECOR_NAMES.items():
        mark = '*' if current & flag else ' '
        desc = DECOR_DESCRIPTIONS.get(name, '')
        lines.append(f"  {mark} {name:<{max_name}}  {int(flag):>4}  {desc}")
    return "\n".join(lines)
