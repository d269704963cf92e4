"""
Log level constants.

Lower number means higher importance. The emit rule is:

    message.level <= max_level  ->  message is formatted and dispatched

Level assignments:
    <-- more severe ---------------------------- more verbose -->
    0      1      2        3     4      5
    fatal  error  warning  info  debug  verbose
"""

from .errors import InvalidLevelIndex

FATAL = 0
ERROR = 1
WARNING = 2
INFO = 3
DEBUG = 4
VERBOSE = 5

# Default maximum level; set_level() may go past it.
MAX_LEVEL = VERBOSE

LEVEL_TEXT = ("F", "E", "W", "I", "D", "V")
UNKNOWN_LEVEL_TEXT = "?"

LEVEL_NAMES = {
    'fatal': FATAL,
    'error': ERROR,
    'warning': WARNING,
    'warn': WARNING,
    'info': INFO,
    'debug': DEBUG,
    'verbose': VERBOSE,
}


def level_text(level: int, strict: bool = False) -> str:
    """Return the one-letter label for a level.

    Levels outside the table give ``UNKNOWN_LEVEL_TEXT``, or raise
    ``InvalidLevelIndex`` when ``strict`` is set.
    """
    if 0 <= level < len(LEVEL_TEXT):
        return LEVEL_TEXT[level]
    if strict:
        raise InvalidLevelIndex(f"No level text for level {level}")
    return UNKNOWN_LEVEL_TEXT


def parse_level(value) -> int:
    """Parse a level given as int, digit string, name or letter.

    Examples: ``3``, ``"3"``, ``"-1"``, ``"info"``, ``"I"``.

    Raises:
        ValueError: If the value is not a recognized level.
    """
    if isinstance(value, int):
        return value
    text = str(value).strip()
    try:
        return int(text)
    except ValueError:
        pass
    key = text.lower()
    if key in LEVEL_NAMES:
        return LEVEL_NAMES[key]
    upper = text.upper()
    if upper in LEVEL_TEXT:
        return LEVEL_TEXT.index(upper)
    raise ValueError(f"Unknown log level: {value!r}")
