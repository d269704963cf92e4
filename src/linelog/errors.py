"""Error taxonomy for the line-formatting pipeline.

None of these escape ``Logger.log()`` -- each is recovered where it is
raised and the worst outcome is a degraded or truncated line. They are
public so embedders can use the same pieces (clock, line buffer, level
table) in strict mode.
"""


class LogError(Exception):
    """Base class for linelog errors."""


class ClockUnavailable(LogError):
    """The wall clock could not be read or decoded."""


class FormatExpansionFailed(LogError):
    """A format string and its arguments could not be rendered."""


class BufferCapacityExceeded(LogError):
    """A strict write did not fit in the line buffer."""


class InvalidLevelIndex(LogError, IndexError):
    """A level value has no entry in the level-text table."""
