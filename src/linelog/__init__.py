"""
linelog -- minimal embeddable logging front-end.

Callers emit tagged, leveled, printf-style messages; each becomes one
bounded line with optional decorations (date, time, process/thread ids,
level letter, sender tag, CR/LF) handed to a replaceable sink.

Public API:
    Logger          -- configurable front-end logger
    init_logger     -- singleton initialization
    get_logger      -- access singleton
    log, log_print  -- module-level logging through the singleton
    fatal .. verbose -- per-level helpers
    Decoration      -- decoration flags
    parse_decor_spec -- parse a decoration spec string
    stdout_sink, stream_sink, CollectingSink -- sinks
"""

from linelog._version import __version__, __app_name__
from linelog.clock import (
    ParsedTime, TimeVal, fixed_clock, gettimeofday, time_decode, time_encode,
)
from linelog.decor import (
    DEFAULT_DECOR, Decoration, format_decor_list, parse_decor_spec,
)
from linelog.errors import (
    BufferCapacityExceeded, ClockUnavailable, FormatExpansionFailed,
    InvalidLevelIndex, LogError,
)
from linelog.levels import (
    DEBUG, ERROR, FATAL, INFO, MAX_LEVEL, VERBOSE, WARNING, level_text,
)
from linelog.manager import (
    Logger, debug, error, fatal, get_decor, get_level, get_log_func,
    get_logger, info, init_logger, log, log_print, set_decor, set_level,
    set_log_func, verbose, warn,
)
from linelog.sinks import CollectingSink, stdout_sink, stream_sink

__all__ = [
    '__version__', '__app_name__',
    'Logger', 'init_logger', 'get_logger',
    'log', 'log_print', 'fatal', 'error', 'warn', 'info', 'debug', 'verbose',
    'set_level', 'get_level', 'set_decor', 'get_decor',
    'set_log_func', 'get_log_func',
    'Decoration', 'DEFAULT_DECOR', 'parse_decor_spec', 'format_decor_list',
    'FATAL', 'ERROR', 'WARNING', 'INFO', 'DEBUG', 'VERBOSE', 'MAX_LEVEL',
    'level_text',
    'TimeVal', 'ParsedTime', 'gettimeofday', 'time_decode', 'time_encode',
    'fixed_clock',
    'stdout_sink', 'stream_sink', 'CollectingSink',
    'LogError', 'ClockUnavailable', 'FormatExpansionFailed',
    'BufferCapacityExceeded', 'InvalidLevelIndex',
]
