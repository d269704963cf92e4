"""Command-line front end for linelog.

Emits one decorated line through the default stdout sink:

    linelog NET info "conn %d ok" 7
    linelog --decor time,level_text,sender,newline NET 3 "up"
    linelog -Q NET debug "dropped at the default level"
    linelog --decor            # list decoration flags

The maximum level starts at INFO (3); -v raises it, -Q lowers it, and
--level sets it outright.
"""

import argparse
import re
import sys

from linelog._version import BASE_VERSION, PIP_VERSION
from linelog.decor import DEFAULT_DECOR, format_decor_list, parse_decor_spec
from linelog.levels import INFO, parse_level
from linelog.linebuf import DEFAULT_CAPACITY
from linelog.manager import init_logger

_LIST = 'list'

FLAGS = {
    "--verbose": {"aliases": ["-v"], "action": "count", "default": 0,
                  "help": "Raise the maximum level (-v, -vv)"},
    "--quiet": {"aliases": ["-Q"], "action": "count", "default": 0,
                "help": "Lower the maximum level (-Q, -QQ, -QQQ)"},
    "--level": {"aliases": ["-l"], "metavar": "LEVEL", "default": None,
                "help": "Maximum level, number or name (overrides -v/-Q)"},
    "--decor": {"nargs": "?", "const": _LIST, "metavar": "SPEC",
                "default": None,
                "help": "Decorations, e.g. time,sender,newline or +year "
                        "(bare --decor lists flags)"},
    "--buffer-size": {"type": int, "default": DEFAULT_CAPACITY,
                      "metavar": "BYTES",
                      "help": f"Line capacity (default: {DEFAULT_CAPACITY})"},
}


def _build_parser():
    parser = argparse.ArgumentParser(
        prog="linelog",
        description="linelog -- emit one decorated log line",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"linelog {BASE_VERSION} ({PIP_VERSION})",
    )
    for flag, kwargs in FLAGS.items():
        kw = {k: v for k, v in kwargs.items() if k != "aliases"}
        parser.add_argument(flag, *kwargs.get("aliases", []), **kw)

    parser.add_argument("tag", nargs="?", help="Sender tag")
    parser.add_argument("msg_level", nargs="?", metavar="level",
                        help="Message level, number or name")
    parser.add_argument("format", nargs="?", help="printf-style format")
    parser.add_argument("args", nargs="*", help="Format arguments")
    return parser


# printf conversions in order; '*' width/precision consume an int argument
_CONVERSION = re.compile(
    r"%[#0 +\-]*(\*|\d+)?(?:\.(\*|\d+))?[hlL]?([diouxXeEfFgGcrsa%])")
_INT_CONVERSIONS = "diouxXc"
_FLOAT_CONVERSIONS = "eEfFgG"


def _conversions(fmt):
    """Conversion letters of ``fmt``, one per argument it consumes."""
    kinds = []
    for width, precision, conv in _CONVERSION.findall(fmt):
        if conv == "%":
            continue
        if width == "*":
            kinds.append("d")
        if precision == "*":
            kinds.append("d")
        kinds.append(conv)
    return kinds


def _convert_arg(text, conv="s"):
    """Turn a CLI arg into a number only where ``conv`` needs one."""
    try:
        if conv in _INT_CONVERSIONS:
            return int(text)
        if conv in _FLOAT_CONVERSIONS:
            return float(text)
    except ValueError:
        pass
    return text


def _convert_args(fmt, args):
    kinds = _conversions(fmt)
    return [_convert_arg(text, kinds[i] if i < len(kinds) else "s")
            for i, text in enumerate(args)]


def main(argv=None):
    """Main entry point for the linelog CLI.

    Args:
        argv: Command-line arguments. None means sys.argv[1:].

    Returns:
        Exit code (0 = success, 2 = usage error).
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.decor == _LIST:
        print(format_decor_list())
        return 0

    try:
        decor = (parse_decor_spec(args.decor) if args.decor is not None
                 else DEFAULT_DECOR)
        if args.level is not None:
            max_level = parse_level(args.level)
        else:
            max_level = INFO + args.verbose - args.quiet
        msg_level = parse_level(args.msg_level) if args.msg_level else INFO
        logger = init_logger(level=max_level, decor=decor,
                             buffer_size=args.buffer_size)
    except ValueError as e:
        parser.error(str(e))

    if args.tag is None or args.format is None:
        parser.print_usage()
        return 2

    logger.print(args.tag, msg_level, args.format,
                 *_convert_args(args.format, args.args))
    return 0


if __name__ == "__main__":
    sys.exit(main())
