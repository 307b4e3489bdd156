"""Command line entry point for pyps."""

import argparse
import logging
import sys

from pyps.config import PsConfig
from pyps.errors import PypsError
from pyps.render import Selection, own_terminal, render
from pyps.table import ProcessTableBuilder

LOG_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="pyps",
        description="Report a snapshot of the current processes.",
    )
    parser.add_argument(
        "-e",
        "-A",
        dest="all",
        action="store_true",
        help="select all processes",
    )
    parser.add_argument(
        "-a",
        dest="with_tty",
        action="store_true",
        help="select all processes attached to a terminal",
    )
    parser.add_argument(
        "-x",
        dest="long",
        action="store_true",
        help="show the full command line with arguments",
    )
    parser.add_argument(
        "-u",
        dest="user",
        action="store_true",
        help="user-oriented output (USER, PPID and STAT columns)",
    )
    parser.add_argument(
        "--proc-root",
        default=PsConfig().proc_root,
        metavar="PATH",
        help="process namespace to read (default: %(default)s)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="log more; repeat for debug output",
    )
    parser.add_argument(
        "--tui",
        action="store_true",
        help="browse the snapshot in an interactive viewer",
    )
    return parser


def configure_logging(verbosity: int) -> None:
    """Send log records to stderr at a level chosen by -v."""
    level = LOG_LEVELS[min(verbosity, len(LOG_LEVELS) - 1)]
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )


def selection_from_args(args: argparse.Namespace) -> Selection:
    """Map the selection flags to a Selection mode."""
    if args.all:
        return Selection.ALL
    if args.with_tty:
        return Selection.WITH_TTY
    return Selection.TTY


def main(argv: list[str] | None = None) -> int:
    """Entry point for the pyps command."""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    config = PsConfig(proc_root=args.proc_root, long_command_lines=args.long)
    selection = selection_from_args(args)

    if args.tui:
        from pyps.app import PyPsApp

        PyPsApp(config, selection=selection, user_columns=args.user).run()
        return 0

    try:
        table = ProcessTableBuilder(config).build()
    except PypsError as exc:
        print(f"pyps: {exc}", file=sys.stderr)
        return 1

    print(render(table, selection, args.user, own_terminal(config)))
    return 0


if __name__ == "__main__":
    sys.exit(main())
