"""ps-style text rendering of a process table."""

import logging
import os
import pwd
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum

import psutil

from pyps.config import PsConfig
from pyps.enricher import UNKNOWN_TTY
from pyps.errors import PypsError
from pyps.models import ProcessEntry, ProcessTable

logger = logging.getLogger(__name__)


class Selection(Enum):
    """Which processes are shown."""

    TTY = "tty"  # same terminal as the caller
    ALL = "all"
    WITH_TTY = "with_tty"  # any process attached to a terminal


@dataclass(slots=True, frozen=True)
class Column:
    """One output column."""

    header: str
    value: Callable[[ProcessEntry], str]
    right_align: bool = False


def user_name(entry: ProcessEntry) -> str:
    """
    Login name of the process owner, the numeric uid, or "?".

    Live processes are resolved through psutil; other namespaces through
    their status block and the password database.
    """
    if entry.proc_root == psutil.PROCFS_PATH:
        try:
            return psutil.Process(entry.pid).username()
        except psutil.Error as exc:
            logger.debug("no owner for process %s: %s", entry.record.pid, exc)
            return "?"
    try:
        uid = entry.get_uid()
    except PypsError as exc:
        logger.debug("no owner for process %s: %s", entry.record.pid, exc)
        return "?"
    try:
        return pwd.getpwuid(uid).pw_name
    except KeyError:
        return str(uid)


DEFAULT_COLUMNS: tuple[Column, ...] = (
    Column("PID", lambda e: e.record.pid, right_align=True),
    Column("TTY", lambda e: e.ctty),
    Column("TIME", lambda e: e.time, right_align=True),
    Column("CMD", lambda e: e.command),
)

USER_COLUMNS: tuple[Column, ...] = (
    Column("USER", user_name),
    Column("PID", lambda e: e.record.pid, right_align=True),
    Column("PPID", lambda e: e.record.ppid, right_align=True),
    Column("STAT", lambda e: e.record.state),
    Column("TTY", lambda e: e.ctty),
    Column("TIME", lambda e: e.time, right_align=True),
    Column("CMD", lambda e: e.command),
)


def own_terminal(config: PsConfig) -> str:
    """Terminal of the calling process, as shown in the TTY column."""
    try:
        tty = os.readlink(os.path.join(config.proc_root, "self", "fd", "0"))
    except OSError:
        return UNKNOWN_TTY
    return tty.removeprefix(config.dev_prefix)


def select(
    table: ProcessTable, selection: Selection, own_tty: str = UNKNOWN_TTY
) -> list[ProcessEntry]:
    """Filter table entries according to a selection mode."""
    if selection is Selection.ALL:
        return list(table)
    if selection is Selection.WITH_TTY:
        return [entry for entry in table if entry.ctty != UNKNOWN_TTY]
    return [entry for entry in table if entry.ctty == own_tty]


def format_rows(
    entries: Iterable[ProcessEntry],
    columns: tuple[Column, ...] = DEFAULT_COLUMNS,
    max_width: int | None = None,
) -> list[str]:
    """
    Lay out entries as aligned text lines, header first.

    Every column but the last is padded to its widest value; lines longer
    than max_width are cut, which only ever shortens the last column.
    """
    rows = [[column.header for column in columns]]
    rows.extend([column.value(entry) for column in columns] for entry in entries)

    widths = [max(len(row[i]) for row in rows) for i in range(len(columns) - 1)]

    lines = []
    for row in rows:
        cells = []
        for column, width, cell in zip(columns, widths, row):
            cells.append(cell.rjust(width) if column.right_align else cell.ljust(width))
        cells.append(row[-1])
        line = " ".join(cells)
        if max_width is not None:
            line = line[:max_width]
        lines.append(line)
    return lines


def render(
    table: ProcessTable,
    selection: Selection = Selection.TTY,
    user_columns: bool = False,
    own_tty: str = UNKNOWN_TTY,
) -> str:
    """Render a table the way ps prints it."""
    columns = USER_COLUMNS if user_columns else DEFAULT_COLUMNS
    entries = select(table, selection, own_tty)
    return "\n".join(format_rows(entries, columns, table.max_width))
