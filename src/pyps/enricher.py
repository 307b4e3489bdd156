"""Attributes derived from a process record and its /proc directory."""

import os

from pyps.config import USER_HZ, PsConfig
from pyps.errors import UnreadableSource
from pyps.models import ProcessRecord

UNKNOWN_TTY = "?"


def controlling_terminal(record: ProcessRecord, config: PsConfig) -> str:
    """Return the terminal behind the process's stdin, or "?" if none."""
    try:
        tty = os.readlink(os.path.join(config.proc_root, record.pid, "fd", "0"))
    except OSError:
        return UNKNOWN_TTY
    if record.tty_pgrp == "-1":
        return UNKNOWN_TTY
    return tty.removeprefix(config.dev_prefix)


def format_cpu_time(ticks: int, ticks_per_second: int = USER_HZ) -> str:
    """Format clock ticks as HH:MM:SS. Hours are not capped."""
    total_seconds = ticks // ticks_per_second
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def _ticks(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        return 0


def cpu_time(record: ProcessRecord, config: PsConfig) -> str:
    """Total user plus system CPU time of a process, formatted."""
    ticks = _ticks(record.utime) + _ticks(record.stime)
    return format_cpu_time(ticks, config.ticks_per_second)


def long_command_line(pid: str, config: PsConfig) -> str:
    """
    Read the full argument vector of a process as one space-separated line.

    Returns an empty string for processes without arguments (kernel threads,
    zombies).

    Raises:
        UnreadableSource: the cmdline file could not be read.
    """
    path = os.path.join(config.proc_root, pid, "cmdline")
    try:
        with open(path, "rb") as f:
            raw = f.read()
    except OSError as exc:
        raise UnreadableSource(path, exc) from exc
    args = raw.rstrip(b"\0").split(b"\0")
    return " ".join(arg.decode("utf-8", errors="replace") for arg in args).strip()
