"""Decoding of /proc/<pid>/stat records."""

import os

from pyps.config import PsConfig
from pyps.errors import MalformedRecord, UnreadableSource
from pyps.models import STAT_FIELDS, ProcessRecord

FIELD_COUNT = len(STAT_FIELDS)


def decode_stat(line: str) -> ProcessRecord:
    """
    Decode one stat line into a ProcessRecord.

    The command name sits between the first ``(`` and the last ``)`` of the
    line and may itself contain spaces or parentheses. Everything else is
    split on single spaces and assigned to STAT_FIELDS by position.

    Raises:
        MalformedRecord: the line has no command delimiters or fewer tokens
            than the schema requires.
    """
    line = line.rstrip("\n")
    start = line.find("(")
    end = line.rfind(")")
    if start < 0 or end < start:
        raise MalformedRecord(f"no command name delimiters in stat record: {line!r}")

    head = line[:start].rstrip(" ")
    tail = line[end + 1 :].lstrip(" ")
    tokens = head.split(" ") if head else []
    if len(tokens) != STAT_FIELDS.index("cmd"):
        raise MalformedRecord(f"unexpected fields before command name: {line!r}")
    tokens.append(line[start + 1 : end])
    if tail:
        tokens.extend(tail.split(" "))

    if len(tokens) < FIELD_COUNT:
        raise MalformedRecord(
            f"stat record has {len(tokens)} fields, expected {FIELD_COUNT}: {line!r}"
        )

    # Newer kernels may append fields; they are not part of the schema.
    values = {name: tokens[index] for index, name in enumerate(STAT_FIELDS)}
    return ProcessRecord(**values)


def read_stat(pid: str, config: PsConfig) -> ProcessRecord:
    """Read and decode the stat record of a process."""
    path = os.path.join(config.proc_root, pid, "stat")
    try:
        # The whole file: a command name may itself contain newlines.
        with open(path, encoding="utf-8", errors="replace", newline="") as f:
            line = f.read()
    except OSError as exc:
        raise UnreadableSource(path, exc) from exc
    return decode_stat(line)
