"""Data models for pyps."""

import os
from dataclasses import dataclass

from pyps.errors import InvalidFieldValue, MalformedRecord, UnknownField, UnreadableSource

# Field order of /proc/<pid>/stat, see proc(5).
STAT_FIELDS: tuple[str, ...] = (
    "pid",
    "cmd",
    "state",
    "ppid",
    "pgrp",
    "sid",
    "tty_nr",
    "tty_pgrp",
    "flags",
    "min_flt",
    "cmin_flt",
    "maj_flt",
    "cmaj_flt",
    "utime",
    "stime",
    "cutime",
    "cstime",
    "priority",
    "nice",
    "num_threads",
    "it_real_value",
    "start_time",
    "vsize",
    "rss",
    "rsslim",
    "start_code",
    "end_code",
    "start_stack",
    "esp",
    "eip",
    "pending",
    "blocked",
    "sigign",
    "sigcatch",
    "wchan",
    "zero1",
    "zero2",
    "exit_signal",
    "task_cpu",
    "rt_priority",
    "policy",
    "blkio_ticks",
    "gtime",
    "cgtime",
    "start_data",
    "end_data",
    "start_brk",
    "arg_start",
    "arg_end",
    "env_start",
    "env_end",
    "exit_code",
)

# Fields computed by the enricher rather than read from stat.
DERIVED_FIELDS: tuple[str, ...] = ("ctty", "time", "command")


@dataclass(slots=True, frozen=True)
class ProcessRecord:
    """One decoded /proc/<pid>/stat line. Every field is kept as text."""

    pid: str
    cmd: str  # short executable name, parentheses removed
    state: str  # 'R', 'S', 'D', 'Z', 'T', ...
    ppid: str
    pgrp: str
    sid: str
    tty_nr: str
    tty_pgrp: str  # "-1" when there is no controlling terminal
    flags: str
    min_flt: str
    cmin_flt: str
    maj_flt: str
    cmaj_flt: str
    utime: str  # clock ticks
    stime: str  # clock ticks
    cutime: str
    cstime: str
    priority: str
    nice: str
    num_threads: str
    it_real_value: str
    start_time: str
    vsize: str  # bytes
    rss: str  # pages
    rsslim: str
    start_code: str
    end_code: str
    start_stack: str
    esp: str
    eip: str
    pending: str
    blocked: str
    sigign: str
    sigcatch: str
    wchan: str
    zero1: str
    zero2: str
    exit_signal: str
    task_cpu: str
    rt_priority: str
    policy: str
    blkio_ticks: str
    gtime: str
    cgtime: str
    start_data: str
    end_data: str
    start_brk: str
    arg_start: str
    arg_end: str
    env_start: str
    env_end: str
    exit_code: str

    def int_field(self, name: str) -> int:
        """
        Parse a field as an integer.

        Raises:
            UnknownField: name is not part of the stat schema.
            InvalidFieldValue: the field does not hold an integer.
        """
        if name not in STAT_FIELDS:
            raise UnknownField(name)
        value = getattr(self, name)
        try:
            return int(value)
        except ValueError as exc:
            raise InvalidFieldValue(
                f"field {name!r} of pid {self.pid} is not an integer: {value!r}"
            ) from exc


@dataclass(slots=True, frozen=True)
class ProcessEntry:
    """A decoded record together with its derived display attributes."""

    record: ProcessRecord
    ctty: str  # "?" when unknown
    time: str  # HH:MM:SS
    command: str
    proc_root: str = "/proc"

    @property
    def pid(self) -> int:
        """Process id as an integer."""
        return self.record.int_field("pid")

    def search(self, field: str) -> str:
        """
        Return a named field of this entry as text.

        Accepts any stat field name plus the derived ``ctty``, ``time`` and
        ``command`` fields.
        """
        if field in DERIVED_FIELDS:
            return getattr(self, field)
        if field in STAT_FIELDS:
            return getattr(self.record, field)
        raise UnknownField(field)

    def get_uid(self) -> int:
        """Read the real uid of the process from its status block."""
        path = os.path.join(self.proc_root, self.record.pid, "status")
        try:
            with open(path, encoding="utf-8", errors="replace") as f:
                lines = f.read().splitlines()
        except OSError as exc:
            raise UnreadableSource(path, exc) from exc

        for line in lines:
            if line.startswith("Uid:"):
                fields = line.split("\t")
                try:
                    return int(fields[1])
                except (IndexError, ValueError) as exc:
                    raise MalformedRecord(f"{path}: bad Uid line {line!r}") from exc
        raise MalformedRecord(f"{path}: no Uid line")


@dataclass(slots=True, frozen=True)
class ProcessTable:
    """One snapshot of the process namespace."""

    entries: tuple[ProcessEntry, ...]
    max_width: int | None  # terminal columns, None when unknown

    def __len__(self) -> int:
        """Number of entries in the snapshot."""
        return len(self.entries)

    def __iter__(self):
        """Iterate over entries in table order."""
        return iter(self.entries)

    def pids(self) -> list[int]:
        """Process ids in table order."""
        return [entry.pid for entry in self.entries]
