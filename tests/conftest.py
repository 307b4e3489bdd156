"""Shared fixtures: fake /proc trees built under tmp_path."""

import os
from pathlib import Path

import pytest

from pyps.config import PsConfig
from pyps.models import STAT_FIELDS


def make_stat_line(pid, cmd="sh", **fields) -> str:
    """Build a stat line with every field "0" except those given."""
    values = ["0"] * len(STAT_FIELDS)
    values[0] = str(pid)
    values[1] = f"({cmd})"
    for name, value in fields.items():
        values[STAT_FIELDS.index(name)] = str(value)
    return " ".join(values) + "\n"


class FakeProc:
    """A directory laid out like /proc."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.root.mkdir()

    @property
    def config(self) -> PsConfig:
        return PsConfig(proc_root=str(self.root))

    def add_process(
        self,
        pid,
        cmd="sh",
        stdin="/dev/pts/0",
        cmdline: bytes | None = None,
        uid: int | None = 1000,
        stat: str | None = None,
        **fields,
    ) -> Path:
        """Create /proc/<pid> with stat, status, cmdline and fd/0."""
        proc_dir = self.root / str(pid)
        proc_dir.mkdir()
        if stat is None:
            stat = make_stat_line(pid, cmd, **fields)
        (proc_dir / "stat").write_text(stat)
        if uid is not None:
            (proc_dir / "status").write_text(
                f"Name:\t{cmd}\nState:\tS (sleeping)\nUid:\t{uid}\t{uid}\t{uid}\t{uid}\n"
            )
        (proc_dir / "cmdline").write_bytes(cmd.encode() + b"\0" if cmdline is None else cmdline)
        fd_dir = proc_dir / "fd"
        fd_dir.mkdir()
        if stdin is not None:
            os.symlink(stdin, fd_dir / "0")
        return proc_dir

    def add_entry(self, name: str) -> Path:
        """Create a non-process directory such as /proc/sys."""
        path = self.root / name
        path.mkdir()
        return path


@pytest.fixture
def fake_proc(tmp_path):
    """An empty fake process namespace."""
    return FakeProc(tmp_path / "proc")


@pytest.fixture
def stat_line():
    """Factory for stat lines."""
    return make_stat_line
