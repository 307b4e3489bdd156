"""Tests for ps-style rendering."""

import os
import pwd

import psutil
import pytest

from pyps.decoder import decode_stat
from pyps.models import ProcessEntry, ProcessTable
from pyps.render import (
    DEFAULT_COLUMNS,
    USER_COLUMNS,
    Selection,
    format_rows,
    own_terminal,
    render,
    select,
    user_name,
)


def make_entry(stat_line, pid, cmd, ctty="?", time="00:00:00", proc_root="/proc", **fields):
    record = decode_stat(stat_line(pid, cmd, **fields))
    return ProcessEntry(record, ctty, time, cmd, proc_root)


@pytest.fixture
def table(stat_line):
    entries = (
        make_entry(stat_line, 1, "init"),
        make_entry(stat_line, 42, "bash", ctty="pts/0", time="00:00:02"),
        make_entry(stat_line, 77, "vim", ctty="pts/1"),
    )
    return ProcessTable(entries=entries, max_width=None)


class TestSelection:
    """Tests for process selection modes."""

    def test_selection_values(self):
        assert Selection.TTY.value == "tty"
        assert Selection.ALL.value == "all"
        assert Selection.WITH_TTY.value == "with_tty"

    def test_all(self, table):
        assert [e.record.pid for e in select(table, Selection.ALL)] == ["1", "42", "77"]

    def test_with_tty(self, table):
        assert [e.record.pid for e in select(table, Selection.WITH_TTY)] == ["42", "77"]

    def test_same_tty(self, table):
        assert [e.record.pid for e in select(table, Selection.TTY, "pts/1")] == ["77"]

    def test_same_tty_without_terminal(self, table):
        assert [e.record.pid for e in select(table, Selection.TTY)] == ["1"]


class TestFormatRows:
    """Tests for column layout."""

    def test_default_layout(self, stat_line):
        entries = [
            make_entry(stat_line, 1, "sh", ctty="pts/0", time="00:00:02"),
            make_entry(stat_line, 42, "init"),
        ]

        lines = format_rows(entries)

        assert lines == [
            "PID TTY" + " " * 7 + "TIME CMD",
            "  1 pts/0 00:00:02 sh",
            " 42 ?     00:00:00 init",
        ]

    def test_header_only_when_empty(self):
        assert format_rows([]) == ["PID TTY TIME CMD"]

    def test_lines_are_cut_to_max_width(self, stat_line):
        entries = [make_entry(stat_line, 1, "a-very-long-command-name")]

        lines = format_rows(entries, max_width=20)

        assert all(len(line) <= 20 for line in lines)
        assert lines[1] == "  1 ?   00:00:00 a-v"

    def test_last_column_is_not_padded(self, stat_line):
        entries = [make_entry(stat_line, 1, "x"), make_entry(stat_line, 2, "longer")]
        lines = format_rows(entries)
        assert not lines[1].endswith(" ")

    def test_user_columns(self, fake_proc):
        uid = os.getuid()
        fake_proc.add_process(5, "sshd", uid=uid, ppid=1, state="S")
        record = decode_stat((fake_proc.root / "5" / "stat").read_text())
        entry = ProcessEntry(record, "?", "00:00:00", "sshd", str(fake_proc.root))

        header, row = format_rows([entry], USER_COLUMNS)

        assert header.split() == ["USER", "PID", "PPID", "STAT", "TTY", "TIME", "CMD"]
        assert row.split() == [pwd.getpwuid(uid).pw_name, "5", "1", "S", "?", "00:00:00", "sshd"]

    def test_default_columns(self):
        assert [c.header for c in DEFAULT_COLUMNS] == ["PID", "TTY", "TIME", "CMD"]


class TestUserName:
    """Tests for owner resolution."""

    def test_unknown_uid_falls_back_to_number(self, fake_proc, stat_line):
        fake_proc.add_process(5, "x", uid=4242424)
        entry = make_entry(stat_line, 5, "x", proc_root=str(fake_proc.root))
        assert user_name(entry) == "4242424"

    def test_unreadable_owner(self, fake_proc, stat_line):
        fake_proc.add_process(5, "x", uid=None)
        entry = make_entry(stat_line, 5, "x", proc_root=str(fake_proc.root))
        assert user_name(entry) == "?"

    @pytest.mark.skipif(not os.path.isdir("/proc/self"), reason="requires /proc")
    def test_live_process_owner_comes_from_psutil(self, stat_line):
        entry = make_entry(stat_line, os.getpid(), "python")
        assert user_name(entry) == psutil.Process().username()

    def test_vanished_live_process(self, stat_line):
        # Above the largest pid_max the kernel allows.
        entry = make_entry(stat_line, 99999999, "gone")
        assert user_name(entry) == "?"


def test_own_terminal(fake_proc):
    self_dir = fake_proc.add_entry("self")
    (self_dir / "fd").mkdir()
    os.symlink("/dev/pts/9", self_dir / "fd" / "0")

    assert own_terminal(fake_proc.config) == "pts/9"


def test_own_terminal_unknown(fake_proc):
    assert own_terminal(fake_proc.config) == "?"


def test_render(table):
    output = render(table, Selection.WITH_TTY)
    lines = output.splitlines()

    assert lines[0].split() == ["PID", "TTY", "TIME", "CMD"]
    assert [line.split()[0] for line in lines[1:]] == ["42", "77"]


def test_render_uses_table_width(stat_line):
    table = ProcessTable(
        entries=(make_entry(stat_line, 1, "x" * 100),),
        max_width=40,
    )
    assert all(len(line) <= 40 for line in render(table, Selection.ALL).splitlines())
