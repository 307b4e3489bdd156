"""Process table builder: one snapshot of the process namespace."""

import logging
import os
import re
import sys

from pyps.config import PsConfig
from pyps.errors import DirectoryListingFailure, PypsError, UnreadableSource
from pyps.models import ProcessEntry, ProcessTable
from pyps.reader import ProcessReader

logger = logging.getLogger(__name__)

PID_PATTERN = re.compile(r"[0-9]+")


def is_process_id(name: str) -> bool:
    """True if a directory entry name is a process id."""
    return PID_PATTERN.fullmatch(name) is not None


def terminal_width(fd: int | None = None) -> int | None:
    """Column count of the terminal on ``fd`` (stdout by default), or None."""
    if fd is None:
        try:
            fd = sys.stdout.fileno()
        except (AttributeError, OSError, ValueError):
            return None
    try:
        return os.get_terminal_size(fd).columns
    except (OSError, ValueError):
        return None


class ProcessTableBuilder:
    """
    Scans the process namespace root and reads every process found there.

    Only the direct children of the root are considered; per-process
    directories are never descended into. A process that cannot be read is
    logged and left out of the table.
    """

    def __init__(
        self,
        config: PsConfig | None = None,
        reader: ProcessReader | None = None,
        width_probe=terminal_width,
    ) -> None:
        """
        Initialize the builder.

        Args:
            config: Options; defaults to reading /proc.
            reader: Per-process reader; defaults to one built from config.
            width_probe: Callable returning the display width or None.
        """
        self._config = config or PsConfig()
        self._reader = reader or ProcessReader(self._config)
        self._width_probe = width_probe

    def process_ids(self) -> list[str]:
        """List the process ids present under the root, in listing order."""
        root = self._config.proc_root
        try:
            with os.scandir(root) as it:
                return [entry.name for entry in it if is_process_id(entry.name)]
        except OSError as exc:
            raise DirectoryListingFailure(root, exc) from exc

    def build(self) -> ProcessTable:
        """
        Take one snapshot of all processes.

        Raises:
            DirectoryListingFailure: the namespace root could not be listed.
        """
        entries: list[ProcessEntry] = []
        skipped = 0

        for pid in self.process_ids():
            try:
                entries.append(self._reader.fetch(pid))
            except PypsError as exc:
                skipped += 1
                if isinstance(exc, UnreadableSource) and exc.vanished:
                    logger.debug("process %s exited during scan: %s", pid, exc)
                else:
                    logger.warning("skipping process %s: %s", pid, exc)

        width = self._width_probe()
        logger.info(
            "snapshot of %s: %d processes, %d skipped, width %s",
            self._config.proc_root,
            len(entries),
            skipped,
            width if width is not None else "unknown",
        )
        return ProcessTable(entries=tuple(entries), max_width=width)
