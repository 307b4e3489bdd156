"""Per-process reader combining the decoder and the enricher."""

from pyps.config import PsConfig
from pyps.decoder import read_stat
from pyps.enricher import controlling_terminal, cpu_time, long_command_line
from pyps.models import ProcessEntry


class ProcessReader:
    """Builds a fully populated ProcessEntry for one process id."""

    def __init__(self, config: PsConfig | None = None) -> None:
        self._config = config or PsConfig()

    @property
    def config(self) -> PsConfig:
        """Options this reader was built with."""
        return self._config

    def fetch(self, pid: str) -> ProcessEntry:
        """
        Read one process.

        Raises:
            MalformedRecord: the stat record does not match the schema.
            UnreadableSource: stat, or cmdline when long command lines are
                enabled, could not be read.
        """
        record = read_stat(pid, self._config)
        command = record.cmd
        if self._config.long_command_lines:
            cmdline = long_command_line(pid, self._config)
            if cmdline:
                command = cmdline

        return ProcessEntry(
            record=record,
            ctty=controlling_terminal(record, self._config),
            time=cpu_time(record, self._config),
            command=command,
            proc_root=self._config.proc_root,
        )
