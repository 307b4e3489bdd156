"""Runtime options for pyps."""

from dataclasses import dataclass, replace

import psutil

# Kernel USER_HZ; fixed at 100 on every mainstream Linux architecture.
USER_HZ = 100


@dataclass(slots=True, frozen=True)
class PsConfig:
    """Immutable options shared by the reader, builder and renderers."""

    proc_root: str = psutil.PROCFS_PATH
    ticks_per_second: int = USER_HZ
    long_command_lines: bool = False
    dev_prefix: str = "/dev/"

    def with_options(self, **changes) -> "PsConfig":
        """Return a copy of this config with some options changed."""
        return replace(self, **changes)
