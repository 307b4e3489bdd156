"""pyps - a ps-like process table built from /proc."""

from pyps.config import PsConfig
from pyps.errors import (
    DirectoryListingFailure,
    InvalidFieldValue,
    MalformedRecord,
    PypsError,
    UnknownField,
    UnreadableSource,
)
from pyps.models import ProcessEntry, ProcessRecord, ProcessTable
from pyps.reader import ProcessReader
from pyps.table import ProcessTableBuilder

__version__ = "0.1.0"

__all__ = [
    "DirectoryListingFailure",
    "InvalidFieldValue",
    "MalformedRecord",
    "ProcessEntry",
    "ProcessReader",
    "ProcessRecord",
    "ProcessTable",
    "ProcessTableBuilder",
    "PsConfig",
    "PypsError",
    "UnknownField",
    "UnreadableSource",
]
