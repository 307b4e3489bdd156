"""Exceptions raised while reading the process namespace."""


class PypsError(Exception):
    """Base class for all pyps errors."""


class MalformedRecord(PypsError):
    """A record does not match the expected schema."""


class UnreadableSource(PypsError):
    """A per-process file could not be read."""

    def __init__(self, path: str, reason: OSError | None = None) -> None:
        self.path = path
        self.reason = reason
        detail = reason.strerror if reason is not None and reason.strerror else reason
        super().__init__(f"cannot read {path}: {detail}")

    @property
    def vanished(self) -> bool:
        """True when the process exited before it could be read."""
        return isinstance(self.reason, (FileNotFoundError, ProcessLookupError))


class DirectoryListingFailure(PypsError):
    """The process namespace root could not be listed."""

    def __init__(self, path: str, reason: OSError) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"cannot list {path}: {reason.strerror or reason}")


class InvalidFieldValue(PypsError, ValueError):
    """A textual field could not be parsed as the requested type."""


class UnknownField(PypsError, KeyError):
    """A field name outside the record schema was requested."""

    def __str__(self) -> str:
        return f"unknown field: {self.args[0]!r}"
