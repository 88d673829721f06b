"""Exception hierarchy. Library errors are converted at module boundaries."""
from pathlib import Path


class VdbAdminError(Exception):
    """Base class for every failure the CLI reports."""


class UsageError(VdbAdminError):
    """Missing, unknown or extra command line arguments."""


class ParseError(VdbAdminError):
    """An entity file could not be read as a record."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


class RecordError(VdbAdminError):
    """A parsed record cannot be turned into a search document."""


class IndexStoreError(VdbAdminError):
    """A call against the search index failed."""


class KeyValueStoreError(VdbAdminError):
    """A call against the Redis database failed."""
