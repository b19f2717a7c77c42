"""
Exception types raised by the accent engine.

Only two conditions are surfaced to callers:

- SourceParseError: one GrammarDB document could not be read or parsed.
  The builder logs it and moves on to the next document.
- StorageError: the LMDB index failed (disk, corruption, full map).
  Fatal for the operation in progress.

A word missing from the lexicon is not an error at all.
"""

from pathlib import Path
from typing import Optional


class AccentError(Exception):
    """Base class for all belaccent errors."""


class SourceParseError(AccentError):
    """A source dictionary document is malformed or unreadable."""

    def __init__(self, path: Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Cannot parse {self.path.name}: {reason}")


class StorageError(AccentError):
    """The persisted lexicon index failed."""

    def __init__(self, message: str, db_path: Optional[Path] = None):
        self.db_path = db_path
        if db_path is not None:
            message = f"{message} (database: {db_path})"
        super().__init__(message)
