"""Exception hierarchy shared by the scanner, reconciler and workspace store."""
from __future__ import annotations

from pathlib import Path
from typing import Optional


class ConsolidatorError(Exception):
    """Base class for all errors raised by the consolidator package."""


class ScanIOError(ConsolidatorError):
    """A directory could not be listed; the subtree is treated as empty."""

    def __init__(self, path: Path, cause: Optional[BaseException] = None) -> None:
        self.path = path
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Unable to list directory {path}{detail}")


class ArchiveResolutionError(ConsolidatorError):
    """An archive path could not be turned into a usable classpath root."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot resolve {path.name}: {reason}")


class CommitError(ConsolidatorError):
    """A modifiable view or library model failed to commit."""


class ModelStateError(CommitError):
    """An operation was attempted on a view that is already committed or disposed."""


class CancelledError(ConsolidatorError):
    """Cooperative cancellation was observed while scanning."""


class WorkspaceError(ConsolidatorError):
    """The workspace file is missing, unreadable or malformed."""
