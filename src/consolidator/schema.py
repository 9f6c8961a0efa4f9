"""Pydantic models describing scan results, dependency entries and run outcomes."""
from __future__ import annotations

from pathlib import Path
from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


OutcomeStatus = Literal["success", "partial_failure", "failure"]


class ArchiveFile(BaseModel):
    """A jar archive discovered on disk."""

    model_config = ConfigDict(frozen=True)

    path: Path
    name: str
    size_bytes: int = Field(default=0, ge=0)

    @field_validator("path")
    @classmethod
    def validate_absolute(cls, value: Path) -> Path:
        if not value.is_absolute():
            raise ValueError(f"archive path must be absolute; got {value}")
        return value

    @classmethod
    def from_path(cls, path: Path, size_bytes: int = 0) -> "ArchiveFile":
        return cls(path=path, name=path.name, size_bytes=size_bytes)


class ScanResult(BaseModel):
    """Archives found by one scan, in traversal order."""

    root: Path
    archives: List[ArchiveFile] = Field(default_factory=list)
    cancelled: bool = False
    errors: List[str] = Field(default_factory=list)

    @property
    def names(self) -> List[str]:
        return [archive.name for archive in self.archives]


class ClasspathRoot(BaseModel):
    """Loadable representation of an archive's contents."""

    model_config = ConfigDict(frozen=True)

    url: str
    path: Optional[Path] = None

    @field_validator("url")
    @classmethod
    def validate_url(cls, value: str) -> str:
        if "://" not in value:
            raise ValueError(f"classpath root must be a URL; got {value!r}")
        return value


class DependencyEntry(BaseModel):
    """A named module library pointing at one or more classpath roots."""

    model_config = ConfigDict(frozen=True)

    name: str
    roots: Tuple[ClasspathRoot, ...] = ()
    managed: bool = False


class ModuleOutcome(BaseModel):
    """Result of reconciling a single module."""

    module: str
    status: OutcomeStatus
    messages: List[str] = Field(default_factory=list)
    added: List[str] = Field(default_factory=list)
    removed: List[str] = Field(default_factory=list)

    @property
    def failed(self) -> bool:
        return self.status == "failure"


class RunSummary(BaseModel):
    """Aggregate, user-facing summary of a scan-and-reconcile run."""

    root: Path
    archive_count: int = Field(ge=0)
    cancelled: bool = False
    outcomes: List[ModuleOutcome] = Field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return not self.cancelled and not any(outcome.failed for outcome in self.outcomes)

    @property
    def failures(self) -> List[ModuleOutcome]:
        return [outcome for outcome in self.outcomes if outcome.failed]

    @property
    def warnings(self) -> List[str]:
        return [
            f"{outcome.module}: {message}"
            for outcome in self.outcomes
            if outcome.status == "partial_failure"
            for message in outcome.messages
        ]

    def message(self) -> str:
        """Render the summary as text suitable for showing to a user."""

        if self.cancelled:
            return f"Scan cancelled after finding {self.archive_count} jar file(s); no modules were changed."
        if self.archive_count == 0:
            return "No jar files found."
        failures = self.failures
        if failures:
            lines = [f"Failed to configure {len(failures)} of {len(self.outcomes)} module(s):"]
            lines.extend(f"  - {outcome.module}: {'; '.join(outcome.messages)}" for outcome in failures)
            return "\n".join(lines)
        text = (
            f"Added {self.archive_count} jar file(s) as independent libraries "
            f"to {len(self.outcomes)} module(s)."
        )
        warnings = self.warnings
        if warnings:
            text += "\nWarnings:\n" + "\n".join(f"  - {warning}" for warning in warnings)
        return text
