"""Persist a project model as a YAML workspace file."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from utils.logging import get_logger

from .errors import WorkspaceError
from .project import Module, Project
from .schema import ClasspathRoot, DependencyEntry


LOGGER = get_logger(__name__)


class DependencyRecord(BaseModel):
    name: str
    roots: List[str] = Field(default_factory=list)
    managed: bool = False


class ModuleRecord(BaseModel):
    name: str
    dependencies: List[DependencyRecord] = Field(default_factory=list)


class WorkspaceRecord(BaseModel):
    """On-disk layout of a workspace file."""

    name: str = "project"
    base_path: Optional[Path] = None
    modules: List[ModuleRecord] = Field(default_factory=list)

    def to_project(self) -> Project:
        modules = [
            Module(
                record.name,
                [
                    DependencyEntry(
                        name=dep.name,
                        roots=tuple(ClasspathRoot(url=url) for url in dep.roots),
                        managed=dep.managed,
                    )
                    for dep in record.dependencies
                ],
            )
            for record in self.modules
        ]
        return Project(self.name, modules, base_path=self.base_path)

    @classmethod
    def from_project(cls, project: Project) -> "WorkspaceRecord":
        return cls(
            name=project.name,
            base_path=project.base_path,
            modules=[
                ModuleRecord(
                    name=module.name,
                    dependencies=[
                        DependencyRecord(
                            name=entry.name,
                            roots=[root.url for root in entry.roots],
                            managed=entry.managed,
                        )
                        for entry in module.entries
                    ],
                )
                for module in project.modules
            ],
        )


def load_workspace(path: Path) -> Project:
    """Load the project model stored at ``path``."""

    if not path.exists():
        raise WorkspaceError(f"Workspace {path} not found")
    try:
        data: Dict[str, Any] = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise WorkspaceError(f"Unable to read workspace {path}: {exc}") from exc
    try:
        record = WorkspaceRecord.model_validate(data)
        project = record.to_project()
    except (ValidationError, ValueError) as exc:
        raise WorkspaceError(f"Invalid workspace {path}: {exc}") from exc
    LOGGER.debug("Loaded workspace %s with %d module(s)", path, len(project.modules))
    return project


def save_workspace(project: Project, path: Path) -> None:
    """Write ``project`` to ``path``, replacing the file atomically."""

    record = WorkspaceRecord.from_project(project)
    data = record.model_dump(mode="json", exclude_none=True)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(path.name + ".tmp")
    tmp_path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
    tmp_path.replace(path)
    LOGGER.debug("Saved workspace %s", path)
