"""Scan a project tree for jar archives and register them as module libraries."""

from .errors import (
    ArchiveResolutionError,
    CancelledError,
    CommitError,
    ConsolidatorError,
    ModelStateError,
    ScanIOError,
    WorkspaceError,
)
from .project import LibraryModel, ModifiableModuleModel, Module, Project, ViewState
from .reconciler import ModuleLibraryReconciler
from .runner import ConsolidationRunner
from .scanner import CancellationFlag, DirectoryScanner, ScanConfig, SkipRule
from .schema import ArchiveFile, ClasspathRoot, DependencyEntry, ModuleOutcome, RunSummary, ScanResult
from .workspace import load_workspace, save_workspace

__all__ = [
    "ArchiveFile",
    "ArchiveResolutionError",
    "CancellationFlag",
    "CancelledError",
    "ClasspathRoot",
    "CommitError",
    "ConsolidationRunner",
    "ConsolidatorError",
    "DependencyEntry",
    "DirectoryScanner",
    "LibraryModel",
    "ModelStateError",
    "ModifiableModuleModel",
    "Module",
    "ModuleLibraryReconciler",
    "ModuleOutcome",
    "Project",
    "RunSummary",
    "ScanConfig",
    "ScanIOError",
    "ScanResult",
    "SkipRule",
    "ViewState",
    "WorkspaceError",
    "load_workspace",
    "save_workspace",
]
