"""Drive a scan followed by reconciliation and summarise the outcome."""
from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence, Union

from utils.config import AppConfig
from utils.logging import get_logger
from utils.parallel import run_in_executor

from .project import Module, Project
from .reconciler import ModuleLibraryReconciler
from .resolvers import JarRootResolver, ResolverChain
from .scanner import CancelCheck, DirectoryScanner, ScanConfig
from .schema import RunSummary, ScanResult


LOGGER = get_logger(__name__)


class ConsolidationRunner:
    """Scan a directory for archives and register them on a project's modules."""

    def __init__(
        self,
        scanner: Optional[DirectoryScanner] = None,
        reconciler: Optional[ModuleLibraryReconciler] = None,
    ) -> None:
        self.scanner = scanner or DirectoryScanner()
        self.reconciler = reconciler or ModuleLibraryReconciler()

    @classmethod
    def from_config(cls, config: AppConfig) -> "ConsolidationRunner":
        return cls(
            scanner=DirectoryScanner(ScanConfig.from_app_config(config)),
            reconciler=ModuleLibraryReconciler(
                resolver=ResolverChain([JarRootResolver(extensions=(config.archive_suffix,))]),
                prune_managed=config.prune_managed,
            ),
        )

    def _root_for(self, project: Project, root: Optional[Union[str, Path]]) -> Path:
        if root is not None:
            return Path(root)
        if project.base_path is None:
            raise ValueError(f"Project {project.name!r} has no base path and no root was given")
        return Path(project.base_path)

    def _select_modules(self, project: Project, names: Optional[Sequence[str]]) -> List[Module]:
        if not names:
            return list(project.modules)
        return [project.module(name) for name in names]

    def apply(
        self,
        project: Project,
        scan: ScanResult,
        module_names: Optional[Sequence[str]] = None,
    ) -> RunSummary:
        """Reconcile ``project`` against a finished scan."""

        summary = RunSummary(root=scan.root, archive_count=len(scan.archives), cancelled=scan.cancelled)
        if scan.cancelled:
            LOGGER.info("Scan was cancelled; leaving modules unchanged")
            return summary
        if not scan.archives:
            LOGGER.info("No archives found under %s", scan.root)
            return summary

        with project.write_lock():
            modules = self._select_modules(project, module_names)
            summary.outcomes = self.reconciler.reconcile(modules, scan.archives)
        return summary

    def run(
        self,
        project: Project,
        root: Optional[Union[str, Path]] = None,
        is_cancelled: Optional[CancelCheck] = None,
        module_names: Optional[Sequence[str]] = None,
    ) -> RunSummary:
        scan = self.scanner.scan(self._root_for(project, root), is_cancelled=is_cancelled)
        return self.apply(project, scan, module_names)

    async def run_async(
        self,
        project: Project,
        root: Optional[Union[str, Path]] = None,
        is_cancelled: Optional[CancelCheck] = None,
        module_names: Optional[Sequence[str]] = None,
    ) -> RunSummary:
        """Like :meth:`run`, but scan and reconcile on a background thread.

        The two phases run one after the other in the executor, so the event
        loop is never blocked by filesystem access.
        """

        scan = await run_in_executor(
            self.scanner.scan, self._root_for(project, root), is_cancelled=is_cancelled
        )
        return await run_in_executor(self.apply, project, scan, module_names)
