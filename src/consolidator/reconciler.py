"""Reconcile each module's library entries against the archives of a scan."""
from __future__ import annotations

from collections import OrderedDict
from typing import Dict, List, Optional, Sequence, Set

from utils.logging import get_logger

from .errors import ArchiveResolutionError, ConsolidatorError
from .project import ModifiableModuleModel, Module
from .resolvers import ResolverChain, RootResolver
from .schema import ArchiveFile, DependencyEntry, ModuleOutcome


LOGGER = get_logger(__name__)


def unique_by_name(archives: Sequence[ArchiveFile]) -> List[ArchiveFile]:
    """Collapse archives sharing a base name; the last one in scan order wins.

    The surviving archive keeps the position of the first occurrence.
    """

    chosen: Dict[str, ArchiveFile] = OrderedDict()
    for archive in archives:
        previous = chosen.get(archive.name)
        if previous is not None:
            LOGGER.warning(
                "Duplicate archive name %s: %s replaces %s", archive.name, archive.path, previous.path
            )
        chosen[archive.name] = archive
    return list(chosen.values())


class ModuleLibraryReconciler:
    """Register every archive as a named module library on each module.

    For every module a modifiable view is taken, entries named after the
    archives (and, with ``prune_managed``, every entry this tool created
    earlier) are removed, one library per archive is added, and the view is
    committed. A failure in one module never affects the others.
    """

    def __init__(self, resolver: Optional[RootResolver] = None, prune_managed: bool = True) -> None:
        self.resolver = resolver or ResolverChain()
        self.prune_managed = prune_managed

    def reconcile(self, modules: Sequence[Module], archives: Sequence[ArchiveFile]) -> List[ModuleOutcome]:
        unique = unique_by_name(archives)
        outcomes = [self.reconcile_module(module, unique) for module in modules]
        failed = sum(1 for outcome in outcomes if outcome.failed)
        LOGGER.info(
            "Reconciled %d module(s) with %d archive(s); %d failed",
            len(outcomes),
            len(unique),
            failed,
        )
        return outcomes

    def _removal_set(self, view: ModifiableModuleModel, names: Set[str]) -> List[DependencyEntry]:
        return [
            entry
            for entry in view.entries
            if entry.name in names or (self.prune_managed and entry.managed)
        ]

    def _add_library(self, view: ModifiableModuleModel, archive: ArchiveFile, warnings: List[str]) -> bool:
        try:
            root = self.resolver.resolve(archive.path)
        except ArchiveResolutionError as exc:
            LOGGER.warning("Skipping %s for module %s: %s", archive.name, view.module.name, exc.reason)
            warnings.append(f"skipped {archive.name}: {exc.reason}")
            return False

        library = view.create_library(archive.name)
        try:
            library.add_root(root)
            library.commit()
        except ConsolidatorError as exc:
            library.dispose()
            LOGGER.warning("Unable to add %s to module %s: %s", archive.name, view.module.name, exc)
            warnings.append(f"could not add {archive.name}: {exc}")
            return False
        return True

    def reconcile_module(self, module: Module, archives: Sequence[ArchiveFile]) -> ModuleOutcome:
        """Reconcile one module; ``archives`` must already be unique by name."""

        names = {archive.name for archive in archives}
        warnings: List[str] = []
        view = module.modifiable_model()
        try:
            stale = self._removal_set(view, names)
            for entry in stale:
                view.remove_entry(entry)

            added = [archive.name for archive in archives if self._add_library(view, archive, warnings)]
            view.commit()
        except (ConsolidatorError, ValueError) as exc:
            view.dispose()
            LOGGER.warning("Configuring dependencies for module %s failed: %s", module.name, exc)
            return ModuleOutcome(
                module=module.name,
                status="failure",
                messages=[f"Error configuring dependencies for module {module.name}: {exc}"],
            )

        LOGGER.debug(
            "Module %s: removed %d entr(ies), added %d librar(ies)", module.name, len(stale), len(added)
        )
        return ModuleOutcome(
            module=module.name,
            status="partial_failure" if warnings else "success",
            messages=warnings,
            added=added,
            removed=[entry.name for entry in stale],
        )
