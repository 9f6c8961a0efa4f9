"""In-memory project model: modules, their dependency entries and modifiable views.

A module never changes in place. Callers obtain a :class:`ModifiableModuleModel`
snapshot, edit it, and then either commit it (replacing the module's entries in
one step) or dispose it (leaving the module untouched). Both are terminal.
"""
from __future__ import annotations

import threading
from contextlib import contextmanager
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from utils.logging import get_logger

from .errors import CommitError, ModelStateError
from .schema import ClasspathRoot, DependencyEntry


LOGGER = get_logger(__name__)


class ViewState(str, Enum):
    OPEN = "open"
    COMMITTED = "committed"
    DISPOSED = "disposed"


class LibraryModel:
    """Modifiable state of a module library created inside a module view."""

    def __init__(self, owner: "ModifiableModuleModel", name: str) -> None:
        self.owner = owner
        self.name = name
        self.state = ViewState.OPEN
        self._roots: List[ClasspathRoot] = []
        self.entry: Optional[DependencyEntry] = None

    @property
    def roots(self) -> Tuple[ClasspathRoot, ...]:
        return tuple(self._roots)

    def _require_open(self, action: str) -> None:
        if self.state is not ViewState.OPEN:
            raise ModelStateError(f"Cannot {action} library {self.name!r}: model is {self.state.value}")

    def add_root(self, root: ClasspathRoot) -> None:
        self._require_open("add a root to")
        self._roots.append(root)

    def commit(self) -> DependencyEntry:
        self._require_open("commit")
        if not self._roots:
            raise CommitError(f"Library {self.name!r} has no classpath roots")
        self.entry = DependencyEntry(name=self.name, roots=tuple(self._roots), managed=True)
        self.state = ViewState.COMMITTED
        return self.entry

    def dispose(self) -> None:
        """Discard the library; it is dropped from the owning module view."""

        if self.state is ViewState.DISPOSED:
            return
        self.state = ViewState.DISPOSED
        self._roots.clear()
        self.owner._forget_library(self)


class ModifiableModuleModel:
    """Snapshot of a module's dependency entries that can be committed atomically."""

    def __init__(self, module: "Module") -> None:
        self.module = module
        self.state = ViewState.OPEN
        self._entries: List[DependencyEntry] = list(module.entries)
        self._libraries: List[LibraryModel] = []

    @property
    def entries(self) -> Tuple[DependencyEntry, ...]:
        """Existing entries still present in the view (new libraries excluded)."""

        return tuple(self._entries)

    @property
    def libraries(self) -> Tuple[LibraryModel, ...]:
        return tuple(self._libraries)

    def _require_open(self, action: str) -> None:
        if self.state is not ViewState.OPEN:
            raise ModelStateError(
                f"Cannot {action} module {self.module.name!r}: view is {self.state.value}"
            )

    def remove_entry(self, entry: DependencyEntry) -> None:
        self._require_open("remove an entry from")
        self._entries.remove(entry)

    def create_library(self, name: str) -> LibraryModel:
        self._require_open("create a library in")
        library = LibraryModel(self, name)
        self._libraries.append(library)
        return library

    def _forget_library(self, library: LibraryModel) -> None:
        if self.state is ViewState.OPEN and library in self._libraries:
            self._libraries.remove(library)

    def _final_entries(self) -> List[DependencyEntry]:
        entries = list(self._entries)
        taken = {entry.name for entry in entries}
        for library in self._libraries:
            if library.state is not ViewState.COMMITTED or library.entry is None:
                raise CommitError(f"Library {library.name!r} has uncommitted changes")
            if library.name in taken:
                raise CommitError(
                    f"Duplicate library name {library.name!r} in module {self.module.name!r}"
                )
            taken.add(library.name)
            entries.append(library.entry)
        return entries

    def commit(self) -> None:
        self._require_open("commit")
        entries = self._final_entries()
        self.module._replace_entries(entries)
        self.state = ViewState.COMMITTED

    def dispose(self) -> None:
        if self.state is ViewState.DISPOSED:
            return
        if self.state is ViewState.COMMITTED:
            raise ModelStateError(f"Cannot dispose module {self.module.name!r}: view is committed")
        for library in list(self._libraries):
            library.dispose()
        self.state = ViewState.DISPOSED


class Module:
    """A build module owning an ordered list of dependency entries."""

    def __init__(self, name: str, entries: Optional[Iterable[DependencyEntry]] = None) -> None:
        self.name = name
        self._entries: List[DependencyEntry] = list(entries or [])

    @property
    def entries(self) -> Tuple[DependencyEntry, ...]:
        return tuple(self._entries)

    def entry_names(self) -> List[str]:
        return [entry.name for entry in self._entries]

    def modifiable_model(self) -> ModifiableModuleModel:
        return ModifiableModuleModel(self)

    def _replace_entries(self, entries: Iterable[DependencyEntry]) -> None:
        self._entries = list(entries)

    def __repr__(self) -> str:
        return f"Module(name={self.name!r}, entries={len(self._entries)})"


class Project:
    """Collection of modules sharing one exclusive write lock."""

    def __init__(
        self,
        name: str = "project",
        modules: Optional[Iterable[Module]] = None,
        base_path: Optional[Path] = None,
    ) -> None:
        self.name = name
        self.base_path = base_path
        self._modules: Dict[str, Module] = {}
        self._lock = threading.RLock()
        for module in modules or []:
            self.add_module(module)

    @property
    def modules(self) -> Tuple[Module, ...]:
        return tuple(self._modules.values())

    def add_module(self, module: Module) -> Module:
        if module.name in self._modules:
            raise ValueError(f"Module {module.name!r} already exists in project {self.name!r}")
        self._modules[module.name] = module
        return module

    def module(self, name: str) -> Module:
        try:
            return self._modules[name]
        except KeyError:
            raise KeyError(f"Unknown module {name!r}") from None

    @contextmanager
    def write_lock(self) -> Iterator["Project"]:
        """Hold exclusive mutation access to the project's dependency configuration."""

        with self._lock:
            LOGGER.debug("Acquired write lock for project %s", self.name)
            yield self
