"""Base protocol for resolving archive files into classpath roots."""
from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable

from ..schema import ClasspathRoot


class RootResolver(ABC):
    """Abstract base class for classpath root resolvers."""

    extensions: Iterable[str] = ()

    def sniff(self, path: Path) -> bool:
        """Return ``True`` if the resolver can handle the given path."""

        if not self.extensions:
            return True
        name = path.name.lower()
        return any(name.endswith(ext.lower()) for ext in self.extensions)

    @abstractmethod
    def resolve(self, path: Path) -> ClasspathRoot:
        """Return the classpath root for ``path`` or raise ``ArchiveResolutionError``."""
