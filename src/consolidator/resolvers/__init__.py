"""Classpath root resolvers used by the module library reconciler."""
from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from ..errors import ArchiveResolutionError
from ..schema import ClasspathRoot
from .base import RootResolver
from .jar import JarRootResolver


class ResolverChain(RootResolver):
    """Dispatch to the first registered resolver that accepts a path."""

    def __init__(self, resolvers: Optional[Sequence[RootResolver]] = None) -> None:
        self.resolvers = list(resolvers or [JarRootResolver()])

    def sniff(self, path: Path) -> bool:
        return any(resolver.sniff(path) for resolver in self.resolvers)

    def resolve(self, path: Path) -> ClasspathRoot:
        for resolver in self.resolvers:
            if resolver.sniff(path):
                return resolver.resolve(path)
        raise ArchiveResolutionError(path, "no resolver accepts this file type")


__all__ = [
    "RootResolver",
    "JarRootResolver",
    "ResolverChain",
]
