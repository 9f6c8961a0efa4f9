"""Resolver for jar (zip container) archives."""
from __future__ import annotations

import zipfile
from pathlib import Path
from typing import Iterable, Optional, Tuple

from utils.logging import get_logger
from utils.paths import jar_url, normalise_path

from ..errors import ArchiveResolutionError
from ..schema import ClasspathRoot
from .base import RootResolver


LOGGER = get_logger(__name__)


class JarRootResolver(RootResolver):
    """Map a jar file to the ``jar://...!/`` root of its contents."""

    extensions: Tuple[str, ...] = (".jar",)

    def __init__(self, verify_container: bool = True, extensions: Optional[Iterable[str]] = None) -> None:
        self.verify_container = verify_container
        if extensions is not None:
            self.extensions = tuple(ext.lower() for ext in extensions)

    def resolve(self, path: Path) -> ClasspathRoot:
        try:
            if not path.is_file():
                raise ArchiveResolutionError(path, "file no longer exists")
            if self.verify_container and not zipfile.is_zipfile(path):
                raise ArchiveResolutionError(path, "not a valid zip container")
        except OSError as exc:
            raise ArchiveResolutionError(path, str(exc)) from exc
        root = ClasspathRoot(url=jar_url(path), path=normalise_path(path))
        LOGGER.debug("Resolved %s to %s", path, root.url)
        return root
