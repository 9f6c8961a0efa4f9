"""Filesystem scanning for jar archives to register as module libraries."""
from __future__ import annotations

import os
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, FrozenSet, Iterable, Optional, Set, Tuple, Union

from utils.config import DEFAULT_SKIP_DIRS, AppConfig
from utils.logging import get_logger
from utils.paths import normalise_path

from .errors import CancelledError, ScanIOError
from .schema import ArchiveFile, ScanResult


LOGGER = get_logger(__name__)

CancelCheck = Callable[[], bool]


def _never_cancelled() -> bool:
    return False


@dataclass(slots=True, frozen=True)
class SkipRule:
    """Name-based predicate deciding which directories are pruned from a scan.

    Only directory names are ever tested; files are never skipped by this rule.
    """

    names: FrozenSet[str] = frozenset(DEFAULT_SKIP_DIRS)
    skip_hidden: bool = True

    @classmethod
    def from_names(cls, names: Iterable[str], skip_hidden: bool = True) -> "SkipRule":
        return cls(names=frozenset(names), skip_hidden=skip_hidden)

    def matches(self, name: str) -> bool:
        if self.skip_hidden and name.startswith("."):
            return True
        return name in self.names


@dataclass(slots=True)
class ScanConfig:
    """Configuration parameters controlling scan behaviour."""

    suffix: str = ".jar"
    skip_rule: SkipRule = field(default_factory=SkipRule)
    follow_symlinks: bool = False
    max_depth: Optional[int] = None

    def __post_init__(self) -> None:
        suffix = self.suffix.strip().lower()
        self.suffix = suffix if suffix.startswith(".") else f".{suffix}"
        if self.max_depth is not None and self.max_depth < 0:
            raise ValueError("max_depth must be >= 0")

    @classmethod
    def from_app_config(cls, config: AppConfig) -> "ScanConfig":
        return cls(
            suffix=config.archive_suffix,
            skip_rule=SkipRule.from_names(config.skip_dirs, skip_hidden=config.skip_hidden),
            follow_symlinks=config.follow_symlinks,
            max_depth=config.max_depth,
        )


class CancellationFlag:
    """Thread-safe flag that a scan polls to stop early.

    Instances are callable, so they can be passed directly as ``is_cancelled``.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def __call__(self) -> bool:
        return self._event.is_set()


class DirectoryScanner:
    """Walk a directory tree depth-first and collect archive files."""

    def __init__(self, config: Optional[ScanConfig] = None) -> None:
        self.config = config or ScanConfig()

    def scan(self, root: Union[str, Path], is_cancelled: Optional[CancelCheck] = None) -> ScanResult:
        root = normalise_path(Path(root))
        if not root.exists():
            raise FileNotFoundError(f"Scan root {root} does not exist")
        if not root.is_dir():
            raise NotADirectoryError(f"Scan root {root} is not a directory")

        check = is_cancelled or _never_cancelled
        result = ScanResult(root=root)
        visited: Set[Tuple[int, int]] = set()
        if self.config.follow_symlinks:
            self._mark_visited(root, visited)

        LOGGER.debug("Scanning %s for *%s files", root, self.config.suffix)
        try:
            self._walk(root, 0, check, result, visited)
        except CancelledError as exc:
            LOGGER.info("%s; keeping %d archive(s) found so far", exc, len(result.archives))
            result.cancelled = True
        else:
            LOGGER.info("Found %d archive(s) under %s", len(result.archives), root)
        return result

    def _mark_visited(self, path: Path, visited: Set[Tuple[int, int]]) -> bool:
        try:
            st = os.stat(path)
        except OSError as exc:
            LOGGER.debug("stat failed for %s: %s", path, exc)
            return False
        key = (st.st_dev, st.st_ino)
        if key in visited:
            return False
        visited.add(key)
        return True

    def _walk(
        self,
        directory: Path,
        depth: int,
        check: CancelCheck,
        result: ScanResult,
        visited: Set[Tuple[int, int]],
    ) -> None:
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda entry: entry.name)
        except OSError as exc:
            error = ScanIOError(directory, exc)
            LOGGER.warning("%s", error)
            result.errors.append(str(error))
            return

        follow = self.config.follow_symlinks
        max_depth = self.config.max_depth
        for entry in entries:
            if check():
                raise CancelledError(f"Scan cancelled before {entry.path}")
            path = Path(entry.path)
            try:
                is_dir = entry.is_dir(follow_symlinks=follow)
                is_file = not is_dir and entry.is_file()
            except OSError as exc:
                LOGGER.debug("Unable to inspect %s: %s", path, exc)
                continue

            if is_dir:
                if self.config.skip_rule.matches(entry.name):
                    LOGGER.debug("Skipping directory %s", path)
                    continue
                if max_depth is not None and depth >= max_depth:
                    continue
                if follow and not self._mark_visited(path, visited):
                    LOGGER.debug("Skipping already visited directory %s", path)
                    continue
                self._walk(path, depth + 1, check, result, visited)
            elif is_file and entry.name.lower().endswith(self.config.suffix):
                try:
                    size = entry.stat().st_size
                except OSError as exc:
                    LOGGER.debug("Archive vanished during scan %s: %s", path, exc)
                    continue
                LOGGER.debug("Found archive %s", path)
                result.archives.append(ArchiveFile.from_path(path, size))
