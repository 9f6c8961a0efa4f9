from __future__ import annotations

import sys
import zipfile
from pathlib import Path
from typing import Callable

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = PROJECT_ROOT / "src"
for path in (SRC_ROOT, PROJECT_ROOT):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from consolidator.resolvers import RootResolver  # noqa: E402
from consolidator.schema import ClasspathRoot  # noqa: E402


def write_jar(path: Path) -> Path:
    """Create a minimal but valid jar (zip) file at ``path``."""

    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, "w") as archive:
        archive.writestr("META-INF/MANIFEST.MF", "Manifest-Version: 1.0\n")
    return path


class InMemoryResolver(RootResolver):
    """Resolve any path without touching the filesystem."""

    def resolve(self, path: Path) -> ClasspathRoot:
        return ClasspathRoot(url=f"jar://{path.as_posix()}!/", path=path)


@pytest.fixture
def make_jar(tmp_path: Path) -> Callable[[str], Path]:
    def _make(relative: str) -> Path:
        return write_jar(tmp_path / relative)

    return _make


@pytest.fixture
def memory_resolver() -> InMemoryResolver:
    return InMemoryResolver()
