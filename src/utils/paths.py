"""Path utility helpers."""
from __future__ import annotations

from pathlib import Path


def normalise_path(path: Path) -> Path:
    """Return an absolute path with user expansion and Windows separators handled."""

    return Path(str(path).replace("\\", "/")).expanduser().resolve()


def jar_url(path: Path) -> str:
    """Return the ``jar://`` URL addressing the root of the archive at ``path``."""

    return f"jar://{normalise_path(path).as_posix()}!/"
