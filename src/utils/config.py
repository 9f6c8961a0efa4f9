"""Configuration helpers for jar-libs-consolidator."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator


DEFAULT_SKIP_DIRS = ["node_modules", "target", "build", ".gradle", ".mvn"]


class AppConfig(BaseModel):
    """Application level configuration."""

    archive_suffix: str = Field(default=".jar")
    skip_hidden: bool = Field(default=True)
    skip_dirs: List[str] = Field(default_factory=lambda: list(DEFAULT_SKIP_DIRS))
    follow_symlinks: bool = Field(default=False)
    max_depth: Optional[int] = Field(default=None, ge=0)
    prune_managed: bool = Field(default=True)

    @field_validator("archive_suffix")
    @classmethod
    def validate_suffix(cls, value: str) -> str:
        value = value.strip().lower()
        if not value:
            raise ValueError("archive_suffix must not be empty")
        return value if value.startswith(".") else f".{value}"


def load_config(path: Optional[Path]) -> AppConfig:
    """Load configuration from a YAML file, falling back to defaults."""

    data: Dict[str, Any] = {}
    if path is not None and path.exists():
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return AppConfig(**data)
