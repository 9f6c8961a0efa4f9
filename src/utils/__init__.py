"""Utility helpers shared across the jar-libs-consolidator codebase."""

from .config import AppConfig, load_config
from .logging import configure_logging, get_logger
from .paths import jar_url, normalise_path
from .parallel import run_in_executor

__all__ = [
    "AppConfig",
    "load_config",
    "configure_logging",
    "get_logger",
    "jar_url",
    "normalise_path",
    "run_in_executor",
]
