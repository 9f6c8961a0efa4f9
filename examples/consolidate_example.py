"""Example script showing how to consolidate jar files programmatically."""
from __future__ import annotations

from pathlib import Path
import sys

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = PROJECT_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from consolidator import ConsolidationRunner, Module, Project  # type: ignore  # noqa: E402
from utils.logging import configure_logging  # type: ignore  # noqa: E402


def main() -> None:
    configure_logging("INFO")
    root = Path(sys.argv[1]) if len(sys.argv) > 1 else PROJECT_ROOT
    project = Project("example", [Module("app"), Module("tests")], base_path=root)
    summary = ConsolidationRunner().run(project)
    print(summary.message())
    for module in project.modules:
        print(module.name, module.entry_names())


if __name__ == "__main__":
    main()
