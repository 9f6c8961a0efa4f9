"""Typer-based command line interface for jar-libs-consolidator."""
from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer

import sys

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = PROJECT_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from consolidator import (  # type: ignore  # noqa: E402
    ConsolidationRunner,
    DirectoryScanner,
    ScanConfig,
    WorkspaceError,
    load_workspace,
    save_workspace,
)
from utils.config import load_config  # type: ignore  # noqa: E402
from utils.logging import configure_logging  # type: ignore  # noqa: E402

app = typer.Typer(add_completion=False)


def _resolve_root(path: Path) -> Path:
    if not path.exists():
        raise typer.BadParameter(f"Path {path} does not exist")
    if not path.is_dir():
        raise typer.BadParameter(f"Path {path} is not a directory")
    return path


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging.")) -> None:
    configure_logging("DEBUG" if verbose else "INFO")


@app.command()
def scan(
    root: Path = typer.Argument(..., help="Project directory to scan for jar files."),
    config_path: Optional[Path] = typer.Option(None, "--config", help="YAML configuration file."),
    follow_symlinks: bool = typer.Option(
        False, "--follow-symlinks/--no-follow-symlinks", help="Descend into symlinked directories."
    ),
) -> None:
    root = _resolve_root(root)
    config = load_config(config_path)
    if follow_symlinks:
        config.follow_symlinks = True
    result = DirectoryScanner(ScanConfig.from_app_config(config)).scan(root)
    for archive in result.archives:
        typer.echo(str(archive.path))
    for error in result.errors:
        typer.echo(f"warning: {error}", err=True)
    typer.echo(f"Found {len(result.archives)} jar file(s) under {result.root}")


@app.command()
def consolidate(
    root: Path = typer.Argument(..., help="Project directory to scan for jar files."),
    workspace: Path = typer.Option(..., "--workspace", "-w", help="Workspace YAML describing the modules."),
    config_path: Optional[Path] = typer.Option(None, "--config", help="YAML configuration file."),
    modules: Optional[List[str]] = typer.Option(
        None, "--module", "-m", help="Only configure the named module (repeatable)."
    ),
) -> None:
    root = _resolve_root(root)
    try:
        project = load_workspace(workspace)
    except WorkspaceError as exc:
        raise typer.BadParameter(str(exc)) from exc

    runner = ConsolidationRunner.from_config(load_config(config_path))
    try:
        summary = runner.run(project, root=root, module_names=modules)
    except KeyError as exc:
        raise typer.BadParameter(str(exc.args[0])) from exc

    if summary.outcomes:
        try:
            save_workspace(project, workspace)
        except OSError as exc:
            typer.echo(f"Unable to save workspace {workspace}: {exc}", err=True)
            raise typer.Exit(code=1) from exc
    typer.echo(summary.message())
    if not summary.succeeded:
        raise typer.Exit(code=1)


@app.command()
def show(workspace: Path = typer.Option(..., "--workspace", "-w", help="Workspace YAML to display.")) -> None:
    try:
        project = load_workspace(workspace)
    except WorkspaceError as exc:
        raise typer.BadParameter(str(exc)) from exc
    for module in project.modules:
        typer.echo(f"{module.name}:")
        if not module.entries:
            typer.echo("  (no dependencies)")
        for entry in module.entries:
            marker = "*" if entry.managed else " "
            roots = ", ".join(root.url for root in entry.roots) or "-"
            typer.echo(f"  {marker} {entry.name} -> {roots}")


if __name__ == "__main__":
    app()
