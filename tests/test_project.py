from __future__ import annotations

import pytest

from consolidator import CommitError, DependencyEntry, ModelStateError, Module, Project, ViewState
from consolidator.schema import ClasspathRoot


ROOT = ClasspathRoot(url="jar:///libs/util.jar!/")


def test_view_is_isolated_until_commit() -> None:
    module = Module("app", [DependencyEntry(name="manual")])
    view = module.modifiable_model()
    view.remove_entry(view.entries[0])
    library = view.create_library("util.jar")
    library.add_root(ROOT)
    library.commit()

    assert module.entry_names() == ["manual"]
    view.commit()
    assert module.entry_names() == ["util.jar"]
    assert module.entries[0].managed
    assert module.entries[0].roots == (ROOT,)
    assert view.state is ViewState.COMMITTED


def test_dispose_leaves_module_untouched() -> None:
    module = Module("app", [DependencyEntry(name="manual")])
    view = module.modifiable_model()
    view.remove_entry(view.entries[0])
    view.create_library("util.jar")
    view.dispose()
    assert module.entry_names() == ["manual"]
    assert view.state is ViewState.DISPOSED
    assert view.libraries == ()


def test_terminal_views_reject_further_changes() -> None:
    module = Module("app")
    view = module.modifiable_model()
    view.commit()
    with pytest.raises(ModelStateError):
        view.commit()
    with pytest.raises(ModelStateError):
        view.create_library("late.jar")
    with pytest.raises(ModelStateError):
        view.dispose()

    disposed = module.modifiable_model()
    disposed.dispose()
    disposed.dispose()
    with pytest.raises(ModelStateError):
        disposed.commit()


def test_uncommitted_library_blocks_module_commit() -> None:
    module = Module("app")
    view = module.modifiable_model()
    library = view.create_library("util.jar")
    library.add_root(ROOT)
    with pytest.raises(CommitError):
        view.commit()
    assert view.state is ViewState.OPEN
    assert module.entries == ()


def test_disposed_library_is_dropped_from_view() -> None:
    module = Module("app")
    view = module.modifiable_model()
    library = view.create_library("util.jar")
    library.dispose()
    view.commit()
    assert module.entries == ()


def test_library_without_roots_cannot_commit() -> None:
    view = Module("app").modifiable_model()
    with pytest.raises(CommitError):
        view.create_library("empty.jar").commit()


def test_duplicate_library_names_fail_commit() -> None:
    module = Module("app", [DependencyEntry(name="util.jar")])
    view = module.modifiable_model()
    library = view.create_library("util.jar")
    library.add_root(ROOT)
    library.commit()
    with pytest.raises(CommitError, match="Duplicate"):
        view.commit()


def test_project_module_lookup_and_lock() -> None:
    project = Project("demo", [Module("app"), Module("lib")])
    assert [module.name for module in project.modules] == ["app", "lib"]
    assert project.module("lib").name == "lib"
    with pytest.raises(KeyError):
        project.module("missing")
    with pytest.raises(ValueError):
        project.add_module(Module("app"))
    with project.write_lock() as locked:
        with project.write_lock():
            assert locked is project
