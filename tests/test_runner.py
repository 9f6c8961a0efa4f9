from __future__ import annotations

import asyncio
import threading
from pathlib import Path

import pytest

from consolidator import CancellationFlag, ConsolidationRunner, Module, Project
from utils.config import AppConfig


def test_run_configures_every_module(tmp_path: Path, make_jar) -> None:
    make_jar("lib/util.jar")
    make_jar("build/ignored.jar")
    project = Project("demo", [Module("app"), Module("core")], base_path=tmp_path)

    summary = ConsolidationRunner().run(project)

    assert summary.archive_count == 1
    assert summary.succeeded
    assert "Added 1 jar file(s)" in summary.message()
    assert all(module.entry_names() == ["util.jar"] for module in project.modules)


def test_run_limited_to_named_modules(tmp_path: Path, make_jar) -> None:
    make_jar("util.jar")
    project = Project("demo", [Module("app"), Module("core")])

    summary = ConsolidationRunner().run(project, root=tmp_path, module_names=["core"])

    assert [outcome.module for outcome in summary.outcomes] == ["core"]
    assert project.module("app").entries == ()


def test_unknown_module_aborts_run(tmp_path: Path, make_jar) -> None:
    make_jar("util.jar")
    project = Project("demo", [Module("app")])
    with pytest.raises(KeyError):
        ConsolidationRunner().run(project, root=tmp_path, module_names=["nope"])


def test_cancelled_scan_skips_reconciliation(tmp_path: Path, make_jar) -> None:
    make_jar("a/first.jar")
    make_jar("b/second.jar")
    project = Project("demo", [Module("app")])
    calls = {"count": 0}

    def cancel_after_first_entry() -> bool:
        calls["count"] += 1
        return calls["count"] > 1

    summary = ConsolidationRunner().run(project, root=tmp_path, is_cancelled=cancel_after_first_entry)

    assert summary.cancelled
    assert summary.outcomes == []
    assert not summary.succeeded
    assert "cancelled" in summary.message()
    assert project.module("app").entries == ()


def test_empty_scan_reports_no_archives(tmp_path: Path) -> None:
    project = Project("demo", [Module("app")])
    summary = ConsolidationRunner().run(project, root=tmp_path)
    assert summary.message() == "No jar files found."
    assert summary.outcomes == []


def test_missing_root_without_base_path(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        ConsolidationRunner().run(Project("demo", [Module("app")]))


def test_run_async_scans_in_background(tmp_path: Path, make_jar) -> None:
    make_jar("util.jar")
    project = Project("demo", [Module("app")], base_path=tmp_path)
    flag = CancellationFlag()

    summary = asyncio.run(ConsolidationRunner().run_async(project, is_cancelled=flag))

    assert summary.succeeded
    assert project.module("app").entry_names() == ["util.jar"]


def test_runner_from_config_honours_settings(tmp_path: Path, make_jar) -> None:
    make_jar("out/generated.jar")
    make_jar("build/kept.jar")
    config = AppConfig(skip_dirs=["out"], prune_managed=False)
    runner = ConsolidationRunner.from_config(config)
    project = Project("demo", [Module("app")])

    runner.run(project, root=tmp_path)

    assert project.module("app").entry_names() == ["kept.jar"]
    assert runner.reconciler.prune_managed is False


def test_runner_from_config_with_custom_suffix(tmp_path: Path, make_jar) -> None:
    make_jar("lib/util.aar")
    make_jar("lib/other.jar")
    project = Project("demo", [Module("app")])

    summary = ConsolidationRunner.from_config(AppConfig(archive_suffix=".aar")).run(project, root=tmp_path)

    assert summary.outcomes[0].status == "success"
    assert project.module("app").entry_names() == ["util.aar"]


def test_run_async_reconciles_off_the_event_loop_thread(tmp_path: Path, make_jar) -> None:
    make_jar("util.jar")
    project = Project("demo", [Module("app")], base_path=tmp_path)
    runner = ConsolidationRunner()
    threads = []
    original = runner.reconciler.reconcile

    def recording_reconcile(modules, archives):
        threads.append(threading.current_thread())
        return original(modules, archives)

    runner.reconciler.reconcile = recording_reconcile

    summary = asyncio.run(runner.run_async(project))

    assert summary.succeeded
    assert threads and threads[0] is not threading.main_thread()
