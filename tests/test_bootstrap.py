# tests/test_bootstrap.py

from __future__ import annotations

from types import SimpleNamespace

import pytest

from tasklist.cli.bootstrap import create_backend, create_initial_state, create_task_store
from tasklist.cli.main import build_arg_parser
from tasklist.client.backends import HttpTaskBackend, LocalTaskBackend

from .fakes import FakeNotifier


def test_backend_selected_by_mode(settings: SimpleNamespace) -> None:
    assert isinstance(create_backend(settings), LocalTaskBackend)

    remote = create_backend(settings, mode="remote")
    assert isinstance(remote, HttpTaskBackend)
    remote.close()

    with pytest.raises(ValueError):
        create_backend(settings, mode="ftp")


def test_memory_kv_backend(settings: SimpleNamespace) -> None:
    settings.kv_backend = "memory"
    store = create_task_store(settings=settings)
    store.create_task("ephemeral")

    assert len(store.list_tasks().tasks) == 1
    assert create_task_store(settings=settings).list_tasks().tasks == []
    assert not settings.kv_db_path.exists()


def test_local_state_persists_through_sqlite(settings: SimpleNamespace) -> None:
    first = create_initial_state(settings=settings, notifier=FakeNotifier())
    first.client = first.controller.add(first.client, "persist me")

    second = create_initial_state(settings=settings, notifier=FakeNotifier())
    second.client = second.controller.load(second.client)
    assert [t.text for t in second.client.tasks] == ["persist me"]
    assert settings.kv_db_path.exists()


def test_arg_parser_subcommands() -> None:
    parser = build_arg_parser()
    args = parser.parse_args(["console", "--mode", "local"])
    assert (args.command, args.mode) == ("console", "local")

    args = parser.parse_args(["serve", "--port", "9001"])
    assert (args.command, args.port) == ("serve", 9001)

    with pytest.raises(SystemExit):
        parser.parse_args([])
