# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from tasklist.client.backends import LocalTaskBackend
from tasklist.client.controller import TaskController
from tasklist.core.state import AppState
from tasklist.server.app import create_app
from tasklist.storage.kv_store import SqliteKeyValueStore
from tasklist.tasks.task_store import TaskStore

from .fakes import FakeNotifier


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap helpers.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="tasklist-test",
        data_dir=tmp_path,
        kv_backend="sqlite",
        kv_db_path=tmp_path / "kv.sqlite3",
        store_key="user_tasks",
        client_mode="local",
        api_base_url="http://testserver",
        request_timeout_seconds=5.0,
        max_task_length=100,
    )


@pytest.fixture()
def kv(settings: SimpleNamespace) -> SqliteKeyValueStore:
    return SqliteKeyValueStore(settings.kv_db_path)


@pytest.fixture()
def store(kv: SqliteKeyValueStore, settings: SimpleNamespace) -> TaskStore:
    """Real SQLite-backed store: its persistence is part of what we test."""
    return TaskStore(kv, key=settings.store_key)


@pytest.fixture()
def app(store: TaskStore):
    flask_app = create_app(store)
    return flask_app


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore, notifier: FakeNotifier) -> AppState:
    """AppState wired to a local backend over the tmp SQLite store."""
    backend = LocalTaskBackend(store)
    return AppState(
        settings=settings,
        backend=backend,
        controller=TaskController(backend, notifier, max_task_length=settings.max_task_length),
    )
