# src/tasklist/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- ensures local (gitignored) directories exist,
- builds the key-value store and the TaskStore service,
- picks the client backend (remote HTTP or local store) once at startup,
- wires everything into AppState for the console client.
"""

from __future__ import annotations

import logging

from ..client.backends import HttpTaskBackend, LocalTaskBackend
from ..client.controller import TaskController
from ..config import get_settings
from ..core.ports import KeyValueStore, Notifier, TaskBackend
from ..core.state import AppState
from ..storage.kv_store import InMemoryKeyValueStore, SqliteKeyValueStore
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.kv_db_path.parent.mkdir(parents=True, exist_ok=True)


def create_kv_store(settings) -> KeyValueStore:
    if settings.kv_backend == "memory":
        logger.warning("Using in-memory key-value store; tasks are lost on exit.")
        return InMemoryKeyValueStore()
    _ensure_local_dirs(settings)
    return SqliteKeyValueStore(settings.kv_db_path)


def create_task_store(*, settings=None) -> TaskStore:
    if settings is None:
        settings = get_settings()
    return TaskStore(create_kv_store(settings), key=settings.store_key)


def create_backend(settings, *, mode: str | None = None) -> TaskBackend:
    mode = mode or settings.client_mode
    if mode == "local":
        logger.info("Client backend: local store %s", settings.kv_db_path)
        return LocalTaskBackend(create_task_store(settings=settings))
    if mode == "remote":
        logger.info("Client backend: remote %s", settings.api_base_url)
        return HttpTaskBackend(settings.api_base_url, timeout=settings.request_timeout_seconds)
    raise ValueError(f"Unknown client mode: {mode!r}")


def create_initial_state(
    *,
    notifier: Notifier,
    settings=None,
    backend: TaskBackend | None = None,
) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings/backend injectable makes the app easier to test and avoids
    hidden global config reads. If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    if backend is None:
        backend = create_backend(settings)

    controller = TaskController(
        backend,
        notifier,
        max_task_length=settings.max_task_length,
    )
    return AppState(settings=settings, backend=backend, controller=controller)
