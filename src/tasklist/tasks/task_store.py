# src/tasklist/tasks/task_store.py

from __future__ import annotations

import json
import logging
from typing import Any

from ..core.ports import KeyValueStore
from .task_models import (
    StoreError,
    Task,
    TaskCollection,
    TaskUpdate,
    TaskValidationError,
    utc_now_iso,
)

logger = logging.getLogger(__name__)

DEFAULT_STORE_KEY = "user_tasks"


class TaskStore:
    """
    Task collection service over a key-value store.

    The whole collection lives under one key as a JSON document:
        {"tasks": [...], "taskIdCounter": N}

    Every operation is a full load -> mutate -> full save. There is no locking
    around that sequence: two concurrent writers race and the later save wins
    (lost update). Single-user use is assumed.
    """

    def __init__(self, kv: KeyValueStore, *, key: str = DEFAULT_STORE_KEY) -> None:
        self._kv = kv
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    # ---- low-level helpers ----

    def _load(self) -> TaskCollection:
        raw = self._kv.get(self._key)
        if raw is None:
            return TaskCollection()
        try:
            data: Any = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StoreError(f"Stored record under {self._key!r} is not valid JSON") from e
        return TaskCollection.from_dict(data)

    def _save(self, collection: TaskCollection) -> None:
        self._kv.put(self._key, json.dumps(collection.to_dict(), ensure_ascii=False))

    # ---- public API ----

    def list_tasks(self) -> TaskCollection:
        return self._load()

    def get_task(self, task_id: int) -> Task:
        data = self._load()
        return data.tasks[data.index_of(task_id)]

    def create_task(self, text: Any) -> Task:
        if not isinstance(text, str) or not text.strip():
            raise TaskValidationError("Task text is required")

        data = self._load()
        task = Task(
            id=data.task_id_counter,
            text=text.strip(),
            completed=False,
            is_editing=False,
            created_at=utc_now_iso(),
        )
        data.task_id_counter += 1
        data.tasks.append(task)
        self._save(data)
        logger.info("Task created id=%s", task.id)
        return task

    def update_task(self, task_id: int, update: TaskUpdate) -> Task:
        data = self._load()
        idx = data.index_of(task_id)
        updated = update.apply(data.tasks[idx])
        data.tasks[idx] = updated
        self._save(data)
        logger.info("Task updated id=%s fields=%s", task_id, sorted(update.to_dict()))
        return updated

    def delete_task(self, task_id: int) -> None:
        data = self._load()
        idx = data.index_of(task_id)
        del data.tasks[idx]
        self._save(data)
        logger.info("Task deleted id=%s", task_id)

    def replace_tasks(self, tasks: list[Task]) -> None:
        """
        Replace the whole task list.

        The counter is kept; it only moves up if a supplied id would otherwise
        collide with a future assignment.
        """
        data = self._load()
        data.tasks = list(tasks)
        if tasks:
            highest = max(t.id for t in tasks)
            if highest >= data.task_id_counter:
                logger.warning(
                    "Bulk replace carried id=%s >= counter=%s; raising counter",
                    highest,
                    data.task_id_counter,
                )
                data.task_id_counter = highest + 1
        self._save(data)
        logger.info("Tasks replaced count=%d", len(tasks))
