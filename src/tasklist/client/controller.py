# src/tasklist/client/controller.py

"""
Client task controller.

The controller holds no task state of its own. The caller (AppState) owns a
ClientState, passes it into every operation and keeps whatever comes back.

Sync contract for network-backed operations:
- nothing is changed locally before the backend call succeeds,
- on success the mirror is rebuilt from the backend's answer,
- on failure the user is notified and the same state is returned.

isEditing is a UI flag: it is set/cleared locally and at most one task is
in edit mode at a time.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace

from ..core.ports import Notifier, TaskBackend
from ..tasks.task_models import Task, TaskCollection, TaskUpdate
from .backends import ClientRequestFailure

logger = logging.getLogger(__name__)

DEFAULT_MAX_TASK_LENGTH = 100


def _plural(n: int, word: str) -> str:
    return f"{n} {word}" + ("" if n == 1 else "s")


@dataclass(frozen=True, slots=True)
class ClientState:
    """Last known server state as seen by the client (advisory only)."""

    tasks: tuple[Task, ...] = field(default_factory=tuple)
    task_id_counter: int = 1

    @classmethod
    def from_collection(cls, collection: TaskCollection) -> ClientState:
        return cls(tasks=tuple(collection.tasks), task_id_counter=collection.task_id_counter)

    def find(self, task_id: int) -> Task | None:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def completed_count(self) -> int:
        return sum(1 for t in self.tasks if t.completed)

    def editing_task(self) -> Task | None:
        for task in self.tasks:
            if task.is_editing:
                return task
        return None

    def map_tasks(self, fn: Callable[[Task], Task]) -> ClientState:
        return replace(self, tasks=tuple(fn(t) for t in self.tasks))

    def with_task(self, task: Task) -> ClientState:
        return self.map_tasks(lambda t: task if t.id == task.id else t)

    def without_task(self, task_id: int) -> ClientState:
        return replace(self, tasks=tuple(t for t in self.tasks if t.id != task_id))


class TaskController:
    def __init__(
        self,
        backend: TaskBackend,
        notifier: Notifier,
        *,
        max_task_length: int = DEFAULT_MAX_TASK_LENGTH,
    ) -> None:
        self._backend = backend
        self._notifier = notifier
        self._max_task_length = max_task_length

    def _check_text(self, text: str, *, empty_message: str) -> str | None:
        trimmed = text.strip()
        if not trimmed:
            self._notifier.alert(empty_message)
            return None
        if len(trimmed) > self._max_task_length:
            self._notifier.alert(f"Task is too long (max {self._max_task_length} characters)!")
            return None
        return trimmed

    def _failed(self, err: ClientRequestFailure, message: str) -> None:
        logger.error("Client operation failed: %s", err)
        self._notifier.alert(message)

    # ---- network-backed operations ----

    def load(self, state: ClientState) -> ClientState:
        try:
            collection = self._backend.load()
        except ClientRequestFailure as e:
            self._failed(e, "Failed to load tasks. Please try again.")
            return state
        logger.debug("Loaded %d tasks (counter=%s)", len(collection.tasks), collection.task_id_counter)
        return ClientState.from_collection(collection)

    def add(self, state: ClientState, text: str) -> ClientState:
        trimmed = self._check_text(text, empty_message="Please enter a task!")
        if trimmed is None:
            return state

        try:
            task = self._backend.create(trimmed)
        except ClientRequestFailure as e:
            self._failed(e, "Failed to add task. Please try again.")
            return state

        return replace(
            state,
            tasks=state.tasks + (task,),
            task_id_counter=max(state.task_id_counter, task.id + 1),
        )

    def toggle_complete(self, state: ClientState, task_id: int) -> ClientState:
        task = state.find(task_id)
        if task is None:
            return state

        try:
            updated = self._backend.update(task_id, TaskUpdate(completed=not task.completed))
        except ClientRequestFailure as e:
            self._failed(e, "Failed to update task. Please try again.")
            return state

        # Edit mode is local; the server's copy of the flag is not authoritative.
        return state.with_task(replace(updated, is_editing=task.is_editing))

    def save_edit(self, state: ClientState, task_id: int, text: str) -> ClientState:
        task = state.find(task_id)
        if task is None:
            return state

        trimmed = self._check_text(text, empty_message="Task cannot be empty!")
        if trimmed is None:
            return state

        try:
            updated = self._backend.update(task_id, TaskUpdate(text=trimmed, is_editing=False))
        except ClientRequestFailure as e:
            self._failed(e, "Failed to update task. Please try again.")
            return state

        return state.with_task(replace(updated, is_editing=False))

    def delete(self, state: ClientState, task_id: int) -> ClientState:
        if state.find(task_id) is None:
            return state
        if not self._notifier.confirm("Are you sure you want to delete this task?"):
            return state

        try:
            self._backend.delete(task_id)
        except ClientRequestFailure as e:
            self._failed(e, "Failed to delete task. Please try again.")
            return state

        return state.without_task(task_id)

    def remove_completed(self, state: ClientState) -> ClientState:
        n = state.completed_count()
        if n == 0:
            self._notifier.alert("No completed tasks to remove!")
            return state

        if not self._notifier.confirm(
            f"Are you sure you want to remove {_plural(n, 'completed task')}?"
        ):
            return state

        survivors = [t for t in state.tasks if not t.completed]
        try:
            self._backend.bulk_replace(survivors)
        except ClientRequestFailure as e:
            self._failed(e, "Failed to remove completed tasks. Please try again.")
            return state

        return replace(state, tasks=tuple(survivors))

    def remove_all(self, state: ClientState) -> ClientState:
        n = len(state.tasks)
        if n == 0:
            self._notifier.alert("No tasks to remove!")
            return state

        if not self._notifier.confirm(
            f"Are you sure you want to remove all {_plural(n, 'task')}? "
            "This action cannot be undone."
        ):
            return state

        try:
            self._backend.bulk_replace([])
        except ClientRequestFailure as e:
            self._failed(e, "Failed to remove all tasks. Please try again.")
            return state

        return replace(state, tasks=())

    # ---- local-only (edit mode) ----

    def start_edit(self, state: ClientState, task_id: int) -> ClientState:
        task = state.find(task_id)
        if task is None or task.completed:
            return state
        return state.map_tasks(lambda t: replace(t, is_editing=t.id == task_id))

    def cancel_edit(self, state: ClientState, task_id: int) -> ClientState:
        task = state.find(task_id)
        if task is None:
            return state
        return state.with_task(replace(task, is_editing=False))
