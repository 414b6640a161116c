# src/tasklist/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any


class TaskListError(Exception):
    """Base class for task-list errors."""


class TaskValidationError(TaskListError):
    """Input does not satisfy the task schema (HTTP 400)."""


class TaskNotFoundError(TaskListError):
    """No task with the requested id (HTTP 404)."""

    def __init__(self, task_id: int) -> None:
        super().__init__("Task not found")
        self.task_id = task_id


class StoreError(TaskListError):
    """The persisted record is missing, corrupt or unreadable."""


def utc_now_iso() -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a Z suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _require_bool(data: dict[str, Any], key: str) -> bool:
    value = data[key]
    if not isinstance(value, bool):
        raise TaskValidationError(f"{key} must be a boolean")
    return value


def _clean_text(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise TaskValidationError("Task text is required")
    return value.strip()


@dataclass(slots=True)
class Task:
    id: int
    text: str
    completed: bool = False
    is_editing: bool = False
    created_at: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "isEditing": self.is_editing,
        }
        if self.created_at is not None:
            data["createdAt"] = self.created_at
        return data

    @classmethod
    def from_dict(cls, data: Any) -> Task:
        """
        Decode a task from its JSON form.

        Legacy records may lack createdAt / isEditing; those get defaults.
        """
        if not isinstance(data, dict):
            raise TaskValidationError("Task must be an object")

        raw_id = data.get("id")
        if isinstance(raw_id, bool) or not isinstance(raw_id, int) or raw_id < 1:
            raise TaskValidationError("Task id must be a positive integer")

        text = data.get("text")
        if not isinstance(text, str):
            raise TaskValidationError("Task text must be a string")

        created_at = data.get("createdAt")
        if created_at is not None and not isinstance(created_at, str):
            raise TaskValidationError("createdAt must be a string")

        return cls(
            id=raw_id,
            text=text,
            completed=_require_bool(data, "completed") if "completed" in data else False,
            is_editing=_require_bool(data, "isEditing") if "isEditing" in data else False,
            created_at=created_at,
        )


@dataclass(slots=True, frozen=True)
class TaskUpdate:
    """
    Partial update payload.

    A field left as None is retained on the stored task; a present field
    overwrites it. id and createdAt are immutable and never part of an update.
    """

    text: str | None = None
    completed: bool | None = None
    is_editing: bool | None = None

    @classmethod
    def from_dict(cls, data: Any) -> TaskUpdate:
        if not isinstance(data, dict):
            raise TaskValidationError("Update payload must be an object")

        text = _clean_text(data["text"]) if "text" in data else None
        completed = _require_bool(data, "completed") if "completed" in data else None
        is_editing = _require_bool(data, "isEditing") if "isEditing" in data else None
        return cls(text=text, completed=completed, is_editing=is_editing)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.text is not None:
            data["text"] = self.text
        if self.completed is not None:
            data["completed"] = self.completed
        if self.is_editing is not None:
            data["isEditing"] = self.is_editing
        return data

    def apply(self, task: Task) -> Task:
        return replace(
            task,
            text=task.text if self.text is None else self.text,
            completed=task.completed if self.completed is None else self.completed,
            is_editing=task.is_editing if self.is_editing is None else self.is_editing,
        )


@dataclass(slots=True)
class TaskCollection:
    tasks: list[Task] = field(default_factory=list)
    task_id_counter: int = 1

    def index_of(self, task_id: int) -> int:
        for i, task in enumerate(self.tasks):
            if task.id == task_id:
                return i
        raise TaskNotFoundError(task_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "tasks": [t.to_dict() for t in self.tasks],
            "taskIdCounter": self.task_id_counter,
        }

    @classmethod
    def from_dict(cls, data: Any) -> TaskCollection:
        if not isinstance(data, dict):
            raise StoreError("Stored task collection is not an object")

        raw_tasks = data.get("tasks") or []
        counter = data.get("taskIdCounter", 1)
        if not isinstance(raw_tasks, list):
            raise StoreError("Stored tasks field is not a list")
        if isinstance(counter, bool) or not isinstance(counter, int):
            raise StoreError("Stored taskIdCounter is not an integer")

        try:
            tasks = [Task.from_dict(t) for t in raw_tasks]
        except TaskValidationError as e:
            raise StoreError(f"Stored task is malformed: {e}") from e
        return cls(tasks=tasks, task_id_counter=counter)


def parse_task_list(raw: Any) -> list[Task]:
    """Decode a client-supplied task list, rejecting blank text and duplicate ids."""
    if not isinstance(raw, list):
        raise TaskValidationError("tasks must be a list")

    tasks = [Task.from_dict(t) for t in raw]
    seen: set[int] = set()
    for t in tasks:
        t.text = _clean_text(t.text)
        if t.id in seen:
            raise TaskValidationError(f"Duplicate task id {t.id}")
        seen.add(t.id)
    return tasks
