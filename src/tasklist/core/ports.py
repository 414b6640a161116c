# src/tasklist/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The service and the client controller depend on Protocols instead of concrete
implementations. This keeps storage and transport swappable and makes
testing easier.
"""

from typing import Any, Protocol


class KeyValueStore(Protocol):
    """String-keyed store of string values (JSON documents)."""

    def get(self, key: str) -> str | None: ...
    def put(self, key: str, value: str) -> None: ...


class TaskBackend(Protocol):
    """
    Client-side persistence strategy.

    Implementations:
    - HttpTaskBackend: talks to the Task Store Service over HTTP,
    - LocalTaskBackend: calls a TaskStore in-process (no server).

    Every method raises ClientRequestFailure when the operation did not succeed.
    """

    def load(self) -> Any: ...  # TaskCollection
    def create(self, text: str) -> Any: ...  # Task
    def update(self, task_id: int, update: Any) -> Any: ...  # TaskUpdate -> Task
    def delete(self, task_id: int) -> None: ...
    def bulk_replace(self, tasks: list[Any]) -> None: ...


class Notifier(Protocol):
    """User-facing blocking prompts (alert / confirm)."""

    def alert(self, message: str) -> None: ...
    def confirm(self, message: str) -> bool: ...
