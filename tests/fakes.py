# tests/fakes.py

from __future__ import annotations

from dataclasses import dataclass, field

from tasklist.client.backends import ClientRequestFailure
from tasklist.tasks.task_models import Task, TaskCollection, TaskUpdate


@dataclass(slots=True)
class FakeNotifier:
    """
    Notifier used by controller tests.

    - Records every alert/confirm message for assertions
    - Answers confirm() with a fixed value
    """

    confirm_answer: bool = True
    alerts: list[str] = field(default_factory=list)
    confirms: list[str] = field(default_factory=list)

    def alert(self, message: str) -> None:
        self.alerts.append(message)

    def confirm(self, message: str) -> bool:
        self.confirms.append(message)
        return self.confirm_answer


class FailingBackend:
    """TaskBackend whose every operation fails like an unreachable server."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def _fail(self, operation: str):
        self.calls.append(operation)
        raise ClientRequestFailure(operation, "connection refused")

    def load(self) -> TaskCollection:
        return self._fail("load")

    def create(self, text: str) -> Task:
        return self._fail("create")

    def update(self, task_id: int, update: TaskUpdate) -> Task:
        return self._fail("update")

    def delete(self, task_id: int) -> None:
        self._fail("delete")

    def bulk_replace(self, tasks: list[Task]) -> None:
        self._fail("bulk_replace")
