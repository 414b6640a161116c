# src/tasklist/client/backends.py

"""
Client persistence strategies.

Both implement the TaskBackend port and are picked once at startup:
- HttpTaskBackend: the Task Store Service over HTTP (httpx),
- LocalTaskBackend: an in-process TaskStore (no server).

Failures of any kind surface as ClientRequestFailure; nothing is retried.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Any

import httpx

from ..tasks.task_models import (
    Task,
    TaskCollection,
    TaskListError,
    TaskUpdate,
)
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


class ClientRequestFailure(Exception):
    """A backend operation did not succeed (network error or non-OK status)."""

    def __init__(self, operation: str, detail: str, *, status_code: int | None = None) -> None:
        super().__init__(f"{operation} failed: {detail}")
        self.operation = operation
        self.detail = detail
        self.status_code = status_code


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return f"HTTP {response.status_code}"
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return f"HTTP {response.status_code}: {body['error']}"
    return f"HTTP {response.status_code}"


class HttpTaskBackend:
    """TaskBackend over the JSON HTTP API."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=base_url,
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def _request(self, operation: str, method: str, url: str, json: Any = None) -> Any:
        try:
            response = self._client.request(method, url, json=json)
        except httpx.HTTPError as e:
            logger.warning("%s: %s %s transport error: %s", operation, method, url, e)
            raise ClientRequestFailure(operation, str(e) or type(e).__name__) from e

        if not response.is_success:
            detail = _error_detail(response)
            logger.warning("%s: %s %s -> %s", operation, method, url, detail)
            raise ClientRequestFailure(operation, detail, status_code=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise ClientRequestFailure(operation, "response is not JSON") from e

    @staticmethod
    def _decode(operation: str, decoder, payload: Any):
        try:
            return decoder(payload)
        except TaskListError as e:
            raise ClientRequestFailure(operation, f"unexpected response: {e}") from e

    def load(self) -> TaskCollection:
        body = self._request("load tasks", "GET", "/api/tasks")
        return self._decode("load tasks", TaskCollection.from_dict, body)

    def create(self, text: str) -> Task:
        body = self._request("add task", "POST", "/api/tasks", json={"text": text})
        return self._decode("add task", Task.from_dict, body)

    def update(self, task_id: int, update: TaskUpdate) -> Task:
        body = self._request("update task", "PUT", f"/api/tasks/{task_id}", json=update.to_dict())
        return self._decode("update task", Task.from_dict, body)

    def delete(self, task_id: int) -> None:
        self._request("delete task", "DELETE", f"/api/tasks/{task_id}")

    def bulk_replace(self, tasks: list[Task]) -> None:
        self._request(
            "replace tasks",
            "PUT",
            "/api/tasks/bulk",
            json={"tasks": [t.to_dict() for t in tasks]},
        )


class LocalTaskBackend:
    """TaskBackend that calls a TaskStore directly (single process, no HTTP)."""

    def __init__(self, store: TaskStore) -> None:
        self._store = store

    def close(self) -> None:
        return

    def _call(self, operation: str, fn, *args):
        try:
            return fn(*args)
        except (TaskListError, sqlite3.Error, OSError) as e:
            logger.warning("%s failed: %s", operation, e)
            raise ClientRequestFailure(operation, str(e)) from e

    def load(self) -> TaskCollection:
        return self._call("load tasks", self._store.list_tasks)

    def create(self, text: str) -> Task:
        return self._call("add task", self._store.create_task, text)

    def update(self, task_id: int, update: TaskUpdate) -> Task:
        return self._call("update task", self._store.update_task, task_id, update)

    def delete(self, task_id: int) -> None:
        self._call("delete task", self._store.delete_task, task_id)

    def bulk_replace(self, tasks: list[Task]) -> None:
        self._call("replace tasks", self._store.replace_tasks, list(tasks))
