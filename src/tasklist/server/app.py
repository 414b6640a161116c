# src/tasklist/server/app.py

"""
HTTP surface of the Task Store Service.

Routes (JSON bodies):
- GET    /api/tasks          -> {"tasks": [...], "taskIdCounter": N}
- POST   /api/tasks          -> created task
- PUT    /api/tasks/bulk     -> {"success": true}
- PUT    /api/tasks/<id>     -> updated task
- DELETE /api/tasks/<id>     -> {"success": true}

Every response carries permissive CORS headers; OPTIONS on /api/ paths is
answered with an empty body. Unmatched paths and methods are 404.
"""

from __future__ import annotations

import logging
from typing import Any

from flask import Flask, Response, jsonify, request
from werkzeug.exceptions import HTTPException

from ..tasks.task_models import (
    TaskNotFoundError,
    TaskUpdate,
    TaskValidationError,
    parse_task_list,
)
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def _json_body() -> Any:
    # Malformed or missing JSON is treated like an empty payload; the
    # operation-level validation then rejects it.
    return request.get_json(silent=True, force=True)


def _error(message: str, status: int) -> tuple[Response, int]:
    return jsonify({"error": message}), status


def create_app(store: TaskStore) -> Flask:
    app = Flask(__name__)
    app.extensions["task_store"] = store

    @app.before_request
    def _preflight() -> Response | None:
        if request.method == "OPTIONS" and request.path.startswith("/api/"):
            return Response(status=200)
        return None

    @app.after_request
    def _cors(response: Response) -> Response:
        for name, value in CORS_HEADERS.items():
            response.headers[name] = value
        return response

    @app.get("/api/tasks")
    def list_tasks():
        return jsonify(store.list_tasks().to_dict())

    @app.post("/api/tasks")
    def create_task():
        body = _json_body()
        text = body.get("text") if isinstance(body, dict) else None
        task = store.create_task(text)
        return jsonify(task.to_dict())

    @app.put("/api/tasks/bulk")
    def replace_tasks():
        body = _json_body()
        if not isinstance(body, dict):
            raise TaskValidationError("Body must be an object with a tasks list")
        store.replace_tasks(parse_task_list(body.get("tasks")))
        return jsonify({"success": True})

    @app.put("/api/tasks/<int:task_id>")
    def update_task(task_id: int):
        # Unknown id wins over a bad body: 404 before 400.
        store.get_task(task_id)
        update = TaskUpdate.from_dict(_json_body())
        task = store.update_task(task_id, update)
        return jsonify(task.to_dict())

    @app.delete("/api/tasks/<int:task_id>")
    def delete_task(task_id: int):
        store.delete_task(task_id)
        return jsonify({"success": True})

    @app.errorhandler(TaskValidationError)
    def _on_validation(err: TaskValidationError):
        logger.info("Rejected request %s %s: %s", request.method, request.path, err)
        return _error(str(err), 400)

    @app.errorhandler(TaskNotFoundError)
    def _on_not_found(err: TaskNotFoundError):
        logger.info("Task not found id=%s (%s %s)", err.task_id, request.method, request.path)
        return _error(str(err), 404)

    @app.errorhandler(HTTPException)
    def _on_http(err: HTTPException):
        # 405 is folded into 404: an unknown method on a known path is "no route".
        if err.code in (404, 405):
            return _error("Not Found", 404)
        return _error(err.name, err.code or 500)

    @app.errorhandler(Exception)
    def _on_unhandled(err: Exception):
        logger.exception("API error on %s %s", request.method, request.path)
        return _error("Internal Server Error", 500)

    return app
