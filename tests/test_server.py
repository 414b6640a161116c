# tests/test_server.py

from __future__ import annotations

import pytest

from tasklist.server.app import create_app
from tasklist.storage.kv_store import InMemoryKeyValueStore
from tasklist.tasks.task_store import TaskStore


def _create(client, text: str) -> dict:
    resp = client.post("/api/tasks", json={"text": text})
    assert resp.status_code == 200
    return resp.get_json()


def test_get_tasks_on_fresh_store(client) -> None:
    resp = client.get("/api/tasks")
    assert resp.status_code == 200
    assert resp.get_json() == {"tasks": [], "taskIdCounter": 1}


def test_create_then_list_round_trip(client) -> None:
    created = _create(client, "Buy milk")
    assert created["id"] == 1
    assert created["completed"] is False
    assert created["isEditing"] is False
    assert created["createdAt"]

    body = client.get("/api/tasks").get_json()
    assert body["taskIdCounter"] == 2
    (task,) = body["tasks"]
    assert task["text"] == "Buy milk"
    assert task["completed"] is False


@pytest.mark.parametrize("payload", [{"text": ""}, {"text": "   "}, {}, {"text": 5}])
def test_create_rejects_empty_text(client, payload) -> None:
    resp = client.post("/api/tasks", json=payload)
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Task text is required"}
    assert client.get("/api/tasks").get_json()["tasks"] == []


def test_create_with_malformed_body_is_400(client) -> None:
    resp = client.post("/api/tasks", data="not json", content_type="application/json")
    assert resp.status_code == 400


def test_update_merges_partial_fields(client) -> None:
    created = _create(client, "Write report")

    resp = client.put(f"/api/tasks/{created['id']}", json={"completed": True})
    assert resp.status_code == 200
    updated = resp.get_json()
    assert updated["completed"] is True
    assert updated["text"] == "Write report"
    assert updated["createdAt"] == created["createdAt"]


def test_update_ignores_id_and_created_at(client) -> None:
    created = _create(client, "A")

    resp = client.put(
        f"/api/tasks/{created['id']}",
        json={"id": 77, "createdAt": "1999-01-01T00:00:00Z", "text": "A2"},
    )
    body = resp.get_json()
    assert body["id"] == created["id"]
    assert body["createdAt"] == created["createdAt"]
    assert body["text"] == "A2"


def test_update_rejects_wrong_types(client) -> None:
    created = _create(client, "A")
    resp = client.put(f"/api/tasks/{created['id']}", json={"completed": "yes"})
    assert resp.status_code == 400


def test_update_unknown_id_is_404_and_no_change(client) -> None:
    _create(client, "A")
    before = client.get("/api/tasks").get_json()

    resp = client.put("/api/tasks/42", json={"completed": True})
    assert resp.status_code == 404
    assert resp.get_json() == {"error": "Task not found"}
    assert client.get("/api/tasks").get_json() == before


def test_update_unknown_id_is_404_even_with_bad_body(client) -> None:
    _create(client, "A")

    assert client.put("/api/tasks/99").status_code == 404
    assert client.put("/api/tasks/99", json={"completed": "yes"}).status_code == 404
    assert client.put("/api/tasks/1", json={"completed": "yes"}).status_code == 400


def test_delete_and_delete_unknown(client) -> None:
    created = _create(client, "A")

    resp = client.delete(f"/api/tasks/{created['id']}")
    assert resp.status_code == 200
    assert resp.get_json() == {"success": True}

    again = client.delete(f"/api/tasks/{created['id']}")
    assert again.status_code == 404
    assert client.get("/api/tasks").get_json() == {"tasks": [], "taskIdCounter": 2}


def test_bulk_replace_empty_keeps_counter(client) -> None:
    _create(client, "A")
    _create(client, "B")

    resp = client.put("/api/tasks/bulk", json={"tasks": []})
    assert resp.status_code == 200
    assert resp.get_json() == {"success": True}
    assert client.get("/api/tasks").get_json() == {"tasks": [], "taskIdCounter": 3}


def test_bulk_replace_scenario(client) -> None:
    a = _create(client, "A")
    b = _create(client, "B")
    client.put(f"/api/tasks/{a['id']}", json={"completed": True})

    resp = client.put("/api/tasks/bulk", json={"tasks": [b]})
    assert resp.status_code == 200

    body = client.get("/api/tasks").get_json()
    assert body["tasks"] == [b]
    assert body["taskIdCounter"] == 3


@pytest.mark.parametrize(
    "payload",
    [
        {"tasks": "nope"},
        {"tasks": [{"id": "x", "text": "bad id"}]},
        {"tasks": [{"id": 1, "text": "a"}, {"id": 1, "text": "b"}]},
        {"tasks": [{"id": 1, "text": "   "}]},
        {"tasks": [{"id": 1, "text": ""}]},
        ["not", "an", "object"],
    ],
)
def test_bulk_replace_rejects_malformed_payload(client, payload) -> None:
    _create(client, "keep me")
    resp = client.put("/api/tasks/bulk", json=payload)
    assert resp.status_code == 400
    assert [t["text"] for t in client.get("/api/tasks").get_json()["tasks"]] == ["keep me"]


def test_cors_headers_on_every_response(client) -> None:
    for resp in (client.get("/api/tasks"), client.get("/api/nowhere")):
        assert resp.headers["Access-Control-Allow-Origin"] == "*"
        assert resp.headers["Access-Control-Allow-Methods"] == "GET, POST, PUT, DELETE, OPTIONS"
        assert resp.headers["Access-Control-Allow-Headers"] == "Content-Type"


def test_options_preflight_has_empty_body(client) -> None:
    resp = client.options("/api/tasks/3")
    assert resp.status_code == 200
    assert resp.data == b""
    assert resp.headers["Access-Control-Allow-Origin"] == "*"


@pytest.mark.parametrize(
    "method,path",
    [
        ("get", "/api/unknown"),
        ("delete", "/api/tasks"),
        ("post", "/api/tasks/1"),
        ("delete", "/api/tasks/bulk"),
        ("put", "/api/tasks/abc"),
    ],
)
def test_unmatched_routes_are_404(client, method, path) -> None:
    resp = getattr(client, method)(path)
    assert resp.status_code == 404
    assert resp.get_json() == {"error": "Not Found"}


class _BrokenKV:
    def get(self, key: str) -> str | None:
        raise OSError("disk on fire")

    def put(self, key: str, value: str) -> None:
        raise OSError("disk on fire")


def test_store_failure_is_500_with_generic_body() -> None:
    client = create_app(TaskStore(_BrokenKV())).test_client()
    resp = client.get("/api/tasks")
    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Internal Server Error"}
    assert resp.headers["Access-Control-Allow-Origin"] == "*"


def test_corrupt_record_is_500() -> None:
    kv = InMemoryKeyValueStore({"user_tasks": "[1, 2"})
    client = create_app(TaskStore(kv)).test_client()
    assert client.get("/api/tasks").status_code == 500
