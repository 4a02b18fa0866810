"""
Tests for the HTTP routes, using the in-memory repositories
"""
import pytest
from fastapi.testclient import TestClient

from my_todo.api.todo.task.schemas import TaskCreate
from my_todo.core.exceptions import Unexpected
from my_todo.main import build_repositories, create_app
from my_todo.config import Settings


def test_root(client):
    res = client.get("/")
    assert res.status_code == 200
    assert res.text == "Hello, world!"


def test_create_task(client):
    res = client.post("/task", json={"text": "should_return_created_task", "labels": []})
    assert res.status_code == 201
    assert res.json() == {
        "id": 1,
        "text": "should_return_created_task",
        "completed": False,
        "labels": [],
    }


def test_create_task_with_label(client):
    label = client.post("/label", json={"name": "urgent"}).json()

    res = client.post("/task", json={"text": "ship it", "labels": [label["id"]]})

    assert res.status_code == 201
    assert res.json()["labels"] == [{"id": 1, "name": "urgent"}]


def test_create_task_unknown_label(client):
    res = client.post("/task", json={"text": "ship it", "labels": [9]})
    assert res.status_code == 404


@pytest.mark.parametrize("text", ["", "x" * 101])
def test_create_task_bad_text(client, text):
    res = client.post("/task", json={"text": text, "labels": []})
    assert res.status_code == 400
    assert res.text.startswith("Validation error")


def test_create_task_invalid_json(client):
    res = client.post(
        "/task", content="{not json", headers={"content-type": "application/json"}
    )
    assert res.status_code == 400


def test_find_task(client, memory_tasks):
    memory_tasks.create(TaskCreate(text="should_find_task"))

    res = client.get("/task/1")

    assert res.status_code == 200
    assert res.json() == {"id": 1, "text": "should_find_task", "completed": False, "labels": []}


def test_find_missing_task(client):
    assert client.get("/task/1").status_code == 404


def test_get_all_tasks(client, memory_tasks):
    memory_tasks.create(TaskCreate(text="should_get_all_tasks"))

    res = client.get("/task")

    assert res.status_code == 200
    assert res.json() == [
        {"id": 1, "text": "should_get_all_tasks", "completed": False, "labels": []}
    ]


def test_update_task(client, memory_tasks, memory_labels):
    label = memory_labels.create("urgent")
    memory_tasks.create(TaskCreate(text="before_update_task", label_ids=[label.id]))

    res = client.patch("/task/1", json={"text": "should_update_task", "completed": True})

    assert res.status_code == 201
    assert res.json() == {
        "id": 1,
        "text": "should_update_task",
        "completed": True,
        "labels": [{"id": 1, "name": "urgent"}],
    }


def test_update_task_clears_labels(client, memory_tasks, memory_labels):
    label = memory_labels.create("urgent")
    memory_tasks.create(TaskCreate(text="labelled", label_ids=[label.id]))

    res = client.patch("/task/1", json={"labels": []})

    assert res.status_code == 201
    assert res.json()["labels"] == []


def test_update_missing_task(client):
    res = client.patch("/task/5", json={"completed": True})
    assert res.status_code == 404


def test_update_task_empty_text(client, memory_tasks):
    memory_tasks.create(TaskCreate(text="keep"))
    res = client.patch("/task/1", json={"text": ""})
    assert res.status_code == 400


def test_delete_task(client, memory_tasks):
    memory_tasks.create(TaskCreate(text="should_delete_task"))

    res = client.delete("/task/1")
    assert res.status_code == 204

    assert client.delete("/task/1").status_code == 404


def test_label_routes(client):
    res = client.post("/label", json={"name": "urgent"})
    assert res.status_code == 201
    assert res.json() == {"id": 1, "name": "urgent"}

    assert client.post("/label", json={"name": "urgent"}).status_code == 409

    res = client.get("/label")
    assert res.status_code == 200
    assert res.json() == [{"id": 1, "name": "urgent"}]

    assert client.delete("/label/1").status_code == 204
    assert client.delete("/label/1").status_code == 404
    assert client.get("/label").json() == []


def test_cors_preflight(client):
    res = client.options(
        "/task",
        headers={
            "Origin": "http://localhost:3001",
            "Access-Control-Request-Method": "PATCH",
        },
    )
    assert res.status_code == 200
    assert res.headers["access-control-allow-origin"] == "http://localhost:3001"


def test_build_repositories_memory():
    tasks, labels = build_repositories(Settings(STORE="memory"))
    assert tasks.all() == []
    assert labels.all() == []


def test_build_repositories_db_requires_url():
    with pytest.raises(RuntimeError):
        build_repositories(Settings(STORE="db", DATABASE_URL=None))


def test_build_repositories_unknown_store():
    with pytest.raises(ValueError):
        build_repositories(Settings(STORE="redis"))


class BrokenStorage:
    """Repository whose every call fails like a lost database connection"""

    def _fail(self, *args, **kwargs):
        raise Unexpected("connection refused")

    create = find = all = update = delete = _fail


@pytest.fixture
def broken_client():
    app = create_app(BrokenStorage(), BrokenStorage())
    with TestClient(app) as test_client:
        yield test_client


@pytest.mark.parametrize(
    "method, path, body",
    [
        ("get", "/task", None),
        ("get", "/task/1", None),
        ("post", "/task", {"text": "t", "labels": []}),
        ("patch", "/task/1", {"completed": True}),
        ("delete", "/task/1", None),
        ("get", "/label", None),
        ("post", "/label", {"name": "urgent"}),
        ("delete", "/label/1", None),
    ],
)
def test_storage_failure_returns_500(broken_client, method, path, body):
    kwargs = {"json": body} if body is not None else {}

    res = broken_client.request(method.upper(), path, **kwargs)

    assert res.status_code == 500
    assert res.json() == {"detail": "Unexpected Error: [connection refused]"}


def test_not_found_detail_names_the_id(client, memory_tasks):
    memory_tasks.create(TaskCreate(text="exists"))

    assert client.get("/task/9").json() == {"detail": "NotFound, id is 9"}
    assert client.delete("/task/9").json() == {"detail": "NotFound, id is 9"}
    assert client.patch("/task/9", json={"completed": True}).json() == {
        "detail": "NotFound, id is 9"
    }
    assert client.post("/task", json={"text": "t", "labels": [4]}).json() == {
        "detail": "NotFound, id is 4"
    }
    assert client.delete("/label/4").json() == {"detail": "NotFound, id is 4"}


def test_importing_main_builds_no_app():
    import my_todo.main

    assert not hasattr(my_todo.main, "app")
