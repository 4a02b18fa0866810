"""
Test configuration and fixtures for my_todo
"""
import pytest
from fastapi.testclient import TestClient

from my_todo.api.todo.label.services import LabelRepositoryForDb, LabelRepositoryForMemory
from my_todo.api.todo.task.services import TaskRepositoryForDb, TaskRepositoryForMemory
from my_todo.db.session import Base, create_session_factory
from my_todo.main import create_app


@pytest.fixture
def session_factory():
    """Fresh SQLite in-memory database with the three tables created"""
    factory = create_session_factory("sqlite://")
    engine = factory.kw["bind"]
    Base.metadata.create_all(bind=engine)
    yield factory
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def memory_labels():
    return LabelRepositoryForMemory()


@pytest.fixture
def memory_tasks(memory_labels):
    return TaskRepositoryForMemory(memory_labels)


@pytest.fixture
def db_labels(session_factory):
    return LabelRepositoryForDb(session_factory)


@pytest.fixture
def db_tasks(session_factory):
    return TaskRepositoryForDb(session_factory)


@pytest.fixture(params=["memory", "db"])
def repositories(request):
    """(task repository, label repository) for each backend"""
    if request.param == "memory":
        labels = request.getfixturevalue("memory_labels")
        tasks = request.getfixturevalue("memory_tasks")
    else:
        labels = request.getfixturevalue("db_labels")
        tasks = request.getfixturevalue("db_tasks")
    return tasks, labels


@pytest.fixture
def client(memory_tasks, memory_labels):
    app = create_app(memory_tasks, memory_labels)
    with TestClient(app) as test_client:
        yield test_client
