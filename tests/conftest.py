from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from todo_api.auth import BasicAccessGate
from todo_api.errors import StorageError
from todo_api.main import create_app
from todo_api.models import TodoEntity
from todo_api.repositories import InMemoryRepository, Repository
from todo_api.schemas import TodoCreate
from todo_api.settings import Settings

ADMIN = ("admin", "s3cret")


def make_settings(**overrides: Any) -> Settings:
    values: Dict[str, Any] = {
        "persistence_backend": "memory",
        "mongo_uri": "mongodb://localhost:27017",
        "mongo_db_name": "todo_api_test",
        "mongo_collection": "todos",
        "mongo_timeout_ms": 500,
        "cors_allow_origins": ["*"],
        "access_username": ADMIN[0],
        "access_password": ADMIN[1],
        "log_level": "INFO",
        "host": "127.0.0.1",
        "port": 5000,
    }
    values.update(overrides)
    return Settings(**values)


class RecordingRepository(InMemoryRepository):
    """In-memory repository that records every call made to it."""

    def __init__(self) -> None:
        super().__init__()
        self.calls: List[str] = []

    def create(self, data: TodoCreate) -> TodoEntity:
        self.calls.append("create")
        return super().create(data)

    def get(self, todo_id: str) -> Optional[TodoEntity]:
        self.calls.append("get")
        return super().get(todo_id)

    def list(self) -> List[TodoEntity]:
        self.calls.append("list")
        return super().list()

    def update(self, todo_id: str, changes: Dict[str, Any]) -> Optional[TodoEntity]:
        self.calls.append("update")
        return super().update(todo_id, changes)

    def delete(self, todo_id: str) -> Optional[TodoEntity]:
        self.calls.append("delete")
        return super().delete(todo_id)


class BrokenRepository(Repository):
    """Repository whose backend is always unreachable."""

    def _fail(self):
        try:
            raise ConnectionError("connection refused")
        except ConnectionError as e:
            raise StorageError() from e

    def create(self, data):
        self._fail()

    def get(self, todo_id):
        self._fail()

    def list(self):
        self._fail()

    def update(self, todo_id, changes):
        self._fail()

    def delete(self, todo_id):
        self._fail()


@pytest.fixture
def repo() -> RecordingRepository:
    return RecordingRepository()


@pytest.fixture
def client(repo: RecordingRepository) -> TestClient:
    app = create_app(
        settings=make_settings(),
        repository=repo,
        access_gate=BasicAccessGate(*ADMIN),
    )
    return TestClient(app)


@pytest.fixture
def broken_repo() -> BrokenRepository:
    return BrokenRepository()


@pytest.fixture
def broken_client(broken_repo: BrokenRepository) -> TestClient:
    app = create_app(
        settings=make_settings(),
        repository=broken_repo,
        access_gate=BasicAccessGate(*ADMIN),
    )
    return TestClient(app)


@pytest.fixture
def admin_auth():
    return ADMIN


@pytest.fixture
def settings_factory():
    return make_settings
