from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from threading import RLock
from typing import Any, Dict, List, Optional

from bson import ObjectId

from .models import TodoEntity
from .schemas import TodoCreate
from .settings import Settings, get_settings


# PUBLIC_INTERFACE
def is_valid_todo_id(value: Any) -> bool:
    """Return True when value is a well-formed ObjectId string (existence is not checked)."""
    return isinstance(value, str) and ObjectId.is_valid(value)


# PUBLIC_INTERFACE
class Repository(ABC):
    """
    Abstract repository contract for todo storage backends.

    Implementations raise errors.StorageError when the backend fails. Callers
    are expected to pass ids that already satisfy is_valid_todo_id.
    """

    @abstractmethod
    def create(self, data: TodoCreate) -> TodoEntity:
        """Persist a new TodoEntity with a fresh id and creation time, and return it."""

    @abstractmethod
    def get(self, todo_id: str) -> Optional[TodoEntity]:
        """Return a TodoEntity by id, or None if not found."""

    @abstractmethod
    def list(self) -> List[TodoEntity]:
        """Return every TodoEntity in store order."""

    @abstractmethod
    def update(self, todo_id: str, changes: Dict[str, Any]) -> Optional[TodoEntity]:
        """
        Atomically apply changes (document field name -> value) to one record.
        Return the updated entity, or None if not found.
        """

    @abstractmethod
    def delete(self, todo_id: str) -> Optional[TodoEntity]:
        """Atomically remove a record. Return its last state, or None if not found."""


class InMemoryRepository(Repository):
    """
    Thread-safe in-memory repository suitable for testing and default runtime.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._items: dict[str, TodoEntity] = {}

    def _now(self) -> datetime:
        return datetime.now(timezone.utc)

    def create(self, data: TodoCreate) -> TodoEntity:
        entity: TodoEntity = {
            "id": str(ObjectId()),
            "todo": data.todo,
            "isDone": data.is_done,
            "created": self._now(),
        }
        with self._lock:
            self._items[entity["id"]] = entity
            return entity.copy()

    def get(self, todo_id: str) -> Optional[TodoEntity]:
        with self._lock:
            item = self._items.get(todo_id)
            return None if item is None else item.copy()

    def list(self) -> List[TodoEntity]:
        with self._lock:
            # dicts keep insertion order, which stands in for natural order
            return [t.copy() for t in self._items.values()]

    def update(self, todo_id: str, changes: Dict[str, Any]) -> Optional[TodoEntity]:
        with self._lock:
            existing = self._items.get(todo_id)
            if existing is None:
                return None

            updated = existing.copy()
            if "todo" in changes:
                updated["todo"] = changes["todo"]
            if "isDone" in changes:
                updated["isDone"] = changes["isDone"]

            self._items[todo_id] = updated
            return updated.copy()

    def delete(self, todo_id: str) -> Optional[TodoEntity]:
        with self._lock:
            return self._items.pop(todo_id, None)


# PUBLIC_INTERFACE
def get_repository(settings: Optional[Settings] = None) -> Repository:
    """
    Factory to return the configured repository based on settings.
    - memory: InMemoryRepository
    - mongo: MongoRepository connected with MONGO_URI
    """
    settings = settings or get_settings()
    if settings.persistence_backend == "mongo":
        from .db import MongoRepository

        return MongoRepository.from_settings(settings)
    return InMemoryRepository()
