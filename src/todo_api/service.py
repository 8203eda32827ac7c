from __future__ import annotations

import logging
from typing import List

from .errors import NoFieldsError, NotFoundError, StorageError, UnauthorizedError, invalid_todo_id
from .models import TodoEntity
from .repositories import Repository, is_valid_todo_id
from .schemas import TodoCreate, TodoUpdate

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
class TodoService:
    """
    Todo resource operations on top of a Repository.

    Input is checked before the repository is touched: a malformed id raises
    ValidationError, an empty update raises NoFieldsError and a denied delete
    raises UnauthorizedError. Missing records raise NotFoundError.
    StorageError from the repository is logged and re-raised unchanged.
    """

    def __init__(self, repository: Repository) -> None:
        self._repo = repository

    def _check_id(self, todo_id: str) -> None:
        if not is_valid_todo_id(todo_id):
            logger.debug("Rejected malformed todoId %r", todo_id)
            raise invalid_todo_id(todo_id)

    def _log_storage_error(self, operation: str, exc: StorageError) -> None:
        logger.error("Storage failure during %s: %s", operation, exc.__cause__ or exc, exc_info=exc)

    # PUBLIC_INTERFACE
    def list_todos(self) -> List[TodoEntity]:
        """Return all todos; an empty store gives an empty list."""
        try:
            return self._repo.list()
        except StorageError as e:
            self._log_storage_error("list", e)
            raise

    # PUBLIC_INTERFACE
    def get_todo(self, todo_id: str) -> TodoEntity:
        self._check_id(todo_id)
        try:
            item = self._repo.get(todo_id)
        except StorageError as e:
            self._log_storage_error("get", e)
            raise
        if item is None:
            raise NotFoundError()
        return item

    # PUBLIC_INTERFACE
    def create_todo(self, data: TodoCreate) -> TodoEntity:
        try:
            created = self._repo.create(data)
        except StorageError as e:
            self._log_storage_error("create", e)
            raise
        logger.info("Created todo %s", created["id"])
        return created

    # PUBLIC_INTERFACE
    def update_todo(self, todo_id: str, data: TodoUpdate) -> TodoEntity:
        """
        Apply only the fields present in the request body.

        Raises NoFieldsError when the body names neither todo nor isDone.
        """
        self._check_id(todo_id)
        changes = data.changes()
        if not changes:
            raise NoFieldsError()
        try:
            updated = self._repo.update(todo_id, changes)
        except StorageError as e:
            self._log_storage_error("update", e)
            raise
        if updated is None:
            raise NotFoundError()
        logger.info("Updated todo %s fields=%s", todo_id, sorted(changes))
        return updated

    # PUBLIC_INTERFACE
    def delete_todo(self, todo_id: str, authorized: bool) -> TodoEntity:
        """
        Remove a todo and return its last state.

        authorized is the access gate's verdict for the calling request.
        """
        self._check_id(todo_id)
        if not authorized:
            raise UnauthorizedError()
        try:
            removed = self._repo.delete(todo_id)
        except StorageError as e:
            self._log_storage_error("delete", e)
            raise
        if removed is None:
            raise NotFoundError()
        logger.info("Deleted todo %s", todo_id)
        return removed
