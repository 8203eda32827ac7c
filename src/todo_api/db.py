from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from bson import ObjectId
from pymongo import MongoClient, ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from .errors import StorageError
from .models import TodoEntity
from .repositories import Repository
from .schemas import TodoCreate
from .settings import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Fields:
    id: str = "_id"
    todo: str = "todo"
    is_done: str = "isDone"
    created: str = "created"
    # Older documents written by the previous backend keep the timestamp here
    legacy_created: str = "date"


_FIELDS = _Fields()


class MongoRepository(Repository):
    """
    MongoDB-backed repository implementing the Repository interface.

    Updates and deletes go through find_one_and_update/find_one_and_delete so
    the lookup and the write are a single atomic operation on the server.
    """

    def __init__(self, collection: Collection, client: Optional[MongoClient] = None) -> None:
        self._collection = collection
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "MongoRepository":
        client: MongoClient = MongoClient(
            settings.mongo_uri,
            serverSelectionTimeoutMS=settings.mongo_timeout_ms,
            tz_aware=True,
        )
        collection = client[settings.mongo_db_name][settings.mongo_collection]
        logger.info(
            "Using MongoDB collection %s.%s",
            settings.mongo_db_name,
            settings.mongo_collection,
        )
        return cls(collection, client=client)

    def close(self) -> None:
        if self._client is not None:
            self._client.close()

    def _doc_to_entity(self, doc: Mapping[str, Any]) -> TodoEntity:
        created = doc.get(_FIELDS.created, doc.get(_FIELDS.legacy_created))
        if not isinstance(created, datetime) or _FIELDS.todo not in doc:
            logger.error("Malformed todo document %s", doc.get(_FIELDS.id))
            raise StorageError()
        if created.tzinfo is None:
            # Collections read without tz_aware come back naive but are UTC
            created = created.replace(tzinfo=timezone.utc)
        return {
            "id": str(doc[_FIELDS.id]),
            "todo": str(doc[_FIELDS.todo]),
            "isDone": bool(doc.get(_FIELDS.is_done, False)),
            "created": created,
        }

    def create(self, data: TodoCreate) -> TodoEntity:
        doc: Dict[str, Any] = {
            _FIELDS.todo: data.todo,
            _FIELDS.is_done: data.is_done,
            _FIELDS.created: datetime.now(timezone.utc),
        }
        try:
            result = self._collection.insert_one(doc)
        except PyMongoError as e:
            raise StorageError() from e
        doc[_FIELDS.id] = result.inserted_id
        return self._doc_to_entity(doc)

    def get(self, todo_id: str) -> Optional[TodoEntity]:
        try:
            doc = self._collection.find_one({_FIELDS.id: ObjectId(todo_id)})
        except PyMongoError as e:
            raise StorageError() from e
        return self._doc_to_entity(doc) if doc else None

    def list(self) -> List[TodoEntity]:
        try:
            docs = list(self._collection.find({}))
        except PyMongoError as e:
            raise StorageError() from e
        return [self._doc_to_entity(d) for d in docs]

    def update(self, todo_id: str, changes: Dict[str, Any]) -> Optional[TodoEntity]:
        patch: Dict[str, Any] = {}
        if "todo" in changes:
            patch[_FIELDS.todo] = changes["todo"]
        if "isDone" in changes:
            patch[_FIELDS.is_done] = changes["isDone"]
        try:
            doc = self._collection.find_one_and_update(
                {_FIELDS.id: ObjectId(todo_id)},
                {"$set": patch},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            raise StorageError() from e
        return self._doc_to_entity(doc) if doc else None

    def delete(self, todo_id: str) -> Optional[TodoEntity]:
        try:
            doc = self._collection.find_one_and_delete({_FIELDS.id: ObjectId(todo_id)})
        except PyMongoError as e:
            raise StorageError() from e
        return self._doc_to_entity(doc) if doc else None
