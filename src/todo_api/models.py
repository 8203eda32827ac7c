from __future__ import annotations

from datetime import datetime
from typing import TypedDict


# PUBLIC_INTERFACE
class TodoEntity(TypedDict):
    """
    Storage-neutral representation of a Todo record.

    Keys keep the wire/document field names:
    - id: ObjectId hex string assigned by the repository at creation
    - todo: non-empty text of the item
    - isDone: completion flag (False by default)
    - created: UTC creation timestamp, never changed afterwards
    """

    id: str
    todo: str
    isDone: bool
    created: datetime
