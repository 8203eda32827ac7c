from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator

from .models import TodoEntity


def _clean_todo_text(value: str) -> str:
    """
    Strip surrounding whitespace and reject text that ends up empty.
    """
    s = value.strip()
    if not s:
        raise ValueError("Please include a todo item!")
    return s


# PUBLIC_INTERFACE
class TodoCreate(BaseModel):
    """
    Body of POST /api/todo.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "todo": "Buy milk",
                "isDone": False,
            }
        },
    )

    todo: str = Field(..., description="Text of the todo item")
    is_done: StrictBool = Field(
        default=False,
        alias="isDone",
        description="Completion status flag; must be a JSON boolean when given",
    )

    @field_validator("todo")
    @classmethod
    def validate_todo(cls, v: str) -> str:
        return _clean_todo_text(v)


# PUBLIC_INTERFACE
class TodoUpdate(BaseModel):
    """
    Body of PATCH /api/todo/{todoId}.

    Both fields are optional, but whether a field was supplied is read from
    model_fields_set and never from its value: {"isDone": false} is an update
    of isDone, {} is no update at all. Sending null for a field is rejected
    since a Todo field may not be cleared.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "todo": "Buy oat milk",
                "isDone": True,
            }
        },
    )

    todo: Optional[str] = Field(default=None, description="Replacement text for the todo item")
    is_done: Optional[StrictBool] = Field(
        default=None,
        alias="isDone",
        description="Replacement completion flag",
    )

    @field_validator("todo")
    @classmethod
    def validate_todo(cls, v: Optional[str]) -> str:
        # Validators only run for supplied values, so None here is an explicit null
        if v is None:
            raise ValueError("todo may not be null")
        return _clean_todo_text(v)

    @field_validator("is_done")
    @classmethod
    def validate_is_done(cls, v: Optional[bool]) -> bool:
        if v is None:
            raise ValueError("Please enter a valid boolean value for isDone!")
        return v

    # PUBLIC_INTERFACE
    def changes(self) -> dict:
        """
        Return the supplied fields keyed by their document names.

        An empty dict means the caller asked for no change.
        """
        fields = self.model_fields_set
        out: dict = {}
        if "todo" in fields:
            out["todo"] = self.todo
        if "is_done" in fields:
            out["isDone"] = self.is_done
        return out


# PUBLIC_INTERFACE
class TodoOut(BaseModel):
    """
    Schema returned by the API for a Todo item.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "_id": "64b7f0c2e13f4a2b9c0d1e2f",
                "todo": "Buy milk",
                "isDone": False,
                "created": "2025-01-25T10:15:30.123000",
            }
        },
    )

    id: str = Field(..., alias="_id", description="Unique identifier of the todo item")
    todo: str = Field(..., description="Text of the todo item")
    is_done: bool = Field(..., alias="isDone", description="Completion status flag")
    created: datetime = Field(..., description="Creation timestamp")

    @classmethod
    def from_entity(cls, entity: TodoEntity) -> "TodoOut":
        return cls(
            id=entity["id"],
            todo=entity["todo"],
            is_done=entity["isDone"],
            created=entity["created"],
        )
