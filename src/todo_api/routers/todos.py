from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Request, status

from ..auth import access_granted
from ..schemas import TodoCreate, TodoOut, TodoUpdate
from ..service import TodoService

router = APIRouter(
    prefix="/api/todo",
    tags=["todos"],
)

_ID_DESCRIPTION = "ObjectId of the todo item (24 hex characters)"


def _get_service(request: Request) -> TodoService:
    """
    Dependency returning the TodoService built by create_app.
    """
    return request.app.state.todo_service


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[TodoOut],
    summary="List Todos",
    description="Return every todo item. An empty store yields an empty list.",
    responses={
        200: {"description": "List retrieved successfully"},
        500: {"description": "Storage failure"},
    },
)
def list_todos(service: TodoService = Depends(_get_service)) -> List[TodoOut]:
    return [TodoOut.from_entity(it) for it in service.list_todos()]


# PUBLIC_INTERFACE
@router.get(
    "/{todo_id}",
    response_model=TodoOut,
    summary="Get Todo",
    description="Get a single Todo item by ID.",
    responses={
        200: {"description": "Todo found"},
        400: {"description": "Invalid todoId format"},
        404: {"description": "Todo not found"},
        500: {"description": "Storage failure"},
    },
)
def get_todo(todo_id: str, service: TodoService = Depends(_get_service)) -> TodoOut:
    """
    Retrieve a single Todo item by its ID.
    """
    return TodoOut.from_entity(service.get_todo(todo_id))


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=TodoOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create Todo",
    description="Create a new Todo item and return it with its assigned id.",
    responses={
        201: {"description": "Todo created successfully"},
        400: {"description": "Validation error"},
        500: {"description": "Storage failure"},
    },
)
def create_todo(payload: TodoCreate, service: TodoService = Depends(_get_service)) -> TodoOut:
    return TodoOut.from_entity(service.create_todo(payload))


# PUBLIC_INTERFACE
@router.patch(
    "/{todo_id}",
    response_model=TodoOut,
    summary="Update Todo",
    description=(
        "Partially update a Todo item. Only the fields present in the body are changed; "
        "a body with neither 'todo' nor 'isDone' is rejected."
    ),
    responses={
        200: {"description": "Todo updated"},
        400: {"description": "Invalid todoId, invalid body, or no fields to update"},
        404: {"description": "Todo not found"},
        500: {"description": "Storage failure"},
    },
)
def patch_todo(
    todo_id: str,
    payload: Optional[TodoUpdate] = Body(default=None),
    service: TodoService = Depends(_get_service),
) -> TodoOut:
    """
    Partial update of a Todo item. A request without a body names no fields.
    """
    return TodoOut.from_entity(service.update_todo(todo_id, payload if payload is not None else TodoUpdate()))


# PUBLIC_INTERFACE
@router.delete(
    "/{todo_id}",
    response_model=TodoOut,
    summary="Delete Todo",
    description="Delete a Todo item by ID and return its last state. Requires HTTP Basic credentials.",
    responses={
        200: {"description": "Todo deleted"},
        400: {"description": "Invalid todoId format"},
        401: {"description": "Not authenticated"},
        404: {"description": "Todo not found"},
        500: {"description": "Storage failure"},
    },
)
def delete_todo(
    todo_id: str,
    authorized: bool = Depends(access_granted),
    service: TodoService = Depends(_get_service),
) -> TodoOut:
    return TodoOut.from_entity(service.delete_todo(todo_id, authorized))
