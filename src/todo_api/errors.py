from __future__ import annotations

from typing import Any, Dict, List, Optional


class TodoApiError(Exception):
    """
    Base class for errors raised by the todo service layer.

    Each subclass maps onto one HTTP outcome. The exception handler in main
    turns instances into a JSON envelope of the form:
        {"error": <error>, "message": <message>, ...}
    """

    status_code: int = 500
    error: str = "TodoApiError"
    message: str = "Server Error"

    def __init__(self, message: Optional[str] = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_content(self) -> Dict[str, Any]:
        return {"error": self.error, "message": self.message}


# PUBLIC_INTERFACE
class ValidationError(TodoApiError):
    """Malformed input, detected before any store access."""

    status_code = 400
    error = "ValidationError"
    message = "Request validation failed"

    def __init__(self, message: Optional[str] = None, detail: Optional[List[Dict[str, Any]]] = None) -> None:
        super().__init__(message)
        self.detail: List[Dict[str, Any]] = detail or []

    def to_content(self) -> Dict[str, Any]:
        content = super().to_content()
        content["detail"] = self.detail
        return content


# PUBLIC_INTERFACE
class NoFieldsError(TodoApiError):
    """An update was requested with nothing to change."""

    status_code = 400
    error = "NoFieldsError"
    message = "No params found"


# PUBLIC_INTERFACE
class NotFoundError(TodoApiError):
    """Well-formed identifier with no matching record."""

    status_code = 404
    error = "NotFoundError"
    message = "ID not found"


# PUBLIC_INTERFACE
class UnauthorizedError(TodoApiError):
    """The access gate denied the request."""

    status_code = 401
    error = "UnauthorizedError"
    message = "Not authenticated"


# PUBLIC_INTERFACE
class StorageError(TodoApiError):
    """
    The persistence backend failed (e.g. the database is unreachable).

    The message returned to clients stays generic; the underlying cause is
    kept on __cause__ for logging.
    """

    status_code = 500
    error = "StorageError"
    message = "Server Error"


def invalid_todo_id(todo_id: str) -> ValidationError:
    """Build the ValidationError raised for a malformed todoId."""
    return ValidationError(
        "Invalid todoId format",
        detail=[{"loc": ["path", "todoId"], "msg": "Invalid todoId format", "input": todo_id}],
    )
