from __future__ import annotations

import logging
import secrets
from abc import ABC, abstractmethod
from typing import Optional

from fastapi import HTTPException, Request
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from .settings import Settings

logger = logging.getLogger(__name__)

_security = HTTPBasic(auto_error=False)


# PUBLIC_INTERFACE
class AccessGate(ABC):
    """Authorization predicate consulted before a todo is deleted."""

    @abstractmethod
    async def is_authorized(self, request: Request) -> bool:
        """Return True if the request may perform a gated operation."""


# PUBLIC_INTERFACE
class BasicAccessGate(AccessGate):
    """
    Gate that accepts requests carrying the configured HTTP Basic credentials.

    If either the username or the password is not configured every request is
    denied, so a misconfigured server never allows deletion.
    """

    def __init__(self, username: Optional[str], password: Optional[str]) -> None:
        self._username = username
        self._password = password

    @classmethod
    def from_settings(cls, settings: Settings) -> "BasicAccessGate":
        if settings.access_username is None or settings.access_password is None:
            logger.warning("ACCESS_USERNAME/ACCESS_PASSWORD not set; deletes will be refused")
        return cls(settings.access_username, settings.access_password)

    async def is_authorized(self, request: Request) -> bool:
        if self._username is None or self._password is None:
            return False
        try:
            creds: Optional[HTTPBasicCredentials] = await _security(request)
        except HTTPException:
            # Malformed Authorization header
            return False
        if creds is None:
            return False
        user_ok = secrets.compare_digest(creds.username.encode("utf-8"), self._username.encode("utf-8"))
        pass_ok = secrets.compare_digest(creds.password.encode("utf-8"), self._password.encode("utf-8"))
        return user_ok and pass_ok


# PUBLIC_INTERFACE
async def access_granted(request: Request) -> bool:
    """
    FastAPI dependency evaluating the application's access gate.

    It only reports the verdict; TodoService decides what a denial means so
    that id validation still runs first.
    """
    gate: AccessGate = request.app.state.access_gate
    return await gate.is_authorized(request)
