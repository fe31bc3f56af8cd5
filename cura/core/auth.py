"""
Session Authentication

Pluggable credential verification and the session that gates the
pharmacy, laboratory and radiology areas.
"""

from __future__ import annotations

import hmac
import logging
from enum import Enum
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, ValidationError

from cura.core.state_store import USER_KEY, AppStateStore

logger = logging.getLogger(__name__)


class UserRole(str, Enum):
    """Department a signed-in user works in."""

    PHARMACY = "pharmacy"
    LABORATORY = "laboratory"
    RADIOLOGY = "radiology"

    @property
    def home_route(self) -> str:
        """Route the user lands on after login."""
        return ROLE_HOME_ROUTES[self]


ROLE_HOME_ROUTES: dict[UserRole, str] = {
    UserRole.PHARMACY: "/pharma",
    UserRole.LABORATORY: "/lab",
    UserRole.RADIOLOGY: "/radiology",
}

ROUTE_ROLES: dict[str, tuple[UserRole, ...]] = {
    "/pharma": (UserRole.PHARMACY,),
    "/lab": (UserRole.LABORATORY,),
    "/radiology": (UserRole.RADIOLOGY,),
}


class SessionUser(BaseModel):
    """Persisted session payload."""

    model_config = ConfigDict(frozen=True)

    username: str
    role: UserRole


class AuthenticationError(Exception):
    """Raised when credentials are rejected."""

    def __init__(self, message: str = "Invalid username or password"):
        self.message = message
        super().__init__(message)


@runtime_checkable
class CredentialVerifier(Protocol):
    """Port for credential checks; production code plugs an identity provider."""

    def verify(self, username: str, password: str) -> bool:
        ...


class StaticCredentialVerifier:
    """Accepts exactly one configured username/password pair."""

    def __init__(self, username: str | None = None, password: str | None = None):
        if username is None or password is None:
            from cura.config.settings import get_settings

            settings = get_settings()
            username = username if username is not None else settings.AUTH_USERNAME
            password = password if password is not None else settings.AUTH_PASSWORD
        self._username = username
        self._password = password

    def verify(self, username: str, password: str) -> bool:
        user_ok = hmac.compare_digest((username or "").encode(), self._username.encode())
        pass_ok = hmac.compare_digest((password or "").encode(), self._password.encode())
        return user_ok and pass_ok


class SessionManager:
    """
    In-memory session mirrored into the state store.

    The persisted user is restored on construction; logout clears the user
    and every stored tab selection.
    """

    def __init__(self, verifier: CredentialVerifier, store: AppStateStore):
        self._verifier = verifier
        self._store = store
        self._user: SessionUser | None = self._restore()

    def _restore(self) -> SessionUser | None:
        data = self._store.get_json(USER_KEY)
        if not data:
            return None
        try:
            return SessionUser.model_validate(data)
        except ValidationError:
            logger.warning("Stored session is invalid, clearing it")
            self._store.remove(USER_KEY)
            return None

    @property
    def user(self) -> SessionUser | None:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    def login(self, username: str, password: str, role: UserRole | str) -> SessionUser:
        """
        Sign in a user for a department.

        Raises:
            AuthenticationError: If the verifier rejects the credentials
        """
        if not self._verifier.verify(username, password):
            logger.info(f"Rejected login for '{username}'")
            raise AuthenticationError()

        user = SessionUser(username=username, role=UserRole(role))
        self._user = user
        self._store.set_json(USER_KEY, user.model_dump(mode="json"))
        logger.info(f"User '{username}' signed in as {user.role.value}")
        return user

    def logout(self) -> None:
        if self._user:
            logger.info(f"User '{self._user.username}' signed out")
        self._user = None
        self._store.clear_session()

    def resolve_route(self, route: str, fallback: str = "/login") -> str:
        """
        Route guard.

        Returns the route itself when the current user may open it, the
        user's own department route when the role does not match, and
        `fallback` when nobody is signed in.
        """
        if route == fallback:
            return route
        if self._user is None:
            return fallback
        allowed = ROUTE_ROLES.get(route)
        if allowed is None or self._user.role in allowed:
            return route
        return self._user.role.home_route

    def initial_route(self) -> str:
        if self._user is None:
            return "/login"
        return self._user.role.home_route
