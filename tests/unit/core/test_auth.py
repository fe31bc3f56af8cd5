"""
Unit tests for session authentication and route guarding.
"""

import pytest

from cura.core.auth import (
    AuthenticationError,
    SessionManager,
    StaticCredentialVerifier,
    UserRole,
)
from cura.core.state_store import LAB_ACTIVE_TAB_KEY, USER_KEY, AppStateStore, InMemoryStorage


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def sessions(storage) -> SessionManager:
    return SessionManager(StaticCredentialVerifier("staff", "s3cret"), AppStateStore(storage))


class TestStaticCredentialVerifier:
    """Tests for StaticCredentialVerifier."""

    def test_accepts_configured_pair(self) -> None:
        verifier = StaticCredentialVerifier("staff", "s3cret")
        assert verifier.verify("staff", "s3cret")

    @pytest.mark.parametrize(
        "username,password",
        [("staff", "wrong"), ("other", "s3cret"), ("", "")],
    )
    def test_rejects_other_pairs(self, username: str, password: str) -> None:
        verifier = StaticCredentialVerifier("staff", "s3cret")
        assert not verifier.verify(username, password)


class TestSessionManager:
    """Tests for SessionManager."""

    def test_login_persists_user(self, sessions, storage) -> None:
        user = sessions.login("staff", "s3cret", "laboratory")

        assert user.role is UserRole.LABORATORY
        assert sessions.is_authenticated
        assert storage.get_item(USER_KEY) is not None

    def test_login_rejected(self, sessions, storage) -> None:
        with pytest.raises(AuthenticationError) as exc_info:
            sessions.login("staff", "nope", UserRole.PHARMACY)

        assert exc_info.value.message == "Invalid username or password"
        assert not sessions.is_authenticated
        assert storage.get_item(USER_KEY) is None

    def test_session_restored_from_store(self, sessions, storage) -> None:
        sessions.login("staff", "s3cret", UserRole.RADIOLOGY)

        restored = SessionManager(StaticCredentialVerifier("staff", "s3cret"), AppStateStore(storage))

        assert restored.user is not None
        assert restored.user.role is UserRole.RADIOLOGY

    def test_invalid_stored_session_is_cleared(self, storage) -> None:
        storage.set_item(USER_KEY, '{"username": "staff", "role": "dentistry"}')

        sessions = SessionManager(StaticCredentialVerifier("staff", "s3cret"), AppStateStore(storage))

        assert sessions.user is None
        assert storage.get_item(USER_KEY) is None

    def test_logout_clears_user_and_tabs(self, sessions, storage) -> None:
        sessions.login("staff", "s3cret", UserRole.LABORATORY)
        storage.set_item(LAB_ACTIVE_TAB_KEY, "reports")

        sessions.logout()

        assert sessions.user is None
        assert storage.get_item(USER_KEY) is None
        assert storage.get_item(LAB_ACTIVE_TAB_KEY) is None


class TestRouteGuard:
    """Tests for SessionManager.resolve_route and initial_route."""

    def test_anonymous_user_sent_to_login(self, sessions) -> None:
        assert sessions.resolve_route("/lab") == "/login"
        assert sessions.initial_route() == "/login"

    def test_login_route_always_allowed(self, sessions) -> None:
        assert sessions.resolve_route("/login") == "/login"

    def test_matching_role_allowed(self, sessions) -> None:
        sessions.login("staff", "s3cret", UserRole.PHARMACY)
        assert sessions.resolve_route("/pharma") == "/pharma"

    def test_other_department_redirects_home(self, sessions) -> None:
        sessions.login("staff", "s3cret", UserRole.RADIOLOGY)

        assert sessions.resolve_route("/lab") == "/radiology"
        assert sessions.initial_route() == "/radiology"
