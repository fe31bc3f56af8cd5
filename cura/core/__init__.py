"""
Core Module

Cross-cutting infrastructure: logging, cancellation, state persistence
and session authentication.
"""

from cura.core.auth import (
    AuthenticationError,
    CredentialVerifier,
    SessionManager,
    SessionUser,
    StaticCredentialVerifier,
    UserRole,
)
from cura.core.cancellation import CancellationScope, CancellationToken, FetchCancelledError
from cura.core.state_store import AppStateStore, InMemoryStorage, JsonFileStorage, StorageAdapter

__all__ = [
    "AppStateStore",
    "AuthenticationError",
    "CancellationScope",
    "CancellationToken",
    "CredentialVerifier",
    "FetchCancelledError",
    "InMemoryStorage",
    "JsonFileStorage",
    "SessionManager",
    "SessionUser",
    "StaticCredentialVerifier",
    "StorageAdapter",
    "UserRole",
]
