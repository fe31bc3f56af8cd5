"""
Shared Domain Errors

Retrieval and mutation failures surfaced to screen workflows.
"""

from __future__ import annotations


class RetrievalError(Exception):
    """
    Base error for appointment-scoped retrieval.

    Attributes:
        message: User-facing message
        appointment_id: Identifier that was attempted, if any
        retryable: True when repeating the same request may succeed
    """

    retryable = False

    def __init__(self, message: str, appointment_id: str | None = None):
        self.message = message
        self.appointment_id = appointment_id
        super().__init__(message)


class RetrievalNotFoundError(RetrievalError):
    """Backend answered but holds no records for the appointment."""


class RetrievalTransientError(RetrievalError):
    """Network failure, timeout, server error or malformed payload."""

    retryable = True


class InvalidIdentifierError(RetrievalError):
    """Input is not a valid appointment identifier; nothing was fetched."""

    def __init__(self, raw: str):
        self.raw = raw
        super().__init__(f"Invalid appointment ID: '{raw}'", appointment_id=None)


class MutationError(Exception):
    """
    A state-changing call failed or was refused.

    Attributes:
        operation: Operation name (see MutationOperation)
        message: User-facing message
        item_key: Busy-flag key of the affected item, if any
    """

    def __init__(self, operation: str, message: str, item_key: object | None = None):
        self.operation = operation
        self.message = message
        self.item_key = item_key
        super().__init__(message)


class InvalidMutationError(MutationError):
    """Rejected client-side before any network call."""


class MutationInProgressError(MutationError):
    """Another mutation on the same item is still in flight."""

    def __init__(self, operation: str, item_key: object | None = None):
        super().__init__(operation, "Another update for this item is already in progress", item_key)


class DetailLoadError(Exception):
    """Detail content of a selected service could not be loaded."""

    def __init__(self, message: str, service_key: object | None = None):
        self.message = message
        self.service_key = service_key
        super().__init__(message)
