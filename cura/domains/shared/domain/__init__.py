"""
Shared Domain Layer

Entities, value objects and services used by every department screen.
"""

from cura.domains.shared.domain.entities import AppointmentAggregate, BackendRecord, PatientSummary
from cura.domains.shared.domain.errors import (
    DetailLoadError,
    InvalidIdentifierError,
    InvalidMutationError,
    MutationError,
    MutationInProgressError,
    RetrievalError,
    RetrievalNotFoundError,
    RetrievalTransientError,
)
from cura.domains.shared.domain.value_objects import ActiveView, AppointmentId

__all__ = [
    "ActiveView",
    "AppointmentAggregate",
    "AppointmentId",
    "BackendRecord",
    "DetailLoadError",
    "InvalidIdentifierError",
    "InvalidMutationError",
    "MutationError",
    "MutationInProgressError",
    "PatientSummary",
    "RetrievalError",
    "RetrievalNotFoundError",
    "RetrievalTransientError",
]
