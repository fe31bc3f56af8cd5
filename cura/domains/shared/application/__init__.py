"""
Shared Application Layer

Retrieval, navigation, mutation and scanning components consumed by the
department workflows.
"""

from cura.domains.shared.application.aggregator import AppointmentRecordAggregator
from cura.domains.shared.application.mutation_coordinator import MutationCoordinator, MutationOperation
from cura.domains.shared.application.navigation_controller import WorkflowNavigationController
from cura.domains.shared.application.retrieval_workflow import AppointmentRetrievalWorkflow
from cura.domains.shared.application.scanner_session import (
    DecodeFailure,
    ScannerError,
    ScannerSession,
    ScannerState,
)

__all__ = [
    "AppointmentRecordAggregator",
    "AppointmentRetrievalWorkflow",
    "DecodeFailure",
    "MutationCoordinator",
    "MutationOperation",
    "ScannerError",
    "ScannerSession",
    "ScannerState",
    "WorkflowNavigationController",
]
