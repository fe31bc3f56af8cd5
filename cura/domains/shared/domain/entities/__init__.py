"""
Shared Entities
"""

from cura.domains.shared.domain.entities.appointment_aggregate import AppointmentAggregate
from cura.domains.shared.domain.entities.appointment_group import AppointmentGroup
from cura.domains.shared.domain.entities.base import BackendRecord
from cura.domains.shared.domain.entities.patient_summary import PatientSummary

__all__ = [
    "AppointmentAggregate",
    "AppointmentGroup",
    "BackendRecord",
    "PatientSummary",
]
