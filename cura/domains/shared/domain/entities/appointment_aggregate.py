"""
Appointment Aggregate

Patient summary plus its line items grouped by department.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

from cura.domains.shared.domain.entities.patient_summary import PatientSummary

ItemT = TypeVar("ItemT")


@dataclass
class AppointmentAggregate(Generic[ItemT]):
    """
    Result of one retrieval.

    Attributes:
        appointment_id: Normalized identifier that was retrieved
        patient: Patient header
        groups: Department name -> items, in first-seen order
    """

    appointment_id: str
    patient: PatientSummary
    groups: dict[str, list[ItemT]] = field(default_factory=dict)

    @property
    def services(self) -> list[ItemT]:
        """All items, group by group."""
        return [item for items in self.groups.values() for item in items]

    @property
    def department_names(self) -> list[str]:
        return list(self.groups.keys())

    @property
    def service_count(self) -> int:
        return sum(len(items) for items in self.groups.values())

    @property
    def is_empty(self) -> bool:
        return self.service_count == 0
