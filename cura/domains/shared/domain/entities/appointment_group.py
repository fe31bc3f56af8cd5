"""
Appointment Group

Pending work items of one appointment, as listed on the main view of the
Lab Tests, Lab Reports and Radiology Pending screens.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

ItemT = TypeVar("ItemT")


@dataclass
class AppointmentGroup(Generic[ItemT]):
    """
    Patient row of a main list.

    Header fields come from the first item seen for the appointment.
    """

    appointment_id: str
    patient_name: str
    doctor_name: str
    appointment_date: str | None
    services: list[ItemT] = field(default_factory=list)

    @property
    def service_count(self) -> int:
        return len(self.services)

    def search_texts(self, service_texts: Callable[[ItemT], Iterable[Any]] | None = None) -> list[Any]:
        """Header fields plus, optionally, texts of every service."""
        texts: list[Any] = [self.patient_name, self.appointment_id, self.doctor_name]
        if service_texts is not None:
            for service in self.services:
                texts.extend(service_texts(service))
        return texts
