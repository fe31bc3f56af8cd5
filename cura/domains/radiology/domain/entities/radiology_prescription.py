"""
Radiology Prescription Entity

One radiology service prescribed in an appointment.
"""

from __future__ import annotations

from typing import Any

from pydantic import field_validator

from cura.domains.radiology.domain.value_objects.radiology_status import RadiologyStatus
from cura.domains.shared.domain.entities.base import BackendRecord


class RadiologyPrescription(BackendRecord):
    """
    Row of `GET /radiology-prescriptions` and of the `services` list of
    `GET /radiology-prescriptions/appointment/:id`.
    """

    prescription_id: str
    appointment_id: str = ""
    service_id: str = ""
    service_name: str = ""
    patient_name: str = ""
    doctor_name: str = ""
    appointment_date: str | None = None
    prescribed_date: str | None = None
    payment_status: bool = False
    test_conducted: bool = False
    test_conducted_at: str | None = None
    status: RadiologyStatus = RadiologyStatus.PENDING

    @field_validator("prescription_id", "service_id", mode="before")
    @classmethod
    def _id_to_str(cls, value: Any) -> Any:
        return str(value) if isinstance(value, int) else value

    @property
    def awaiting_report(self) -> bool:
        """Conducted and not yet reported."""
        return self.test_conducted and self.status is RadiologyStatus.PENDING

    def search_texts(self) -> tuple[str]:
        return (self.service_name,)
