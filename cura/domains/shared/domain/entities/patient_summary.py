"""
Patient Summary Entity

Patient header of an appointment-scoped retrieval.
"""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, ConfigDict, Field, field_validator

from cura.domains.shared.domain.entities.base import BackendRecord


class PatientSummary(BackendRecord):
    """
    Immutable patient header.

    Attributes:
        appointment_id: Appointment the retrieval was scoped to
        patient_name: Patient display name
        doctor_name: Prescribing doctor
        appointment_date: Appointment date as sent by the backend
        phone: Patient phone, used for SMS
    """

    model_config = ConfigDict(frozen=True)

    appointment_id: str = ""
    patient_name: str = ""
    doctor_name: str = ""
    appointment_date: str | None = None
    phone: str | None = Field(default=None, validation_alias=AliasChoices("patient_phone", "phone"))
    patient_id: str | None = None

    @field_validator("appointment_id", "patient_id", mode="before")
    @classmethod
    def _id_to_str(cls, value: Any) -> Any:
        return str(value) if isinstance(value, int) else value

    @property
    def has_phone(self) -> bool:
        return bool(self.phone and self.phone.strip())
