"""
Lab Service Entities

Patient services (one lab service prescribed in an appointment) and the
pending-test rows listed on the Lab Tests screen.
"""

from __future__ import annotations

from cura.domains.laboratory.domain.value_objects.report_status import ReportStatus
from cura.domains.shared.domain.entities.base import BackendRecord


class LabService(BackendRecord):
    """Row of `GET /patient-services/appointment/:id`."""

    patient_service_id: int
    appointment_id: str = ""
    service_type_id: int | None = None
    service_type_name: str = ""
    sub_department_id: int | None = None
    sub_department_name: str = "Other"
    prescribed_at: str | None = None
    prescribed_date: str | None = None
    sample_collected: bool = False
    sample_collected_at: str | None = None
    report_status: ReportStatus = ReportStatus.PENDING
    payment_status: bool = False

    @property
    def can_collect_sample(self) -> bool:
        return not self.sample_collected


class PendingLabTest(BackendRecord):
    """Row of `GET /lab-tests/pending` and `GET /lab-tests/completed`."""

    appointment_id: str
    patient_name: str = ""
    doctor_name: str = ""
    appointment_date: str | None = None
    patient_service_id: int
    service_type_name: str = ""
    sub_department_name: str = "Other"
    sample_collected: bool = False
    sample_collected_at: str | None = None
    report_status: str = ReportStatus.PENDING.value

    def search_texts(self) -> tuple[str, str]:
        return (self.service_type_name, self.sub_department_name)
