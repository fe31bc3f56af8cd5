"""
Lab Test Entities

Tests ordered under a patient service, their results and the report
payload used for printing.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from cura.domains.laboratory.domain.value_objects.report_status import ResultFlag
from cura.domains.shared.domain.entities.base import BackendRecord


class PatientTest(BackendRecord):
    """Row of `GET /lab-tests/service/:id`."""

    patient_test_id: int
    patient_service_id: int | None = None
    test_id: int | None = None
    test_name: str = ""
    unit: str | None = None
    normal_min: float | None = None
    normal_max: float | None = None

    @property
    def normal_range(self) -> str:
        if self.normal_min is None and self.normal_max is None:
            return ""
        low = "" if self.normal_min is None else f"{self.normal_min:g}"
        high = "" if self.normal_max is None else f"{self.normal_max:g}"
        return f"{low} - {high}"

    def flag(self, result_value: str) -> ResultFlag | None:
        """
        Compare a numeric result with the normal range.

        Returns:
            ResultFlag, or None for non-numeric values or unknown ranges
        """
        try:
            value = float(result_value)
        except (TypeError, ValueError):
            return None
        if self.normal_min is None and self.normal_max is None:
            return None
        if self.normal_min is not None and value < self.normal_min:
            return ResultFlag.LOW
        if self.normal_max is not None and value > self.normal_max:
            return ResultFlag.HIGH
        return ResultFlag.NORMAL


class PatientTestResult(BackendRecord):
    """Stored result of one patient test."""

    result_id: int
    patient_test_id: int
    result_value: str = ""
    reported_at: str | None = None
    test_name: str | None = None
    unit: str | None = None
    normal_min: float | None = None
    normal_max: float | None = None
    status: ResultFlag | None = None


class ReportPatientInfo(BackendRecord):
    patient_name: str = ""
    doctor_name: str = ""
    phone: str = ""
    sample_collected: str = ""
    sample_received: str = ""
    report_on: str = ""


class ReportServiceInfo(BackendRecord):
    service_type_name: str = ""
    sub_department_name: str = ""


class MedicalReportData(BaseModel):
    """Payload of `GET /patient-services/:id/medical-report`."""

    patient_info: ReportPatientInfo = Field(default_factory=ReportPatientInfo)
    service_info: ReportServiceInfo = Field(default_factory=ReportServiceInfo)
    test_results: list[PatientTestResult] = Field(default_factory=list)

    @property
    def abnormal_results(self) -> list[PatientTestResult]:
        return [r for r in self.test_results if r.status is not None and r.status is not ResultFlag.NORMAL]
