"""
Laboratory Domain Layer
"""

from cura.domains.laboratory.domain.entities import (
    LabService,
    MedicalReportData,
    PatientTest,
    PatientTestResult,
    PendingLabTest,
)
from cura.domains.laboratory.domain.value_objects import ReportStatus, ResultFlag

__all__ = [
    "LabService",
    "MedicalReportData",
    "PatientTest",
    "PatientTestResult",
    "PendingLabTest",
    "ReportStatus",
    "ResultFlag",
]
