"""
Laboratory Entities
"""

from cura.domains.laboratory.domain.entities.lab_catalog import CatalogServiceType, CatalogTest, SubDepartment
from cura.domains.laboratory.domain.entities.lab_service import LabService, PendingLabTest
from cura.domains.laboratory.domain.entities.lab_test import (
    MedicalReportData,
    PatientTest,
    PatientTestResult,
    ReportPatientInfo,
    ReportServiceInfo,
)

__all__ = [
    "CatalogServiceType",
    "CatalogTest",
    "LabService",
    "MedicalReportData",
    "PatientTest",
    "PatientTestResult",
    "PendingLabTest",
    "ReportPatientInfo",
    "ReportServiceInfo",
    "SubDepartment",
]
