"""
Radiology Domain Layer
"""

from cura.domains.radiology.domain.entities import (
    RadiologyPrescription,
    RadiologyReport,
    RadiologyServiceType,
    RadiologyTemplate,
)
from cura.domains.radiology.domain.services import ReportTemplateService
from cura.domains.radiology.domain.value_objects import RadiologyStatus

__all__ = [
    "RadiologyPrescription",
    "RadiologyReport",
    "RadiologyServiceType",
    "RadiologyStatus",
    "RadiologyTemplate",
    "ReportTemplateService",
]
