"""
Radiology Entities
"""

from cura.domains.radiology.domain.entities.radiology_catalog import (
    RadiologyReport,
    RadiologyServiceType,
    RadiologyTemplate,
)
from cura.domains.radiology.domain.entities.radiology_prescription import RadiologyPrescription

__all__ = [
    "RadiologyPrescription",
    "RadiologyReport",
    "RadiologyServiceType",
    "RadiologyTemplate",
]
