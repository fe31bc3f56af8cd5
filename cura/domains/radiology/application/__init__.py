"""
Radiology Application Layer
"""

from cura.domains.radiology.application.ports import IRadiologyAPIPort
from cura.domains.radiology.application.radiology_aggregator import RadiologyPrescriptionAggregator
from cura.domains.radiology.application.workflows import (
    RadiologyPendingWorkflow,
    RadiologyPrescriptionsWorkflow,
    RadiologyServicesWorkflow,
    ReportDraft,
)

__all__ = [
    "IRadiologyAPIPort",
    "RadiologyPendingWorkflow",
    "RadiologyPrescriptionAggregator",
    "RadiologyPrescriptionsWorkflow",
    "RadiologyServicesWorkflow",
    "ReportDraft",
]
