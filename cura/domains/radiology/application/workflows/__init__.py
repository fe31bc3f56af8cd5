"""
Radiology Screen Workflows
"""

from cura.domains.radiology.application.workflows.radiology_pending import ReportDraft, RadiologyPendingWorkflow
from cura.domains.radiology.application.workflows.radiology_prescriptions import RadiologyPrescriptionsWorkflow
from cura.domains.radiology.application.workflows.radiology_services import RadiologyServicesWorkflow

__all__ = [
    "RadiologyPendingWorkflow",
    "RadiologyPrescriptionsWorkflow",
    "RadiologyServicesWorkflow",
    "ReportDraft",
]
