"""
Laboratory Application Layer
"""

from cura.domains.laboratory.application.lab_aggregator import LabPrescriptionAggregator
from cura.domains.laboratory.application.ports import ILaboratoryAPIPort
from cura.domains.laboratory.application.workflows import (
    LabPrescriptionsWorkflow,
    LabReportsWorkflow,
    LabTestsWorkflow,
)

__all__ = [
    "ILaboratoryAPIPort",
    "LabPrescriptionAggregator",
    "LabPrescriptionsWorkflow",
    "LabReportsWorkflow",
    "LabTestsWorkflow",
]
