"""
Laboratory Screen Workflows
"""

from cura.domains.laboratory.application.workflows.lab_prescriptions import LabPrescriptionsWorkflow
from cura.domains.laboratory.application.workflows.lab_reports import LabReportsWorkflow
from cura.domains.laboratory.application.workflows.lab_services import LabServicesWorkflow
from cura.domains.laboratory.application.workflows.lab_tests import LabTestsWorkflow

__all__ = [
    "LabPrescriptionsWorkflow",
    "LabReportsWorkflow",
    "LabServicesWorkflow",
    "LabTestsWorkflow",
]
