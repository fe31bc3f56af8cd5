"""
Pharmacy Screen Workflows
"""

from cura.domains.pharmacy.application.workflows.analytics import AnalyticsExport, AnalyticsWorkflow
from cura.domains.pharmacy.application.workflows.billing import BillingWorkflow
from cura.domains.pharmacy.application.workflows.inventory import InventoryWorkflow
from cura.domains.pharmacy.application.workflows.prescriptions import PrescriptionsWorkflow

__all__ = [
    "AnalyticsExport",
    "AnalyticsWorkflow",
    "BillingWorkflow",
    "InventoryWorkflow",
    "PrescriptionsWorkflow",
]
