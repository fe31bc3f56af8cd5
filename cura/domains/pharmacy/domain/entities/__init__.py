"""
Pharmacy Entities
"""

from cura.domains.pharmacy.domain.entities.analytics import (
    AnalyticsSummary,
    MonthlyTrend,
    PaymentBreakdown,
    SalesTrendPoint,
    TopMedicine,
)
from cura.domains.pharmacy.domain.entities.bill import Bill, BillLine
from cura.domains.pharmacy.domain.entities.medicine import Medicine, parse_backend_date
from cura.domains.pharmacy.domain.entities.prescription import (
    PrescribedMedication,
    Prescription,
    PrescriptionListItem,
    PrescriptionRow,
    build_inventory_index,
)

__all__ = [
    "AnalyticsSummary",
    "Bill",
    "BillLine",
    "Medicine",
    "MonthlyTrend",
    "PaymentBreakdown",
    "PrescribedMedication",
    "Prescription",
    "PrescriptionListItem",
    "PrescriptionRow",
    "SalesTrendPoint",
    "TopMedicine",
    "build_inventory_index",
    "parse_backend_date",
]
