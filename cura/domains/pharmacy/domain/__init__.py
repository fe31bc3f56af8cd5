"""
Pharmacy Domain Layer

Core business entities and value objects for pharmacy operations.
"""

from cura.domains.pharmacy.domain.entities import (
    Bill,
    BillLine,
    Medicine,
    PrescribedMedication,
    Prescription,
    PrescriptionListItem,
    PrescriptionRow,
)
from cura.domains.pharmacy.domain.value_objects import ExpiryStatus, PaymentMode, StockStatus

__all__ = [
    "Bill",
    "BillLine",
    "ExpiryStatus",
    "Medicine",
    "PaymentMode",
    "PrescribedMedication",
    "Prescription",
    "PrescriptionListItem",
    "PrescriptionRow",
    "StockStatus",
]
