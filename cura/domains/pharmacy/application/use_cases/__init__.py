"""
Pharmacy Use Cases
"""

from cura.domains.pharmacy.application.use_cases.dispense_prescription import (
    DispenseOutcome,
    DispensePrescriptionUseCase,
    DispenseRequest,
    PaymentError,
    bill_total,
    build_bill_lines,
)

__all__ = [
    "DispenseOutcome",
    "DispensePrescriptionUseCase",
    "DispenseRequest",
    "PaymentError",
    "bill_total",
    "build_bill_lines",
]
