"""
Bill Entities

Bill rows (one per dispensed medication) and the lines sent when billing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import field_validator

from cura.domains.pharmacy.domain.value_objects.payment_mode import PaymentMode
from cura.domains.shared.domain.entities.base import BackendRecord


class Bill(BackendRecord):
    """One billed medication of an appointment."""

    bill_id: str
    appointment_id: str
    medication_name: str = ""
    quantity: int = 0
    unit_price: float = 0.0
    total_price: float = 0.0
    payment_mode: PaymentMode = PaymentMode.CASH
    transaction_id: str | None = None
    payment_status: str = ""
    created_at: str | None = None
    patient_name: str = ""
    patient_phone: str | None = None

    @field_validator("bill_id", mode="before")
    @classmethod
    def _id_to_str(cls, value: Any) -> Any:
        return str(value) if isinstance(value, int) else value


@dataclass(frozen=True)
class BillLine:
    """Medication line of a bill being created."""

    name: str
    quantity: int
    price: float

    @property
    def total(self) -> float:
        return self.quantity * self.price

    def to_payload(self) -> dict[str, Any]:
        return {"name": self.name, "quantity": self.quantity, "price": self.price}
