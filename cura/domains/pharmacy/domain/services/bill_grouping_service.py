"""
Bill Grouping Domain Service

Groups bill rows by appointment and totals each group.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime

from cura.domains.pharmacy.domain.entities.bill import Bill
from cura.domains.shared.domain.services.record_grouping_service import RecordGroupingService


@dataclass
class BillGroup:
    """
    Bills of one appointment.

    Header fields come from the first bill seen for the appointment.
    """

    appointment_id: str
    patient_name: str
    patient_phone: str | None
    created_at: str | None
    bills: list[Bill] = field(default_factory=list)

    @property
    def item_count(self) -> int:
        return len(self.bills)

    @property
    def total_amount(self) -> float:
        return sum(bill.total_price for bill in self.bills)

    @property
    def payment_mode(self) -> str:
        return self.bills[0].payment_mode.value if self.bills else ""


def _timestamp(value: str | None) -> float:
    if not value:
        return 0.0
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).timestamp()
    except ValueError:
        return 0.0


class BillGroupingService:
    """Appointment-level aggregation of bills."""

    @staticmethod
    def group_by_appointment(bills: Iterable[Bill]) -> list[BillGroup]:
        """Groups in first-seen order."""
        groups = RecordGroupingService.group_by(bills, lambda bill: bill.appointment_id)
        return [
            BillGroup(
                appointment_id=appointment_id,
                patient_name=items[0].patient_name,
                patient_phone=items[0].patient_phone,
                created_at=items[0].created_at,
                bills=items,
            )
            for appointment_id, items in groups.items()
        ]

    @staticmethod
    def created_at_key(group: BillGroup) -> float:
        """Sort key for newest-first ordering."""
        return _timestamp(group.created_at)

    @staticmethod
    def total(bills: Iterable[Bill]) -> float:
        return sum(bill.total_price for bill in bills)
