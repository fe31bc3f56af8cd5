"""
Inventory Filter Domain Service

Dropdown predicates and counters of the inventory screen.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from cura.domains.pharmacy.domain.entities.medicine import DEFAULT_EXPIRY_WARNING_DAYS, Medicine
from cura.domains.pharmacy.domain.value_objects.stock_status import ExpiryStatus, StockStatus


@dataclass(frozen=True)
class InventoryCounters:
    total: int
    in_stock: int
    low_stock: int
    expired: int
    expiring_soon: int


class InventoryFilterService:
    """Stock and expiry filters over Medicine records."""

    def __init__(self, warning_days: int = DEFAULT_EXPIRY_WARNING_DAYS, today: date | None = None):
        self.warning_days = warning_days
        self._today = today

    @property
    def today(self) -> date:
        return self._today or date.today()

    @staticmethod
    def matches_stock(medicine: Medicine, stock_filter: StockStatus | str) -> bool:
        return medicine.stock_status == StockStatus(stock_filter)

    def matches_expiry(self, medicine: Medicine, expiry_filter: ExpiryStatus | str) -> bool:
        return medicine.expiry_status(self.today, self.warning_days) == ExpiryStatus(expiry_filter)

    def counters(self, medicines: Iterable[Medicine]) -> InventoryCounters:
        items = list(medicines)
        statuses = [m.expiry_status(self.today, self.warning_days) for m in items]
        return InventoryCounters(
            total=len(items),
            in_stock=sum(1 for m in items if m.stock_status is StockStatus.IN_STOCK),
            low_stock=sum(1 for m in items if m.stock_status is StockStatus.LOW_STOCK),
            expired=statuses.count(ExpiryStatus.EXPIRED),
            expiring_soon=statuses.count(ExpiryStatus.EXPIRING_SOON),
        )
