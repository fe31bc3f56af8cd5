"""
Medicine Entity

Inventory record of one medicine.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any

from pydantic import field_validator

from cura.domains.pharmacy.domain.value_objects.stock_status import ExpiryStatus, StockStatus
from cura.domains.shared.domain.entities.base import BackendRecord

DEFAULT_EXPIRY_WARNING_DAYS = 30


def parse_backend_date(value: Any) -> date | None:
    """Accept a date, a datetime or an ISO string (date or timestamp)."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value.strip()[:10])
    raise ValueError(f"Unsupported date value: {value!r}")


class Medicine(BackendRecord):
    """
    Medicine in stock.

    Attributes:
        id: Backend identifier
        name: Display name, matched case-insensitively against prescriptions
        price: Unit price
        quantity: Units in stock
        stock_status: Backend stock flag
        expiry_date: Expiry date, None when not set
    """

    id: int
    name: str
    price: float = 0.0
    quantity: int = 0
    stock_status: StockStatus = StockStatus.LOW_STOCK
    expiry_date: date | None = None
    created_at: str | None = None
    updated_at: str | None = None

    @field_validator("expiry_date", mode="before")
    @classmethod
    def _parse_expiry(cls, value: Any) -> date | None:
        return parse_backend_date(value)

    @property
    def lookup_key(self) -> str:
        return self.name.strip().lower()

    def is_expired(self, today: date | None = None) -> bool:
        if self.expiry_date is None:
            return False
        return self.expiry_date <= (today or date.today())

    def is_expiring_soon(self, today: date | None = None, warning_days: int = DEFAULT_EXPIRY_WARNING_DAYS) -> bool:
        if self.expiry_date is None:
            return False
        today = today or date.today()
        return today < self.expiry_date <= today + timedelta(days=warning_days)

    def expiry_status(self, today: date | None = None, warning_days: int = DEFAULT_EXPIRY_WARNING_DAYS) -> ExpiryStatus:
        if self.is_expired(today):
            return ExpiryStatus.EXPIRED
        if self.is_expiring_soon(today, warning_days):
            return ExpiryStatus.EXPIRING_SOON
        return ExpiryStatus.VALID
