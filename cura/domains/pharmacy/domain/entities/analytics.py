"""
Analytics Entities

Sales reports of the pharmacy: summary, daily trend, monthly trend and
best-selling medicines. Counts and amounts may arrive as numeric strings.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import ConfigDict, Field, field_validator, model_validator

from cura.domains.pharmacy.domain.entities.medicine import parse_backend_date
from cura.domains.shared.domain.entities.base import BackendRecord


class AnalyticsRecord(BackendRecord):
    model_config = ConfigDict(allow_inf_nan=False)


class PaymentBreakdown(AnalyticsRecord):
    payment_mode: str = ""
    revenue: float = 0.0

    @property
    def label(self) -> str:
        return "Cash" if self.payment_mode == "cash" else "Online"


class AnalyticsSummary(AnalyticsRecord):
    total_revenue: float = Field(default=0.0, alias="totalRevenue")
    total_bills: int = Field(default=0, alias="totalBills")
    total_medicines: int = Field(default=0, alias="totalMedicines")
    low_stock_count: int = Field(default=0, alias="lowStockCount")
    payment_breakdown: list[PaymentBreakdown] = Field(default_factory=list, alias="paymentBreakdown")


class SalesTrendPoint(AnalyticsRecord):
    """Sales of one day; `day` is None when the backend row has no date."""

    day: date | None = Field(default=None, alias="date")
    sales_count: int = 0
    revenue: float = 0.0

    @field_validator("day", mode="before")
    @classmethod
    def _parse_day(cls, value: Any) -> date | None:
        return parse_backend_date(value)


class MonthlyTrend(AnalyticsRecord):
    month: str
    sales_count: int = 0
    revenue: float = 0.0
    total_items: int = 0

    @property
    def year(self) -> str:
        return self.month[:4]


class TopMedicine(AnalyticsRecord):
    medication_name: str
    total_revenue: float = 0.0
    total_quantity: int = 0
    stock_status: str = "Available"

    @model_validator(mode="before")
    @classmethod
    def _fallback_names(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = dict(data)
            if not data.get("medication_name") and data.get("name"):
                data["medication_name"] = data["name"]
            if not data.get("total_quantity") and data.get("quantity"):
                data["total_quantity"] = data["quantity"]
        return data

    @property
    def unit_price(self) -> float:
        return self.total_revenue / self.total_quantity if self.total_quantity > 0 else 0.0
