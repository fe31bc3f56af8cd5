"""
Analytics Workflow

Pharmacy sales dashboard: summary cards, sales and revenue trends per
interval, monthly trends, best-selling medicines, payment breakdown and
spreadsheet-ready exports. Charts and workbook files are drawn by the
caller from the rows held here.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from pydantic import ValidationError

from cura.clients.hospital_api_client import HospitalAPIError
from cura.domains.pharmacy.application.ports import IAnalyticsAPIPort
from cura.domains.pharmacy.domain.entities import (
    AnalyticsSummary,
    MonthlyTrend,
    PaymentBreakdown,
    SalesTrendPoint,
    TopMedicine,
)
from cura.domains.pharmacy.domain.services import SalesTrendService, TrendBucket
from cura.domains.pharmacy.domain.value_objects import ReportInterval

logger = logging.getLogger(__name__)

REPORTS = ("summary", "sales-trend", "top-medicines", "monthly-trends", "inventory-analytics")

DEFAULT_SHEET = "Analytics Data"

EXPORT_MEDICINES = "medicines"

# Export kind -> (backend export, file name); medicines is built locally
EXPORT_FILES = {
    "complete": ("complete", "complete-analytics-report.xlsx"),
    "revenue": ("revenue", "revenue-data.xlsx"),
    "sales-summary": ("sales-summary", "analytics-summary.xlsx"),
    EXPORT_MEDICINES: (None, "all-medicines-report.xlsx"),
}


@dataclass
class AnalyticsExport:
    """Workbook content: sheet name -> rows."""

    filename: str
    sheets: dict[str, list[Any]] = field(default_factory=dict)


def to_sheets(data: Any) -> dict[str, list[Any]]:
    """
    Shape an export payload as named sheets.

    A list is one sheet; a mapping gives one sheet per key (a non-list
    value becomes a single row); anything else is a single row.
    """
    if data is None:
        return {DEFAULT_SHEET: []}
    if isinstance(data, list):
        return {DEFAULT_SHEET: data}
    if isinstance(data, dict):
        return {str(name): value if isinstance(value, list) else [value] for name, value in data.items()}
    return {DEFAULT_SHEET: [data]}


@dataclass(frozen=True)
class SummaryCards:
    total_revenue: float
    total_bills: int
    medicines_in_stock: int
    low_stock_items: int


class AnalyticsWorkflow:
    """
    State and actions of the Analytics screen.

    The five reports are fetched concurrently; if any of them fails the
    previous data is kept and `error` is set.
    """

    def __init__(self, api: IAnalyticsAPIPort, today: date | None = None):
        self._api = api
        self.trends = SalesTrendService(today=today)
        self.summary: AnalyticsSummary | None = None
        self.sales_trend: list[SalesTrendPoint] = []
        self.top_medicines: list[TopMedicine] = []
        self.monthly_trends: list[MonthlyTrend] = []
        self.inventory_analytics: Any = None
        self.sales_interval = ReportInterval.DAILY
        self.revenue_interval = ReportInterval.DAILY
        self.monthly_interval = ReportInterval.MONTHLY
        self.error: str | None = None
        self.is_loading = False

    async def load(self) -> AnalyticsSummary | None:
        self.is_loading = True
        self.error = None
        try:
            summary, sales, top, monthly, inventory = await asyncio.gather(
                *(self._api.get_analytics(report) for report in REPORTS)
            )
            parsed = (
                AnalyticsSummary.parse(summary or {}),
                SalesTrendPoint.parse_list(sales),
                TopMedicine.parse_list(top),
                MonthlyTrend.parse_list(monthly),
            )
        except (HospitalAPIError, ValidationError) as e:
            logger.error(f"Failed to load analytics data: {e}")
            self.error = "Failed to load analytics data"
            return self.summary
        finally:
            self.is_loading = False

        self.summary, self.sales_trend, self.top_medicines, self.monthly_trends = parsed
        self.inventory_analytics = inventory
        logger.info(
            f"Loaded analytics: {len(self.sales_trend)} day(s), {len(self.monthly_trends)} month(s), "
            f"{len(self.top_medicines)} top medicine(s)"
        )
        return self.summary

    # =========================================================================
    # Chart data
    # =========================================================================

    def set_sales_interval(self, interval: ReportInterval | str) -> None:
        self.sales_interval = ReportInterval(interval)

    def set_revenue_interval(self, interval: ReportInterval | str) -> None:
        self.revenue_interval = ReportInterval(interval)

    def set_monthly_interval(self, interval: ReportInterval | str) -> None:
        self.monthly_interval = ReportInterval(interval)

    @property
    def sales_chart(self) -> list[TrendBucket]:
        return self.trends.bucket_sales(self.sales_trend, self.sales_interval)

    @property
    def revenue_chart(self) -> list[TrendBucket]:
        return self.trends.bucket_sales(self.sales_trend, self.revenue_interval)

    @property
    def monthly_chart(self) -> list[TrendBucket]:
        return self.trends.bucket_monthly(self.monthly_trends, self.sales_trend, self.monthly_interval)

    @property
    def payment_breakdown(self) -> list[PaymentBreakdown]:
        return list(self.summary.payment_breakdown) if self.summary else []

    @property
    def cards(self) -> SummaryCards:
        summary = self.summary or AnalyticsSummary()
        return SummaryCards(
            total_revenue=summary.total_revenue,
            total_bills=summary.total_bills,
            medicines_in_stock=summary.total_medicines,
            low_stock_items=summary.low_stock_count,
        )

    # =========================================================================
    # Exports
    # =========================================================================

    @property
    def medicine_export_rows(self) -> list[dict[str, Any]]:
        return self.trends.medicine_export_rows(self.top_medicines)

    async def export(self, kind: str) -> AnalyticsExport | None:
        """
        Build the sheets of an export.

        Args:
            kind: complete, revenue, sales-summary or medicines

        Returns:
            The export, or None when the backend export failed (`error` is set)

        Raises:
            ValueError: Unknown export kind
        """
        if kind not in EXPORT_FILES:
            raise ValueError(f"Unknown analytics export: {kind}")
        backend_export, filename = EXPORT_FILES[kind]
        self.error = None
        if backend_export is None:
            return AnalyticsExport(filename, to_sheets(self.medicine_export_rows))
        try:
            data = await self._api.export_analytics(backend_export)
        except HospitalAPIError as e:
            logger.error(f"Failed to export {kind}: {e}")
            self.error = "Failed to export data"
            return None
        return AnalyticsExport(filename, to_sheets(data))
