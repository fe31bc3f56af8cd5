"""
Sales Trend Domain Service

Buckets daily sales into the chart intervals and builds the rows of the
medicines export.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any

from cura.domains.pharmacy.domain.entities.analytics import MonthlyTrend, SalesTrendPoint, TopMedicine
from cura.domains.pharmacy.domain.value_objects.report_interval import ReportInterval
from cura.domains.shared.domain.services.record_grouping_service import RecordGroupingService

# Buckets kept per interval (None keeps all)
BUCKET_LIMITS: dict[ReportInterval, int | None] = {
    ReportInterval.DAILY: 30,
    ReportInterval.WEEKLY: 12,
    ReportInterval.MONTHLY: 12,
    ReportInterval.YEARLY: 5,
}


@dataclass
class TrendBucket:
    """
    One chart point.

    `label` is an ISO date (daily, weekly: the Sunday starting the week),
    YYYY-MM (monthly) or YYYY (yearly).
    """

    label: str
    sales: int = 0
    revenue: float = 0.0
    items: int = 0


def week_start(day: date) -> date:
    """Sunday on or before `day`."""
    return day - timedelta(days=(day.weekday() + 1) % 7)


def _tail(buckets: list[TrendBucket], limit: int | None) -> list[TrendBucket]:
    return buckets[-limit:] if limit else buckets


class SalesTrendService:
    """Interval bucketing over SalesTrendPoint and MonthlyTrend rows."""

    def __init__(self, today: date | None = None):
        self._today = today

    @property
    def today(self) -> date:
        return self._today or date.today()

    def _bucket_key(self, interval: ReportInterval) -> Callable[[SalesTrendPoint], str]:
        def key(point: SalesTrendPoint) -> str:
            day = point.day or self.today
            if interval is ReportInterval.WEEKLY:
                return week_start(day).isoformat()
            if interval is ReportInterval.MONTHLY:
                return f"{day.year}-{day.month:02d}"
            if interval is ReportInterval.YEARLY:
                return str(day.year)
            return day.isoformat()

        return key

    def bucket_sales(
        self, points: Sequence[SalesTrendPoint], interval: ReportInterval | str
    ) -> list[TrendBucket]:
        """
        Sum daily sales per interval, in first-seen order.

        Daily keeps the last 30 rows as they are; the other intervals keep
        the last 12 weeks, 12 months or 5 years.
        """
        interval = ReportInterval(interval)
        key = self._bucket_key(interval)
        if interval is ReportInterval.DAILY:
            buckets = [TrendBucket(key(p), p.sales_count, p.revenue, p.sales_count) for p in points]
            return _tail(buckets, BUCKET_LIMITS[interval])

        groups = RecordGroupingService.group_by(points, key)
        buckets = [
            TrendBucket(
                label=label,
                sales=sum(p.sales_count for p in rows),
                revenue=sum(p.revenue for p in rows),
                items=sum(p.sales_count for p in rows),
            )
            for label, rows in groups.items()
        ]
        return _tail(buckets, BUCKET_LIMITS[interval])

    def bucket_monthly(
        self,
        trends: Sequence[MonthlyTrend],
        points: Sequence[SalesTrendPoint],
        interval: ReportInterval | str,
    ) -> list[TrendBucket]:
        """
        Points of the monthly-trends chart.

        Daily and weekly come from the daily sales (items = sales count),
        monthly is the monthly report as-is and yearly sums it per year.
        """
        interval = ReportInterval(interval)
        if interval in (ReportInterval.DAILY, ReportInterval.WEEKLY):
            return self.bucket_sales(points, interval)
        if interval is ReportInterval.MONTHLY:
            return [TrendBucket(t.month[:7], t.sales_count, t.revenue, t.total_items) for t in trends]

        groups = RecordGroupingService.group_by(trends, lambda t: t.year)
        return [
            TrendBucket(
                label=year,
                sales=sum(t.sales_count for t in rows),
                revenue=sum(t.revenue for t in rows),
                items=sum(t.total_items for t in rows),
            )
            for year, rows in groups.items()
        ]

    @staticmethod
    def medicine_export_rows(medicines: Iterable[TopMedicine]) -> list[dict[str, Any]]:
        """Ranked rows of the medicines export; amounts rounded to 2 decimals."""
        return [
            {
                "Rank": rank,
                "Medicine Name": medicine.medication_name,
                "Unit Price": f"{medicine.unit_price:.2f}",
                "Units Sold": medicine.total_quantity,
                "Revenue": f"{medicine.total_revenue:.2f}",
                "Stock Status": medicine.stock_status or "Available",
            }
            for rank, medicine in enumerate(medicines, start=1)
        ]
