"""
Pharmacy Domain Services
"""

from cura.domains.pharmacy.domain.services.bill_grouping_service import BillGroup, BillGroupingService
from cura.domains.pharmacy.domain.services.dosage_quantity_service import DosageQuantityService
from cura.domains.pharmacy.domain.services.inventory_filter_service import InventoryCounters, InventoryFilterService
from cura.domains.pharmacy.domain.services.sales_trend_service import SalesTrendService, TrendBucket, week_start

__all__ = [
    "BillGroup",
    "BillGroupingService",
    "DosageQuantityService",
    "InventoryCounters",
    "InventoryFilterService",
    "SalesTrendService",
    "TrendBucket",
    "week_start",
]
