"""
Pharmacy Value Objects
"""

from cura.domains.pharmacy.domain.value_objects.payment_mode import PaymentMode
from cura.domains.pharmacy.domain.value_objects.report_interval import ReportInterval
from cura.domains.pharmacy.domain.value_objects.stock_status import ExpiryStatus, StockStatus

__all__ = ["ExpiryStatus", "PaymentMode", "ReportInterval", "StockStatus"]
