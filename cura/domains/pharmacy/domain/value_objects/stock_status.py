"""
Inventory Status Value Objects

Stock level as reported by the backend and expiry state derived locally.
"""

from enum import Enum


class StockStatus(str, Enum):
    """Backend stock flag of a medicine."""

    IN_STOCK = "in_stock"
    LOW_STOCK = "low_stock"


class ExpiryStatus(str, Enum):
    """Expiry state relative to today."""

    EXPIRED = "expired"
    EXPIRING_SOON = "expiring_soon"  # Within the warning window
    VALID = "valid"  # Not expired and not expiring soon, or no date set
