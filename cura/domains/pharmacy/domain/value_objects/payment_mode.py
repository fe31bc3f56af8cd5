"""
Payment Mode Value Object
"""

from enum import Enum


class PaymentMode(str, Enum):
    """How a bill was paid."""

    CASH = "cash"
    ONLINE = "online"  # Payment gateway, requires a verified transaction

    @property
    def requires_gateway(self) -> bool:
        return self is PaymentMode.ONLINE
