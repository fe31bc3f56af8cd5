"""
Pharmacy Application Ports

Protocol interfaces for the pharmacy backend surface and the payment
gateway checkout.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from cura.domains.shared.application.ports import IMutationAPIPort


@runtime_checkable
class IPharmacyAPIPort(IMutationAPIPort, Protocol):
    """
    Prescriptions, medicines and bills endpoints.

    Implemented by HospitalAPIClient in cura/clients/hospital_api_client.py.
    """

    # =========================================================================
    # Prescriptions
    # =========================================================================

    async def get_prescriptions(self) -> list[dict[str, Any]]:
        ...

    async def get_prescriptions_by_appointment(self, appointment_id: str) -> list[dict[str, Any]]:
        ...

    async def delete_prescription(self, appointment_id: str) -> None:
        ...

    async def send_prescription_sms(self, appointment_id: str, patient_phone: str) -> Any:
        ...

    # =========================================================================
    # Medicines
    # =========================================================================

    async def get_medicines(self) -> list[dict[str, Any]]:
        ...

    async def add_medicine(
        self, name: str, price: float, quantity: int, expiry_date: str | None = None
    ) -> dict[str, Any]:
        ...

    # =========================================================================
    # Bills
    # =========================================================================

    async def get_bills(self) -> list[dict[str, Any]]:
        ...

    async def get_bills_by_appointment(self, appointment_id: str) -> list[dict[str, Any]]:
        ...

    async def create_razorpay_order(
        self, amount: float, currency: str = "INR", receipt: str | None = None
    ) -> dict[str, Any]:
        ...

    async def verify_razorpay_payment(
        self, razorpay_order_id: str, razorpay_payment_id: str, razorpay_signature: str
    ) -> dict[str, Any]:
        ...

    async def send_bill_sms(self, appointment_id: str, patient_phone: str) -> Any:
        ...


@runtime_checkable
class IAnalyticsAPIPort(Protocol):
    """
    Pharmacy sales reports and their server-built exports.

    Implemented by HospitalAPIClient in cura/clients/hospital_api_client.py.
    """

    async def get_analytics(self, report: str) -> Any:
        ...

    async def export_analytics(self, export: str) -> Any:
        ...


@dataclass(frozen=True)
class PaymentOrder:
    """
    Gateway order handed to the checkout UI.

    Attributes:
        order_id: Gateway order id returned by the backend
        amount: Amount in the gateway's minor unit, as returned by the backend
        currency: ISO currency code
        key_id: Public gateway key
        merchant_name: Name shown in the checkout
        description: Payment description
        customer_name: Prefilled customer name
    """

    order_id: str
    amount: int
    currency: str
    key_id: str
    merchant_name: str
    description: str
    customer_name: str


@dataclass(frozen=True)
class PaymentConfirmation:
    """Gateway callback payload, verified by the backend before billing."""

    razorpay_order_id: str
    razorpay_payment_id: str
    razorpay_signature: str


@runtime_checkable
class PaymentCheckoutPort(Protocol):
    """
    External gateway checkout (browser widget, payment terminal).

    Returns the confirmation once the customer paid, or None when the
    customer dismissed the checkout. Raises on gateway errors.
    """

    async def checkout(self, order: PaymentOrder) -> PaymentConfirmation | None:
        ...


__all__ = [
    "IAnalyticsAPIPort",
    "IPharmacyAPIPort",
    "PaymentCheckoutPort",
    "PaymentConfirmation",
    "PaymentOrder",
]
