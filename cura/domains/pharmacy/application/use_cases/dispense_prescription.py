"""
Dispense Prescription Use Case

Bills the selected medications and marks the prescription dispensed.
Online payments go through the gateway first; no bill is created until the
gateway confirmed and the backend verified the payment.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from cura.clients.hospital_api_client import HospitalAPIError
from cura.config.settings import get_settings
from cura.domains.pharmacy.application.ports import (
    IPharmacyAPIPort,
    PaymentCheckoutPort,
    PaymentConfirmation,
    PaymentOrder,
)
from cura.domains.pharmacy.domain.entities import BillLine, Prescription
from cura.domains.pharmacy.domain.value_objects import PaymentMode
from cura.domains.shared.application.mutation_coordinator import MutationCoordinator, MutationOperation
from cura.domains.shared.domain.errors import InvalidMutationError

logger = logging.getLogger(__name__)


class PaymentError(Exception):
    """Gateway unavailable, gateway failure or verification rejected."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


@dataclass
class DispenseRequest:
    """Request to bill and dispense a prescription."""

    prescription: Prescription
    quantities: dict[str, int]
    payment_mode: PaymentMode = PaymentMode.CASH


@dataclass
class DispenseOutcome:
    """Result of a dispense attempt."""

    dispensed: bool
    payment_mode: PaymentMode
    total_amount: float = 0.0
    lines: list[BillLine] = field(default_factory=list)
    transaction_id: str | None = None
    dismissed: bool = False


def build_bill_lines(prescription: Prescription, quantities: dict[str, int]) -> list[BillLine]:
    """Lines with a positive quantity, priced from inventory."""
    lines = []
    for medication in prescription.medications:
        quantity = int(quantities.get(medication.name, 0) or 0)
        if quantity > 0:
            lines.append(BillLine(name=medication.name, quantity=quantity, price=medication.price))
    return lines


def bill_total(lines: list[BillLine]) -> float:
    return sum(line.total for line in lines)


class DispensePrescriptionUseCase:
    """
    Use case for billing and dispensing.

    Cash: create bill -> mark dispensed -> refresh.
    Online: create gateway order -> checkout -> verify -> create bill with
    the transaction id -> mark dispensed -> refresh.
    """

    def __init__(
        self,
        api: IPharmacyAPIPort,
        coordinator: MutationCoordinator,
        checkout: PaymentCheckoutPort | None = None,
    ):
        self._api = api
        self._coordinator = coordinator
        self._checkout = checkout

    async def execute(self, request: DispenseRequest) -> DispenseOutcome:
        """
        Execute the dispense flow.

        Raises:
            InvalidMutationError: Nothing to bill
            PaymentError: Gateway missing, failed or not verified
            MutationError: Bill or dispense call failed
        """
        prescription = request.prescription
        mode = PaymentMode(request.payment_mode)
        lines = build_bill_lines(prescription, request.quantities)
        total = bill_total(lines)
        if not lines or total <= 0:
            raise InvalidMutationError(
                MutationOperation.CREATE_BILL.value, "No Items to Pay", prescription.appointment_id
            )

        transaction_id = None
        if mode.requires_gateway:
            confirmation = await self._collect_online_payment(prescription, total)
            if confirmation is None:
                logger.info(f"Checkout dismissed for appointment {prescription.appointment_id}")
                return DispenseOutcome(
                    dispensed=False, payment_mode=mode, total_amount=total, lines=lines, dismissed=True
                )
            transaction_id = confirmation.razorpay_payment_id

        await self._coordinator.mutate(
            MutationOperation.CREATE_BILL,
            prescription.appointment_id,
            [line.to_payload() for line in lines],
            mode.value,
            transaction_id,
            refresh=False,
        )
        await self._coordinator.mutate(MutationOperation.UPDATE_DISPENSE_STATUS, prescription.appointment_id)

        logger.info(
            f"Dispensed prescription {prescription.appointment_id} "
            f"({len(lines)} line(s), {total:.2f}, {mode.value})"
        )
        return DispenseOutcome(
            dispensed=True,
            payment_mode=mode,
            total_amount=total,
            lines=lines,
            transaction_id=transaction_id,
        )

    async def _collect_online_payment(self, prescription: Prescription, total: float) -> PaymentConfirmation | None:
        if self._checkout is None:
            raise PaymentError("Payment gateway not loaded.")

        settings = get_settings()
        try:
            order_data = await self._api.create_razorpay_order(
                total, settings.PAYMENT_CURRENCY, prescription.appointment_id
            )
        except HospitalAPIError as e:
            logger.error(f"Gateway order creation failed: {e}")
            raise PaymentError("Payment or dispensing failed") from e

        order = PaymentOrder(
            order_id=str(order_data.get("id", "")),
            amount=int(order_data.get("amount", round(total * 100))),
            currency=order_data.get("currency", settings.PAYMENT_CURRENCY),
            key_id=settings.RAZORPAY_KEY_ID or "",
            merchant_name=settings.PHARMACY_BRAND_NAME,
            description=f"Bill Payment for {prescription.patient_name}",
            customer_name=prescription.patient_name,
        )

        try:
            confirmation = await self._checkout.checkout(order)
        except Exception as e:
            logger.error(f"Gateway checkout failed: {e}")
            raise PaymentError("Payment or dispensing failed") from e
        if confirmation is None:
            return None

        try:
            await self._api.verify_razorpay_payment(
                confirmation.razorpay_order_id,
                confirmation.razorpay_payment_id,
                confirmation.razorpay_signature,
            )
        except HospitalAPIError as e:
            logger.error(f"Payment verification failed for order {order.order_id}: {e}")
            raise PaymentError("Payment verification failed") from e
        return confirmation
