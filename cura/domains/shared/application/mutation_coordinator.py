"""
Mutation-and-Refresh Coordinator

Runs state-changing backend calls and re-fetches the active aggregate on
success instead of patching local state. Nothing is retried; a failure
leaves the screen state untouched.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Awaitable, Callable, Hashable
from enum import Enum
from typing import Any, TypeVar

from cura.clients.hospital_api_client import HospitalAPIError
from cura.domains.shared.application.ports import IMutationAPIPort, RefreshCallback
from cura.domains.shared.domain.errors import InvalidMutationError, MutationError, MutationInProgressError

logger = logging.getLogger(__name__)

T = TypeVar("T")

REPORT_STATUSES = ("Pending", "InProgress", "Completed")
PAYMENT_MODES = ("cash", "online")


class MutationOperation(str, Enum):
    """Coordinated backend mutations."""

    MARK_SAMPLE_COLLECTED = "mark-sample-collected"
    MARK_TEST_CONDUCTED = "mark-test-conducted"
    UPDATE_REPORT_STATUS = "update-report-status"
    UPDATE_DISPENSE_STATUS = "update-dispense-status"
    REFILL_STOCK = "refill-stock"
    UPDATE_MEDICINE = "update-medicine"
    DELETE_MEDICINE = "delete-medicine"
    CREATE_BILL = "create-bill"
    SAVE_TEST_RESULT = "save-test-result"

    @property
    def label(self) -> str:
        return self.value.replace("-", " ")


def _is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value)


class MutationCoordinator:
    """
    Serializes mutations per item and refreshes after each success.

    Busy flags are keyed by item id (service id, medicine id, appointment
    id), so unrelated rows stay interactive while one row is updating.

    Example:
        coordinator = MutationCoordinator(api, refresh=lambda: workflow.reload())
        await coordinator.mutate(MutationOperation.REFILL_STOCK, medicine_id, 20)
    """

    def __init__(
        self,
        api: IMutationAPIPort,
        refresh: RefreshCallback | None = None,
        name: str = "mutations",
    ):
        self._api = api
        self._refresh = refresh
        self.name = name
        self._busy: set[Hashable] = set()

    def bind_refresh(self, refresh: RefreshCallback | None) -> None:
        """Point the coordinator at the aggregate of the active context."""
        self._refresh = refresh

    def is_busy(self, item_key: Hashable) -> bool:
        return item_key in self._busy

    @property
    def busy_keys(self) -> frozenset[Hashable]:
        return frozenset(self._busy)

    async def mutate(self, operation: MutationOperation | str, *args: Any, refresh: bool = True) -> Any:
        """
        Validate, execute and refresh one coordinated operation.

        Args:
            operation: MutationOperation or its string value
            *args: Operation arguments, item id first
            refresh: Run the refresh callback after success

        Raises:
            InvalidMutationError: Rejected before any network call
            MutationInProgressError: Same item already updating
            MutationError: Backend rejected the call
        """
        operation = MutationOperation(operation)
        handler = self._handlers()[operation]
        call, item_key = handler(*args)
        return await self.run(operation.value, call, item_key=item_key, refresh=refresh)

    async def run(
        self,
        operation: str,
        call: Callable[[], Awaitable[T]],
        item_key: Hashable | None = None,
        refresh: bool = True,
    ) -> T:
        """
        Execute an arbitrary mutation under the busy-flag and refresh policy.
        """
        if item_key is not None and item_key in self._busy:
            raise MutationInProgressError(operation, item_key)

        if item_key is not None:
            self._busy.add(item_key)
        try:
            result = await call()
        except HospitalAPIError as e:
            logger.error(f"[{self.name}] {operation} failed for {item_key}: {e}")
            message = f"Failed to {operation.replace('-', ' ')}: {e.error_message}"
            raise MutationError(operation, message, item_key) from e
        finally:
            if item_key is not None:
                self._busy.discard(item_key)

        logger.info(f"[{self.name}] {operation} succeeded for {item_key}")
        if refresh and self._refresh is not None:
            await self._refresh()
        return result

    # =========================================================================
    # Operation handlers: validate arguments, return (call, item_key)
    # =========================================================================

    def _handlers(self) -> dict[MutationOperation, Callable[..., tuple[Callable[[], Awaitable[Any]], Hashable]]]:
        return {
            MutationOperation.MARK_SAMPLE_COLLECTED: self._mark_sample_collected,
            MutationOperation.MARK_TEST_CONDUCTED: self._mark_test_conducted,
            MutationOperation.UPDATE_REPORT_STATUS: self._update_report_status,
            MutationOperation.UPDATE_DISPENSE_STATUS: self._update_dispense_status,
            MutationOperation.REFILL_STOCK: self._refill_stock,
            MutationOperation.UPDATE_MEDICINE: self._update_medicine,
            MutationOperation.DELETE_MEDICINE: self._delete_medicine,
            MutationOperation.CREATE_BILL: self._create_bill,
            MutationOperation.SAVE_TEST_RESULT: self._save_test_result,
        }

    def _mark_sample_collected(self, patient_service_id: int, sample_collected: bool = True):
        return (lambda: self._api.update_sample_collected(patient_service_id, sample_collected)), patient_service_id

    def _mark_test_conducted(self, prescription_id: str, test_conducted: bool = True):
        return (lambda: self._api.update_test_conducted(prescription_id, test_conducted)), prescription_id

    def _update_report_status(self, patient_service_id: int, report_status: str):
        if report_status not in REPORT_STATUSES:
            raise InvalidMutationError(
                MutationOperation.UPDATE_REPORT_STATUS.value,
                f"Invalid report status: {report_status}",
                patient_service_id,
            )
        return (lambda: self._api.update_service_report_status(patient_service_id, report_status)), patient_service_id

    def _update_dispense_status(self, appointment_id: str):
        return (lambda: self._api.update_dispense_status(appointment_id)), appointment_id

    def _refill_stock(self, medicine_id: int, quantity: Any):
        if not _is_number(quantity) or quantity <= 0 or int(quantity) != quantity:
            raise InvalidMutationError(
                MutationOperation.REFILL_STOCK.value, "Please enter a valid refill quantity", medicine_id
            )
        return (lambda: self._api.refill_medicine(medicine_id, int(quantity))), medicine_id

    def _update_medicine(self, medicine_id: int, name: str, price: Any, expiry_date: str | None = None):
        operation = MutationOperation.UPDATE_MEDICINE.value
        if not name or not name.strip():
            raise InvalidMutationError(operation, "Please fill in all required fields", medicine_id)
        if not _is_number(price) or price <= 0:
            raise InvalidMutationError(operation, "Please enter a valid price", medicine_id)
        return (
            lambda: self._api.update_medicine(medicine_id, name.strip(), float(price), expiry_date or None)
        ), medicine_id

    def _delete_medicine(self, medicine_id: int, confirm_name: str):
        if not confirm_name or not confirm_name.strip():
            raise InvalidMutationError(
                MutationOperation.DELETE_MEDICINE.value, "Please type the medicine name to confirm", medicine_id
            )
        return (lambda: self._api.delete_medicine(medicine_id, confirm_name)), medicine_id

    def _create_bill(
        self,
        appointment_id: str,
        medicines: list[dict[str, Any]],
        payment_mode: str,
        transaction_id: str | None = None,
    ):
        operation = MutationOperation.CREATE_BILL.value
        if not medicines:
            raise InvalidMutationError(operation, "No Items to Pay", appointment_id)
        if payment_mode not in PAYMENT_MODES:
            raise InvalidMutationError(operation, f"Invalid payment mode: {payment_mode}", appointment_id)
        if payment_mode == "online" and not transaction_id:
            raise InvalidMutationError(operation, "Online bills need a verified transaction", appointment_id)
        return (
            lambda: self._api.create_bill(appointment_id, medicines, payment_mode, transaction_id)
        ), appointment_id

    def _save_test_result(self, patient_test_id: int, result_value: str):
        if result_value is None or not str(result_value).strip():
            raise InvalidMutationError(
                MutationOperation.SAVE_TEST_RESULT.value, "Please enter a result value", patient_test_id
            )
        return (lambda: self._api.save_test_result(patient_test_id, str(result_value).strip())), patient_test_id
