"""
Billing Workflow

Bills grouped by appointment, newest first, with detail and SMS.
"""

from __future__ import annotations

import logging

from cura.clients.hospital_api_client import HospitalAPIError
from cura.domains.pharmacy.application.ports import IPharmacyAPIPort
from cura.domains.pharmacy.domain.entities import Bill
from cura.domains.pharmacy.domain.services import BillGroup, BillGroupingService
from cura.domains.shared.application.mutation_coordinator import MutationCoordinator
from cura.domains.shared.domain.errors import InvalidMutationError, RetrievalNotFoundError, RetrievalTransientError
from cura.domains.shared.domain.services import PaginationState

logger = logging.getLogger(__name__)


class BillingWorkflow:
    """State and actions of the Billing screen."""

    def __init__(self, api: IPharmacyAPIPort):
        self._api = api
        self.coordinator = MutationCoordinator(api, name="billing")
        self.bills: list[Bill] = []
        self.state: PaginationState[BillGroup] = PaginationState.from_settings(
            sort_key=BillGroupingService.created_at_key,
            descending=True,
        )
        self.selected: BillGroup | None = None
        self.details: list[Bill] = []
        self.error: str | None = None

    async def load(self) -> list[BillGroup]:
        self.error = None
        try:
            self.bills = Bill.parse_list(await self._api.get_bills())
        except HospitalAPIError as e:
            logger.error(f"Failed to fetch bills: {e}")
            self.error = "Failed to fetch bills"
        self._regroup()
        return self.state.filtered

    def set_search(self, term: str) -> None:
        """Search patient name or appointment id; groups are rebuilt from matching bills."""
        self.state.set_search(term)
        self._regroup()

    def _regroup(self) -> None:
        term = self.state.search_term.strip().lower()
        matching = [
            bill
            for bill in self.bills
            if not term or term in bill.patient_name.lower() or term in bill.appointment_id.lower()
        ]
        self.state.set_items(BillGroupingService.group_by_appointment(matching))

    async def view_bill(self, group: BillGroup) -> list[Bill]:
        """
        Load every bill row of an appointment.

        Raises:
            RetrievalNotFoundError: No bills for the appointment
            RetrievalTransientError: Backend failure
        """
        try:
            rows = await self._api.get_bills_by_appointment(group.appointment_id)
        except HospitalAPIError as e:
            logger.error(f"Failed to fetch bill details for {group.appointment_id}: {e}")
            if e.is_not_found:
                raise RetrievalNotFoundError("No bills found for this appointment", group.appointment_id) from e
            raise RetrievalTransientError("Failed to fetch bill details", group.appointment_id) from e
        details = Bill.parse_list(rows)
        if not details:
            raise RetrievalNotFoundError("No bills found for this appointment", group.appointment_id)
        self.selected = group
        self.details = details
        return details

    @property
    def details_total(self) -> float:
        return BillGroupingService.total(self.details)

    def close_bill(self) -> None:
        self.selected = None
        self.details = []

    def is_sending_sms(self, appointment_id: str) -> bool:
        return self.coordinator.is_busy(("sms", appointment_id))

    async def send_sms(self, group: BillGroup) -> None:
        """
        Text the bill to the patient.

        Raises:
            InvalidMutationError: Patient phone unknown; nothing is sent
            MutationError: Backend failed to send
        """
        if not group.patient_phone:
            raise InvalidMutationError(
                "send-sms", "Patient phone number not found in the database.", group.appointment_id
            )
        await self.coordinator.run(
            "send-sms",
            lambda: self._api.send_bill_sms(group.appointment_id, group.patient_phone),
            item_key=("sms", group.appointment_id),
            refresh=False,
        )
