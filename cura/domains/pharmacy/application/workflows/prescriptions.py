"""
Prescriptions Workflow

Pharmacy screen: list of prescriptions, retrieval by scan or manual id,
prescription detail with proposed bill quantities, dispensing, deletion
and prescription SMS.
"""

from __future__ import annotations

import logging

from cura.clients.hospital_api_client import HospitalAPIError
from cura.domains.pharmacy.application.ports import IPharmacyAPIPort, PaymentCheckoutPort
from cura.domains.pharmacy.application.prescription_aggregator import PrescriptionAggregate, PrescriptionAggregator
from cura.domains.pharmacy.application.use_cases import (
    DispenseOutcome,
    DispensePrescriptionUseCase,
    DispenseRequest,
    bill_total,
    build_bill_lines,
)
from cura.domains.pharmacy.domain.entities import PrescribedMedication, Prescription, PrescriptionListItem
from cura.domains.pharmacy.domain.services import DosageQuantityService
from cura.domains.pharmacy.domain.value_objects import PaymentMode
from cura.domains.shared.application.retrieval_workflow import AppointmentRetrievalWorkflow
from cura.domains.shared.domain.errors import InvalidMutationError, RetrievalError
from cura.domains.shared.domain.services import PaginationState

logger = logging.getLogger(__name__)


class PrescriptionsWorkflow(AppointmentRetrievalWorkflow[PrescribedMedication]):
    """
    State and actions of the Prescriptions screen.

    The bill summary works on `selected`: `view_prescription` loads it and
    proposes quantities, `set_bill_quantity` edits them and `dispense`
    bills and dispenses it.
    """

    screen_name = "prescriptions"

    def __init__(self, api: IPharmacyAPIPort, checkout: PaymentCheckoutPort | None = None):
        super().__init__(PrescriptionAggregator(api), api)
        self._api = api
        self._dispense = DispensePrescriptionUseCase(api, self.coordinator, checkout)

        self.list_state: PaginationState[PrescriptionListItem] = PaginationState.from_settings(
            search_fields=lambda p: (p.patient_name, p.appointment_id, p.doctor_name),
        )
        self.list_error: str | None = None
        self.selected: Prescription | None = None
        self.bill_quantities: dict[str, int] = {}
        self.payment_mode = PaymentMode.CASH
        self.is_processing_payment = False
        self.is_view_loading = False

    @property
    def retrieved_prescriptions(self) -> list[Prescription]:
        if isinstance(self.retrieved, PrescriptionAggregate):
            return list(self.retrieved.prescriptions or [])
        return []

    # =========================================================================
    # Lists
    # =========================================================================

    async def load_prescriptions(self) -> list[PrescriptionListItem]:
        """Fetch every prescription for the main list. Failures leave it empty."""
        self.list_error = None
        try:
            items = PrescriptionListItem.parse_list(await self._api.get_prescriptions())
        except HospitalAPIError as e:
            logger.error(f"Failed to fetch prescriptions: {e}")
            self.list_error = "Failed to fetch prescriptions"
            items = []
        self.list_state.set_items(items)
        return items

    # =========================================================================
    # Detail and bill summary
    # =========================================================================

    async def view_prescription(self, appointment_id: str) -> Prescription:
        """
        Load a prescription with fresh inventory data and propose quantities.

        Raises:
            RetrievalError: Prescription not found or not loadable
        """
        self.is_view_loading = True
        try:
            aggregate = await PrescriptionAggregator(self._api).retrieve(appointment_id)
        except RetrievalError as e:
            logger.warning(f"No prescription details for {appointment_id}: {e.message}")
            raise
        finally:
            self.is_view_loading = False

        prescription = aggregate.prescription
        self.selected = prescription
        self.bill_quantities = DosageQuantityService.propose_all(prescription.medications)
        return prescription

    def set_bill_quantity(self, name: str, value: int) -> int:
        """Edit a bill quantity; the value is clamped to the units in stock."""
        if self.selected is None:
            raise InvalidMutationError("create-bill", "No prescription selected")
        medication = next((m for m in self.selected.medications if m.name == name), None)
        if medication is None:
            raise KeyError(f"Medication not in prescription: {name}")
        clamped = DosageQuantityService.clamp(value, medication.quantity)
        self.bill_quantities[name] = clamped
        return clamped

    @property
    def bill_total(self) -> float:
        if self.selected is None:
            return 0.0
        return bill_total(build_bill_lines(self.selected, self.bill_quantities))

    @property
    def can_pay(self) -> bool:
        return self.bill_total > 0 and not self.is_processing_payment

    def close_bill(self) -> None:
        self.selected = None
        self.bill_quantities = {}
        self.is_processing_payment = False

    async def dispense(self, payment_mode: PaymentMode | str | None = None) -> DispenseOutcome:
        """
        Bill and dispense the selected prescription.

        A dismissed checkout returns `dispensed=False` and keeps the bill
        summary open.
        """
        if self.selected is None:
            raise InvalidMutationError("create-bill", "No prescription selected")
        mode = PaymentMode(payment_mode) if payment_mode is not None else self.payment_mode

        self.is_processing_payment = True
        try:
            outcome = await self._dispense.execute(
                DispenseRequest(prescription=self.selected, quantities=dict(self.bill_quantities), payment_mode=mode)
            )
        finally:
            self.is_processing_payment = False

        if outcome.dispensed:
            self.close_bill()
        return outcome

    # =========================================================================
    # Row actions
    # =========================================================================

    async def delete_prescription(self, appointment_id: str) -> None:
        await self.coordinator.run(
            "delete-prescription",
            lambda: self._api.delete_prescription(appointment_id),
            item_key=appointment_id,
            refresh=False,
        )
        if self.retrieved is not None and self.retrieved.appointment_id == appointment_id:
            self.retrieved = None
        self.list_state.set_items(i for i in self.list_state.items if i.appointment_id != appointment_id)

    def is_sending_sms(self, prescription_id: str) -> bool:
        return self.coordinator.is_busy(("sms", prescription_id))

    async def send_sms(self, prescription: Prescription) -> None:
        """
        Send the prescription to the patient's phone.

        Raises:
            InvalidMutationError: Patient phone unknown; nothing is sent
            MutationError: Backend failed to send
        """
        phone = prescription.patient_phone
        if not phone and self.retrieved is not None and self.retrieved.appointment_id == prescription.appointment_id:
            phone = self.retrieved.patient.phone
        if not phone:
            raise InvalidMutationError(
                "send-sms", "Patient phone number not found in the database.", prescription.id
            )
        await self.coordinator.run(
            "send-sms",
            lambda: self._api.send_prescription_sms(prescription.appointment_id, phone),
            item_key=("sms", prescription.id),
            refresh=False,
        )
