"""
Radiology Prescriptions Workflow

Lookup of an appointment's radiology services with test-conducted,
status and payment updates. Every successful update re-fetches the
appointment.
"""

from __future__ import annotations

import logging
from typing import Any

from cura.domains.radiology.application.ports import IRadiologyAPIPort
from cura.domains.radiology.application.radiology_aggregator import RadiologyPrescriptionAggregator
from cura.domains.radiology.domain.entities import RadiologyPrescription
from cura.domains.radiology.domain.value_objects import RadiologyStatus
from cura.domains.shared.application.mutation_coordinator import MutationOperation
from cura.domains.shared.application.retrieval_workflow import AppointmentRetrievalWorkflow
from cura.domains.shared.domain.errors import InvalidMutationError

logger = logging.getLogger(__name__)


class RadiologyPrescriptionsWorkflow(AppointmentRetrievalWorkflow[RadiologyPrescription]):
    """State and actions of the Radiology Prescriptions screen."""

    screen_name = "radiology-prescriptions"

    def __init__(self, api: IRadiologyAPIPort):
        super().__init__(RadiologyPrescriptionAggregator(api), api)
        self._api = api

    def is_test_updating(self, service: RadiologyPrescription) -> bool:
        return self.coordinator.is_busy(service.prescription_id)

    async def mark_test_conducted(self, service: RadiologyPrescription, conducted: bool = True) -> Any:
        return await self.coordinator.mutate(
            MutationOperation.MARK_TEST_CONDUCTED, service.prescription_id, conducted
        )

    async def update_status(self, service: RadiologyPrescription, status: RadiologyStatus | str) -> Any:
        try:
            value = RadiologyStatus(status).value
        except ValueError as e:
            raise InvalidMutationError(
                "update-status", f"Invalid radiology status: {status}", service.prescription_id
            ) from e
        return await self.coordinator.run(
            "update-status",
            lambda: self._api.update_radiology_status(service.prescription_id, value),
            item_key=("status", service.prescription_id),
        )

    async def update_payment_status(self, service: RadiologyPrescription, paid: bool) -> Any:
        return await self.coordinator.run(
            "update-payment-status",
            lambda: self._api.update_radiology_payment_status(service.prescription_id, paid),
            item_key=("payment", service.prescription_id),
        )
