"""
Lab Prescriptions Workflow

Lookup of an appointment's lab services with sample collection, payment
and report status updates. Every successful update re-fetches the
appointment.
"""

from __future__ import annotations

import logging
from typing import Any

from cura.domains.laboratory.application.lab_aggregator import LabPrescriptionAggregator
from cura.domains.laboratory.application.ports import ILaboratoryAPIPort
from cura.domains.laboratory.domain.entities import LabService
from cura.domains.laboratory.domain.value_objects import ReportStatus
from cura.domains.shared.application.mutation_coordinator import MutationOperation
from cura.domains.shared.application.retrieval_workflow import AppointmentRetrievalWorkflow

logger = logging.getLogger(__name__)


class LabPrescriptionsWorkflow(AppointmentRetrievalWorkflow[LabService]):
    """State and actions of the Lab Prescriptions screen."""

    screen_name = "lab-prescriptions"

    def __init__(self, api: ILaboratoryAPIPort):
        super().__init__(LabPrescriptionAggregator(api), api)
        self._api = api

    def is_sample_updating(self, service: LabService) -> bool:
        return self.coordinator.is_busy(service.patient_service_id)

    async def mark_sample_collected(self, service: LabService, collected: bool = True) -> Any:
        return await self.coordinator.mutate(
            MutationOperation.MARK_SAMPLE_COLLECTED, service.patient_service_id, collected
        )

    async def update_report_status(self, service: LabService, status: ReportStatus | str) -> Any:
        value = status.value if isinstance(status, ReportStatus) else status
        return await self.coordinator.mutate(
            MutationOperation.UPDATE_REPORT_STATUS, service.patient_service_id, value
        )

    async def update_payment_status(self, service: LabService, paid: bool) -> Any:
        return await self.coordinator.run(
            "update-payment-status",
            lambda: self._api.update_service_payment_status(service.patient_service_id, paid),
            item_key=("payment", service.patient_service_id),
        )
