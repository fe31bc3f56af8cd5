"""
Radiology Prescription Aggregator

Retrieves the radiology services prescribed in an appointment, grouped by
service name.
"""

from __future__ import annotations

import logging
from typing import Any

from cura.domains.radiology.application.ports import IRadiologyAPIPort
from cura.domains.radiology.domain.entities import RadiologyPrescription
from cura.domains.shared.application.aggregator import AppointmentRecordAggregator
from cura.domains.shared.domain.entities import AppointmentAggregate, PatientSummary
from cura.domains.shared.domain.services import RecordGroupingService

logger = logging.getLogger(__name__)


class RadiologyPrescriptionAggregator(AppointmentRecordAggregator[RadiologyPrescription]):
    """Aggregator for the Radiology Prescriptions screen."""

    not_found_message = "No radiology prescriptions found for this appointment"
    transient_message = "Failed to fetch radiology prescriptions. Please try again"

    def __init__(self, api: IRadiologyAPIPort):
        super().__init__()
        self._api = api

    async def _fetch(self, appointment_id: str) -> Any:
        payload = await self._api.get_radiology_prescriptions_by_appointment(appointment_id)
        if not payload or not payload.get("services"):
            return None
        return payload

    def _build(self, appointment_id: str, payload: Any) -> AppointmentAggregate[RadiologyPrescription]:
        services = RadiologyPrescription.parse_list(payload["services"])
        patient = PatientSummary.model_validate({**(payload.get("patient") or {}), "appointment_id": appointment_id})
        groups = RecordGroupingService.group_by(services, lambda s: s.service_name or "Other")
        return AppointmentAggregate(appointment_id=appointment_id, patient=patient, groups=groups)
