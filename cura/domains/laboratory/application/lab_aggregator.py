"""
Lab Prescription Aggregator

Retrieves the lab services prescribed in an appointment, grouped by
sub-department.
"""

from __future__ import annotations

import logging
from typing import Any

from cura.domains.laboratory.application.ports import ILaboratoryAPIPort
from cura.domains.laboratory.domain.entities import LabService
from cura.domains.shared.application.aggregator import AppointmentRecordAggregator
from cura.domains.shared.domain.entities import AppointmentAggregate, PatientSummary
from cura.domains.shared.domain.services import RecordGroupingService

logger = logging.getLogger(__name__)


class LabPrescriptionAggregator(AppointmentRecordAggregator[LabService]):
    """Aggregator for the Lab Prescriptions screen."""

    not_found_message = "No lab prescriptions found for this appointment"
    transient_message = "Failed to fetch lab prescriptions. Please try again"

    def __init__(self, api: ILaboratoryAPIPort):
        super().__init__()
        self._api = api

    async def _fetch(self, appointment_id: str) -> Any:
        payload = await self._api.get_patient_services_by_appointment(appointment_id)
        if not payload or not payload.get("services"):
            return None
        return payload

    def _build(self, appointment_id: str, payload: Any) -> AppointmentAggregate[LabService]:
        services = LabService.parse_list(payload["services"])
        patient = PatientSummary.model_validate({**(payload.get("patient") or {}), "appointment_id": appointment_id})
        groups = RecordGroupingService.group_by(services, lambda s: s.sub_department_name or "Other")
        return AppointmentAggregate(appointment_id=appointment_id, patient=patient, groups=groups)
