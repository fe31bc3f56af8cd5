"""
Prescription Aggregator

Retrieves the medication rows of an appointment and joins every row with
live inventory (price, stock quantity, stock status).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from cura.domains.pharmacy.application.ports import IPharmacyAPIPort
from cura.domains.pharmacy.domain.entities import (
    Medicine,
    PrescribedMedication,
    Prescription,
    PrescriptionRow,
    build_inventory_index,
)
from cura.domains.shared.application.aggregator import AppointmentRecordAggregator
from cura.domains.shared.domain.entities import AppointmentAggregate, PatientSummary
from cura.domains.shared.domain.services import RecordGroupingService

logger = logging.getLogger(__name__)


@dataclass
class PrescriptionAggregate(AppointmentAggregate[PrescribedMedication]):
    """Aggregate whose single group is keyed by the appointment id."""

    prescriptions: list[Prescription] | None = None

    @property
    def prescription(self) -> Prescription | None:
        return self.prescriptions[0] if self.prescriptions else None


class PrescriptionAggregator(AppointmentRecordAggregator[PrescribedMedication]):
    """
    Aggregator for the Prescriptions screen.

    Inventory is only fetched when the appointment has prescription rows.
    """

    not_found_message = "No patient found"

    def __init__(self, api: IPharmacyAPIPort):
        super().__init__()
        self._api = api

    async def _fetch(self, appointment_id: str) -> Any:
        rows = await self._api.get_prescriptions_by_appointment(appointment_id)
        if not rows:
            return None
        medicines = await self._api.get_medicines()
        return {"rows": rows, "medicines": medicines}

    def _build(self, appointment_id: str, payload: Any) -> PrescriptionAggregate:
        rows = PrescriptionRow.parse_list(payload["rows"])
        inventory = build_inventory_index(Medicine.parse_list(payload["medicines"]))

        by_appointment = RecordGroupingService.group_by(rows, lambda row: row.appointment_id)
        prescriptions = [Prescription.from_rows(group, inventory) for group in by_appointment.values()]
        unmatched = sum(1 for p in prescriptions for m in p.medications if not m.in_inventory)
        if unmatched:
            logger.info(f"{unmatched} prescribed medication(s) not in inventory for {appointment_id}")

        first = rows[0]
        patient = PatientSummary(
            appointment_id=appointment_id,
            patient_name=first.patient_name,
            doctor_name=first.doctor_name,
            appointment_date=first.date,
            phone=first.patient_phone,
        )
        return PrescriptionAggregate(
            appointment_id=appointment_id,
            patient=patient,
            groups={p.appointment_id: list(p.medications) for p in prescriptions},
            prescriptions=prescriptions,
        )
