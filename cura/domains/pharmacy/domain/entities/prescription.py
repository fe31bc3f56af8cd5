"""
Prescription Entities

Flat medication rows from the backend and the per-appointment prescription
built from them, with every medication joined to live inventory.
"""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field

from cura.domains.pharmacy.domain.entities.medicine import Medicine
from cura.domains.pharmacy.domain.value_objects.stock_status import StockStatus
from cura.domains.shared.domain.entities.base import BackendRecord


class PrescriptionRow(BackendRecord):
    """One medication line of `GET /prescriptions/:appointmentId`."""

    id: int | str | None = None
    appointment_id: str
    medication_name: str
    dosage: str = ""
    frequency: str = ""
    duration: str = ""
    notes: str = ""
    dispense_status: bool = False
    patient_name: str = ""
    doctor_name: str = ""
    patient_phone: str | None = None
    date: str | None = None
    created_at: str | None = None


class PrescribedMedication(BaseModel):
    """
    Medication line enriched with inventory data.

    A medication with no inventory match has price 0, quantity 0 and is
    flagged low stock.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    dosage: str = ""
    frequency: str = ""
    duration: str = ""
    notes: str = ""
    quantity: int = 0
    price: float = 0.0
    stock_status: StockStatus = StockStatus.LOW_STOCK
    in_inventory: bool = False

    @classmethod
    def from_row(cls, row: PrescriptionRow, medicine: Medicine | None) -> PrescribedMedication:
        return cls(
            name=row.medication_name,
            dosage=row.dosage,
            frequency=row.frequency,
            duration=row.duration,
            notes=row.notes,
            quantity=medicine.quantity if medicine else 0,
            price=medicine.price if medicine else 0.0,
            stock_status=medicine.stock_status if medicine else StockStatus.LOW_STOCK,
            in_inventory=medicine is not None,
        )


class Prescription(BaseModel):
    """All medications prescribed in one appointment."""

    id: str
    appointment_id: str
    patient_name: str = ""
    doctor_name: str = ""
    date: str | None = None
    dispense_status: bool = False
    patient_phone: str | None = None
    medications: list[PrescribedMedication] = Field(default_factory=list)

    @classmethod
    def from_rows(
        cls,
        rows: list[PrescriptionRow],
        inventory: dict[str, Medicine] | None = None,
    ) -> Prescription:
        """
        Build from the rows of a single appointment.

        Args:
            rows: Non-empty rows sharing one appointment_id
            inventory: Lower-case medicine name -> Medicine
        """
        if not rows:
            raise ValueError("Cannot build a prescription from no rows")
        inventory = inventory or {}
        first = rows[0]
        return cls(
            id=str(first.id) if first.id is not None else first.appointment_id,
            appointment_id=first.appointment_id,
            patient_name=first.patient_name,
            doctor_name=first.doctor_name,
            date=first.date,
            dispense_status=first.dispense_status,
            patient_phone=first.patient_phone,
            medications=[
                PrescribedMedication.from_row(row, inventory.get(row.medication_name.strip().lower()))
                for row in rows
            ],
        )

    @property
    def medication_count(self) -> int:
        return len(self.medications)


class PrescriptionListItem(BackendRecord):
    """Row of `GET /prescriptions` shown on the main list."""

    id: int | str | None = None
    appointment_id: str
    patient_name: str = ""
    doctor_name: str = ""
    date: str | None = None
    dispense_status: bool = False

    @property
    def display_id(self) -> str:
        return str(self.id) if self.id is not None else self.appointment_id


def build_inventory_index(medicines: Iterable[Medicine]) -> dict[str, Medicine]:
    """Lower-case name -> medicine. The last duplicate wins."""
    return {medicine.lookup_key: medicine for medicine in medicines}
