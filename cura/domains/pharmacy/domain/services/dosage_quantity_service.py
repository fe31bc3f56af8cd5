"""
Dosage Quantity Domain Service

Proposes how many units to bill for a prescribed medication from its
frequency and duration text.
"""

from __future__ import annotations

import re

from cura.domains.pharmacy.domain.entities.prescription import PrescribedMedication

FREQUENCY_PATTERN = re.compile(r"(\d+)\s*(times?|time)\s*(daily|day|a day)")
DURATION_PATTERN = re.compile(r"(\d+)\s*(days?|weeks?|months?)")

DEFAULT_TIMES_PER_DAY = 1
DEFAULT_DURATION_DAYS = 7
UNKNOWN_STOCK_LIMIT = 999

_DAYS_PER_UNIT = {
    "day": 1,
    "days": 1,
    "week": 7,
    "weeks": 7,
    "month": 30,
    "months": 30,
}


class DosageQuantityService:
    """
    Quantity rules for the bill summary.

    Frequency "2 times daily" -> 2/day, anything unparseable -> 1/day.
    Duration "7 days" -> 7, "2 weeks" -> 14, "1 month" -> 30, anything
    unparseable -> 7 days.
    """

    @staticmethod
    def times_per_day(frequency: str | None) -> int:
        match = FREQUENCY_PATTERN.search((frequency or "").lower())
        return int(match.group(1)) if match else DEFAULT_TIMES_PER_DAY

    @staticmethod
    def duration_days(duration: str | None) -> int:
        match = DURATION_PATTERN.search((duration or "").lower())
        if not match:
            return DEFAULT_DURATION_DAYS
        return int(match.group(1)) * _DAYS_PER_UNIT[match.group(2)]

    @classmethod
    def required_quantity(cls, frequency: str | None, duration: str | None) -> int:
        return cls.times_per_day(frequency) * cls.duration_days(duration)

    @classmethod
    def propose(cls, medication: PrescribedMedication) -> int:
        """Required quantity capped at the units in stock."""
        required = cls.required_quantity(medication.frequency, medication.duration)
        return min(required, max(0, medication.quantity))

    @classmethod
    def propose_all(cls, medications: list[PrescribedMedication]) -> dict[str, int]:
        return {medication.name: cls.propose(medication) for medication in medications}

    @staticmethod
    def clamp(value: int, available: int | None) -> int:
        """Clamp a manual edit to [0, stock]; 999 when stock is unknown or zero."""
        limit = available if available else UNKNOWN_STOCK_LIMIT
        return max(0, min(int(value), limit))
