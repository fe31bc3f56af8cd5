"""
Radiology Status Value Object
"""

from enum import Enum


class RadiologyStatus(str, Enum):
    """Reporting status of a radiology prescription."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def is_final(self) -> bool:
        return self in (RadiologyStatus.COMPLETED, RadiologyStatus.CANCELLED)
