"""
Report Status Value Object
"""

from enum import Enum


class ReportStatus(str, Enum):
    """Result-entry progress of a lab service."""

    PENDING = "Pending"
    IN_PROGRESS = "InProgress"
    COMPLETED = "Completed"

    @property
    def is_completed(self) -> bool:
        return self is ReportStatus.COMPLETED


class ResultFlag(str, Enum):
    """Result value relative to the test's normal range."""

    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
