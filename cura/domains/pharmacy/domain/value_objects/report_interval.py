"""
Report Interval Value Object
"""

from enum import Enum


class ReportInterval(str, Enum):
    """Bucket size of an analytics chart."""

    DAILY = "daily"
    WEEKLY = "weekly"  # Weeks start on Sunday
    MONTHLY = "monthly"
    YEARLY = "yearly"
