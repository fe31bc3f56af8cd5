"""
Laboratory Value Objects
"""

from cura.domains.laboratory.domain.value_objects.report_status import ReportStatus, ResultFlag

__all__ = ["ReportStatus", "ResultFlag"]
