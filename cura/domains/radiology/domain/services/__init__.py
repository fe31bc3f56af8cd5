"""
Radiology Domain Services
"""

from cura.domains.radiology.domain.services.report_template_service import ReportTemplateService

__all__ = ["ReportTemplateService"]
