"""
Radiology Value Objects
"""

from cura.domains.radiology.domain.value_objects.radiology_status import RadiologyStatus

__all__ = ["RadiologyStatus"]
