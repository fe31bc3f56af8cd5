"""
Shared Value Objects
"""

from cura.domains.shared.domain.value_objects.active_view import ActiveView
from cura.domains.shared.domain.value_objects.appointment_id import (
    AppointmentId,
    hex_to_uuid,
    is_hex32,
    is_uuid,
)

__all__ = [
    "ActiveView",
    "AppointmentId",
    "hex_to_uuid",
    "is_hex32",
    "is_uuid",
]
