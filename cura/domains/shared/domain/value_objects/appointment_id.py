"""
Appointment Identifier Value Object

Canonical form is a lower-case UUID (8-4-4-4-12 hex digits).
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from cura.domains.shared.domain.errors import InvalidIdentifierError

UUID_PATTERN = re.compile(r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}", re.IGNORECASE)
HEX32_PATTERN = re.compile(r"[0-9a-f]{32}", re.IGNORECASE)


def is_uuid(value: str) -> bool:
    """True if `value` is exactly UUID-shaped (any hex case)."""
    return UUID_PATTERN.fullmatch(value) is not None


def is_hex32(value: str) -> bool:
    return HEX32_PATTERN.fullmatch(value) is not None


def hex_to_uuid(value: str) -> str:
    """Insert dashes at positions 8/12/16/20 of a 32-char hex string."""
    return f"{value[0:8]}-{value[8:12]}-{value[12:16]}-{value[16:20]}-{value[20:32]}"


@dataclass(frozen=True)
class AppointmentId:
    """
    Validated appointment identifier.

    Use `AppointmentId.parse()` to build one from user or scanner input.
    """

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not is_uuid(self.value) or self.value != self.value.lower():
            raise InvalidIdentifierError(str(self.value))

    @classmethod
    def parse(cls, raw: str | AppointmentId | None) -> AppointmentId:
        """
        Normalize raw input: trim, lower-case, re-dash a bare 32-hex string.

        Raises:
            InvalidIdentifierError: If the input is not UUID-shaped after normalization
        """
        if isinstance(raw, AppointmentId):
            return raw
        if raw is None:
            raise InvalidIdentifierError("")

        candidate = str(raw).strip().lower()
        if is_hex32(candidate):
            candidate = hex_to_uuid(candidate)
        if not is_uuid(candidate):
            raise InvalidIdentifierError(str(raw))
        return cls(candidate)

    @property
    def short(self) -> str:
        """First block, used in user-facing confirmations."""
        return self.value[:8]

    def __str__(self) -> str:
        return self.value
