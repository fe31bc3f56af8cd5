"""
QR Payload Decoder Domain Service

Extracts an appointment identifier from the text of a scanned QR code.
Pure functions, no I/O.
"""

from __future__ import annotations

import base64
import binascii
import json
import re
from typing import Any
from urllib.parse import parse_qs, urlsplit

from cura.domains.shared.domain.value_objects.appointment_id import (
    HEX32_PATTERN,
    UUID_PATTERN,
    hex_to_uuid,
    is_hex32,
    is_uuid,
)

_BASE64_PATTERN = re.compile(r"[A-Za-z0-9+/]+={0,2}")


class QRPayloadDecoder:
    """
    Decoder for scanner payloads.

    Formats are tried in a fixed order and the first hit wins:
    JSON object field, exact UUID, URL query/path, bare 32-hex, base64
    (recursing on the decoded text), embedded UUID, embedded 32-hex.
    """

    JSON_FIELDS: tuple[str, ...] = ("appointment_id", "appointmentid", "id")
    URL_QUERY_FIELDS: tuple[str, ...] = ("appointment_id", "id")

    @classmethod
    def extract(cls, raw: str | None) -> str | None:
        """
        Extract an appointment identifier.

        Args:
            raw: Decoded QR text

        Returns:
            Identifier string, or None if no known format matched
        """
        if not raw:
            return None
        text = raw.strip()
        if not text:
            return None

        found = cls._from_json(text)
        if found is not None:
            return found

        if is_uuid(text):
            return text

        found = cls._from_url(text)
        if found is not None:
            return found

        if is_hex32(text):
            return hex_to_uuid(text)

        found = cls._from_base64(text)
        if found is not None:
            return found

        match = UUID_PATTERN.search(text)
        if match:
            return match.group(0)

        match = HEX32_PATTERN.search(text)
        if match:
            return hex_to_uuid(match.group(0))

        return None

    @classmethod
    def _from_json(cls, text: str) -> str | None:
        try:
            parsed: Any = json.loads(text)
        except ValueError:
            return None
        if not isinstance(parsed, dict):
            return None

        by_lower = {}
        for key, value in parsed.items():
            by_lower.setdefault(str(key).lower(), value)

        for field in cls.JSON_FIELDS:
            value = by_lower.get(field)
            if value is not None and not isinstance(value, (dict, list, bool)):
                return str(value)
        return None

    @classmethod
    def _from_url(cls, text: str) -> str | None:
        try:
            parts = urlsplit(text)
        except ValueError:
            return None
        if not parts.scheme or not parts.netloc:
            return None

        query = parse_qs(parts.query)
        candidate = None
        for field in cls.URL_QUERY_FIELDS:
            values = query.get(field)
            if values and values[0]:
                candidate = values[0]
                break
        if candidate is None:
            candidate = parts.path.rstrip("/").split("/")[-1] if parts.path.rstrip("/") else None
            if candidate is None:
                return None

        return candidate if is_uuid(candidate) else None

    @classmethod
    def _from_base64(cls, text: str) -> str | None:
        if not _BASE64_PATTERN.fullmatch(text) or len(text) % 4 == 1:
            return None
        padded = text.rstrip("=")
        padded += "=" * (-len(padded) % 4)
        try:
            decoded = base64.b64decode(padded, validate=True).decode("latin-1")
        except (binascii.Error, ValueError):
            return None
        if not decoded or decoded == text:
            return None
        return cls.extract(decoded)


def extract_identifier(raw: str | None) -> str | None:
    """Module-level shortcut for QRPayloadDecoder.extract()."""
    return QRPayloadDecoder.extract(raw)
