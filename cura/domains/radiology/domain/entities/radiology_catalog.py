"""
Radiology Catalog Entities

Radiology service types, their report templates and stored reports.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from cura.domains.shared.domain.entities.base import BackendRecord


class RadiologyServiceType(BackendRecord):
    service_id: str
    name: str
    price: float | None = None

    @field_validator("service_id", mode="before")
    @classmethod
    def _id_to_str(cls, value: Any) -> Any:
        return str(value) if isinstance(value, int) else value


class RadiologyTemplate(BackendRecord):
    """
    Report template of a service.

    `template_structure` holds `title`, `content` (markdown-like text) and
    `sections` (heading lines extracted from the content).
    """

    template_id: str
    service_id: str = ""
    template_name: str = ""
    template_structure: dict[str, Any] = Field(default_factory=dict)
    created_at: str | None = None
    updated_at: str | None = None

    @field_validator("template_id", "service_id", mode="before")
    @classmethod
    def _id_to_str(cls, value: Any) -> Any:
        return str(value) if isinstance(value, int) else value

    @property
    def content(self) -> str:
        return self.template_structure.get("content") or ""

    @property
    def sections(self) -> list[str]:
        return list(self.template_structure.get("sections") or [])


class RadiologyReport(BackendRecord):
    report_id: str
    prescription_id: str = ""
    template_id: str | None = None
    report_data: dict[str, Any] = Field(default_factory=dict)
    report_file_path: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    service_id: str | None = None
    service_name: str | None = None

    @property
    def content(self) -> str:
        return self.report_data.get("content") or ""
