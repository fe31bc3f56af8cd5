"""
Report Template Domain Service

Default report text and template structure for radiology services.
"""

from __future__ import annotations

import re
from typing import Any

CAPS_HEADING = re.compile(r"^[A-Z][A-Z\s]+:$")


class ReportTemplateService:
    """Pure helpers for radiology report templates."""

    @staticmethod
    def default_template(service_name: str) -> str:
        """Skeleton used when a service has no template."""
        return (
            f"# {service_name.upper()} REPORT\n\n"
            "## CLINICAL HISTORY\n- Patient presents with...\n\n"
            "## TECHNIQUE\n- Standard examination protocol\n\n"
            "## FINDINGS\n- [Enter findings here]\n\n"
            "## IMPRESSION\n- [Enter impression here]"
        )

    @staticmethod
    def extract_sections(content: str) -> list[str]:
        """
        Heading lines of a template.

        A heading starts with `#` or `**`, or is an upper-case label
        ending in a colon (`FINDINGS:`).
        """
        sections = []
        for line in content.split("\n"):
            stripped = line.strip()
            if stripped and (stripped.startswith("#") or stripped.startswith("**") or CAPS_HEADING.match(stripped)):
                sections.append(stripped)
        return sections

    @classmethod
    def build_structure(cls, title: str, content: str) -> dict[str, Any]:
        content = content.strip()
        return {"title": title, "content": content, "sections": cls.extract_sections(content)}
