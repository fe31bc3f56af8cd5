"""
Unit tests for ReportTemplateService.
"""

from cura.domains.radiology.domain.services import ReportTemplateService


class TestDefaultTemplate:
    """Tests for the default report skeleton."""

    def test_heading_uses_upper_case_service_name(self) -> None:
        content = ReportTemplateService.default_template("Chest X-Ray")

        assert content.startswith("# CHEST X-RAY REPORT\n\n## CLINICAL HISTORY")
        assert content.endswith("## IMPRESSION\n- [Enter impression here]")

    def test_default_sections(self) -> None:
        sections = ReportTemplateService.extract_sections(ReportTemplateService.default_template("MRI Brain"))

        assert sections == [
            "# MRI BRAIN REPORT",
            "## CLINICAL HISTORY",
            "## TECHNIQUE",
            "## FINDINGS",
            "## IMPRESSION",
        ]


class TestExtractSections:
    """Tests for heading detection."""

    def test_bold_and_caps_headings(self) -> None:
        content = "**Findings**\nNormal study.\nIMPRESSION:\n  No acute process.\nNote: follow up"

        assert ReportTemplateService.extract_sections(content) == ["**Findings**", "IMPRESSION:"]

    def test_empty_content(self) -> None:
        assert ReportTemplateService.extract_sections("") == []

    def test_build_structure_strips_content(self) -> None:
        structure = ReportTemplateService.build_structure("CT Abdomen", "\n# CT ABDOMEN\nFINDINGS:\n")

        assert structure == {
            "title": "CT Abdomen",
            "content": "# CT ABDOMEN\nFINDINGS:",
            "sections": ["# CT ABDOMEN", "FINDINGS:"],
        }
