"""
Unit tests for RecordGroupingService.
"""

from dataclasses import dataclass

from cura.domains.shared.domain.services import RecordGroupingService


@dataclass
class Line:
    appointment_id: str
    patient_name: str
    doctor_name: str
    department: str
    appointment_date: str | None = None


LINES = [
    Line("a-1", "Asha", "Dr. Rao", "Hematology", "2024-03-01"),
    Line("a-2", "Ravi", "Dr. Sen", "Biochemistry"),
    Line("a-1", "Asha", "Dr. Rao", "Biochemistry", "2024-03-01"),
    Line("a-3", "Meera", "Dr. Rao", "Hematology"),
]


class TestGroupBy:
    """Tests for first-seen grouping."""

    def test_groups_keep_first_seen_order(self) -> None:
        groups = RecordGroupingService.group_by(LINES, lambda line: line.department)
        assert list(groups) == ["Hematology", "Biochemistry"]

    def test_items_keep_relative_order(self) -> None:
        groups = RecordGroupingService.group_by(LINES, lambda line: line.department)
        assert [line.appointment_id for line in groups["Hematology"]] == ["a-1", "a-3"]

    def test_every_item_in_exactly_one_group(self) -> None:
        groups = RecordGroupingService.to_groups(LINES, lambda line: line.department)
        assert sum(group.item_count for group in groups) == len(LINES)

    def test_empty_input(self) -> None:
        assert RecordGroupingService.group_by([], lambda line: line.department) == {}


class TestGroupByAppointment:
    """Tests for patient rows of main lists."""

    def test_one_group_per_appointment(self) -> None:
        groups = RecordGroupingService.group_by_appointment(LINES)
        assert [g.appointment_id for g in groups] == ["a-1", "a-2", "a-3"]
        assert groups[0].service_count == 2
        assert groups[0].appointment_date == "2024-03-01"

    def test_search_texts_include_services(self) -> None:
        group = RecordGroupingService.group_by_appointment(LINES)[0]
        texts = group.search_texts(lambda line: (line.department,))
        assert texts == ["Asha", "a-1", "Dr. Rao", "Hematology", "Biochemistry"]
