"""
Unit tests for laboratory entities.
"""

import pytest

from cura.domains.laboratory.domain.entities import LabService, MedicalReportData, PatientTest
from cura.domains.laboratory.domain.value_objects import ReportStatus, ResultFlag


class TestLabService:
    """Tests for LabService parsing."""

    def test_null_fields_fall_back_to_defaults(self) -> None:
        service = LabService.parse(
            {"patient_service_id": 7, "sub_department_name": None, "report_status": None, "extra": "x"}
        )

        assert service.sub_department_name == "Other"
        assert service.report_status is ReportStatus.PENDING
        assert service.can_collect_sample

    def test_completed_status(self) -> None:
        service = LabService.parse({"patient_service_id": 7, "report_status": "Completed", "sample_collected": True})

        assert service.report_status.is_completed
        assert not service.can_collect_sample


class TestPatientTest:
    """Tests for PatientTest range checks."""

    @pytest.fixture
    def hdl(self) -> PatientTest:
        return PatientTest(patient_test_id=1, test_name="HDL", unit="mg/dL", normal_min=40, normal_max=60)

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("35", ResultFlag.LOW),
            ("40", ResultFlag.NORMAL),
            ("59.5", ResultFlag.NORMAL),
            ("61", ResultFlag.HIGH),
        ],
    )
    def test_flag(self, hdl: PatientTest, value: str, expected: ResultFlag) -> None:
        assert hdl.flag(value) is expected

    def test_non_numeric_value_has_no_flag(self, hdl: PatientTest) -> None:
        assert hdl.flag("reactive") is None

    def test_unknown_range_has_no_flag(self) -> None:
        assert PatientTest(patient_test_id=2, test_name="Culture").flag("3") is None

    def test_normal_range_text(self, hdl: PatientTest) -> None:
        assert hdl.normal_range == "40 - 60"
        assert PatientTest(patient_test_id=2, normal_max=5.5).normal_range == " - 5.5"
        assert PatientTest(patient_test_id=3).normal_range == ""


class TestMedicalReportData:
    """Tests for the printable report payload."""

    def test_abnormal_results(self) -> None:
        report = MedicalReportData.model_validate(
            {
                "patient_info": {"patient_name": "Asha Verma", "phone": None},
                "service_info": {"service_type_name": "Lipid Profile"},
                "test_results": [
                    {"result_id": 1, "patient_test_id": 1, "result_value": "35", "status": "low"},
                    {"result_id": 2, "patient_test_id": 2, "result_value": "120", "status": "normal"},
                    {"result_id": 3, "patient_test_id": 3, "result_value": "n/a"},
                ],
            }
        )

        assert report.patient_info.phone == ""
        assert [r.result_id for r in report.abnormal_results] == [1]

    def test_empty_payload(self) -> None:
        report = MedicalReportData.model_validate({})

        assert report.test_results == []
        assert report.service_info.service_type_name == ""
