"""
Unit tests for LabReportsWorkflow.
"""

import pytest

from cura.clients.hospital_api_client import HospitalAPIError
from cura.domains.laboratory.application.workflows import LabReportsWorkflow
from cura.domains.shared.domain.errors import RetrievalNotFoundError, RetrievalTransientError


def report_row(appointment_id: str, service_id: int, status: str = "Completed") -> dict:
    return {
        "appointment_id": appointment_id,
        "patient_name": "Asha Verma",
        "doctor_name": "Dr. Rao",
        "patient_service_id": service_id,
        "service_type_name": "Lipid Profile",
        "sub_department_name": "Biochemistry",
        "report_status": status,
    }


@pytest.fixture
def workflow(mock_api) -> LabReportsWorkflow:
    return LabReportsWorkflow(mock_api)


class TestCompletedReports:
    """Loading the completed list."""

    @pytest.mark.asyncio
    async def test_uses_completed_endpoint(self, workflow, mock_api, appointment_id) -> None:
        mock_api.get_completed_lab_reports.return_value = [
            report_row(appointment_id, 11),
            report_row(appointment_id, 12),
        ]

        groups = await workflow.load_completed_reports()

        assert len(groups) == 1
        assert groups[0].service_count == 2
        mock_api.get_pending_lab_tests.assert_not_called()

    @pytest.mark.asyncio
    async def test_falls_back_to_pending_list(self, workflow, mock_api, appointment_id) -> None:
        mock_api.get_completed_lab_reports.side_effect = HospitalAPIError("NOT_FOUND", "missing", 404)
        mock_api.get_pending_lab_tests.return_value = [
            report_row(appointment_id, 11, status="Completed"),
            report_row(appointment_id, 12, status="Pending"),
        ]

        groups = await workflow.load_completed_reports()

        assert [s.patient_service_id for s in groups[0].services] == [11]
        assert workflow.error is None

    @pytest.mark.asyncio
    async def test_both_endpoints_failing(self, workflow, mock_api) -> None:
        mock_api.get_completed_lab_reports.side_effect = HospitalAPIError("SERVER_ERROR", "down", 500)
        mock_api.get_pending_lab_tests.side_effect = HospitalAPIError("SERVER_ERROR", "down", 500)

        groups = await workflow.load_completed_reports()

        assert groups == []
        assert workflow.error == "Failed to fetch completed reports"

    @pytest.mark.asyncio
    async def test_view_and_close_report(self, workflow, mock_api, appointment_id) -> None:
        mock_api.get_completed_lab_reports.return_value = [report_row(appointment_id, 11)]
        groups = await workflow.load_completed_reports()

        workflow.view_report(groups[0])
        assert workflow.selected is groups[0]

        workflow.back_to_reports()
        assert workflow.selected is None


class TestReportData:
    """Printable report payload."""

    @pytest.mark.asyncio
    async def test_report_data(self, workflow, mock_api) -> None:
        mock_api.get_medical_report_data.return_value = {
            "patient_info": {"patient_name": "Asha Verma"},
            "test_results": [{"result_id": 1, "patient_test_id": 101, "result_value": "45", "status": "normal"}],
        }

        report = await workflow.get_report_data(11)

        mock_api.get_medical_report_data.assert_awaited_once_with(11)
        assert report.patient_info.patient_name == "Asha Verma"
        assert report.abnormal_results == []

    @pytest.mark.asyncio
    async def test_report_not_found(self, workflow, mock_api) -> None:
        mock_api.get_medical_report_data.side_effect = HospitalAPIError("NOT_FOUND", "missing", 404)

        with pytest.raises(RetrievalNotFoundError):
            await workflow.get_report_data(11)

    @pytest.mark.asyncio
    async def test_report_transient_failure(self, workflow, mock_api) -> None:
        mock_api.get_medical_report_data.side_effect = HospitalAPIError("TIMEOUT", "slow")

        with pytest.raises(RetrievalTransientError):
            await workflow.get_report_data(11)

    @pytest.mark.asyncio
    async def test_results_by_service_tolerates_failures(self, workflow, mock_api) -> None:
        async def results(service_id: int) -> list[dict]:
            if service_id == 12:
                raise HospitalAPIError("SERVER_ERROR", "down", 500)
            return [{"result_id": 1, "patient_test_id": 101, "result_value": "45"}]

        mock_api.get_service_test_results.side_effect = results

        by_service = await workflow.get_results_by_service([11, 12])

        assert [r.result_value for r in by_service[11]] == ["45"]
        assert by_service[12] == []
