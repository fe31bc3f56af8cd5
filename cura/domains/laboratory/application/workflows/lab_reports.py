"""
Lab Reports Workflow

Completed lab services grouped by appointment, with the printable
report data of a service.
"""

from __future__ import annotations

import asyncio
import logging

from cura.clients.hospital_api_client import HospitalAPIError
from cura.domains.laboratory.application.ports import ILaboratoryAPIPort
from cura.domains.laboratory.domain.entities import MedicalReportData, PatientTestResult, PendingLabTest
from cura.domains.laboratory.domain.value_objects import ReportStatus
from cura.domains.shared.domain.entities import AppointmentGroup
from cura.domains.shared.domain.errors import RetrievalNotFoundError, RetrievalTransientError
from cura.domains.shared.domain.services import PaginationState, RecordGroupingService

logger = logging.getLogger(__name__)


class LabReportsWorkflow:
    """State and actions of the Lab Reports screen."""

    def __init__(self, api: ILaboratoryAPIPort):
        self._api = api
        self.state: PaginationState[AppointmentGroup[PendingLabTest]] = PaginationState.from_settings(
            search_fields=lambda group: group.search_texts(PendingLabTest.search_texts),
        )
        self.selected: AppointmentGroup[PendingLabTest] | None = None
        self.error: str | None = None

    async def load_completed_reports(self) -> list[AppointmentGroup[PendingLabTest]]:
        """
        Fetch completed services.

        When the dedicated endpoint fails, the pending list filtered on
        report_status Completed is used instead.
        """
        self.error = None
        try:
            try:
                rows = await self._api.get_completed_lab_reports()
            except HospitalAPIError as e:
                logger.info(f"Completed reports endpoint unavailable ({e.error_code}), using pending list")
                rows = [
                    row
                    for row in await self._api.get_pending_lab_tests()
                    if row.get("report_status") == ReportStatus.COMPLETED.value
                ]
        except HospitalAPIError as e:
            logger.error(f"Failed to fetch completed reports: {e}")
            self.error = "Failed to fetch completed reports"
            return self.state.items

        groups = RecordGroupingService.group_by_appointment(PendingLabTest.parse_list(rows))
        self.state.set_items(groups)
        return groups

    def set_search(self, term: str) -> None:
        self.state.set_search(term)

    def view_report(self, group: AppointmentGroup[PendingLabTest]) -> None:
        self.selected = group

    def back_to_reports(self) -> None:
        self.selected = None

    async def get_report_data(self, patient_service_id: int) -> MedicalReportData:
        """
        Load the printable report of a service.

        Raises:
            RetrievalNotFoundError: No report for the service
            RetrievalTransientError: Backend failure
        """
        try:
            payload = await self._api.get_medical_report_data(patient_service_id)
        except HospitalAPIError as e:
            logger.error(f"Failed to load report data for service {patient_service_id}: {e}")
            if e.is_not_found:
                raise RetrievalNotFoundError("Report not found", str(patient_service_id)) from e
            raise RetrievalTransientError("Failed to load report data", str(patient_service_id)) from e
        return MedicalReportData.model_validate(payload or {})

    async def get_results_by_service(self, service_ids: list[int]) -> dict[int, list[PatientTestResult]]:
        """
        Results of several services, fetched concurrently.

        A service whose results cannot be fetched maps to an empty list.
        """
        rows = await asyncio.gather(*(self._service_results(service_id) for service_id in service_ids))
        return dict(zip(service_ids, rows))

    async def _service_results(self, service_id: int) -> list[PatientTestResult]:
        try:
            rows = await self._api.get_service_test_results(service_id)
        except HospitalAPIError as e:
            logger.warning(f"No test results for service {service_id}: {e}")
            return []
        return PatientTestResult.parse_list(rows)
