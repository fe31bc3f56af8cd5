"""
Lab Tests Workflow

Result entry for pending lab services: patients with pending work
(main), their services grouped by sub-department (services), and the
tests of one service with a draft result per test (detail).
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from cura.clients.hospital_api_client import HospitalAPIError
from cura.domains.laboratory.application.ports import ILaboratoryAPIPort
from cura.domains.laboratory.domain.entities import PatientTest, PendingLabTest
from cura.domains.laboratory.domain.value_objects import ReportStatus
from cura.domains.shared.application.mutation_coordinator import MutationCoordinator, MutationOperation
from cura.domains.shared.application.navigation_controller import WorkflowNavigationController
from cura.domains.shared.domain.entities import AppointmentGroup
from cura.domains.shared.domain.errors import InvalidMutationError
from cura.domains.shared.domain.services import PaginationState, RecordGroupingService
from cura.domains.shared.domain.value_objects import ActiveView

logger = logging.getLogger(__name__)

PatientGroup = AppointmentGroup[PendingLabTest]


class LabTestsWorkflow:
    """
    State and actions of the Lab Tests screen.

    Completing a service saves every draft result concurrently, marks the
    service Completed, returns to main and re-fetches the pending list.
    """

    def __init__(self, api: ILaboratoryAPIPort):
        self._api = api
        self.coordinator = MutationCoordinator(api, name="lab-tests")
        self.navigation: WorkflowNavigationController[PatientGroup, PendingLabTest, list[PatientTest]] = (
            WorkflowNavigationController(
                detail_loader=self._load_tests,
                on_refresh=self.load_pending,
                complete_view=ActiveView.MAIN,
                name="lab-tests",
            )
        )
        self.state: PaginationState[PatientGroup] = PaginationState.from_settings(
            search_fields=lambda group: group.search_texts(PendingLabTest.search_texts),
        )
        self.error: str | None = None
        self.is_loading = False

    # =========================================================================
    # Main view
    # =========================================================================

    async def load_pending(self) -> list[PatientGroup]:
        self.is_loading = True
        self.error = None
        try:
            pending = PendingLabTest.parse_list(await self._api.get_pending_lab_tests())
        except HospitalAPIError as e:
            logger.error(f"Failed to fetch pending lab tests: {e}")
            self.error = "Failed to fetch pending lab tests"
            return self.state.items
        finally:
            self.is_loading = False
        groups = RecordGroupingService.group_by_appointment(pending)
        self.state.set_items(groups)
        return groups

    def set_search(self, term: str) -> None:
        self.state.set_search(term)

    # =========================================================================
    # Navigation
    # =========================================================================

    @property
    def active_view(self) -> ActiveView:
        return self.navigation.active_view

    def select_patient(self, group: PatientGroup) -> None:
        self.navigation.select_patient(group)

    @property
    def services_by_department(self) -> dict[str, list[PendingLabTest]]:
        patient = self.navigation.selected_patient
        if patient is None:
            return {}
        return RecordGroupingService.group_by(patient.services, lambda s: s.sub_department_name or "Other")

    async def select_service(self, service: PendingLabTest) -> list[PatientTest] | None:
        """
        Open the tests of a service.

        Raises:
            DetailLoadError: Tests could not be fetched; view is back on services
        """
        return await self.navigation.select_service(service)

    async def _load_tests(self, service: PendingLabTest) -> list[PatientTest]:
        return PatientTest.parse_list(await self._api.get_tests_by_service(service.patient_service_id))

    @property
    def tests(self) -> list[PatientTest]:
        return self.navigation.detail or []

    def back_to_services(self) -> None:
        self.navigation.back_to_services()

    def back_to_main(self) -> None:
        self.navigation.back_to_main()

    # =========================================================================
    # Result entry
    # =========================================================================

    def set_result(self, patient_test_id: int, value: str) -> None:
        self.navigation.set_draft(patient_test_id, value)

    def get_result(self, patient_test_id: int) -> str:
        return self.navigation.get_draft(patient_test_id, "")

    @property
    def missing_results(self) -> list[PatientTest]:
        return [t for t in self.tests if not str(self.get_result(t.patient_test_id) or "").strip()]

    async def complete_service(self) -> Any:
        """
        Save every result and mark the selected service Completed.

        Raises:
            InvalidMutationError: No service open, or some results are blank
            MutationError: A save or the status update failed; drafts are kept
        """
        service = self.navigation.selected_service
        if service is None or self.navigation.active_view is not ActiveView.DETAIL:
            raise InvalidMutationError("complete-service", "No service selected")
        missing = self.missing_results
        if missing:
            raise InvalidMutationError(
                "complete-service",
                f"Please fill in results for {len(missing)} test(s) before completing",
                service.patient_service_id,
            )

        tests = list(self.tests)
        results = {t.patient_test_id: str(self.get_result(t.patient_test_id)).strip() for t in tests}

        async def save_and_complete() -> Any:
            saved = await asyncio.gather(
                *(
                    self.coordinator.mutate(MutationOperation.SAVE_TEST_RESULT, test_id, value, refresh=False)
                    for test_id, value in results.items()
                ),
                return_exceptions=True,
            )
            failures = [r for r in saved if isinstance(r, Exception)]
            if failures:
                logger.warning(
                    f"{len(failures)}/{len(results)} result save(s) failed for service {service.patient_service_id}"
                )
                raise failures[0]
            return await self.coordinator.run(
                "complete-service",
                lambda: self._api.complete_lab_service(service.patient_service_id, ReportStatus.COMPLETED.value),
                item_key=service.patient_service_id,
                refresh=False,
            )

        result = await self.navigation.complete(save_and_complete)
        logger.info(f"Completed lab service {service.patient_service_id} with {len(results)} result(s)")
        return result
