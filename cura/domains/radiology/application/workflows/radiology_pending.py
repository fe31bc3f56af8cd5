"""
Radiology Pending Workflow

Report authoring for conducted radiology tests: patients with tests
awaiting a report (main), their services (services) and the report
editor of one service (detail).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from cura.clients.hospital_api_client import HospitalAPIError
from cura.domains.radiology.application.ports import IRadiologyAPIPort
from cura.domains.radiology.domain.entities import RadiologyPrescription, RadiologyTemplate
from cura.domains.radiology.domain.services import ReportTemplateService
from cura.domains.radiology.domain.value_objects import RadiologyStatus
from cura.domains.shared.application.mutation_coordinator import MutationCoordinator
from cura.domains.shared.application.navigation_controller import WorkflowNavigationController
from cura.domains.shared.domain.entities import AppointmentGroup
from cura.domains.shared.domain.errors import InvalidMutationError
from cura.domains.shared.domain.services import PaginationState, RecordGroupingService
from cura.domains.shared.domain.value_objects import ActiveView

logger = logging.getLogger(__name__)

PatientGroup = AppointmentGroup[RadiologyPrescription]

CONTENT_DRAFT = "content"


@dataclass(frozen=True)
class ReportDraft:
    """
    Report editor context of one prescription.

    Attributes:
        prescription_id: Prescription being reported
        service_id: Radiology service type
        service_name: Service display name
        template_id: Template the content came from, "" for the default one
        template_content: Initial editor content
    """

    prescription_id: str
    service_id: str
    service_name: str
    template_id: str
    template_content: str


def _appointment_date_key(group: PatientGroup) -> datetime:
    try:
        parsed = datetime.fromisoformat(str(group.appointment_date).replace("Z", "+00:00"))
    except ValueError:
        return datetime.min.replace(tzinfo=timezone.utc)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class RadiologyPendingWorkflow:
    """
    State and actions of the Radiology Pending screen.

    Pending means conducted and still in `pending` status. Patients are
    sorted by appointment date, newest first.
    """

    def __init__(self, api: IRadiologyAPIPort):
        self._api = api
        self.coordinator = MutationCoordinator(api, name="radiology-pending")
        self.navigation: WorkflowNavigationController[PatientGroup, RadiologyPrescription, ReportDraft] = (
            WorkflowNavigationController(
                detail_loader=self._load_report_draft,
                on_refresh=self.load_pending,
                complete_view=ActiveView.SERVICES,
                name="radiology-pending",
            )
        )
        self.state: PaginationState[PatientGroup] = PaginationState.from_settings(
            search_fields=lambda group: group.search_texts(RadiologyPrescription.search_texts),
            sort_key=_appointment_date_key,
            descending=True,
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
            rows = RadiologyPrescription.parse_list(await self._api.get_radiology_prescriptions())
        except HospitalAPIError as e:
            logger.error(f"Failed to fetch pending radiology tests: {e}")
            self.error = "Failed to fetch pending radiology tests"
            return self.state.items
        finally:
            self.is_loading = False

        groups = RecordGroupingService.group_by_appointment(r for r in rows if r.awaiting_report)
        self.state.set_items(groups)
        self._rebind_selected_patient(groups)
        return groups

    def _rebind_selected_patient(self, groups: list[PatientGroup]) -> None:
        """Point the services view at the re-fetched group of the same appointment."""
        selected = self.navigation.selected_patient
        if selected is None or self.navigation.active_view is not ActiveView.SERVICES:
            return
        fresh = next((g for g in groups if g.appointment_id == selected.appointment_id), None)
        if fresh is None:
            self.navigation.back_to_main()
        else:
            self.navigation.selected_patient = fresh

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

    async def open_report(self, service: RadiologyPrescription) -> ReportDraft | None:
        """
        Open the report editor of a service.

        Raises:
            DetailLoadError: Template could not be loaded; view is back on services
        """
        draft = await self.navigation.select_service(service)
        if draft is not None:
            self.navigation.set_draft(CONTENT_DRAFT, draft.template_content)
        return draft

    async def _load_report_draft(self, service: RadiologyPrescription) -> ReportDraft:
        templates = RadiologyTemplate.parse_list(await self._api.get_radiology_templates(service.service_id))
        if templates:
            template = templates[0]
            return ReportDraft(
                prescription_id=service.prescription_id,
                service_id=service.service_id,
                service_name=service.service_name,
                template_id=template.template_id,
                template_content=template.content,
            )
        logger.info(f"No template for radiology service {service.service_id}, using default")
        return ReportDraft(
            prescription_id=service.prescription_id,
            service_id=service.service_id,
            service_name=service.service_name,
            template_id="",
            template_content=ReportTemplateService.default_template(service.service_name),
        )

    @property
    def report_draft(self) -> ReportDraft | None:
        return self.navigation.detail

    @property
    def report_content(self) -> str:
        return self.navigation.get_draft(CONTENT_DRAFT, "")

    def set_report_content(self, content: str) -> None:
        self.navigation.set_draft(CONTENT_DRAFT, content)

    def back_to_services(self) -> None:
        self.navigation.back_to_services()

    def back_to_main(self) -> None:
        self.navigation.back_to_main()

    # =========================================================================
    # Save
    # =========================================================================

    async def save_report(self, now: datetime | None = None) -> Any:
        """
        Store the report and mark the prescription completed.

        Returns to the services view and re-fetches the pending list.

        Raises:
            InvalidMutationError: No report open
            MutationError: Saving or the status update failed; the editor stays open
        """
        draft = self.navigation.detail
        if draft is None or self.navigation.active_view is not ActiveView.DETAIL:
            raise InvalidMutationError("save-report", "No report open")

        report_data = {
            "content": self.report_content,
            "serviceName": draft.service_name,
            "createdAt": (now or datetime.now(timezone.utc)).isoformat(),
        }

        async def create_and_complete() -> Any:
            report = await self.coordinator.run(
                "save-report",
                lambda: self._api.create_radiology_report(draft.prescription_id, draft.template_id, report_data),
                item_key=draft.prescription_id,
                refresh=False,
            )
            await self.coordinator.run(
                "update-status",
                lambda: self._api.update_radiology_status(draft.prescription_id, RadiologyStatus.COMPLETED.value),
                item_key=("status", draft.prescription_id),
                refresh=False,
            )
            return report

        report = await self.navigation.complete(create_and_complete)
        logger.info(f"Saved radiology report for prescription {draft.prescription_id}")
        return report
