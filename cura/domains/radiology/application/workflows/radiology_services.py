"""
Radiology Services Workflow

Catalog of radiology services and the single report template of each
service.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from cura.clients.hospital_api_client import HospitalAPIError
from cura.domains.radiology.application.ports import IRadiologyAPIPort
from cura.domains.radiology.domain.entities import RadiologyServiceType, RadiologyTemplate
from cura.domains.radiology.domain.services import ReportTemplateService
from cura.domains.shared.application.mutation_coordinator import MutationCoordinator
from cura.domains.shared.domain.errors import InvalidMutationError
from cura.domains.shared.domain.services import PaginationState

logger = logging.getLogger(__name__)


def _to_price(price: Any) -> float | None:
    if price is None or price == "":
        return None
    try:
        return float(price)
    except (TypeError, ValueError):
        return None


class RadiologyServicesWorkflow:
    """
    State and actions of the Radiology Services screen.

    A service owns at most one template; saving a template updates the
    existing one or creates it. Deleting a service deletes its templates
    first.
    """

    def __init__(self, api: IRadiologyAPIPort):
        self._api = api
        self.coordinator = MutationCoordinator(api, refresh=self.load, name="radiology-services")
        self.state: PaginationState[RadiologyServiceType] = PaginationState.from_settings(
            search_fields=lambda s: (s.name,),
            sort_key=lambda s: s.name.lower(),
        )
        self.selected: RadiologyServiceType | None = None
        self.templates: list[RadiologyTemplate] = []
        self.template_content = ""
        self.error: str | None = None

    async def load(self) -> list[RadiologyServiceType]:
        self.error = None
        try:
            services = RadiologyServiceType.parse_list(await self._api.get_radiology_services())
        except HospitalAPIError as e:
            logger.error(f"Failed to load radiology services: {e}")
            self.error = "Failed to load radiology services."
            return self.state.items
        self.state.set_items(services)
        return services

    def set_search(self, term: str) -> None:
        self.state.set_search(term)

    # =========================================================================
    # Services
    # =========================================================================

    async def add_service(self, name: str, price: Any = None) -> Any:
        if not name or not name.strip():
            raise InvalidMutationError("add-service", "Please fill in the service name.")
        return await self.coordinator.run(
            "add-service",
            lambda: self._api.add_radiology_service(name.strip(), _to_price(price)),
            item_key=("add", name.strip().lower()),
        )

    async def update_service(self, service: RadiologyServiceType, name: str, price: Any = None) -> Any:
        if not name or not name.strip():
            raise InvalidMutationError("update-service", "Please fill in the service name.", service.service_id)
        return await self.coordinator.run(
            "update-service",
            lambda: self._api.update_radiology_service(service.service_id, name.strip(), _to_price(price)),
            item_key=service.service_id,
        )

    async def delete_service(self, service: RadiologyServiceType) -> None:
        async def delete_with_templates() -> None:
            templates = RadiologyTemplate.parse_list(await self._api.get_radiology_templates(service.service_id))
            if templates:
                logger.info(f"Deleting {len(templates)} template(s) of radiology service {service.service_id}")
                await asyncio.gather(
                    *(self._api.delete_radiology_template(service.service_id, t.template_id) for t in templates)
                )
            await self._api.delete_radiology_service(service.service_id)

        await self.coordinator.run("delete-service", delete_with_templates, item_key=service.service_id)
        if self.selected is not None and self.selected.service_id == service.service_id:
            self.close_template()

    # =========================================================================
    # Template
    # =========================================================================

    async def open_template(self, service: RadiologyServiceType) -> str:
        """Select a service and load its template content ("" when none or on failure)."""
        self.selected = service
        try:
            self.templates = RadiologyTemplate.parse_list(await self._api.get_radiology_templates(service.service_id))
        except HospitalAPIError as e:
            logger.error(f"Failed to load templates of {service.service_id}: {e}")
            self.templates = []
        self.template_content = self.templates[0].content if self.templates else ""
        return self.template_content

    def close_template(self) -> None:
        self.selected = None
        self.templates = []
        self.template_content = ""

    async def save_template(self, content: str | None = None) -> RadiologyTemplate:
        """
        Create or update the template of the selected service.

        The template is named after the service; sections are extracted
        from the content headings.
        """
        if self.selected is None:
            raise InvalidMutationError("save-template", "No service selected")
        if content is not None:
            self.template_content = content
        if not self.template_content.strip():
            raise InvalidMutationError(
                "save-template", "Please fill in the template content.", self.selected.service_id
            )

        service = self.selected
        structure = ReportTemplateService.build_structure(service.name, self.template_content)
        existing = self.templates[0] if self.templates else None

        async def upsert() -> Any:
            if existing is not None:
                return await self._api.update_radiology_template(
                    service.service_id, existing.template_id, service.name, structure
                )
            return await self._api.add_radiology_template(service.service_id, service.name, structure)

        saved = RadiologyTemplate.parse(
            await self.coordinator.run("save-template", upsert, item_key=("template", service.service_id), refresh=False)
        )
        self.templates = [saved]
        return saved

    async def delete_template(self, template: RadiologyTemplate) -> None:
        if self.selected is None:
            raise InvalidMutationError("delete-template", "No service selected")
        service_id = self.selected.service_id
        await self.coordinator.run(
            "delete-template",
            lambda: self._api.delete_radiology_template(service_id, template.template_id),
            item_key=("template", service_id),
            refresh=False,
        )
        self.templates = [t for t in self.templates if t.template_id != template.template_id]
