"""
Lab Services Workflow

Catalog of lab service types grouped by sub-department, with the tests
(and normal ranges) of each service type. Every successful add or delete
re-fetches the catalog and the open department and service.
"""

from __future__ import annotations

import asyncio
import logging
import math
from typing import Any

from cura.clients.hospital_api_client import HospitalAPIError
from cura.domains.laboratory.application.ports import ILabCatalogAPIPort
from cura.domains.laboratory.domain.entities import CatalogServiceType, CatalogTest, SubDepartment
from cura.domains.shared.application.mutation_coordinator import MutationCoordinator
from cura.domains.shared.domain.errors import InvalidMutationError
from cura.domains.shared.domain.services import FILTER_ALL, PaginationState

logger = logging.getLogger(__name__)

DEPARTMENT_FILTER = "department"

SORT_NAME = "name"
SORT_DEPARTMENT = "department"
SORT_TESTS = "tests"

SERVICE_SORTS = {
    SORT_NAME: lambda s: s.service_type_name.lower(),
    SORT_DEPARTMENT: lambda s: s.sub_department_name.lower(),
    SORT_TESTS: lambda s: s.test_count,
}


def _to_float(value: Any) -> float | None:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


class LabServicesWorkflow:
    """
    State and actions of the lab Services screen.

    The list shows every service type with search on the service and
    department names, a department filter and sorting by name,
    department or test count. Selecting a department loads its service
    types; selecting a service type loads its tests.
    """

    def __init__(self, api: ILabCatalogAPIPort):
        self._api = api
        self.coordinator = MutationCoordinator(api, refresh=self.refresh, name="lab-services")
        self.state: PaginationState[CatalogServiceType] = PaginationState.from_settings(
            search_fields=lambda s: (s.service_type_name, s.sub_department_name),
            filters={DEPARTMENT_FILTER: lambda s, department_id: s.sub_department_id == department_id},
            sort_keys=SERVICE_SORTS,
            sort_name=SORT_NAME,
        )
        self.departments: list[SubDepartment] = []
        self.selected_department: SubDepartment | None = None
        self.department_services: list[CatalogServiceType] = []
        self.selected_service: CatalogServiceType | None = None
        self.tests: list[CatalogTest] = []
        self.error: str | None = None
        self.is_loading = False

    @property
    def services(self) -> list[CatalogServiceType]:
        return self.state.items

    @property
    def total_services(self) -> int:
        return len(self.state.items)

    @property
    def total_departments(self) -> int:
        return len(self.departments)

    @property
    def total_tests(self) -> int:
        return sum(s.test_count for s in self.state.items)

    async def load(self) -> list[CatalogServiceType]:
        self.is_loading = True
        self.error = None
        try:
            services, departments = await asyncio.gather(self._api.get_all_services(), self._api.get_departments())
        except HospitalAPIError as e:
            logger.error(f"Failed to load lab services catalog: {e}")
            self.error = "Failed to load services data."
            return self.state.items
        finally:
            self.is_loading = False
        self.departments = SubDepartment.parse_list(departments)
        parsed = CatalogServiceType.parse_list(services)
        self.state.set_items(parsed)
        return parsed

    async def refresh(self) -> None:
        """Re-fetch the catalog and whatever department and service are open."""
        await self.load()
        if self.selected_department is not None:
            await self.select_department(self.selected_department)
        if self.selected_service is not None:
            known = {s.service_type_id for s in self.state.items}
            if self.selected_service.service_type_id in known:
                await self.view_tests(self.selected_service)
            else:
                self.close_tests()

    # =========================================================================
    # List controls
    # =========================================================================

    def set_search(self, term: str) -> None:
        self.state.set_search(term)

    def set_department_filter(self, value: int | str) -> None:
        """Filter on a sub-department id, or FILTER_ALL."""
        if value != FILTER_ALL:
            value = int(value)
            if value not in {d.sub_department_id for d in self.departments}:
                raise ValueError(f"Unknown department: {value}")
        self.state.set_filter(DEPARTMENT_FILTER, value)

    def set_sort(self, name: str) -> None:
        """Sort by name, department or tests; the same column again flips direction."""
        if name not in SERVICE_SORTS:
            raise ValueError(f"Unknown sort: {name}")
        self.state.set_sort(name)
        self.state.current_page = 1

    # =========================================================================
    # Department and service selection
    # =========================================================================

    async def select_department(self, department: SubDepartment) -> list[CatalogServiceType]:
        self.selected_department = department
        try:
            rows = await self._api.get_service_types(department.sub_department_id)
        except HospitalAPIError as e:
            logger.error(f"Failed to load service types of department {department.sub_department_id}: {e}")
            self.error = "Failed to load services data."
            self.department_services = []
            return []
        self.department_services = CatalogServiceType.parse_list(rows)
        return self.department_services

    def clear_department(self) -> None:
        self.selected_department = None
        self.department_services = []

    async def view_tests(self, service: CatalogServiceType) -> list[CatalogTest]:
        self.selected_service = service
        try:
            self.tests = CatalogTest.parse_list(await self._api.get_catalog_tests(service.service_type_id))
        except HospitalAPIError as e:
            logger.error(f"Failed to load tests of service type {service.service_type_id}: {e}")
            self.error = "Failed to load tests."
            self.tests = []
        return self.tests

    def close_tests(self) -> None:
        self.selected_service = None
        self.tests = []

    # =========================================================================
    # Mutations
    # =========================================================================

    async def add_service(self, sub_department_id: int | None, service_type_name: str) -> Any:
        name = (service_type_name or "").strip()
        if not sub_department_id or not name:
            raise InvalidMutationError("add-service-type", "Please select a department and enter a service name.")
        return await self.coordinator.run(
            "add-service-type",
            lambda: self._api.add_service_type(int(sub_department_id), name),
            item_key=("add-service-type", int(sub_department_id), name.lower()),
        )

    async def delete_service(self, service: CatalogServiceType) -> None:
        await self.coordinator.run(
            "delete-service-type",
            lambda: self._api.delete_service_type(service.service_type_id),
            item_key=("service-type", service.service_type_id),
        )

    async def add_test(
        self,
        service_type_id: int | None,
        test_name: str,
        unit: str,
        normal_min: Any,
        normal_max: Any,
    ) -> Any:
        """
        Add a test with its normal range to a service type.

        Raises:
            InvalidMutationError: A field is blank, a bound is not a finite
                number, or the minimum exceeds the maximum
        """
        name = (test_name or "").strip()
        unit = (unit or "").strip()
        low = _to_float(normal_min)
        high = _to_float(normal_max)
        if not service_type_id or not name or not unit or low is None or high is None:
            raise InvalidMutationError("add-test", "Please fill in all test fields.")
        if low > high:
            raise InvalidMutationError("add-test", "Normal minimum cannot exceed normal maximum.")
        return await self.coordinator.run(
            "add-test",
            lambda: self._api.add_catalog_test(int(service_type_id), name, unit, low, high),
            item_key=("add-test", int(service_type_id), name.lower()),
        )

    async def delete_test(self, test: CatalogTest) -> None:
        await self.coordinator.run(
            "delete-test",
            lambda: self._api.delete_catalog_test(test.test_id),
            item_key=("test", test.test_id),
        )
