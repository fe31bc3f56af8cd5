"""
Lab Catalog Entities

Sub-departments, the service types they offer and the tests of each
service type, with their normal range.
"""

from __future__ import annotations

from cura.domains.shared.domain.entities.base import BackendRecord


class SubDepartment(BackendRecord):
    sub_department_id: int
    sub_department_name: str


class CatalogServiceType(BackendRecord):
    """
    Orderable lab service.

    `sub_department_name` and `test_count` are only filled by the
    all-services listing.
    """

    service_type_id: int
    sub_department_id: int
    service_type_name: str
    sub_department_name: str = ""
    test_count: int = 0


class CatalogTest(BackendRecord):
    test_id: int
    service_type_id: int | None = None
    test_name: str
    unit: str = ""
    normal_min: float | None = None
    normal_max: float | None = None

    @property
    def normal_range(self) -> str:
        if self.normal_min is None and self.normal_max is None:
            return ""
        low = "" if self.normal_min is None else f"{self.normal_min:g}"
        high = "" if self.normal_max is None else f"{self.normal_max:g}"
        return f"{low} - {high} {self.unit}".strip()
