"""
Laboratory Application Ports
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from cura.domains.shared.application.ports import IMutationAPIPort


@runtime_checkable
class ILaboratoryAPIPort(IMutationAPIPort, Protocol):
    """
    Patient services and lab test endpoints.

    Implemented by HospitalAPIClient in cura/clients/hospital_api_client.py.
    """

    async def get_patient_services_by_appointment(self, appointment_id: str) -> dict[str, Any] | None:
        ...

    async def update_service_payment_status(self, patient_service_id: int, payment_status: bool) -> Any:
        ...

    async def get_medical_report_data(self, patient_service_id: int) -> dict[str, Any]:
        ...

    async def get_service_test_results(self, patient_service_id: int) -> list[dict[str, Any]]:
        ...

    async def get_pending_lab_tests(self) -> list[dict[str, Any]]:
        ...

    async def get_completed_lab_reports(self) -> list[dict[str, Any]]:
        ...

    async def get_tests_by_service(self, patient_service_id: int) -> list[dict[str, Any]]:
        ...

    async def get_test_results(self, patient_test_id: int) -> list[dict[str, Any]]:
        ...

    async def complete_lab_service(self, patient_service_id: int, report_status: str = "Completed") -> Any:
        ...


@runtime_checkable
class ILabCatalogAPIPort(IMutationAPIPort, Protocol):
    """
    Lab service catalog: sub-departments, service types and their tests.

    Implemented by HospitalAPIClient in cura/clients/hospital_api_client.py.
    """

    async def get_departments(self) -> list[dict[str, Any]]:
        ...

    async def get_all_services(self) -> list[dict[str, Any]]:
        ...

    async def get_service_types(self, department_id: int) -> list[dict[str, Any]]:
        ...

    async def add_service_type(self, sub_department_id: int, service_type_name: str) -> dict[str, Any]:
        ...

    async def delete_service_type(self, service_type_id: int) -> None:
        ...

    async def get_catalog_tests(self, service_type_id: int) -> list[dict[str, Any]]:
        ...

    async def add_catalog_test(
        self, service_type_id: int, test_name: str, unit: str, normal_min: float, normal_max: float
    ) -> dict[str, Any]:
        ...

    async def delete_catalog_test(self, test_id: int) -> None:
        ...


__all__ = ["ILabCatalogAPIPort", "ILaboratoryAPIPort"]
