"""
Radiology Application Ports
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from cura.domains.shared.application.ports import IMutationAPIPort


@runtime_checkable
class IRadiologyAPIPort(IMutationAPIPort, Protocol):
    """
    Radiology prescriptions, services, templates and reports endpoints.

    Implemented by HospitalAPIClient in cura/clients/hospital_api_client.py.
    """

    # =========================================================================
    # Prescriptions
    # =========================================================================

    async def get_radiology_prescriptions(self) -> list[dict[str, Any]]:
        ...

    async def get_radiology_prescriptions_by_appointment(self, appointment_id: str) -> dict[str, Any] | None:
        ...

    async def update_radiology_status(self, prescription_id: str, status: str) -> Any:
        ...

    async def update_radiology_payment_status(self, prescription_id: str, payment_status: bool) -> Any:
        ...

    # =========================================================================
    # Services and templates
    # =========================================================================

    async def get_radiology_services(self) -> list[dict[str, Any]]:
        ...

    async def add_radiology_service(self, name: str, price: float | None = None) -> dict[str, Any]:
        ...

    async def update_radiology_service(self, service_id: str, name: str, price: float | None = None) -> dict[str, Any]:
        ...

    async def delete_radiology_service(self, service_id: str) -> None:
        ...

    async def get_radiology_templates(self, service_id: str) -> list[dict[str, Any]]:
        ...

    async def add_radiology_template(
        self, service_id: str, template_name: str, template_structure: dict[str, Any]
    ) -> dict[str, Any]:
        ...

    async def update_radiology_template(
        self, service_id: str, template_id: str, template_name: str, template_structure: dict[str, Any]
    ) -> dict[str, Any]:
        ...

    async def delete_radiology_template(self, service_id: str, template_id: str) -> None:
        ...

    # =========================================================================
    # Reports
    # =========================================================================

    async def create_radiology_report(
        self, prescription_id: str, template_id: str, report_data: dict[str, Any]
    ) -> dict[str, Any]:
        ...


__all__ = ["IRadiologyAPIPort"]
