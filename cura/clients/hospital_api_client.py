"""
Hospital Backend HTTP Client

Async client for the department REST backend (pharmacy, laboratory,
radiology). Uses httpx for async HTTP with configurable timeouts.
Responses are returned as raw JSON; typed parsing happens in the domain
layer.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from cura.config.settings import get_settings

logger = logging.getLogger(__name__)


class HospitalAPIError(Exception):
    """
    Error raised for any failed backend call.

    Attributes:
        error_code: Machine-readable error code
        error_message: Human-readable error description
        status_code: HTTP status when the backend answered, else None
    """

    TRANSIENT_CODES = frozenset({"TIMEOUT", "CONNECTION_ERROR", "SERVER_ERROR", "RATE_LIMIT", "INVALID_RESPONSE"})

    def __init__(self, error_code: str, error_message: str, status_code: int | None = None):
        self.error_code = error_code
        self.error_message = error_message
        self.status_code = status_code
        super().__init__(f"{error_code}: {error_message}")

    @property
    def is_not_found(self) -> bool:
        return self.error_code == "NOT_FOUND"

    @property
    def is_transient(self) -> bool:
        return self.error_code in self.TRANSIENT_CODES


class HospitalAPIClient:
    """
    Async HTTP client for the hospital backend (`/api`).

    Environment Variables:
        API_BASE_URL: Base URL including the `/api` prefix
        API_TIMEOUT: Request timeout in seconds (default: 30)
        API_VERIFY_SSL: Verify TLS certificates (default: true)

    Example:
        async with HospitalAPIClient() as client:
            rows = await client.get_prescriptions_by_appointment(appointment_id)
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout_seconds: float | None = None,
        verify_ssl: bool | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Backend base URL (defaults to env API_BASE_URL)
            timeout_seconds: Request timeout (defaults to env API_TIMEOUT)
            verify_ssl: TLS verification (defaults to env API_VERIFY_SSL)
            transport: Optional custom transport (tests use httpx.MockTransport)
        """
        settings = get_settings()
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.timeout = timeout_seconds or settings.API_TIMEOUT
        self.verify_ssl = settings.API_VERIFY_SSL if verify_ssl is None else verify_ssl
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> HospitalAPIClient:
        """Initialize async client."""
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(self.timeout),
            headers=self._get_headers(),
            verify=self.verify_ssl,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Close async client."""
        await self.close()

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    def _get_headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": "CURA-Dashboard/1.0",
        }

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise RuntimeError("Client not initialized. Use 'async with HospitalAPIClient() as client:'")
        return self._client

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """
        Perform a request and decode the JSON body.

        Returns:
            Decoded JSON, or None for an empty body

        Raises:
            HospitalAPIError: On HTTP, transport or decoding errors
        """
        client = self._get_client()

        try:
            response = await client.request(method, path, json=json, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            self._handle_http_error(e)
        except httpx.TimeoutException as e:
            logger.error(f"{method} {path} timed out: {e}")
            raise HospitalAPIError("TIMEOUT", f"Request timed out: {e}") from e
        except httpx.RequestError as e:
            logger.error(f"{method} {path} connection error: {e}")
            raise HospitalAPIError("CONNECTION_ERROR", f"Connection error: {e}") from e

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise HospitalAPIError(
                "INVALID_RESPONSE", f"Backend returned non-JSON body for {path}", response.status_code
            ) from e

    def _handle_http_error(self, error: httpx.HTTPStatusError) -> None:
        """
        Map an HTTP error status to HospitalAPIError.

        Raises:
            HospitalAPIError: Always
        """
        status = error.response.status_code
        path = error.request.url.path

        error_mapping = {
            401: ("AUTH_ERROR", "Authentication required"),
            403: ("FORBIDDEN", "Access denied"),
            404: ("NOT_FOUND", "Resource not found"),
            422: ("VALIDATION_ERROR", "Validation error"),
            429: ("RATE_LIMIT", "Rate limit exceeded"),
        }

        if status in error_mapping:
            code, message = error_mapping[status]
            logger.warning(f"Backend returned {status} for {path}")
            raise HospitalAPIError(code, message, status) from error

        if status >= 500:
            logger.error(f"Backend server error {status} for {path}")
            raise HospitalAPIError("SERVER_ERROR", f"Backend server error: {status}", status) from error

        try:
            error_data = error.response.json()
        except ValueError:
            error_data = None
        if isinstance(error_data, dict):
            message = error_data.get("message", error_data.get("error", error.response.text))
        else:
            message = error.response.text

        raise HospitalAPIError(f"HTTP_{status}", message, status) from error

    # =========================================================================
    # Prescriptions
    # =========================================================================

    async def get_prescriptions(self) -> list[dict[str, Any]]:
        return await self._request("GET", "/prescriptions") or []

    async def get_prescriptions_by_appointment(self, appointment_id: str) -> list[dict[str, Any]]:
        return await self._request("GET", f"/prescriptions/{appointment_id}") or []

    async def update_dispense_status(self, appointment_id: str) -> Any:
        return await self._request("PATCH", f"/prescriptions/{appointment_id}/dispense")

    async def delete_prescription(self, appointment_id: str) -> None:
        await self._request("DELETE", f"/prescriptions/{appointment_id}")

    async def send_prescription_sms(self, appointment_id: str, patient_phone: str) -> Any:
        return await self._request(
            "POST",
            "/prescriptions/sms/send",
            json={"appointment_id": appointment_id, "patient_phone": patient_phone},
        )

    # =========================================================================
    # Medicines (inventory)
    # =========================================================================

    async def get_medicines(self) -> list[dict[str, Any]]:
        return await self._request("GET", "/medicines") or []

    async def add_medicine(
        self, name: str, price: float, quantity: int, expiry_date: str | None = None
    ) -> dict[str, Any]:
        return await self._request(
            "POST",
            "/medicines",
            json={"name": name, "price": price, "quantity": quantity, "expiry_date": expiry_date},
        )

    async def refill_medicine(self, medicine_id: int, quantity: int) -> dict[str, Any]:
        return await self._request("PATCH", f"/medicines/refill/{medicine_id}", json={"quantity": quantity})

    async def update_medicine(
        self, medicine_id: int, name: str, price: float, expiry_date: str | None = None
    ) -> dict[str, Any]:
        return await self._request(
            "PUT",
            f"/medicines/{medicine_id}",
            json={"name": name, "price": price, "expiry_date": expiry_date},
        )

    async def delete_medicine(self, medicine_id: int, confirm_name: str) -> None:
        await self._request("DELETE", f"/medicines/{medicine_id}", json={"confirmName": confirm_name})

    # =========================================================================
    # Bills and payments
    # =========================================================================

    async def get_bills(self) -> list[dict[str, Any]]:
        return await self._request("GET", "/bills") or []

    async def get_bills_by_appointment(self, appointment_id: str) -> list[dict[str, Any]]:
        return await self._request("GET", f"/bills/{appointment_id}") or []

    async def create_bill(
        self,
        appointment_id: str,
        medicines: list[dict[str, Any]],
        payment_mode: str,
        transaction_id: str | None = None,
    ) -> list[dict[str, Any]]:
        payload: dict[str, Any] = {
            "appointment_id": appointment_id,
            "medicines": medicines,
            "payment_mode": payment_mode,
        }
        if transaction_id:
            payload["transaction_id"] = transaction_id
        return await self._request("POST", "/bills", json=payload)

    async def create_razorpay_order(
        self, amount: float, currency: str = "INR", receipt: str | None = None
    ) -> dict[str, Any]:
        return await self._request(
            "POST",
            "/bills/razorpay/order",
            json={"amount": amount, "currency": currency, "receipt": receipt},
        )

    async def verify_razorpay_payment(
        self, razorpay_order_id: str, razorpay_payment_id: str, razorpay_signature: str
    ) -> dict[str, Any]:
        return await self._request(
            "POST",
            "/bills/razorpay/verify",
            json={
                "razorpay_order_id": razorpay_order_id,
                "razorpay_payment_id": razorpay_payment_id,
                "razorpay_signature": razorpay_signature,
            },
        )

    async def send_bill_sms(self, appointment_id: str, patient_phone: str) -> Any:
        return await self._request(
            "POST",
            "/bills/sms/send",
            json={"appointment_id": appointment_id, "patient_phone": patient_phone},
        )

    # =========================================================================
    # Analytics
    # =========================================================================

    async def get_analytics(self, report: str) -> Any:
        """
        Fetch an analytics report.

        Args:
            report: One of summary, sales-trend, monthly-trends,
                inventory-analytics, top-medicines
        """
        if report not in ("summary", "sales-trend", "monthly-trends", "inventory-analytics", "top-medicines"):
            raise ValueError(f"Unknown analytics report: {report}")
        return await self._request("GET", f"/analytics/{report}")

    async def export_analytics(self, export: str) -> Any:
        """Fetch an analytics export: revenue, sales-summary or complete."""
        if export not in ("revenue", "sales-summary", "complete"):
            raise ValueError(f"Unknown analytics export: {export}")
        return await self._request("GET", f"/analytics/export/{export}")

    # =========================================================================
    # Patient services (lab prescriptions)
    # =========================================================================

    async def get_patient_services(self) -> list[dict[str, Any]]:
        return await self._request("GET", "/patient-services") or []

    async def get_patient_services_by_appointment(self, appointment_id: str) -> dict[str, Any] | None:
        return await self._request("GET", f"/patient-services/appointment/{appointment_id}")

    async def update_sample_collected(self, patient_service_id: int, sample_collected: bool) -> dict[str, Any]:
        return await self._request(
            "PATCH",
            f"/patient-services/{patient_service_id}/sample-collected",
            json={"sample_collected": sample_collected},
        )

    async def update_service_report_status(self, patient_service_id: int, report_status: str) -> dict[str, Any]:
        return await self._request(
            "PATCH",
            f"/patient-services/{patient_service_id}/report-status",
            json={"report_status": report_status},
        )

    async def update_service_payment_status(self, patient_service_id: int, payment_status: bool) -> dict[str, Any]:
        return await self._request(
            "PATCH",
            f"/patient-services/{patient_service_id}/payment-status",
            json={"payment_status": payment_status},
        )

    async def get_medical_report_data(self, patient_service_id: int) -> dict[str, Any]:
        """Report payload: patient_info, service_info and test_results."""
        return await self._request("GET", f"/patient-services/{patient_service_id}/medical-report")

    async def get_service_test_results(self, patient_service_id: int) -> list[dict[str, Any]]:
        return await self._request("GET", f"/patient-services/{patient_service_id}/test-results") or []

    async def get_patient_info(self, appointment_id: str) -> dict[str, Any]:
        return await self._request("GET", f"/appointments/{appointment_id}/patient-info")

    # =========================================================================
    # Lab tests
    # =========================================================================

    async def get_pending_lab_tests(self) -> list[dict[str, Any]]:
        return await self._request("GET", "/lab-tests/pending") or []

    async def get_completed_lab_reports(self) -> list[dict[str, Any]]:
        return await self._request("GET", "/lab-tests/completed") or []

    async def get_tests_by_service(self, patient_service_id: int) -> list[dict[str, Any]]:
        return await self._request("GET", f"/lab-tests/service/{patient_service_id}") or []

    async def get_test_results(self, patient_test_id: int) -> list[dict[str, Any]]:
        return await self._request("GET", f"/lab-tests/{patient_test_id}/results") or []

    async def save_test_result(self, patient_test_id: int, result_value: str) -> dict[str, Any]:
        return await self._request(
            "POST", f"/lab-tests/{patient_test_id}/results", json={"result_value": result_value}
        )

    async def update_test_result(self, result_id: int, result_value: str) -> dict[str, Any]:
        return await self._request(
            "PATCH", f"/lab-tests/results/{result_id}", json={"result_value": result_value}
        )

    async def complete_lab_service(self, patient_service_id: int, report_status: str = "Completed") -> Any:
        return await self._request(
            "PATCH",
            f"/lab-tests/service/{patient_service_id}/complete",
            json={"report_status": report_status},
        )

    # =========================================================================
    # Radiology services and templates
    # =========================================================================

    async def get_radiology_services(self) -> list[dict[str, Any]]:
        return await self._request("GET", "/radiology-services") or []

    async def add_radiology_service(self, name: str, price: float | None = None) -> dict[str, Any]:
        return await self._request("POST", "/radiology-services", json={"name": name, "price": price})

    async def update_radiology_service(self, service_id: str, name: str, price: float | None = None) -> dict[str, Any]:
        return await self._request(
            "PUT", f"/radiology-services/{service_id}", json={"name": name, "price": price}
        )

    async def delete_radiology_service(self, service_id: str) -> None:
        await self._request("DELETE", f"/radiology-services/{service_id}")

    async def get_radiology_templates(self, service_id: str) -> list[dict[str, Any]]:
        return await self._request("GET", f"/radiology-services/{service_id}/templates") or []

    async def add_radiology_template(
        self, service_id: str, template_name: str, template_structure: dict[str, Any]
    ) -> dict[str, Any]:
        return await self._request(
            "POST",
            f"/radiology-services/{service_id}/templates",
            json={"template_name": template_name, "template_structure": template_structure},
        )

    async def update_radiology_template(
        self, service_id: str, template_id: str, template_name: str, template_structure: dict[str, Any]
    ) -> dict[str, Any]:
        return await self._request(
            "PUT",
            f"/radiology-services/{service_id}/templates/{template_id}",
            json={"template_name": template_name, "template_structure": template_structure},
        )

    async def delete_radiology_template(self, service_id: str, template_id: str) -> None:
        await self._request("DELETE", f"/radiology-services/{service_id}/templates/{template_id}")

    # =========================================================================
    # Radiology prescriptions
    # =========================================================================

    async def get_radiology_prescriptions(self) -> list[dict[str, Any]]:
        return await self._request("GET", "/radiology-prescriptions") or []

    async def get_radiology_prescriptions_by_appointment(self, appointment_id: str) -> dict[str, Any] | None:
        return await self._request("GET", f"/radiology-prescriptions/appointment/{appointment_id}")

    async def update_test_conducted(self, prescription_id: str, test_conducted: bool) -> dict[str, Any]:
        return await self._request(
            "PATCH",
            f"/radiology-prescriptions/{prescription_id}/test-conducted",
            json={"test_conducted": test_conducted},
        )

    async def update_radiology_status(self, prescription_id: str, status: str) -> dict[str, Any]:
        return await self._request(
            "PATCH", f"/radiology-prescriptions/{prescription_id}/status", json={"status": status}
        )

    async def update_radiology_payment_status(self, prescription_id: str, payment_status: bool) -> dict[str, Any]:
        return await self._request(
            "PATCH",
            f"/radiology-prescriptions/{prescription_id}/payment-status",
            json={"payment_status": payment_status},
        )

    # =========================================================================
    # Radiology reports
    # =========================================================================

    async def get_radiology_reports(self) -> list[dict[str, Any]]:
        return await self._request("GET", "/radiology-reports") or []

    async def get_radiology_report(self, report_id: str) -> dict[str, Any]:
        return await self._request("GET", f"/radiology-reports/{report_id}")

    async def get_radiology_reports_by_prescription(self, prescription_id: str) -> list[dict[str, Any]]:
        return await self._request("GET", f"/radiology-reports/prescription/{prescription_id}") or []

    async def create_radiology_report(
        self, prescription_id: str, template_id: str, report_data: dict[str, Any]
    ) -> dict[str, Any]:
        return await self._request(
            "POST",
            "/radiology-reports",
            json={"prescription_id": prescription_id, "template_id": template_id, "report_data": report_data},
        )

    async def update_radiology_report(self, report_id: str, report_data: dict[str, Any]) -> dict[str, Any]:
        return await self._request("PUT", f"/radiology-reports/{report_id}", json={"report_data": report_data})

    async def delete_radiology_report(self, report_id: str) -> None:
        await self._request("DELETE", f"/radiology-reports/{report_id}")

    # =========================================================================
    # Service catalog
    # =========================================================================

    async def get_all_services(self) -> list[dict[str, Any]]:
        return await self._request("GET", "/services/all") or []

    async def get_departments(self) -> list[dict[str, Any]]:
        return await self._request("GET", "/services/departments") or []

    async def get_service_types(self, department_id: int) -> list[dict[str, Any]]:
        return await self._request("GET", f"/services/service-types/{department_id}") or []

    async def add_service_type(self, sub_department_id: int, service_type_name: str) -> dict[str, Any]:
        return await self._request(
            "POST",
            "/services/service-types",
            json={"sub_department_id": sub_department_id, "service_type_name": service_type_name},
        )

    async def delete_service_type(self, service_type_id: int) -> None:
        await self._request("DELETE", f"/services/service-types/{service_type_id}")

    async def get_catalog_tests(self, service_type_id: int) -> list[dict[str, Any]]:
        return await self._request("GET", f"/services/tests/{service_type_id}") or []

    async def add_catalog_test(
        self, service_type_id: int, test_name: str, unit: str, normal_min: float, normal_max: float
    ) -> dict[str, Any]:
        return await self._request(
            "POST",
            "/services/tests",
            json={
                "service_type_id": service_type_id,
                "test_name": test_name,
                "unit": unit,
                "normal_min": normal_min,
                "normal_max": normal_max,
            },
        )

    async def delete_catalog_test(self, test_id: int) -> None:
        await self._request("DELETE", f"/services/tests/{test_id}")

    async def test_connection(self) -> bool:
        """
        Test backend connectivity.

        Returns:
            True if the services catalog answers, False otherwise
        """
        try:
            await self._request("GET", "/services/departments")
            return True
        except HospitalAPIError as e:
            logger.error(f"Backend connection test failed: {e}")
            return False


class HospitalAPIClientFactory:
    """Factory for creating HospitalAPIClient instances."""

    @staticmethod
    def create(
        base_url: str | None = None,
        timeout_seconds: float | None = None,
    ) -> HospitalAPIClient:
        return HospitalAPIClient(base_url=base_url, timeout_seconds=timeout_seconds)
