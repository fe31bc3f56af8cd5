"""
Shared Application Ports

Protocol interfaces for the collaborators the shared workflow engine
drives: the backend mutation surface and the camera used for scanning.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, Protocol, runtime_checkable

RefreshCallback = Callable[[], Awaitable[Any]]


@runtime_checkable
class IMutationAPIPort(Protocol):
    """
    Backend calls behind the coordinated mutations.

    Implemented by HospitalAPIClient in cura/clients/hospital_api_client.py.
    """

    async def update_sample_collected(self, patient_service_id: int, sample_collected: bool) -> Any:
        ...

    async def update_test_conducted(self, prescription_id: str, test_conducted: bool) -> Any:
        ...

    async def update_service_report_status(self, patient_service_id: int, report_status: str) -> Any:
        ...

    async def update_dispense_status(self, appointment_id: str) -> Any:
        ...

    async def refill_medicine(self, medicine_id: int, quantity: int) -> Any:
        ...

    async def update_medicine(
        self, medicine_id: int, name: str, price: float, expiry_date: str | None = None
    ) -> Any:
        ...

    async def delete_medicine(self, medicine_id: int, confirm_name: str) -> Any:
        ...

    async def create_bill(
        self,
        appointment_id: str,
        medicines: list[dict[str, Any]],
        payment_mode: str,
        transaction_id: str | None = None,
    ) -> Any:
        ...

    async def save_test_result(self, patient_test_id: int, result_value: str) -> Any:
        ...


@runtime_checkable
class CameraPort(Protocol):
    """
    Exclusive camera plus frame decoder (browser camera, OpenCV, kiosk scanner).

    `start` acquires the stream and decoder and raises on permission or
    device failure. `read_payload` returns the text of the next QR code in
    view, or None when the frame holds none. `stop` releases the stream and
    destroys the decoder; it must be safe to call more than once.
    """

    async def start(self) -> None:
        ...

    async def read_payload(self) -> str | None:
        ...

    async def stop(self) -> None:
        ...


__all__ = [
    "CameraPort",
    "IMutationAPIPort",
    "RefreshCallback",
]
