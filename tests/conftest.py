"""
Shared pytest fixtures for all tests.

This module provides the settings reset, mock backend ports and sample
backend payloads shared by the unit tests.
"""

import os
from unittest.mock import AsyncMock

import pytest

from cura.config.settings import reset_settings
from cura.domains.shared.application.scanner_session import ScannerSession

# Ensure test environment
os.environ["ENVIRONMENT"] = "test"

APPOINTMENT_ID = "f47ac10b-58cc-4372-a567-0e02b2c3d479"
OTHER_APPOINTMENT_ID = "9b2e4c1a-7d3f-4e8a-b5c6-0123456789ab"


# ============================================================================
# SETTINGS
# ============================================================================


@pytest.fixture(autouse=True)
def fresh_settings():
    """Rebuild settings from the environment for every test."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture(autouse=True)
def release_cameras():
    """Forget cameras left acquired by a failing scanner test."""
    yield
    ScannerSession._active_cameras.clear()


# ============================================================================
# MOCK BACKEND
# ============================================================================


@pytest.fixture
def mock_api():
    """Backend port double; every method is an AsyncMock."""
    return AsyncMock()


# ============================================================================
# SAMPLE PAYLOADS
# ============================================================================


@pytest.fixture
def appointment_id() -> str:
    return APPOINTMENT_ID


@pytest.fixture
def other_appointment_id() -> str:
    return OTHER_APPOINTMENT_ID


def make_lab_payload(
    appointment_id: str = APPOINTMENT_ID,
    sample_collected: bool = False,
) -> dict:
    """Lab prescriptions payload with two Biochemistry services and one Hematology service."""
    return {
        "patient": {
            "appointment_id": appointment_id,
            "patient_name": "Asha Verma",
            "doctor_name": "Dr. Rao",
            "appointment_date": "2024-03-01",
            "patient_phone": "9876543210",
        },
        "services": [
            {
                "patient_service_id": 11,
                "appointment_id": appointment_id,
                "service_type_name": "Lipid Profile",
                "sub_department_name": "Biochemistry",
                "sample_collected": sample_collected,
                "report_status": "Pending",
                "payment_status": True,
            },
            {
                "patient_service_id": 12,
                "appointment_id": appointment_id,
                "service_type_name": "Liver Function Test",
                "sub_department_name": "Biochemistry",
                "sample_collected": False,
                "report_status": "Pending",
                "payment_status": False,
            },
            {
                "patient_service_id": 13,
                "appointment_id": appointment_id,
                "service_type_name": "Complete Blood Count",
                "sub_department_name": "Hematology",
                "sample_collected": False,
                "report_status": "Pending",
                "payment_status": False,
            },
        ],
    }


@pytest.fixture
def lab_payload() -> dict:
    return make_lab_payload()


@pytest.fixture
def lab_payload_factory():
    return make_lab_payload


def make_medicine(
    medicine_id: int,
    name: str,
    price: float = 10.0,
    quantity: int = 100,
    stock_status: str = "in_stock",
    expiry_date: str | None = "2030-01-01",
) -> dict:
    return {
        "id": medicine_id,
        "name": name,
        "price": price,
        "quantity": quantity,
        "stock_status": stock_status,
        "expiry_date": expiry_date,
    }


@pytest.fixture
def medicine_factory():
    return make_medicine


@pytest.fixture
def medicines_payload() -> list[dict]:
    return [
        make_medicine(1, "Paracetamol 500mg", price=2.5, quantity=200),
        make_medicine(2, "Ibuprofen 400mg", price=4.0, quantity=3, stock_status="low_stock"),
        make_medicine(3, "Paracetamol Syrup", price=45.0, quantity=20),
        make_medicine(4, "Amoxicillin 250mg", price=8.0, quantity=50, expiry_date="2020-05-01"),
    ]


@pytest.fixture
def prescription_rows() -> list[dict]:
    base = {
        "id": 501,
        "appointment_id": APPOINTMENT_ID,
        "patient_name": "Asha Verma",
        "doctor_name": "Dr. Rao",
        "patient_phone": "9876543210",
        "date": "2024-03-01",
        "dispense_status": False,
    }
    return [
        {**base, "medication_name": "Paracetamol 500mg", "frequency": "2 times daily", "duration": "5 days"},
        {**base, "medication_name": "ibuprofen 400MG", "frequency": "3 times a day", "duration": "1 week"},
        {**base, "medication_name": "Vitamin D3", "frequency": "once", "duration": "as needed"},
    ]
