"""
Unit tests for DependencyContainer.
"""

import logging

import httpx
import pytest

from cura.clients.hospital_api_client import HospitalAPIClient
from cura.core.auth import SessionManager, StaticCredentialVerifier, UserRole
from cura.core.container import DependencyContainer
from cura.core.logger import JSONFormatter
from cura.core.state_store import AppStateStore, InMemoryStorage, JsonFileStorage
from cura.domains.laboratory.application.workflows import (
    LabPrescriptionsWorkflow,
    LabReportsWorkflow,
    LabServicesWorkflow,
    LabTestsWorkflow,
)
from cura.domains.pharmacy.application.workflows import (
    AnalyticsWorkflow,
    BillingWorkflow,
    InventoryWorkflow,
    PrescriptionsWorkflow,
)
from cura.domains.radiology.application.workflows import (
    RadiologyPendingWorkflow,
    RadiologyPrescriptionsWorkflow,
    RadiologyServicesWorkflow,
)


def make_client() -> HospitalAPIClient:
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json=[]))
    return HospitalAPIClient(base_url="http://testserver/api", transport=transport)


@pytest.fixture
def container(monkeypatch) -> DependencyContainer:
    monkeypatch.delenv("STATE_FILE_PATH", raising=False)
    return DependencyContainer(api=make_client())


class TestSingletons:
    """Tests for the container-scoped singletons."""

    def test_api_is_injected_client(self, container: DependencyContainer) -> None:
        assert container.get_api() is container.get_api()
        assert container.get_api().base_url == "http://testserver/api"

    def test_default_store_is_in_memory(self, container: DependencyContainer) -> None:
        store = container.get_state_store()

        assert isinstance(store.storage, InMemoryStorage)
        assert container.get_state_store() is store

    def test_store_follows_settings(self, monkeypatch, tmp_path) -> None:
        monkeypatch.setenv("STATE_FILE_PATH", str(tmp_path / "state.json"))

        container = DependencyContainer(api=make_client())

        assert isinstance(container.get_state_store().storage, JsonFileStorage)

    def test_session_manager_is_shared(self, container: DependencyContainer) -> None:
        sessions = container.get_session_manager()

        assert isinstance(sessions, SessionManager)
        assert container.get_session_manager() is sessions

    def test_custom_verifier_and_store(self) -> None:
        store = AppStateStore(InMemoryStorage())
        container = DependencyContainer(
            api=make_client(),
            store=store,
            verifier=StaticCredentialVerifier("lab", "secret"),
        )

        user = container.get_session_manager().login("lab", "secret", UserRole.LABORATORY)

        assert user.role == UserRole.LABORATORY
        assert store.get_json("user")["username"] == "lab"


class TestWorkflowFactories:
    """Tests for the per-screen workflow factories."""

    @pytest.mark.parametrize(
        "factory,workflow_type",
        [
            ("create_prescriptions_workflow", PrescriptionsWorkflow),
            ("create_inventory_workflow", InventoryWorkflow),
            ("create_billing_workflow", BillingWorkflow),
            ("create_analytics_workflow", AnalyticsWorkflow),
            ("create_lab_prescriptions_workflow", LabPrescriptionsWorkflow),
            ("create_lab_tests_workflow", LabTestsWorkflow),
            ("create_lab_reports_workflow", LabReportsWorkflow),
            ("create_lab_services_workflow", LabServicesWorkflow),
            ("create_radiology_prescriptions_workflow", RadiologyPrescriptionsWorkflow),
            ("create_radiology_pending_workflow", RadiologyPendingWorkflow),
            ("create_radiology_services_workflow", RadiologyServicesWorkflow),
        ],
    )
    def test_fresh_workflow_per_call(self, container: DependencyContainer, factory: str, workflow_type: type) -> None:
        first = getattr(container, factory)()
        second = getattr(container, factory)()

        assert isinstance(first, workflow_type)
        assert first is not second


class TestLifecycle:
    """Tests for start/close of the HTTP client."""

    @pytest.mark.asyncio
    async def test_owned_client_is_opened_and_closed(self, monkeypatch) -> None:
        monkeypatch.setenv("API_BASE_URL", "http://backend.local/api/")

        async with DependencyContainer() as container:
            api = container.get_api()
            assert api.base_url == "http://backend.local/api"
            assert api._client is not None

        assert api._client is None

    @pytest.mark.asyncio
    async def test_injected_client_is_left_to_caller(self) -> None:
        async with make_client() as api:
            async with DependencyContainer(api=api):
                pass

            assert api._client is not None

    @pytest.mark.asyncio
    async def test_start_is_idempotent(self, monkeypatch) -> None:
        monkeypatch.setenv("API_BASE_URL", "http://backend.local/api")
        container = DependencyContainer()

        await container.start()
        client = container.get_api()._client
        await container.start()

        assert container.get_api()._client is client
        await container.close()


class TestLoggingSetup:
    """Tests for the optional logging setup."""

    def test_configure_logs(self, monkeypatch) -> None:
        monkeypatch.setenv("LOG_FORMAT", "json")
        root = logging.getLogger()
        saved_handlers, saved_level = list(root.handlers), root.level
        try:
            DependencyContainer(api=make_client(), configure_logs=True)

            assert any(isinstance(h.formatter, JSONFormatter) for h in root.handlers)
        finally:
            for handler in list(root.handlers):
                root.removeHandler(handler)
            for handler in saved_handlers:
                root.addHandler(handler)
            root.setLevel(saved_level)
            for name in ("httpx", "httpcore"):
                logging.getLogger(name).setLevel(logging.NOTSET)
