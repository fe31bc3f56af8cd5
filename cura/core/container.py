"""
Dependency Injection Container

Wires the hospital API client, the persisted UI state and the session
manager to the screen workflows. A presentation layer creates one
container, starts it, and asks it for the workflow of each screen.
"""

from __future__ import annotations

import logging

from cura.clients.hospital_api_client import HospitalAPIClient, HospitalAPIClientFactory
from cura.config.settings import get_settings
from cura.core.auth import CredentialVerifier, SessionManager, StaticCredentialVerifier
from cura.core.logger import configure_from_settings
from cura.core.state_store import AppStateStore, create_state_store
from cura.domains.laboratory.application.workflows import (
    LabPrescriptionsWorkflow,
    LabReportsWorkflow,
    LabServicesWorkflow,
    LabTestsWorkflow,
)
from cura.domains.pharmacy.application.ports import PaymentCheckoutPort
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

logger = logging.getLogger(__name__)


class DependencyContainer:
    """
    Application-wide dependency container.

    The API client and the session are singletons; every `create_*` call
    returns a fresh workflow so screens never share list or navigation
    state.

    Example:
        async with DependencyContainer() as container:
            lab = container.create_lab_prescriptions_workflow()
            await lab.manual_search()
    """

    def __init__(
        self,
        api: HospitalAPIClient | None = None,
        store: AppStateStore | None = None,
        verifier: CredentialVerifier | None = None,
        checkout: PaymentCheckoutPort | None = None,
        configure_logs: bool = False,
    ):
        """
        Initialize the container.

        Args:
            api: Client to use instead of one built from settings
            store: State store to use instead of the settings-driven one
            verifier: Credential check to use instead of the static pair
            checkout: Payment gateway checkout for online billing
            configure_logs: Install the root log handlers from settings
        """
        self.settings = get_settings()
        if configure_logs:
            configure_from_settings()

        self._api = api
        self._owns_api = api is None
        self._store = store
        self._verifier = verifier
        self._checkout = checkout
        self._sessions: SessionManager | None = None
        self._started = False

        logger.info(f"DependencyContainer initialized ({self.settings.ENVIRONMENT})")

    async def __aenter__(self) -> DependencyContainer:
        await self.start()
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()

    async def start(self) -> None:
        """Open the HTTP connection pool of a container-owned client."""
        if self._started:
            return
        if self._owns_api:
            await self.get_api().__aenter__()
        self._started = True

    async def close(self) -> None:
        if self._owns_api and self._api is not None:
            await self._api.close()
        self._started = False

    # =========================================================================
    # Singletons
    # =========================================================================

    def get_api(self) -> HospitalAPIClient:
        if self._api is None:
            self._api = HospitalAPIClientFactory.create()
            logger.debug(f"Created HospitalAPIClient for {self._api.base_url}")
        return self._api

    def get_state_store(self) -> AppStateStore:
        if self._store is None:
            self._store = create_state_store()
        return self._store

    def get_session_manager(self) -> SessionManager:
        if self._sessions is None:
            verifier = self._verifier or StaticCredentialVerifier()
            self._sessions = SessionManager(verifier, self.get_state_store())
        return self._sessions

    # =========================================================================
    # Pharmacy
    # =========================================================================

    def create_prescriptions_workflow(self) -> PrescriptionsWorkflow:
        return PrescriptionsWorkflow(self.get_api(), checkout=self._checkout)

    def create_inventory_workflow(self) -> InventoryWorkflow:
        return InventoryWorkflow(self.get_api())

    def create_billing_workflow(self) -> BillingWorkflow:
        return BillingWorkflow(self.get_api())

    def create_analytics_workflow(self) -> AnalyticsWorkflow:
        return AnalyticsWorkflow(self.get_api())

    # =========================================================================
    # Laboratory
    # =========================================================================

    def create_lab_prescriptions_workflow(self) -> LabPrescriptionsWorkflow:
        return LabPrescriptionsWorkflow(self.get_api())

    def create_lab_tests_workflow(self) -> LabTestsWorkflow:
        return LabTestsWorkflow(self.get_api())

    def create_lab_reports_workflow(self) -> LabReportsWorkflow:
        return LabReportsWorkflow(self.get_api())

    def create_lab_services_workflow(self) -> LabServicesWorkflow:
        return LabServicesWorkflow(self.get_api())

    # =========================================================================
    # Radiology
    # =========================================================================

    def create_radiology_prescriptions_workflow(self) -> RadiologyPrescriptionsWorkflow:
        return RadiologyPrescriptionsWorkflow(self.get_api())

    def create_radiology_pending_workflow(self) -> RadiologyPendingWorkflow:
        return RadiologyPendingWorkflow(self.get_api())

    def create_radiology_services_workflow(self) -> RadiologyServicesWorkflow:
        return RadiologyServicesWorkflow(self.get_api())
