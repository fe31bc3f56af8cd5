# ============================================================================
# Tests for the three-step workflow navigation
# ============================================================================
"""Unit tests for WorkflowNavigationController."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from cura.core.cancellation import FetchCancelledError
from cura.domains.shared.application.navigation_controller import WorkflowNavigationController
from cura.domains.shared.domain.errors import DetailLoadError
from cura.domains.shared.domain.value_objects import ActiveView


@pytest.fixture
def loader() -> AsyncMock:
    return AsyncMock(return_value=["test-1", "test-2"])


@pytest.fixture
def refresh() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def controller(loader, refresh) -> WorkflowNavigationController:
    return WorkflowNavigationController(detail_loader=loader, on_refresh=refresh, name="test")


class TestTransitions:
    """Tests for main -> services -> detail."""

    def test_starts_on_main(self, controller) -> None:
        assert controller.active_view is ActiveView.MAIN
        assert controller.selected_patient is None

    def test_select_patient(self, controller, loader) -> None:
        controller.select_patient("patient-1")
        assert controller.active_view is ActiveView.SERVICES
        assert controller.selected_patient == "patient-1"
        loader.assert_not_called()

    @pytest.mark.asyncio
    async def test_select_service_loads_detail(self, controller, loader) -> None:
        controller.select_patient("patient-1")
        detail = await controller.select_service("service-1")

        loader.assert_awaited_once_with("service-1")
        assert detail == ["test-1", "test-2"]
        assert controller.active_view is ActiveView.DETAIL
        assert controller.detail == detail
        assert controller.is_detail_loading is False

    @pytest.mark.asyncio
    async def test_view_flips_before_load_finishes(self, controller, loader) -> None:
        release = asyncio.Event()

        async def slow(_):
            await release.wait()
            return ["t"]

        loader.side_effect = slow
        controller.select_patient("patient-1")
        task = asyncio.create_task(controller.select_service("service-1"))
        await asyncio.sleep(0)

        assert controller.active_view is ActiveView.DETAIL
        assert controller.is_detail_loading is True
        release.set()
        await task
        assert controller.is_detail_loading is False

    @pytest.mark.asyncio
    async def test_load_failure_returns_to_services(self, controller, loader) -> None:
        loader.side_effect = RuntimeError("backend down")
        controller.select_patient("patient-1")

        with pytest.raises(DetailLoadError):
            await controller.select_service("service-1")

        assert controller.active_view is ActiveView.SERVICES
        assert controller.selected_patient == "patient-1"
        assert controller.selected_service is None
        assert controller.detail is None

    @pytest.mark.asyncio
    async def test_back_to_services_discards_drafts(self, controller) -> None:
        controller.select_patient("patient-1")
        await controller.select_service("service-1")
        controller.set_draft(1, "5.4")

        controller.back_to_services()

        assert controller.active_view is ActiveView.SERVICES
        assert controller.drafts == {}
        assert controller.detail is None

    @pytest.mark.asyncio
    async def test_main_clears_everything(self, controller) -> None:
        controller.select_patient("patient-1")
        await controller.select_service("service-1")
        controller.set_draft(1, "5.4")

        controller.back_to_main()

        assert controller.active_view is ActiveView.MAIN
        assert controller.selected_patient is None
        assert controller.selected_service is None
        assert controller.detail is None
        assert controller.drafts == {}

    @pytest.mark.asyncio
    async def test_leaving_detail_discards_late_result(self, controller, loader) -> None:
        release = asyncio.Event()

        async def slow(_):
            await release.wait()
            return ["late"]

        loader.side_effect = slow
        controller.select_patient("patient-1")
        task = asyncio.create_task(controller.select_service("service-1"))
        await asyncio.sleep(0)

        controller.back_to_main()
        release.set()

        with pytest.raises(FetchCancelledError):
            await task
        assert controller.active_view is ActiveView.MAIN
        assert controller.detail is None

    def test_detail_is_not_a_completion_target(self) -> None:
        with pytest.raises(ValueError):
            WorkflowNavigationController(complete_view=ActiveView.DETAIL)


class TestComplete:
    """Tests for the completing action."""

    @pytest.mark.asyncio
    async def test_complete_returns_to_services_and_refreshes(self, controller, refresh) -> None:
        controller.select_patient("patient-1")
        await controller.select_service("service-1")
        action = AsyncMock(return_value="saved")

        result = await controller.complete(action)

        assert result == "saved"
        assert controller.active_view is ActiveView.SERVICES
        assert controller.selected_patient == "patient-1"
        refresh.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_complete_to_main(self, loader, refresh) -> None:
        controller = WorkflowNavigationController(loader, refresh, complete_view=ActiveView.MAIN)
        controller.select_patient("patient-1")
        await controller.select_service("service-1")

        await controller.complete(AsyncMock())

        assert controller.active_view is ActiveView.MAIN
        assert controller.selected_patient is None

    @pytest.mark.asyncio
    async def test_failed_action_keeps_state(self, controller, refresh) -> None:
        controller.select_patient("patient-1")
        await controller.select_service("service-1")
        controller.set_draft(1, "5.4")

        with pytest.raises(RuntimeError):
            await controller.complete(AsyncMock(side_effect=RuntimeError("save failed")))

        assert controller.active_view is ActiveView.DETAIL
        assert controller.get_draft(1) == "5.4"
        refresh.assert_not_awaited()
