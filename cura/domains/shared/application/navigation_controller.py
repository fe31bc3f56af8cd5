"""
Workflow Navigation Controller

Three-step state machine (main -> services -> detail) shared by the
Lab Tests and Radiology Pending screens.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any, Generic, TypeVar

from cura.core.cancellation import CancellationScope, FetchCancelledError
from cura.domains.shared.application.ports import RefreshCallback
from cura.domains.shared.domain.errors import DetailLoadError
from cura.domains.shared.domain.value_objects import ActiveView

logger = logging.getLogger(__name__)

PatientT = TypeVar("PatientT")
ServiceT = TypeVar("ServiceT")
DetailT = TypeVar("DetailT")

T = TypeVar("T")


class WorkflowNavigationController(Generic[PatientT, ServiceT, DetailT]):
    """
    Holds the selected navigation context of a screen.

    Entering `main` always clears the selected patient, the selected
    service, the loaded detail and every draft. Each transition cancels a
    detail load that is still running, so its result is never applied.

    Args:
        detail_loader: Coroutine function loading the detail of a service
        on_refresh: Refresh callback run after a completed action
        complete_view: View entered after `complete` (SERVICES or MAIN)
        name: Screen name used in logs and cancellation labels
    """

    def __init__(
        self,
        detail_loader: Callable[[ServiceT], Awaitable[DetailT]] | None = None,
        on_refresh: RefreshCallback | None = None,
        complete_view: ActiveView = ActiveView.SERVICES,
        name: str = "workflow",
    ):
        if complete_view is ActiveView.DETAIL:
            raise ValueError("complete_view must be SERVICES or MAIN")
        self._detail_loader = detail_loader
        self._on_refresh = on_refresh
        self.complete_view = complete_view
        self.name = name
        self._detail_scope = CancellationScope(f"{name}.detail")

        self.active_view = ActiveView.MAIN
        self.selected_patient: PatientT | None = None
        self.selected_service: ServiceT | None = None
        self.detail: DetailT | None = None
        self.drafts: dict[Any, Any] = {}
        self.is_detail_loading = False

    def bind_refresh(self, on_refresh: RefreshCallback | None) -> None:
        self._on_refresh = on_refresh

    # =========================================================================
    # Transitions
    # =========================================================================

    def select_patient(self, patient: PatientT) -> None:
        """main -> services. No fetch: services are part of the list aggregate."""
        self._detail_scope.cancel()
        self.selected_patient = patient
        self.selected_service = None
        self._clear_detail()
        self.active_view = ActiveView.SERVICES
        logger.debug(f"[{self.name}] -> services")

    async def select_service(self, service: ServiceT) -> DetailT | None:
        """
        services -> detail.

        The view flips to detail immediately with `is_detail_loading` set;
        content arrives when the loader finishes.

        Raises:
            DetailLoadError: Loader failed; the view is back on services
            FetchCancelledError: Another transition happened meanwhile
        """
        token = self._detail_scope.new_token()
        self.selected_service = service
        self._clear_detail()
        self.active_view = ActiveView.DETAIL
        logger.debug(f"[{self.name}] -> detail")

        if self._detail_loader is None:
            return None

        self.is_detail_loading = True
        try:
            detail = await token.guard(self._detail_loader(service))
        except FetchCancelledError:
            raise
        except Exception as e:
            if token.is_cancelled:
                raise FetchCancelledError(token.label) from e
            self._detail_scope.cancel()
            self.selected_service = None
            self._clear_detail()
            self.active_view = ActiveView.SERVICES
            logger.error(f"[{self.name}] Failed to load detail: {e}")
            raise DetailLoadError("Failed to load details for the selected service", service) from e

        self.detail = detail
        self.is_detail_loading = False
        return detail

    def back_to_services(self) -> None:
        """detail -> services. Unsaved drafts are discarded."""
        self._detail_scope.cancel()
        self.selected_service = None
        self._clear_detail()
        self.active_view = ActiveView.SERVICES if self.selected_patient is not None else ActiveView.MAIN
        logger.debug(f"[{self.name}] -> {self.active_view.value}")

    def back_to_main(self) -> None:
        """Any view -> main. Clears the whole selection."""
        self._detail_scope.cancel()
        self.selected_patient = None
        self.selected_service = None
        self._clear_detail()
        self.active_view = ActiveView.MAIN
        logger.debug(f"[{self.name}] -> main")

    async def complete(self, action: Callable[[], Awaitable[T]]) -> T:
        """
        Run the completing mutation, leave the detail view and refresh.

        On failure the exception propagates and the state is left as is.
        """
        result = await action()
        if self.complete_view is ActiveView.MAIN:
            self.back_to_main()
        else:
            self.back_to_services()
        if self._on_refresh is not None:
            await self._on_refresh()
        return result

    # =========================================================================
    # Drafts
    # =========================================================================

    def set_draft(self, key: Any, value: Any) -> None:
        self.drafts[key] = value

    def get_draft(self, key: Any, default: Any = None) -> Any:
        return self.drafts.get(key, default)

    def _clear_detail(self) -> None:
        self.detail = None
        self.drafts = {}
        self.is_detail_loading = False
