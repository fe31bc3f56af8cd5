"""
Appointment Retrieval Workflow

Screen state for lookup-by-appointment screens (Prescriptions, Lab
Prescriptions, Radiology Prescriptions): manual or scanned identifier,
inline retrieval errors, and refresh of the retrieved aggregate after a
mutation.
"""

from __future__ import annotations

import logging
from typing import Generic, TypeVar

from cura.core.cancellation import CancellationScope, FetchCancelledError
from cura.domains.shared.application.aggregator import AppointmentRecordAggregator
from cura.domains.shared.application.mutation_coordinator import MutationCoordinator
from cura.domains.shared.application.ports import IMutationAPIPort
from cura.domains.shared.domain.entities import AppointmentAggregate
from cura.domains.shared.domain.errors import RetrievalError

logger = logging.getLogger(__name__)

ItemT = TypeVar("ItemT")


class AppointmentRetrievalWorkflow(Generic[ItemT]):
    """
    Base class for screens that retrieve one appointment at a time.

    A retrieval replaces the previous one; a response for a superseded
    retrieval is discarded. Failures never raise: the message lands in
    `retrieval_error` and `can_retry` tells whether retrying makes sense.
    """

    screen_name = "retrieval"

    def __init__(self, aggregator: AppointmentRecordAggregator[ItemT], api: IMutationAPIPort):
        self.aggregator = aggregator
        self.coordinator = MutationCoordinator(api, refresh=self.refresh_retrieved, name=self.screen_name)
        self._retrieval_scope = CancellationScope(f"{self.screen_name}.retrieve")

        self.retrieved: AppointmentAggregate[ItemT] | None = None
        self.retrieved_appointment_id: str | None = None
        self.retrieval_error: str | None = None
        self.can_retry = False
        self.is_loading = False
        self.search_input = ""

    async def retrieve(self, appointment_id: str) -> AppointmentAggregate[ItemT] | None:
        """
        Retrieve an appointment and make it the current one.

        Returns:
            The aggregate, or None when the retrieval failed or was superseded
        """
        token = self._retrieval_scope.new_token()
        self.retrieval_error = None
        self.can_retry = False
        self.retrieved_appointment_id = appointment_id.strip() if appointment_id else appointment_id
        self.is_loading = True
        try:
            aggregate = await self.aggregator.retrieve(appointment_id, token=token)
        except FetchCancelledError:
            logger.debug(f"[{self.screen_name}] Discarded superseded retrieval of {appointment_id}")
            return None
        except RetrievalError as e:
            if token.is_cancelled:
                return None
            self.retrieved = None
            self.retrieval_error = e.message
            self.can_retry = e.retryable
            logger.info(f"[{self.screen_name}] Retrieval of {appointment_id} failed: {e.message}")
            return None
        finally:
            if not token.is_cancelled:
                self.is_loading = False

        self.retrieved = aggregate
        self.retrieved_appointment_id = aggregate.appointment_id
        return aggregate

    async def on_scan_success(self, appointment_id: str) -> AppointmentAggregate[ItemT] | None:
        """Scanner produced an identifier: fill the input and retrieve."""
        self.search_input = appointment_id
        return await self.retrieve(appointment_id)

    async def manual_search(self) -> AppointmentAggregate[ItemT] | None:
        """Retrieve the identifier typed in `search_input`, then clear the input."""
        value = self.search_input.strip()
        if not value:
            return None
        result = await self.retrieve(value)
        self.search_input = ""
        return result

    async def refresh_retrieved(self) -> AppointmentAggregate[ItemT] | None:
        """Re-fetch the current appointment (after a mutation)."""
        if not self.retrieved_appointment_id:
            return None
        return await self.retrieve(self.retrieved_appointment_id)

    async def retry(self) -> AppointmentAggregate[ItemT] | None:
        if self.aggregator.last_attempted_id is None:
            return None
        return await self.retrieve(self.aggregator.last_attempted_id)

    def clear(self) -> None:
        self._retrieval_scope.cancel()
        self.retrieved = None
        self.retrieved_appointment_id = None
        self.retrieval_error = None
        self.can_retry = False
        self.is_loading = False
