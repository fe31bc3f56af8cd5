"""
Appointment Record Aggregator

Base retrieval flow shared by the prescription, lab and radiology screens:
normalize the identifier, issue the fetch, translate failures into the
retrieval error family and build a typed, grouped aggregate.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from pydantic import ValidationError

from cura.clients.hospital_api_client import HospitalAPIError
from cura.core.cancellation import CancellationToken
from cura.domains.shared.domain.entities import AppointmentAggregate
from cura.domains.shared.domain.errors import RetrievalNotFoundError, RetrievalTransientError
from cura.domains.shared.domain.value_objects import AppointmentId

logger = logging.getLogger(__name__)

ItemT = TypeVar("ItemT")


class AppointmentRecordAggregator(ABC, Generic[ItemT]):
    """
    Template for appointment-scoped retrieval.

    Subclasses implement `_fetch` (network, exactly one logical call) and
    `_build` (parse and group). The attempted identifier is always kept in
    `last_attempted_id`, also when the retrieval fails.
    """

    not_found_message = "No records found for this appointment"
    transient_message = "Could not load records. Please try again"

    def __init__(self) -> None:
        self.last_attempted_id: str | None = None

    async def retrieve(
        self,
        appointment_id: str | AppointmentId,
        token: CancellationToken | None = None,
    ) -> AppointmentAggregate[ItemT]:
        """
        Fetch and group the records of one appointment.

        Args:
            appointment_id: Raw or parsed identifier
            token: Optional cancellation token; a stale result is discarded

        Returns:
            AppointmentAggregate with at least one item

        Raises:
            InvalidIdentifierError: Identifier rejected before any network call
            RetrievalNotFoundError: Empty result or HTTP 404
            RetrievalTransientError: Network, server or schema failure
            FetchCancelledError: Token cancelled while the fetch was running
        """
        self.last_attempted_id = str(appointment_id).strip()
        appointment = AppointmentId.parse(appointment_id)
        self.last_attempted_id = appointment.value

        try:
            fetch = self._fetch(appointment.value)
            payload = await (token.guard(fetch) if token is not None else fetch)
        except HospitalAPIError as e:
            if e.is_not_found:
                logger.info(f"No records for appointment {appointment.value}")
                raise RetrievalNotFoundError(self.not_found_message, appointment.value) from e
            logger.error(f"Retrieval failed for appointment {appointment.value}: {e}")
            raise RetrievalTransientError(self.transient_message, appointment.value) from e

        if not payload:
            logger.info(f"Empty result for appointment {appointment.value}")
            raise RetrievalNotFoundError(self.not_found_message, appointment.value)

        try:
            aggregate = self._build(appointment.value, payload)
        except (ValidationError, TypeError, KeyError) as e:
            logger.error(f"Malformed payload for appointment {appointment.value}: {e}")
            raise RetrievalTransientError(self.transient_message, appointment.value) from e

        if aggregate.is_empty:
            raise RetrievalNotFoundError(self.not_found_message, appointment.value)

        logger.debug(
            f"Retrieved {aggregate.service_count} item(s) in "
            f"{len(aggregate.groups)} group(s) for {appointment.value}"
        )
        return aggregate

    @abstractmethod
    async def _fetch(self, appointment_id: str) -> Any:
        """Issue the backend call(s); return the raw payload."""

    @abstractmethod
    def _build(self, appointment_id: str, payload: Any) -> AppointmentAggregate[ItemT]:
        """Parse the raw payload into a grouped aggregate."""
