"""
Fetch Cancellation

Token/scope pair tying in-flight fetches to the navigation state that
started them. A response that arrives after its token was cancelled is
discarded instead of being applied to a screen the user already left.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FetchCancelledError(Exception):
    """Raised when a fetch result belongs to a cancelled token."""

    def __init__(self, label: str = "fetch"):
        self.label = label
        super().__init__(f"{label} was cancelled")


class CancellationToken:
    """Single-use cancellation flag."""

    __slots__ = ("_cancelled", "label")

    def __init__(self, label: str = "fetch"):
        self._cancelled = False
        self.label = label

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True

    def raise_if_cancelled(self) -> None:
        if self._cancelled:
            raise FetchCancelledError(self.label)

    async def guard(self, awaitable: Awaitable[T]) -> T:
        """
        Await `awaitable` and return its result unless the token was
        cancelled meanwhile.

        Raises:
            FetchCancelledError: If cancelled before or during the await
        """
        if self._cancelled:
            if inspect.iscoroutine(awaitable):
                awaitable.close()
            raise FetchCancelledError(self.label)
        result = await awaitable
        if self._cancelled:
            logger.debug(f"Discarding stale result of {self.label}")
            raise FetchCancelledError(self.label)
        return result


class CancellationScope:
    """
    Issues tokens for one logical slot (a screen's retrieval, a detail pane).

    Issuing a new token cancels the previous one, so only the most recent
    request for the slot can land.
    """

    def __init__(self, name: str):
        self.name = name
        self._current: CancellationToken | None = None

    @property
    def current(self) -> CancellationToken | None:
        return self._current

    def new_token(self) -> CancellationToken:
        self.cancel()
        self._current = CancellationToken(self.name)
        return self._current

    def cancel(self) -> None:
        if self._current is not None and not self._current.is_cancelled:
            self._current.cancel()
        self._current = None
