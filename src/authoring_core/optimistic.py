"""
Optimistic editing of a single server-side value.

Two copies of the value are kept: ``server_value`` (last confirmed by the
server) and ``proposed_value`` (what the UI shows). ``propose`` writes the
proposed value; on success it becomes the server value, on failure the
proposed value snaps back to the server value and the error propagates.

Concurrent proposals are not coalesced: each one commits or rolls back when
its own response arrives, so the last response to arrive wins.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_UNSET: Any = object()


class OptimisticSetting(Generic[T]):
    def __init__(self, initial: T, commit: Callable[[T], Awaitable[Any]], *, name: str = "setting") -> None:
        self.name = name
        self.server_value: T = initial
        self.proposed_value: T = initial
        self._commit = commit
        self._in_flight = 0

    @property
    def dirty(self) -> bool:
        return self.proposed_value != self.server_value

    @property
    def in_flight(self) -> bool:
        return self._in_flight > 0

    def reset(self, value: T) -> None:
        """Adopt ``value`` as confirmed server state (initial load)."""
        self.server_value = value
        self.proposed_value = value

    def select(self, value: T) -> None:
        """Change the UI-visible value without sending it."""
        self.proposed_value = value

    async def propose(self, value: T = _UNSET) -> T:
        """
        Send ``value`` (default: the currently selected one) to the server.

        Returns the committed value. On failure ``proposed_value`` is rolled
        back to ``server_value`` and the error is re-raised.
        """
        if value is _UNSET:
            value = self.proposed_value
        self.proposed_value = value
        self._in_flight += 1
        try:
            await self._commit(value)
        except Exception:
            self.proposed_value = self.server_value
            logger.warning("Change of %s to %r failed; rolled back to %r", self.name, value, self.server_value)
            raise
        else:
            self.server_value = value
            logger.info("Changed %s to %r", self.name, value)
            return value
        finally:
            self._in_flight -= 1
