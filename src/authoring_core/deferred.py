"""
Deferred collections: lists handed out before their contents exist.

A fetch operation returns an empty ``DeferredCollection`` immediately and
fills that very object once the server answers. Callers keep the reference
and either await it or register observers:

    authors = associations.authors.fetch_all_for_article(64, "de")
    authors.add_observer(on_resolved=render, on_rejected=show_error)
    ...
    await authors  # returns ``authors`` itself, or raises the rejection

The completion signal fires at most once. Observers registered after
completion are still called, with the memoized outcome.
"""

from __future__ import annotations

import asyncio
from typing import Callable, Generic, TypeVar

from authoring_core.errors import CollectionAlreadySettledError

T = TypeVar("T")

ResolvedCallback = Callable[["DeferredCollection[T]"], None]
RejectedCallback = Callable[[BaseException], None]


class DeferredCollection(list, Generic[T]):
    """
    A ``list`` plus a single-fire completion signal.

    Must be created while an event loop is running. The owning fetch appends
    items and then calls ``resolve()``, or calls ``reject(reason)`` and
    leaves the list as it is (normally empty).
    """

    def __init__(self) -> None:
        super().__init__()
        self._completion: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        self._task: asyncio.Task[None] | None = None

    @classmethod
    def create(cls) -> tuple[DeferredCollection[T], Callable[[], None], Callable[[BaseException], None]]:
        collection: DeferredCollection[T] = cls()
        return collection, collection.resolve, collection.reject

    @property
    def completion(self) -> asyncio.Future[None]:
        return self._completion

    def done(self) -> bool:
        return self._completion.done()

    def failed(self) -> bool:
        future = self._completion
        return future.done() and not future.cancelled() and future.exception() is not None

    def resolve(self) -> None:
        """Mark the contents final."""
        self._ensure_pending()
        self._completion.set_result(None)

    def reject(self, reason: BaseException) -> None:
        """Mark the fetch failed; ``reason`` is handed to every observer."""
        self._ensure_pending()
        self._completion.set_exception(reason)
        # The rejection is delivered through observers/await; mark it retrieved
        # so asyncio does not report it as unhandled.
        self._completion.exception()

    def add_observer(
        self,
        on_resolved: ResolvedCallback | None = None,
        on_rejected: RejectedCallback | None = None,
    ) -> None:
        """Call exactly one of the callbacks once the outcome is known."""

        def _notify(future: asyncio.Future[None]) -> None:
            if future.cancelled():
                return
            reason = future.exception()
            if reason is None:
                if on_resolved is not None:
                    on_resolved(self)
            elif on_rejected is not None:
                on_rejected(reason)

        self._completion.add_done_callback(_notify)

    def attach_task(self, task: asyncio.Task[None]) -> None:
        # Keeps the populating task alive for as long as the collection is.
        self._task = task

    def _ensure_pending(self) -> None:
        if self._completion.done():
            raise CollectionAlreadySettledError("deferred collection already settled")

    def __await__(self):
        yield from self._completion.__await__()
        return self

    def __repr__(self) -> str:
        state = "pending"
        if self.failed():
            state = "rejected"
        elif self._completion.done():
            state = "resolved"
        return f"DeferredCollection({list.__repr__(self)}, {state})"
