"""
Debounced live search for authors.

Meant to back an incremental "type to search" widget:

- A term change (page 1) is not sent right away. It is scheduled after the
  debounce delay, and only the last term typed within the window is sent.
- A pagination request (page > 1) is sent immediately, unless its context
  equals the one seen last; widgets are known to ask for the same next page
  twice.

Responses are delivered through the ``on_results`` callback in arrival
order. Unless ``drop_stale_responses`` is enabled, a slow response for an
older request can arrive after, and overwrite, a newer one.

A failed search, including one whose results cannot be decoded, is passed to
``on_error``, or logged when no error callback is given. Errors raised by
``on_results`` itself are logged.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from typing import Any

from authoring_core.associations.authors import AuthorAssociations
from authoring_core.errors import TransportError
from authoring_core.models import Author, Pagination, SearchPage

logger = logging.getLogger(__name__)

Clock = Callable[[], float]
Scheduler = Callable[[float, Callable[[], None]], Any]
ResultsCallback = Callable[[SearchPage[Author]], None]
ErrorCallback = Callable[[Exception], None]


def _call_later(delay_s: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
    return asyncio.get_running_loop().call_later(delay_s, callback)


class LiveSearchCoordinator:
    def __init__(
        self,
        authors: AuthorAssociations,
        *,
        delay_ms: int | None = None,
        page_size: int | None = None,
        drop_stale_responses: bool | None = None,
        clock: Clock = time.monotonic,
        schedule: Scheduler = _call_later,
    ) -> None:
        """
        Args:
            authors: Author resource used to run the actual searches
            delay_ms: Debounce window (default: ``search_delay_ms`` setting)
            page_size: Results per page (default: ``search_page_size`` setting)
            drop_stale_responses: Ignore responses older than the last one delivered
            clock: Monotonic clock in seconds
            schedule: ``schedule(delay_s, callback)`` timer primitive
        """
        settings = authors.settings
        self.authors = authors
        self.delay_s = (delay_ms if delay_ms is not None else settings.search_delay_ms) / 1000
        self.page_size = page_size or settings.search_page_size
        self.drop_stale_responses = (
            drop_stale_responses if drop_stale_responses is not None else settings.drop_stale_search_responses
        )
        self._clock = clock
        self._schedule = schedule

        self.last_query_at: float | None = None
        self.last_context: Pagination | None = None
        self._term_changes = 0
        self._dispatched = 0
        self._delivered = 0
        self._pending: set[asyncio.Task[None]] = set()

    def query(
        self,
        term: str,
        page: int = 1,
        context: Pagination | None = None,
        *,
        on_results: ResultsCallback,
        on_error: ErrorCallback | None = None,
    ) -> asyncio.Task[None] | None:
        """
        Request one page of results for ``term``.

        Returns the dispatch task for pagination requests that are sent, and
        ``None`` for deferred term changes and dropped duplicates.
        """
        if page <= 1:
            self.last_query_at = self._clock()
            self._term_changes += 1
            ticket = self._term_changes
            self._schedule(self.delay_s, lambda: self._on_delay_elapsed(ticket, term, on_results, on_error))
            return None

        if context is not None and context == self.last_context:
            logger.debug("Dropping duplicate pagination request for %r (page %s)", term, page)
            return None
        self.last_context = context
        return self._dispatch(term, page, on_results, on_error)

    def _on_delay_elapsed(
        self,
        ticket: int,
        term: str,
        on_results: ResultsCallback,
        on_error: ErrorCallback | None,
    ) -> None:
        if ticket != self._term_changes:
            elapsed = self._clock() - (self.last_query_at or 0.0)
            logger.debug("Dropping superseded search for %r (term changed %.3fs ago)", term, elapsed)
            return
        self._dispatch(term, 1, on_results, on_error)

    def _dispatch(
        self,
        term: str,
        page: int,
        on_results: ResultsCallback,
        on_error: ErrorCallback | None,
    ) -> asyncio.Task[None]:
        self._dispatched += 1
        task = asyncio.get_running_loop().create_task(
            self._run(self._dispatched, term, page, on_results, on_error)
        )
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _run(
        self,
        sequence: int,
        term: str,
        page: int,
        on_results: ResultsCallback,
        on_error: ErrorCallback | None,
    ) -> None:
        logger.debug("Searching authors for %r (page %s, request #%s)", term, page, sequence)
        try:
            result = await self.authors.search(term, page=page, per_page=self.page_size)
        except Exception as exc:
            if on_error is not None:
                on_error(exc)
            else:
                detail = exc.to_log_message() if isinstance(exc, TransportError) else repr(exc)
                logger.warning("Author search for %r failed: %s", term, detail)
            return

        if self.drop_stale_responses:
            if sequence < self._delivered:
                logger.debug("Discarding out-of-order response #%s (already delivered #%s)", sequence, self._delivered)
                return
            self._delivered = sequence
        try:
            on_results(result)
        except Exception:
            logger.exception("Results callback for author search %r failed", term)

    @property
    def pending(self) -> int:
        return len(self._pending)

    async def drain(self) -> None:
        """Wait for every dispatched search to finish."""
        while self._pending:
            await asyncio.gather(*self._pending)
