from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Coroutine, Sequence
from typing import Any, TypeVar

import httpx

from authoring_core import routing
from authoring_core.deferred import DeferredCollection
from authoring_core.errors import FetchCancelledError
from authoring_core.http_client import ContentApiClient
from authoring_core.relations import RelationDescriptor, encode
from authoring_core.settings import Settings, get_settings

logger = logging.getLogger(__name__)

T = TypeVar("T")
C = TypeVar("C", bound=DeferredCollection)


class AssociationResource:
    """Shared plumbing for one association kind (authors, topics, images)."""

    def __init__(self, api: ContentApiClient, settings: Settings | None = None) -> None:
        self.api = api
        self.settings = settings or get_settings()

    def _deferred(
        self,
        populate: Callable[[C], Awaitable[None]],
        collection_cls: type[C] = DeferredCollection,
    ) -> C:
        """
        Return an empty collection now and fill it from ``populate`` later.

        ``populate`` appends to the collection it is given; any exception it
        raises rejects the collection with that exception. Cancelling the
        task rejects it with ``FetchCancelledError``.
        """
        collection, resolve, reject = collection_cls.create()

        async def _run() -> None:
            try:
                await populate(collection)
            except Exception as exc:
                logger.debug("Rejecting %s: %r", type(collection).__name__, exc)
                reject(exc)
            else:
                resolve()

        def _on_done(task: asyncio.Task[None]) -> None:
            # Covers cancellation both before and during ``populate``.
            if task.cancelled() and not collection.done():
                logger.debug("Rejecting %s: fetch cancelled", type(collection).__name__)
                reject(FetchCancelledError("fetch cancelled before completion"))

        task = asyncio.get_running_loop().create_task(_run())
        task.add_done_callback(_on_done)
        collection.attach_task(task)
        return collection

    def _relation_request(
        self,
        method: str,
        *,
        number: int,
        language: str,
        descriptors: Sequence[RelationDescriptor],
    ) -> Coroutine[Any, Any, httpx.Response]:
        # Encoding happens here, at call time, so misuse fails before any I/O.
        link_header = encode(descriptors)
        return self.api.send(
            method,
            routing.link_article(number=number, language=language),
            headers={"link": link_header},
        )
