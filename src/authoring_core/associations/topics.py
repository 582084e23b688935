from __future__ import annotations

import logging
from collections.abc import Coroutine, Sequence
from typing import Any

from authoring_core import routing
from authoring_core.associations.base import AssociationResource
from authoring_core.deferred import DeferredCollection
from authoring_core.models import Topic
from authoring_core.relations import RelationDescriptor, RelationKind

logger = logging.getLogger(__name__)


class TopicAssociations(AssociationResource):
    def fetch_all_for_article(self, number: int, language: str) -> DeferredCollection[Topic]:
        """Topics assigned to an article."""

        async def populate(topics: DeferredCollection[Topic]) -> None:
            # The API exposes article topics only as part of the article itself.
            article = await self.api.get_json(routing.article(number=number, language=language))
            topics.extend(Topic.from_api(item) for item in article.get("topics") or [])

        return self._deferred(populate)

    def _descriptors(self, topics: Sequence[Topic]) -> list[RelationDescriptor]:
        return [RelationDescriptor(self.api.relation_uri(routing.topic(t.id)), RelationKind.TOPIC) for t in topics]

    def attach(self, number: int, language: str, topics: Sequence[Topic]) -> Coroutine[Any, Any, list[Topic]]:
        """
        Assign all ``topics`` to the article in one request.

        Raises:
            EmptyAssociationError: immediately, if ``topics`` is empty.
        """
        request = self._relation_request(
            "LINK", number=number, language=language, descriptors=self._descriptors(topics)
        )

        async def _attach() -> list[Topic]:
            await request
            logger.info("Attached topics %s to article %s/%s", [t.id for t in topics], number, language)
            return list(topics)

        return _attach()

    def detach(self, number: int, language: str, topics: Sequence[Topic]) -> Coroutine[Any, Any, None]:
        request = self._relation_request(
            "UNLINK", number=number, language=language, descriptors=self._descriptors(topics)
        )

        async def _detach() -> None:
            await request
            logger.info("Detached topics %s from article %s/%s", [t.id for t in topics], number, language)

        return _detach()
