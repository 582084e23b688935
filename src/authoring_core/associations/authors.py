"""Article authors: listing, attaching, detaching, ordering and roles."""

from __future__ import annotations

import logging
from collections.abc import Coroutine, Sequence
from typing import Any

from authoring_core import routing
from authoring_core.associations.base import AssociationResource
from authoring_core.deferred import DeferredCollection
from authoring_core.errors import ProtocolMisuseError
from authoring_core.models import Author, AuthorRole, SearchPage
from authoring_core.relations import RelationDescriptor, RelationKind, encode, encode_order

logger = logging.getLogger(__name__)


class AuthorAssociations(AssociationResource):
    def fetch_all_for_article(self, number: int, language: str) -> DeferredCollection[Author]:
        """All authors of an article, with their roles and sort order."""

        async def populate(authors: DeferredCollection[Author]) -> None:
            page = await self.api.get_items(
                routing.article_authors(number=number, language=language),
                params={"items_per_page": self.settings.list_page_size},
            )
            for item in page.items:
                authors.append(Author.from_api(item, default_avatar_url=self.settings.default_avatar_url))

        return self._deferred(populate)

    def fetch_role_catalog(self) -> DeferredCollection[AuthorRole]:
        """
        All defined author roles.

        Not memoized here; callers fetch it once per session and keep it.
        """

        async def populate(roles: DeferredCollection[AuthorRole]) -> None:
            page = await self.api.get_items(
                routing.author_types(),
                params={"items_per_page": self.settings.list_page_size},
            )
            roles.extend(AuthorRole.from_api(item) for item in page.items)

        return self._deferred(populate)

    async def search(self, term: str, *, page: int = 1, per_page: int | None = None) -> SearchPage[Author]:
        """One page of authors matching ``term``."""
        result = await self.api.get_items(
            routing.search_authors(),
            params={
                "items_per_page": per_page or self.settings.search_page_size,
                "page": page,
                "query": term,
            },
        )
        authors = [
            Author.from_api({"author": item}, default_avatar_url=self.settings.default_avatar_url)
            for item in result.items
        ]
        has_more = result.pagination is not None and not result.pagination.is_last_page
        return SearchPage(results=authors, has_more=has_more, context=result.pagination)

    def _descriptors(self, author_id: int, role_id: int) -> list[RelationDescriptor]:
        return [
            RelationDescriptor(self.api.relation_uri(routing.author(author_id)), RelationKind.AUTHOR),
            RelationDescriptor(self.api.relation_uri(routing.author_type(role_id)), RelationKind.AUTHOR_TYPE),
        ]

    def attach(self, number: int, language: str, author: Author, role_id: int) -> Coroutine[Any, Any, Author]:
        """
        Set ``author`` as an author of the article, with the given role.

        Resolves with the same author object, its ``article_role`` now
        carrying ``role_id``.
        """
        request = self._relation_request(
            "LINK", number=number, language=language, descriptors=self._descriptors(author.id, role_id)
        )

        async def _attach() -> Author:
            await request
            if author.article_role is None or author.article_role.id != role_id:
                author.article_role = AuthorRole(id=role_id)
            logger.info("Attached author %s (role %s) to article %s/%s", author.id, role_id, number, language)
            return author

        return _attach()

    def detach(
        self,
        number: int,
        language: str,
        author: Author,
        role_id: int | None = None,
    ) -> Coroutine[Any, Any, None]:
        """Remove ``author`` from the article for the given role (default: its current one)."""
        role_id = role_id if role_id is not None else author.role_id
        if role_id is None:
            raise ProtocolMisuseError(f"author {author.id} has no role to detach")
        request = self._relation_request(
            "UNLINK", number=number, language=language, descriptors=self._descriptors(author.id, role_id)
        )

        async def _detach() -> None:
            await request
            logger.info("Detached author %s (role %s) from article %s/%s", author.id, role_id, number, language)

        return _detach()

    def reorder(self, number: int, language: str, authors: Sequence[Author]) -> Coroutine[Any, Any, None]:
        """
        Store a new author order for the article.

        An empty list is sent as-is (an empty order), unlike attach/detach.
        """
        order = encode_order(authors)

        async def _reorder() -> None:
            await self.api.send(
                "POST",
                routing.article_authors_order(number=number, language=language),
                json={"order": order},
            )
            logger.info("Reordered authors of article %s/%s: %s", number, language, order)

        return _reorder()

    def update_role(
        self,
        author: Author,
        *,
        number: int,
        language: str,
        old_role_id: int,
        new_role_id: int,
    ) -> Coroutine[Any, Any, Author]:
        """
        Switch ``author``'s role on the article from ``old_role_id`` to ``new_role_id``.

        Resolves with the same author object, its ``article_role`` now
        carrying ``new_role_id``.
        """
        link_header = encode(
            [
                RelationDescriptor(self.api.relation_uri(routing.author_type(old_role_id)), RelationKind.OLD_AUTHOR_TYPE),
                RelationDescriptor(self.api.relation_uri(routing.author_type(new_role_id)), RelationKind.NEW_AUTHOR_TYPE),
            ]
        )
        request = self.api.send(
            "POST",
            routing.article_author(number=number, language=language, author_id=author.id),
            headers={"link": link_header},
            json={},
        )

        async def _update_role() -> Author:
            await request
            if author.article_role is None or author.article_role.id != new_role_id:
                author.article_role = AuthorRole(id=new_role_id)
            logger.info(
                "Changed role of author %s on article %s/%s: %s -> %s",
                author.id,
                number,
                language,
                old_role_id,
                new_role_id,
            )
            return author

        return _update_role()
