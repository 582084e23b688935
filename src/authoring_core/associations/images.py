from __future__ import annotations

import logging
from collections.abc import Coroutine, Sequence
from typing import Any

from authoring_core import routing
from authoring_core.associations.base import AssociationResource
from authoring_core.deferred import DeferredCollection
from authoring_core.errors import TransportError
from authoring_core.models import Image, Pagination, UploadedImage
from authoring_core.relations import RelationDescriptor, RelationKind

logger = logging.getLogger(__name__)


class ImageQueryResult(DeferredCollection[Image]):
    """A page of image search results; ``pagination`` is set once resolved."""

    def __init__(self) -> None:
        super().__init__()
        self.pagination: Pagination | None = None


class ImageAssociations(AssociationResource):
    def fetch_all_for_article(self, number: int, language: str) -> DeferredCollection[Image]:
        async def populate(images: DeferredCollection[Image]) -> None:
            page = await self.api.get_items(
                routing.article_images(number=number, language=language),
                params={"expand": True, "items_per_page": self.settings.list_page_size},
            )
            images.extend(Image.from_api(item) for item in page.items)

        return self._deferred(populate)

    async def fetch_by_id(self, image_id: int) -> Image:
        return Image.from_api(await self.api.get_json(routing.image(image_id)))

    def query(self, page: int, per_page: int | None = None, term: str | None = None) -> ImageQueryResult:
        """Search the image library; an empty (204) answer yields no items and no pagination."""
        params: dict[str, Any] = {
            "expand": True,
            "items_per_page": per_page or self.settings.image_page_size,
            "page": page,
        }
        if term:
            params["query"] = term

        async def populate(images: ImageQueryResult) -> None:
            result = await self.api.get_items(routing.search_images(), params=params)
            images.extend(Image.from_api(item) for item in result.items)
            images.pagination = result.pagination

        return self._deferred(populate, ImageQueryResult)

    async def upload(
        self,
        content: bytes,
        *,
        filename: str = "image",
        content_type: str = "application/octet-stream",
        photographer: str | None = None,
        description: str | None = None,
    ) -> UploadedImage:
        """
        Add a new image to the library.

        The server answers with an empty body and the new image's address in
        ``X-Location``; an answer without it is treated as a failed upload.
        """
        response = await self.api.send(
            "POST",
            routing.images(),
            data={"image[photographer]": photographer or "", "image[description]": description or ""},
            files={"image[image]": (filename, content, content_type)},
        )
        location = response.headers.get("X-Location")
        if not location:
            error = TransportError(
                "no x-location header in response",
                status_code=response.status_code,
                method="POST",
                url=str(response.request.url),
            )
            logger.warning("Upload failed: %s", error.to_log_message())
            raise error
        uploaded = UploadedImage.from_location(location)
        logger.info("Uploaded image %s (%s)", uploaded.id, filename)
        return uploaded

    async def update_description(self, image: Image, description: str) -> Image:
        """Store a new description; ``image`` keeps its old one if the request fails."""
        await self.api.send(
            "POST",
            routing.image(image.id),
            params={"_method": "PATCH"},
            data={"image[description]": description},
        )
        image.description = description
        logger.info("Updated description of image %s", image.id)
        return image

    def _descriptors(self, images: Sequence[Image]) -> list[RelationDescriptor]:
        return [RelationDescriptor(self.api.relation_uri(routing.image(i.id)), RelationKind.IMAGE) for i in images]

    def attach(self, number: int, language: str, images: Sequence[Image]) -> Coroutine[Any, Any, list[Image]]:
        """Attach all ``images`` to the article in one LINK request."""
        request = self._relation_request(
            "LINK", number=number, language=language, descriptors=self._descriptors(images)
        )

        async def _attach() -> list[Image]:
            await request
            logger.info("Attached images %s to article %s/%s", [i.id for i in images], number, language)
            return list(images)

        return _attach()

    def detach(self, number: int, language: str, images: Sequence[Image]) -> Coroutine[Any, Any, None]:
        request = self._relation_request(
            "UNLINK", number=number, language=language, descriptors=self._descriptors(images)
        )

        async def _detach() -> None:
            await request
            logger.info("Detached images %s from article %s/%s", [i.id for i in images], number, language)

        return _detach()
