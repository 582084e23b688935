"""Article associations: authors, topics and images."""

from __future__ import annotations

from authoring_core.associations.authors import AuthorAssociations
from authoring_core.associations.images import ImageAssociations, ImageQueryResult
from authoring_core.associations.topics import TopicAssociations
from authoring_core.http_client import ContentApiClient
from authoring_core.settings import Settings, get_settings

__all__ = [
    "AssociationClient",
    "AuthorAssociations",
    "ImageAssociations",
    "ImageQueryResult",
    "TopicAssociations",
]


class AssociationClient:
    """One entry point per association kind, sharing a single API client."""

    def __init__(self, api: ContentApiClient, settings: Settings | None = None) -> None:
        settings = settings or get_settings()
        self.api = api
        self.authors = AuthorAssociations(api, settings)
        self.topics = TopicAssociations(api, settings)
        self.images = ImageAssociations(api, settings)
