"""
Authoring client core.

Association management (authors, topics, images), live author search and
optimistic comment-setting edits against the Newscoop content API.
"""

__version__ = "0.1.0"

from authoring_core.articles import ArticleService, CommentingSetting
from authoring_core.associations import AssociationClient
from authoring_core.deferred import DeferredCollection
from authoring_core.errors import (
    AuthoringError,
    CollectionAlreadySettledError,
    EmptyAssociationError,
    FetchCancelledError,
    ProtocolMisuseError,
    TransportError,
    UnknownStatusError,
)
from authoring_core.http_client import ContentApiClient
from authoring_core.models import Author, AuthorRole, Image, Pagination, SearchPage, Topic, UploadedImage
from authoring_core.moderation import CommentingChannel, CommentSorting, StatusFilter
from authoring_core.optimistic import OptimisticSetting
from authoring_core.relations import RelationDescriptor, RelationKind, encode, encode_order
from authoring_core.search import LiveSearchCoordinator
from authoring_core.settings import Settings, get_settings

__all__ = [
    "ArticleService",
    "AssociationClient",
    "Author",
    "AuthorRole",
    "AuthoringError",
    "CollectionAlreadySettledError",
    "CommentSorting",
    "CommentingChannel",
    "CommentingSetting",
    "ContentApiClient",
    "DeferredCollection",
    "EmptyAssociationError",
    "FetchCancelledError",
    "Image",
    "LiveSearchCoordinator",
    "OptimisticSetting",
    "Pagination",
    "ProtocolMisuseError",
    "RelationDescriptor",
    "RelationKind",
    "SearchPage",
    "Settings",
    "StatusFilter",
    "Topic",
    "TransportError",
    "UnknownStatusError",
    "UploadedImage",
    "encode",
    "encode_order",
    "get_settings",
]
