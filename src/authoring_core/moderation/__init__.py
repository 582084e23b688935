"""Comment moderation state: commenting setting, status filter and sorting."""

from authoring_core.moderation.commenting import COMMENTING_OPTIONS, CommentingChannel, CommentingOption
from authoring_core.moderation.sorting import DEFAULT_SORTING, CommentSorting
from authoring_core.moderation.status_filter import ALL, DEFAULT_STATUSES, StatusFilter

__all__ = [
    "ALL",
    "COMMENTING_OPTIONS",
    "CommentSorting",
    "CommentingChannel",
    "CommentingOption",
    "DEFAULT_SORTING",
    "DEFAULT_STATUSES",
    "StatusFilter",
]
