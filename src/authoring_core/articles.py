"""Article resource access: raw article data, commenting flags, editable fields."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import Enum
from typing import Any

import httpx

from authoring_core import routing
from authoring_core.http_client import ContentApiClient

logger = logging.getLogger(__name__)

# Field types the body editor knows how to edit.
EDITABLE_FIELD_TYPES = ("text", "long_text", "body")


class CommentingSetting(str, Enum):
    """Who may comment on an article."""

    ENABLED = "enabled"
    DISABLED = "disabled"
    LOCKED = "locked"

    @property
    def label(self) -> str:
        return self.value.capitalize()


def _flag(value: Any) -> int:
    if value is None or value == "":
        return 0
    return int(value)


def commenting_from_article(data: dict[str, Any]) -> CommentingSetting:
    """Derive the commenting setting from an article's ``comments_*`` flags."""
    if _flag(data.get("comments_locked")) > 0:
        return CommentingSetting.LOCKED
    if _flag(data.get("comments_enabled")) > 0:
        return CommentingSetting.ENABLED
    return CommentingSetting.DISABLED


def commenting_flags(setting: CommentingSetting) -> dict[str, int]:
    return {
        "comments_enabled": int(setting is not CommentingSetting.DISABLED),
        "comments_locked": int(setting is CommentingSetting.LOCKED),
    }


def is_editable(field: dict[str, Any]) -> bool:
    """Whether an article type field is a content field the editor can handle."""
    if _flag(field.get("isContentField")) == 0:
        return False
    return field.get("type") in EDITABLE_FIELD_TYPES


def editable_fields(fields: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    return [field for field in fields if is_editable(field)]


class ArticleService:
    def __init__(self, api: ContentApiClient) -> None:
        self.api = api

    async def fetch(self, number: int, language: str) -> dict[str, Any]:
        return await self.api.get_json(routing.article(number=number, language=language))

    async def fetch_type(self, type_name: str) -> dict[str, Any]:
        return await self.api.get_json(routing.article_type(type_name))

    async def change_commenting(self, number: int, language: str, setting: CommentingSetting) -> httpx.Response:
        logger.debug("Setting commenting of article %s/%s to %s", number, language, setting.value)
        return await self.api.send(
            "PATCH",
            routing.article(number=number, language=language),
            json=commenting_flags(setting),
        )
