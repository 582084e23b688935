"""
Content API data models.

Wire objects use camelCase keys; models accept them through aliases and
expose snake_case attributes.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar
from urllib.parse import unquote

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class AuthorRole(BaseModel):
    """A role an author can have on an article (writer, photographer, ...)."""

    id: int
    name: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> AuthorRole:
        # API calls it "type"; "name" is the more informative attribute name.
        return cls(id=data["id"], name=data.get("type", data.get("name")))


class Author(BaseModel):
    """An author, optionally as attached to a specific article."""

    id: int
    first_name: str | None = None
    last_name: str | None = None
    text: str = ""
    article_role: AuthorRole | None = None
    avatar_url: str | None = None
    sort_order: int | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any], *, default_avatar_url: str | None = None) -> Author:
        """
        Build from an article-author item: ``{"author": {...}, "type": {...}, "order": n}``.

        Search results carry only the author object; wrap them as ``{"author": item}``.
        """
        raw = data["author"]
        first_name = raw.get("firstName")
        last_name = raw.get("lastName")
        role = data.get("type")
        image = raw.get("image")
        return cls(
            id=raw["id"],
            first_name=first_name,
            last_name=last_name,
            text=f"{first_name or ''} {last_name or ''}".strip(),
            article_role=AuthorRole.from_api(role) if role else None,
            avatar_url=unquote(image) if image else default_avatar_url,
            sort_order=data.get("order"),
        )

    @property
    def related_id(self) -> int:
        return self.id

    @property
    def role_id(self) -> int | None:
        return self.article_role.id if self.article_role is not None else None


class Topic(BaseModel):
    id: int
    title: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Topic:
        return cls(id=data["id"], title=data.get("title"))

    @property
    def related_id(self) -> int:
        return self.id


class Image(BaseModel):
    """Image metadata; unknown keys in API data are ignored."""

    model_config = ConfigDict(populate_by_name=True)

    id: int | None = None
    article_image_id: int | None = Field(default=None, alias="articleImageId")
    basename: str | None = None
    thumbnail_path: str | None = Field(default=None, alias="thumbnailPath")
    description: str | None = None
    width: int | None = None
    height: int | None = None
    photographer: str | None = None
    photographer_url: str | None = Field(default=None, alias="photographerUrl")

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Image:
        return cls.model_validate(data)

    @property
    def related_id(self) -> int | None:
        return self.id


class Pagination(BaseModel):
    """
    Server pagination metadata.

    Also serves as the live-search context: the server hands it out with a
    page of results and the next page request echoes it back. Equality is
    structural.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    items_per_page: int | None = Field(default=None, alias="itemsPerPage")
    current_page: int | None = Field(default=None, alias="currentPage")
    items_count: int | None = Field(default=None, alias="itemsCount")
    next_page_link: str | None = Field(default=None, alias="nextPageLink")

    @property
    def last_page(self) -> int | None:
        if not self.items_per_page or self.items_count is None:
            return None
        return max(1, math.ceil(self.items_count / self.items_per_page))

    @property
    def is_last_page(self) -> bool:
        last_page = self.last_page
        if last_page is None or self.current_page is None:
            return self.next_page_link is None
        return self.current_page >= last_page


@dataclass
class ItemsPage:
    """Raw ``items`` of a list response plus its pagination, if any."""

    items: list[dict[str, Any]] = field(default_factory=list)
    pagination: Pagination | None = None


@dataclass
class SearchPage(Generic[T]):
    """One page of live search results, as delivered to the results callback."""

    results: list[T]
    has_more: bool
    context: Pagination | None


@dataclass(frozen=True)
class UploadedImage:
    """Where the server stored a freshly uploaded image."""

    id: int
    url: str

    @classmethod
    def from_location(cls, location: str) -> UploadedImage:
        return cls(id=int(location.rstrip("/").rsplit("/", 1)[-1]), url=location)
