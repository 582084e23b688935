"""Content API routes, relative to the configured API root."""

from __future__ import annotations


def article(*, number: int, language: str) -> str:
    return f"/articles/{number}/{language}"


def article_authors(*, number: int, language: str) -> str:
    return f"{article(number=number, language=language)}/authors"


def article_author(*, number: int, language: str, author_id: int) -> str:
    return f"{article_authors(number=number, language=language)}/{author_id}"


def article_authors_order(*, number: int, language: str) -> str:
    return f"{article_authors(number=number, language=language)}/order"


def article_images(*, number: int, language: str) -> str:
    return f"{article(number=number, language=language)}/images"


def article_type(type_name: str) -> str:
    return f"/articleTypes/{type_name}"


def link_article(*, number: int, language: str) -> str:
    # LINK and UNLINK share the article resource itself.
    return article(number=number, language=language)


def author(author_id: int) -> str:
    return f"/authors/{author_id}"


def author_types() -> str:
    return "/authors/types"


def author_type(role_id: int) -> str:
    return f"{author_types()}/{role_id}"


def search_authors() -> str:
    return "/search/authors"


def topic(topic_id: int) -> str:
    return f"/topics/{topic_id}"


def images() -> str:
    return "/images"


def image(image_id: int) -> str:
    return f"{images()}/{image_id}"


def search_images() -> str:
    return "/search/images"
