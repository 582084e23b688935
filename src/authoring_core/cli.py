"""
Command-line interface for article associations and comment settings.

Usage:
    authoring authors list <number> <language>             # Article authors
    authoring authors roles                                # Author role catalog
    authoring authors add <number> <language> <id> <role>  # Attach an author
    authoring authors remove <number> <language> <id> <role>
    authoring authors reorder <number> <language> 22-1 162-4
    authoring authors set-role <number> <language> <id> <old> <new>
    authoring authors search <term> [--page N]
    authoring topics list|add|remove <number> <language> [ids...]
    authoring images list|add|remove <number> <language> [ids...]
    authoring images search [<term>] [--page N]
    authoring images upload <file> [--photographer X] [--description Y]
    authoring images describe <id> <description>
    authoring commenting show|set <number> <language> [value]
"""

import asyncio
import logging
import mimetypes
from pathlib import Path
from typing import Awaitable, Callable, List, Optional, TypeVar

import typer
from rich.console import Console
from rich.table import Table

from authoring_core.articles import ArticleService, CommentingSetting
from authoring_core.associations import AssociationClient
from authoring_core.errors import ProtocolMisuseError, TransportError
from authoring_core.http_client import ContentApiClient
from authoring_core.models import Author, AuthorRole, Image, Topic
from authoring_core.moderation import CommentingChannel
from authoring_core.settings import get_settings

R = TypeVar("R")

app = typer.Typer(
    name="authoring",
    help="Manage article authors, topics, images and commenting on a Newscoop content API",
)
authors_app = typer.Typer(help="Article authors")
topics_app = typer.Typer(help="Article topics")
images_app = typer.Typer(help="Article images")
commenting_app = typer.Typer(help="Article commenting setting")
app.add_typer(authors_app, name="authors")
app.add_typer(topics_app, name="topics")
app.add_typer(images_app, name="images")
app.add_typer(commenting_app, name="commenting")

console = Console()


def make_api() -> ContentApiClient:
    return ContentApiClient.from_settings(get_settings())


def _run(operation: Callable[[ContentApiClient], Awaitable[R]]) -> R:
    """Run one operation against a fresh client, mapping errors to exit codes."""

    async def main() -> R:
        async with make_api() as api:
            return await operation(api)

    try:
        return asyncio.run(main())
    except TransportError as exc:
        console.print(f"[red]Request failed ({exc.status_code or 'network'}):[/red] {exc.payload!r}")
        raise typer.Exit(1)
    except ProtocolMisuseError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(2)


def _parse_order_token(token: str) -> Author:
    author_id, sep, role_id = token.partition("-")
    if not sep or not author_id.isdigit() or not role_id.isdigit():
        raise typer.BadParameter(f"expected <author id>-<role id>, got {token!r}")
    return Author(id=int(author_id), article_role=AuthorRole(id=int(role_id)))


def _authors_table(authors: List[Author], title: str) -> Table:
    table = Table(title=title)
    table.add_column("ID", justify="right")
    table.add_column("Name")
    table.add_column("Role")
    table.add_column("Order", justify="right")
    for author in authors:
        role = author.article_role
        table.add_row(
            str(author.id),
            author.text,
            f"{role.name or ''} ({role.id})" if role else "-",
            str(author.sort_order) if author.sort_order is not None else "-",
        )
    return table


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log requests")) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# -----------------------------------------------------------------------------
# Authors
# -----------------------------------------------------------------------------


@authors_app.command("list")
def authors_list(number: int, language: str) -> None:
    """List the authors of an article."""

    async def op(api: ContentApiClient) -> List[Author]:
        return list(await AssociationClient(api).authors.fetch_all_for_article(number, language))

    console.print(_authors_table(_run(op), f"Authors of article {number}/{language}"))


@authors_app.command("roles")
def authors_roles() -> None:
    """List all author roles."""

    async def op(api: ContentApiClient) -> List[AuthorRole]:
        return list(await AssociationClient(api).authors.fetch_role_catalog())

    table = Table(title="Author roles")
    table.add_column("ID", justify="right")
    table.add_column("Name")
    for role in _run(op):
        table.add_row(str(role.id), role.name or "")
    console.print(table)


@authors_app.command("add")
def authors_add(number: int, language: str, author_id: int, role_id: int) -> None:
    """Attach an author to an article with the given role."""

    async def op(api: ContentApiClient) -> Author:
        return await AssociationClient(api).authors.attach(number, language, Author(id=author_id), role_id)

    _run(op)
    console.print(f"[green]✓ Author {author_id} added as role {role_id}[/green]")


@authors_app.command("remove")
def authors_remove(number: int, language: str, author_id: int, role_id: int) -> None:
    """Detach an author (in the given role) from an article."""

    async def op(api: ContentApiClient) -> None:
        await AssociationClient(api).authors.detach(number, language, Author(id=author_id), role_id)

    _run(op)
    console.print(f"[green]✓ Author {author_id} (role {role_id}) removed[/green]")


@authors_app.command("reorder")
def authors_reorder(
    number: int,
    language: str,
    order: Optional[List[str]] = typer.Argument(None, help="<author id>-<role id> tokens in the new order"),
) -> None:
    """Store a new author order."""
    authors = [_parse_order_token(token) for token in order or []]

    async def op(api: ContentApiClient) -> None:
        await AssociationClient(api).authors.reorder(number, language, authors)

    _run(op)
    console.print(f"[green]✓ Order saved ({len(authors)} authors)[/green]")


@authors_app.command("set-role")
def authors_set_role(number: int, language: str, author_id: int, old_role_id: int, new_role_id: int) -> None:
    """Change an author's role on an article."""

    async def op(api: ContentApiClient) -> None:
        await AssociationClient(api).authors.update_role(
            Author(id=author_id),
            number=number,
            language=language,
            old_role_id=old_role_id,
            new_role_id=new_role_id,
        )

    _run(op)
    console.print(f"[green]✓ Author {author_id} role changed {old_role_id} → {new_role_id}[/green]")


@authors_app.command("search")
def authors_search(term: str, page: int = typer.Option(1, "--page", "-p", min=1)) -> None:
    """Search authors by name."""

    async def op(api: ContentApiClient):
        return await AssociationClient(api).authors.search(term, page=page)

    result = _run(op)
    console.print(_authors_table(result.results, f"Authors matching {term!r} (page {page})"))
    if result.has_more:
        console.print(f"[dim]More results: --page {page + 1}[/dim]")


# -----------------------------------------------------------------------------
# Topics
# -----------------------------------------------------------------------------


@topics_app.command("list")
def topics_list(number: int, language: str) -> None:
    """List the topics of an article."""

    async def op(api: ContentApiClient) -> List[Topic]:
        return list(await AssociationClient(api).topics.fetch_all_for_article(number, language))

    table = Table(title=f"Topics of article {number}/{language}")
    table.add_column("ID", justify="right")
    table.add_column("Title")
    for topic in _run(op):
        table.add_row(str(topic.id), topic.title or "")
    console.print(table)


@topics_app.command("add")
def topics_add(number: int, language: str, topic_ids: Optional[List[int]] = typer.Argument(None)) -> None:
    """Assign topics to an article."""
    topics = [Topic(id=topic_id) for topic_id in topic_ids or []]

    async def op(api: ContentApiClient) -> List[Topic]:
        return await AssociationClient(api).topics.attach(number, language, topics)

    _run(op)
    console.print(f"[green]✓ {len(topics)} topic(s) added[/green]")


@topics_app.command("remove")
def topics_remove(number: int, language: str, topic_ids: Optional[List[int]] = typer.Argument(None)) -> None:
    """Remove topics from an article."""
    topics = [Topic(id=topic_id) for topic_id in topic_ids or []]

    async def op(api: ContentApiClient) -> None:
        await AssociationClient(api).topics.detach(number, language, topics)

    _run(op)
    console.print(f"[green]✓ {len(topics)} topic(s) removed[/green]")


# -----------------------------------------------------------------------------
# Images
# -----------------------------------------------------------------------------


def _images_table(images: List[Image], title: str) -> Table:
    table = Table(title=title)
    table.add_column("ID", justify="right")
    table.add_column("Description")
    table.add_column("Size")
    table.add_column("Photographer")
    for image in images:
        size = f"{image.width}x{image.height}" if image.width and image.height else "-"
        table.add_row(str(image.id), image.description or "", size, image.photographer or "")
    return table


@images_app.command("list")
def images_list(number: int, language: str) -> None:
    """List the images of an article."""

    async def op(api: ContentApiClient) -> List[Image]:
        return list(await AssociationClient(api).images.fetch_all_for_article(number, language))

    console.print(_images_table(_run(op), f"Images of article {number}/{language}"))


@images_app.command("search")
def images_search(
    term: Optional[str] = typer.Argument(None),
    page: int = typer.Option(1, "--page", "-p", min=1),
) -> None:
    """Search the image library."""

    async def op(api: ContentApiClient):
        images = await AssociationClient(api).images.query(page, term=term)
        return list(images), images.pagination

    images, pagination = _run(op)
    console.print(_images_table(images, f"Images (page {page})"))
    if pagination is not None and not pagination.is_last_page:
        console.print(f"[dim]More results: --page {page + 1}[/dim]")


@images_app.command("upload")
def images_upload(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Image file"),
    photographer: Optional[str] = typer.Option(None, "--photographer"),
    description: Optional[str] = typer.Option(None, "--description"),
) -> None:
    """Upload an image to the library."""
    content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"

    async def op(api: ContentApiClient):
        return await AssociationClient(api).images.upload(
            path.read_bytes(),
            filename=path.name,
            content_type=content_type,
            photographer=photographer,
            description=description,
        )

    uploaded = _run(op)
    console.print(f"[green]✓ Uploaded image {uploaded.id}[/green] ({uploaded.url})")


@images_app.command("describe")
def images_describe(image_id: int, description: str) -> None:
    """Change the description of an image."""

    async def op(api: ContentApiClient) -> Image:
        return await AssociationClient(api).images.update_description(Image(id=image_id), description)

    _run(op)
    console.print(f"[green]✓ Description of image {image_id} updated[/green]")


@images_app.command("add")
def images_add(number: int, language: str, image_ids: Optional[List[int]] = typer.Argument(None)) -> None:
    """Attach images to an article."""
    images = [Image(id=image_id) for image_id in image_ids or []]

    async def op(api: ContentApiClient) -> List[Image]:
        return await AssociationClient(api).images.attach(number, language, images)

    _run(op)
    console.print(f"[green]✓ {len(images)} image(s) added[/green]")


@images_app.command("remove")
def images_remove(number: int, language: str, image_ids: Optional[List[int]] = typer.Argument(None)) -> None:
    """Detach images from an article."""
    images = [Image(id=image_id) for image_id in image_ids or []]

    async def op(api: ContentApiClient) -> None:
        await AssociationClient(api).images.detach(number, language, images)

    _run(op)
    console.print(f"[green]✓ {len(images)} image(s) removed[/green]")


# -----------------------------------------------------------------------------
# Commenting
# -----------------------------------------------------------------------------


@commenting_app.command("show")
def commenting_show(number: int, language: str) -> None:
    """Show who may comment on an article."""

    async def op(api: ContentApiClient) -> CommentingSetting:
        return await CommentingChannel(ArticleService(api), number, language).load()

    console.print(f"Commenting: [bold]{_run(op).label}[/bold]")


@commenting_app.command("set")
def commenting_set(number: int, language: str, value: CommentingSetting) -> None:
    """Change who may comment on an article."""

    async def op(api: ContentApiClient) -> CommentingSetting:
        channel = CommentingChannel(ArticleService(api), number, language)
        previous = await channel.load()
        try:
            return await channel.propose(value)
        except TransportError:
            console.print(f"[yellow]Kept previous value: {previous.label}[/yellow]")
            raise

    _run(op)
    console.print(f"[green]✓ Commenting set to {value.label}[/green]")


if __name__ == "__main__":
    app()
