"""
Relation header codec for the LINK/UNLINK association protocol.

Attaching or detaching related entities is expressed as a single ``link``
header listing one descriptor per relation, in the order the server must
apply them:

    </content-api/authors/22; rel="author">,</content-api/authors/types/1; rel="author-type">

Reordering article authors uses a different, flat format carried in the
request body: ``"22-1,162-4"`` (``<author id>-<role id>`` per entry).
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from authoring_core.errors import EmptyAssociationError, ProtocolMisuseError


class RelationKind(str, Enum):
    """Relation names understood by the link-management endpoint."""

    AUTHOR = "author"
    AUTHOR_TYPE = "author-type"
    OLD_AUTHOR_TYPE = "old-author-type"
    NEW_AUTHOR_TYPE = "new-author-type"
    TOPIC = "topic"
    IMAGE = "image"


@dataclass(frozen=True)
class RelationDescriptor:
    uri: str
    rel: RelationKind

    def render(self) -> str:
        return f'<{self.uri}; rel="{self.rel.value}">'


class OrderedAssociation(Protocol):
    @property
    def related_id(self) -> int: ...

    @property
    def role_id(self) -> int | None: ...


def encode(descriptors: Sequence[RelationDescriptor]) -> str:
    """
    Serialize descriptors into one ``link`` header value.

    Raises:
        EmptyAssociationError: if ``descriptors`` is empty; the protocol has
            no no-op request.
    """
    if len(descriptors) < 1:
        raise EmptyAssociationError("relation list is empty")
    return ",".join(descriptor.render() for descriptor in descriptors)


def encode_order(entries: Iterable[OrderedAssociation]) -> str:
    """Flat ``<related id>-<role id>`` token list, in the desired final order."""
    tokens = []
    for entry in entries:
        if entry.role_id is None:
            raise ProtocolMisuseError(f"association {entry.related_id} has no role to order by")
        tokens.append(f"{entry.related_id}-{entry.role_id}")
    return ",".join(tokens)
