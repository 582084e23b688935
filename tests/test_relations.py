import pytest

from authoring_core.errors import EmptyAssociationError, ProtocolMisuseError
from authoring_core.models import Author, AuthorRole
from authoring_core.relations import RelationDescriptor, RelationKind, encode, encode_order


def test_encode_rejects_empty_list():
    with pytest.raises(EmptyAssociationError):
        encode([])


def test_empty_association_error_is_protocol_misuse():
    with pytest.raises(ProtocolMisuseError):
        encode([])


def test_encode_single_descriptor():
    assert encode([RelationDescriptor("/topics/2", RelationKind.TOPIC)]) == '</topics/2; rel="topic">'


def test_encode_preserves_input_order():
    descriptors = [
        RelationDescriptor("/a/2", RelationKind.IMAGE),
        RelationDescriptor("/a/1", RelationKind.IMAGE),
        RelationDescriptor("/a/3", RelationKind.IMAGE),
    ]

    assert encode(descriptors) == '</a/2; rel="image">,</a/1; rel="image">,</a/3; rel="image">'


def test_encode_author_with_role():
    header = encode(
        [
            RelationDescriptor("/authors/22", RelationKind.AUTHOR),
            RelationDescriptor("/authors/types/1", RelationKind.AUTHOR_TYPE),
        ]
    )

    assert header == '</authors/22; rel="author">,</authors/types/1; rel="author-type">'


def test_encode_order_tokens():
    authors = [
        Author(id=162, article_role=AuthorRole(id=4, name="Photographer")),
        Author(id=22, article_role=AuthorRole(id=1, name="Writer")),
    ]

    assert encode_order(authors) == "162-4,22-1"


def test_encode_order_empty_is_empty_string():
    assert encode_order([]) == ""


def test_encode_order_requires_roles():
    with pytest.raises(ProtocolMisuseError):
        encode_order([Author(id=22)])
