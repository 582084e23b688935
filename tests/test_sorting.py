import pytest

from authoring_core.moderation import DEFAULT_SORTING, CommentSorting


def test_options_in_display_order():
    assert [s.value for s in CommentSorting] == ["Nested", "Chronological", "Chronological (asc.)"]
    assert DEFAULT_SORTING is CommentSorting.NESTED


@pytest.mark.parametrize(
    ("sorting", "params"),
    [
        (CommentSorting.NESTED, {"sorting": "nested"}),
        (CommentSorting.CHRONOLOGICAL, {"sorting": "chronological"}),
        (CommentSorting.CHRONOLOGICAL_ASC, {"sorting": "chronological"}),
    ],
)
def test_query_params(sorting, params):
    assert sorting.query_params() == params


def test_only_ascending_option_lists_oldest_first():
    assert [s for s in CommentSorting if s.oldest_first] == [CommentSorting.CHRONOLOGICAL_ASC]


def test_lookup_by_label():
    assert CommentSorting("Chronological (asc.)") is CommentSorting.CHRONOLOGICAL_ASC
