from types import SimpleNamespace

import pytest

from authoring_core.errors import ProtocolMisuseError, UnknownStatusError
from authoring_core.moderation import ALL, StatusFilter


def test_starts_with_only_all_selected():
    assert StatusFilter().statuses == {"all": True, "pending": False, "approved": False, "hidden": False}


def test_toggle_sequence():
    status_filter = StatusFilter()

    status_filter.toggle("pending")
    assert status_filter.statuses == {"all": False, "pending": True, "approved": False, "hidden": False}

    status_filter.toggle("approved")
    assert status_filter.statuses == {"all": False, "pending": True, "approved": True, "hidden": False}

    status_filter.toggle("pending")
    assert status_filter.statuses == {"all": False, "pending": False, "approved": True, "hidden": False}

    status_filter.toggle("approved")
    assert status_filter.statuses == {"all": True, "pending": False, "approved": False, "hidden": False}


def test_switching_all_off_selects_every_status():
    status_filter = StatusFilter()

    status_filter.toggle(ALL)

    assert status_filter.statuses == {"all": False, "pending": True, "approved": True, "hidden": True}


def test_switching_all_on_clears_partial_selection():
    status_filter = StatusFilter()
    status_filter.toggle("hidden")

    status_filter.toggle(ALL)

    assert status_filter.statuses == {"all": True, "pending": False, "approved": False, "hidden": False}


def test_unknown_status_is_rejected():
    status_filter = StatusFilter()

    with pytest.raises(UnknownStatusError):
        status_filter.toggle("deleted")

    assert issubclass(UnknownStatusError, ProtocolMisuseError)
    assert status_filter.statuses[ALL] is True


def test_custom_status_set():
    status_filter = StatusFilter(["new", "spam"])

    status_filter.toggle("spam")

    assert status_filter.statuses == {"all": False, "new": False, "spam": True}


def test_selection_predicate():
    status_filter = StatusFilter()
    assert status_filter.is_selected("hidden")
    assert status_filter.is_selected(None)

    status_filter.toggle("pending")

    assert status_filter.is_selected("pending")
    assert not status_filter.is_selected("hidden")
    assert not status_filter.is_selected(None)
    assert not status_filter.is_selected("deleted")


def test_filter_accepts_dicts_and_objects():
    comments = [
        {"id": 1, "status": "pending"},
        SimpleNamespace(id=2, status="approved"),
        {"id": 3, "status": "hidden"},
    ]
    status_filter = StatusFilter()
    assert status_filter.filter(comments) == comments

    status_filter.toggle("approved")
    status_filter.toggle("hidden")

    assert [c["id"] if isinstance(c, dict) else c.id for c in status_filter.filter(comments)] == [2, 3]
