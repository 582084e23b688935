"""
Comment status filter.

``all`` is privileged: it is on exactly when no explicit partial selection
is active, and the filter can never end up with every flag off.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any, TypeVar

from authoring_core.errors import UnknownStatusError

ALL = "all"
DEFAULT_STATUSES = ("pending", "approved", "hidden")

C = TypeVar("C")


def _status_of(comment: Any) -> str | None:
    if isinstance(comment, dict):
        return comment.get("status")
    return getattr(comment, "status", None)


class StatusFilter:
    def __init__(self, statuses: Sequence[str] = DEFAULT_STATUSES) -> None:
        self.others = tuple(statuses)
        self.statuses: dict[str, bool] = {ALL: True, **{name: False for name in self.others}}

    def toggle(self, name: str) -> None:
        if name not in self.statuses:
            raise UnknownStatusError(f"unknown comment status filter: {name!r}")

        previously_checked = self.statuses[name]
        self.statuses[name] = not previously_checked

        if name == ALL:
            # Switching "all" off selects every status explicitly; switching it
            # on clears the explicit selection.
            for other in self.others:
                self.statuses[other] = previously_checked
        elif previously_checked:
            if not any(self.statuses[other] for other in self.others):
                self.statuses[ALL] = True
        else:
            self.statuses[ALL] = False

    def is_selected(self, status: str | None) -> bool:
        if self.statuses[ALL]:
            return True
        return bool(status is not None and self.statuses.get(status))

    def filter(self, comments: Iterable[C]) -> list[C]:
        """Comments (objects or dicts with a ``status``) the filter lets through."""
        return [comment for comment in comments if self.is_selected(_status_of(comment))]
