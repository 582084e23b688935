from __future__ import annotations

from enum import Enum
from typing import Any


class CommentSorting(str, Enum):
    """How the comment list is ordered; the value is the option label."""

    NESTED = "Nested"
    CHRONOLOGICAL = "Chronological"
    CHRONOLOGICAL_ASC = "Chronological (asc.)"  # oldest first

    @property
    def api_value(self) -> str:
        # The API only distinguishes threaded from flat listings.
        return "nested" if self is CommentSorting.NESTED else "chronological"

    @property
    def oldest_first(self) -> bool:
        return self is CommentSorting.CHRONOLOGICAL_ASC

    def query_params(self) -> dict[str, Any]:
        """Parameters for (re)loading the comment list in this order."""
        return {"sorting": self.api_value}


DEFAULT_SORTING = CommentSorting.NESTED
