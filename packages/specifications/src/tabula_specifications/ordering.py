"""Row ordering requested by the client, normalised to a closed set."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SortField(str, Enum):
    ID = "id"
    CREATED_AT = "createdAt"


@dataclass(frozen=True)
class RowOrder:
    field: SortField = SortField.ID
    descending: bool = False

    @classmethod
    def parse(cls, sort_by: str | None, sort_order: str | None = "asc") -> RowOrder:
        """
        Map ``sortBy`` / ``sortOrder`` onto an ordering.

        Unknown sort fields fall back to ascending by id, whatever the
        requested direction.
        """
        try:
            field = SortField(sort_by)
        except ValueError:
            return cls()
        return cls(field, descending=(sort_order or "").lower() == "desc")
