"""FilterCriterion: one column/operator/value filter requested by a client."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class FilterCriterion(BaseModel):
    """
    Transient filter request, constructed per request and never persisted.

    ``column_name`` and ``column_type`` are informational echoes from the
    client; the table's :class:`~.columns.ColumnSchema` is authoritative
    for the column's type.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    column_id: int = Field(alias="columnId", gt=0, strict=True)
    operator: str = Field(min_length=1)
    value: Any = None
    second_value: Any = Field(default=None, alias="secondValue")
    column_name: str | None = Field(default=None, alias="columnName")
    column_type: str | None = Field(default=None, alias="columnType")

    def to_wire(self) -> dict[str, Any]:
        """Serialise to the camelCase JSON shape used by the HTTP surface."""
        return self.model_dump(by_alias=True, mode="json")
