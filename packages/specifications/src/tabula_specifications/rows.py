"""Read-only row and cell views handed out by the row store."""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .columns import ColumnDescriptor, ColumnSchema


@dataclass(frozen=True)
class Cell:
    column_id: int
    value: Any
    id: int | None = None
    row_id: int | None = None
    column: ColumnDescriptor | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "rowId": self.row_id,
            "columnId": self.column_id,
            "value": self.value,
        }
        if self.column is not None:
            data["column"] = self.column.to_dict()
        return data


@dataclass(frozen=True)
class Row:
    id: int
    cells: tuple[Cell, ...] = ()
    table_id: int | None = None
    created_at: datetime.datetime | None = None
    _index: dict[int, Cell] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        # first cell wins when a column is stored twice
        index = self._index
        for cell in self.cells:
            index.setdefault(cell.column_id, cell)

    def cell(self, column_id: int) -> Cell | None:
        return self._index.get(column_id)

    def with_cells(self, cells: tuple[Cell, ...]) -> Row:
        return replace(self, cells=cells)

    def ordered_by(self, schema: ColumnSchema) -> Row:
        """Return a copy whose cells follow the columns' declared order."""
        cells = sorted(self.cells, key=lambda c: schema.order_of(c.column_id))
        return self.with_cells(tuple(cells))

    def to_dict(self, *, include_cells: bool = True) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "tableId": self.table_id,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
        if include_cells:
            data["cells"] = [c.to_dict() for c in self.cells]
        return data
