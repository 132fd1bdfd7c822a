"""Column schema: typed descriptors of a table's columns."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any


class ColumnType(str, Enum):
    """Declared column types known to the platform."""

    TEXT = "text"
    STRING = "string"
    EMAIL = "email"
    URL = "url"
    NUMBER = "number"
    INTEGER = "integer"
    DECIMAL = "decimal"
    BOOLEAN = "boolean"
    DATE = "date"
    DATETIME = "datetime"
    REFERENCE = "reference"
    CUSTOM_ARRAY = "customArray"
    JSON = "json"


class TypeFamily(str, Enum):
    """Groups of column types that share operators and comparison rules."""

    TEXT = "text"
    NUMERIC = "numeric"
    BOOLEAN = "boolean"
    DATE = "date"
    REFERENCE = "reference"
    OTHER = "other"

    @classmethod
    def of(cls, column_type: ColumnType | str | None) -> TypeFamily:
        """Classify a declared type; unknown types fall into ``OTHER``."""
        key = column_type.value if isinstance(column_type, ColumnType) else column_type
        return _FAMILIES.get(key or "", cls.OTHER)


_FAMILIES: dict[str, TypeFamily] = {
    ColumnType.TEXT.value: TypeFamily.TEXT,
    ColumnType.STRING.value: TypeFamily.TEXT,
    ColumnType.EMAIL.value: TypeFamily.TEXT,
    ColumnType.URL.value: TypeFamily.TEXT,
    ColumnType.NUMBER.value: TypeFamily.NUMERIC,
    ColumnType.INTEGER.value: TypeFamily.NUMERIC,
    ColumnType.DECIMAL.value: TypeFamily.NUMERIC,
    ColumnType.BOOLEAN.value: TypeFamily.BOOLEAN,
    ColumnType.DATE.value: TypeFamily.DATE,
    ColumnType.DATETIME.value: TypeFamily.DATE,
    ColumnType.REFERENCE.value: TypeFamily.REFERENCE,
    ColumnType.CUSTOM_ARRAY.value: TypeFamily.REFERENCE,
}


@dataclass(frozen=True)
class ColumnDescriptor:
    """
    One column of a table, as supplied by the schema collaborator.

    ``type`` is kept as the raw declared string so that types unknown to
    this package still round-trip; use :attr:`family` for dispatch.
    """

    id: int
    name: str
    type: str
    order: int = 0
    reference_table_id: int | None = None

    @property
    def family(self) -> TypeFamily:
        return TypeFamily.of(self.type)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "order": self.order,
            "referenceTableId": self.reference_table_id,
        }


class ColumnSchema:
    """
    Immutable, ordered view over a table's column descriptors.

    Iteration yields descriptors by declared ``order`` (ties by id).
    """

    __slots__ = ("_by_id", "_ordered")

    def __init__(self, columns: Iterable[ColumnDescriptor]) -> None:
        self._ordered: tuple[ColumnDescriptor, ...] = tuple(
            sorted(columns, key=lambda c: (c.order, c.id))
        )
        self._by_id: dict[int, ColumnDescriptor] = {c.id: c for c in self._ordered}

    def get(self, column_id: Any) -> ColumnDescriptor | None:
        if isinstance(column_id, bool) or not isinstance(column_id, int):
            return None
        return self._by_id.get(column_id)

    def __contains__(self, column_id: object) -> bool:
        return self.get(column_id) is not None

    def order_of(self, column_id: int) -> tuple[int, int]:
        """Sort key for cells; cells of unknown columns sort last."""
        column = self._by_id.get(column_id)
        if column is None:
            return (1, 0)
        return (0, column.order)

    def __iter__(self) -> Iterator[ColumnDescriptor]:
        return iter(self._ordered)

    def __len__(self) -> int:
        return len(self._ordered)

    def __repr__(self) -> str:
        names = ", ".join(c.name for c in self._ordered)
        return f"ColumnSchema([{names}])"
