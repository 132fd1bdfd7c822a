"""
Cell-store models: tables, typed columns, rows, and cells.

Every cell keeps its raw JSON ``value`` plus typed projections computed
once at write time.  Predicates compare against the projection that
matches the column's type family, so numeric, boolean, and instant
comparisons behave the same on every dialect.
"""

from __future__ import annotations

import datetime
from typing import Any

from sqlalchemy import (
    Boolean,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from tabula_specifications.coercion import coerce, to_text
from tabula_specifications.columns import ColumnDescriptor, TypeFamily

from .types import JSONType, UTCDateTime


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class Base(DeclarativeBase):
    pass


class TableModel(Base):
    __tablename__ = "tabula_tables"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255))
    created_at: Mapped[datetime.datetime] = mapped_column(
        UTCDateTime, default=_utcnow
    )

    columns: Mapped[list[ColumnModel]] = relationship(
        back_populates="table", order_by="ColumnModel.order"
    )


class ColumnModel(Base):
    __tablename__ = "tabula_columns"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    table_id: Mapped[int] = mapped_column(
        ForeignKey("tabula_tables.id", ondelete="CASCADE"), index=True
    )
    name: Mapped[str] = mapped_column(String(255))
    type: Mapped[str] = mapped_column(String(32))
    order: Mapped[int] = mapped_column(Integer, default=0)
    reference_table_id: Mapped[int | None] = mapped_column(Integer, nullable=True)

    table: Mapped[TableModel] = relationship(back_populates="columns")

    def to_descriptor(self) -> ColumnDescriptor:
        return ColumnDescriptor(
            id=self.id,
            name=self.name,
            type=self.type,
            order=self.order,
            reference_table_id=self.reference_table_id,
        )


class RowModel(Base):
    __tablename__ = "tabula_rows"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    table_id: Mapped[int] = mapped_column(
        ForeignKey("tabula_tables.id", ondelete="CASCADE"), index=True
    )
    created_at: Mapped[datetime.datetime] = mapped_column(
        UTCDateTime, default=_utcnow
    )

    cells: Mapped[list[CellModel]] = relationship(
        back_populates="row", cascade="all, delete-orphan"
    )


class CellModel(Base):
    __tablename__ = "tabula_cells"
    __table_args__ = (
        UniqueConstraint("row_id", "column_id", name="uq_tabula_cells_row_column"),
        Index("ix_tabula_cells_column_number", "column_id", "number_value"),
        Index("ix_tabula_cells_column_date", "column_id", "date_value"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    row_id: Mapped[int] = mapped_column(
        ForeignKey("tabula_rows.id", ondelete="CASCADE"), index=True
    )
    column_id: Mapped[int] = mapped_column(
        ForeignKey("tabula_columns.id", ondelete="CASCADE"), index=True
    )
    value: Mapped[Any] = mapped_column(JSONType, nullable=True)

    # Typed projections of ``value``
    text_value: Mapped[str | None] = mapped_column(Text, nullable=True)
    number_value: Mapped[float | None] = mapped_column(Float, nullable=True)
    bool_value: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    date_value: Mapped[datetime.datetime | None] = mapped_column(
        UTCDateTime, nullable=True
    )

    row: Mapped[RowModel] = relationship(back_populates="cells")
    column: Mapped[ColumnModel] = relationship()

    @classmethod
    def from_value(cls, column: ColumnModel | ColumnDescriptor, value: Any) -> CellModel:
        """Build a cell for *column*, filling every projection *value* supports."""
        return cls(column_id=column.id, value=value, **project(column.type, value))


def project(column_type: str, value: Any) -> dict[str, Any]:
    """
    Compute the typed projections of a raw cell value.

    ``text_value`` is set for every non-null value; the other projections
    are set only when the value coerces under the column's type family.
    """
    projections: dict[str, Any] = {
        "text_value": to_text(value, column_type),
        "number_value": None,
        "bool_value": None,
        "date_value": None,
    }
    if value is None:
        return projections

    family = TypeFamily.of(column_type)
    target = {
        TypeFamily.NUMERIC: "number_value",
        TypeFamily.BOOLEAN: "bool_value",
        TypeFamily.DATE: "date_value",
    }.get(family)
    if target is not None:
        result = coerce(value, column_type)
        if result.success:
            projections[target] = result.value
    return projections
