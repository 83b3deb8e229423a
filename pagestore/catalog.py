"""Columns, schemas and table metadata."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from pagestore.types import DataType, parse_data_type


@dataclass(frozen=True)
class Column:
    """A named, typed column."""

    name: str
    data_type: DataType


@dataclass
class Schema:
    """An ordered list of columns."""

    columns: list[Column]
    non_inlined_columns: list[int] = field(default_factory=list, init=False)

    def column_index(self, name: str) -> Optional[int]:
        """Index of the first column called ``name``, or None."""
        return next(
            (index for index, column in enumerate(self.columns) if column.name == name),
            None,
        )

    def column_count(self) -> int:
        return len(self.columns)

    def non_inlined_column_count(self) -> int:
        return len(self.non_inlined_columns)


@dataclass
class TableInfo:
    """Metadata of one table."""

    schema: Schema
    name: str
    table_oid: int


def parse_create_stmt(stmt: str) -> Schema:
    """Build a schema from text such as ``"a bigint,b varchar(10)"``.

    Each comma-separated part is a column name, one space, and a type.
    """
    columns = []
    for token in stmt.lower().split(","):
        split_at = token.find(" ")
        if split_at < 0:
            raise ValueError(f"column definition without a type: {token!r}")
        name, type_text = token[:split_at], token[split_at + 1 :]
        columns.append(Column(name, parse_data_type(type_text)))
    return Schema(columns)