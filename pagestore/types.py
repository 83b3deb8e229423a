"""SQL data types and typed values."""

from __future__ import annotations

import enum
import functools
import re
from dataclasses import dataclass
from typing import Any, Optional

_U32_MAX = 2**32 - 1
_U64_MAX = 2**64 - 1


class TypeId(enum.Enum):
    """Every possible SQL type id, in declaration order."""

    INVALID = "Invalid"
    BOOLEAN = "Boolean"
    TINYINT = "TinyInt"
    SMALLINT = "SmallInt"
    INTEGER = "Integer"
    BIGINT = "BigInt"
    DECIMAL = "Decimal"
    VARCHAR = "Varchar"
    TIMESTAMP = "Timestamp"
    VECTOR = "Vector"


_TYPE_ORDER = {type_id: position for position, type_id in enumerate(TypeId)}
_NUMERIC = frozenset({TypeId.TINYINT, TypeId.SMALLINT, TypeId.INTEGER, TypeId.BIGINT})


@functools.total_ordering
@dataclass(frozen=True)
class DataType:
    """A column type; only VARCHAR carries a length."""

    type_id: TypeId
    length: Optional[int] = None

    def __post_init__(self) -> None:
        if self.type_id is TypeId.VARCHAR:
            if not isinstance(self.length, int) or isinstance(self.length, bool):
                raise TypeError("VARCHAR requires an integer length")
            if not 0 <= self.length <= _U32_MAX:
                raise ValueError(f"VARCHAR length out of range: {self.length}")
        elif self.length is not None:
            raise ValueError(f"{self.type_id.value} takes no length")

    def _sort_key(self) -> tuple[int, int]:
        return _TYPE_ORDER[self.type_id], self.length or 0

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, DataType):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def is_numeric(self) -> bool:
        """True for the integer types."""
        return self.type_id in _NUMERIC

    def __str__(self) -> str:
        if self.type_id is TypeId.VARCHAR:
            return f"{self.type_id.value}({self.length})"
        return self.type_id.value


_NAMED_TYPES = {
    "bool": TypeId.BOOLEAN,
    "boolean": TypeId.BOOLEAN,
    "tinyint": TypeId.TINYINT,
    "smallint": TypeId.SMALLINT,
    "int": TypeId.INTEGER,
    "integer": TypeId.INTEGER,
    "bigint": TypeId.BIGINT,
    "double": TypeId.DECIMAL,
    "float": TypeId.DECIMAL,
}

_SIZE_PATTERN = re.compile(r"\+?[0-9]+")


def parse_data_type(text: str) -> DataType:
    """Parse a type name; unknown names default to INTEGER.

    Raises ValueError for a malformed VARCHAR/CHAR size.
    """
    named = _NAMED_TYPES.get(text)
    if named is not None:
        return DataType(named)
    if text.startswith(("varchar", "char")):
        start = text.find("(")
        end = text.find(")")
        if start < 0 or end < 0:
            raise ValueError(f"missing size in {text!r}")
        inner = text[start + 1 : end]
        if not _SIZE_PATTERN.fullmatch(inner):
            raise ValueError(f"invalid size in {text!r}")
        size = int(inner)
        if size > _U32_MAX:
            raise ValueError(f"size too large in {text!r}")
        return DataType(TypeId.VARCHAR, size)
    return DataType(TypeId.INTEGER)


_INT_RANGES = {
    TypeId.TINYINT: (-(2**7), 2**7 - 1),
    TypeId.SMALLINT: (-(2**15), 2**15 - 1),
    TypeId.INTEGER: (-(2**31), 2**31 - 1),
    TypeId.BIGINT: (-(2**63), 2**63 - 1),
    TypeId.TIMESTAMP: (0, _U64_MAX),
}


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_real(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(frozen=True)
class Value:
    """A typed SQL value, checked against the range of its type."""

    type_id: TypeId
    value: Any

    def __post_init__(self) -> None:
        type_id, value = self.type_id, self.value
        if type_id is TypeId.BOOLEAN:
            if not isinstance(value, bool):
                raise TypeError("BOOLEAN value must be a bool")
        elif type_id in _INT_RANGES:
            if not _is_int(value):
                raise TypeError(f"{type_id.value} value must be an int")
            low, high = _INT_RANGES[type_id]
            if not low <= value <= high:
                raise ValueError(f"{value} out of range for {type_id.value}")
        elif type_id is TypeId.DECIMAL:
            if not _is_real(value):
                raise TypeError("DECIMAL value must be a number")
            object.__setattr__(self, "value", float(value))
        elif type_id is TypeId.VARCHAR:
            if not isinstance(value, str):
                raise TypeError("VARCHAR value must be a str")
        elif type_id is TypeId.VECTOR:
            items = tuple(value)
            if not all(_is_real(item) for item in items):
                raise TypeError("VECTOR elements must be numbers")
            object.__setattr__(self, "value", tuple(float(item) for item in items))
        else:
            raise ValueError(f"cannot build a value of type {type_id.value}")