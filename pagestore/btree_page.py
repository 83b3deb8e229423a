"""B+ tree page headers and in-memory page layouts."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass, field
from typing import Any, ClassVar

from pagestore.disk import PAGE_SIZE

_USIZE = 8
# Room each page spends on the bookkeeping of its key and value arrays.
_ARRAY_OVERHEAD = 2 * 4 * _USIZE


class IndexPageType(enum.IntEnum):
    """Kind of B+ tree page, with its on-disk code."""

    INVALID_INDEX_PAGE = 1
    LEAF_PAGE = 2
    INTERNAL_PAGE = 3


@dataclass
class InternalHeader:
    """Header of an internal page: current and maximum size."""

    SIZE: ClassVar[int] = struct.calcsize("<II")

    size: int = 0
    max_size: int = 0


@dataclass
class LeafHeader:
    """Header of a leaf page: current and maximum size and the next leaf."""

    SIZE: ClassVar[int] = struct.calcsize("<IIQ")

    size: int = 0
    max_size: int = 0
    next_page_id: int = 0


BPLUS_TREE_INTERNAL_PAGE_HEADER_SIZE = InternalHeader.SIZE
BPLUS_TREE_LEAF_PAGE_HEADER_SIZE = LeafHeader.SIZE


def slot_count(header_size: int, key_size: int, value_size: int) -> int:
    """Number of key/value slots that fit in a page after ``header_size`` bytes."""
    room = PAGE_SIZE - header_size - 8
    if room < 0:
        raise ValueError(f"header of {header_size} bytes does not fit in a page")
    if key_size < 0 or value_size < 0:
        raise ValueError("key and value sizes must not be negative")
    return room // (key_size + value_size + _ARRAY_OVERHEAD)


def _keys_str(keys: list[Any]) -> str:
    return "(" + "".join(f",{key!r}" for key in keys[1:])


@dataclass
class InternalPage:
    """Internal page: n keys (the first is unused) and n child page ids."""

    header: InternalHeader = field(default_factory=InternalHeader)
    keys: list[Any] = field(default_factory=list)
    values: list[Any] = field(default_factory=list)

    def __str__(self) -> str:
        return _keys_str(self.keys)


@dataclass
class LeafPage:
    """Leaf page: sorted unique keys with their record ids."""

    header: LeafHeader = field(default_factory=LeafHeader)
    keys: list[Any] = field(default_factory=list)
    values: list[Any] = field(default_factory=list)

    def __str__(self) -> str:
        return _keys_str(self.keys)