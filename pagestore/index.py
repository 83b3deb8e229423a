"""Index keys and the B+ tree index over buffer-pool pages."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from pagestore.btree_page import (
    BPLUS_TREE_INTERNAL_PAGE_HEADER_SIZE,
    BPLUS_TREE_LEAF_PAGE_HEADER_SIZE,
    slot_count,
)
from pagestore.buffer_pool import BufferPoolManager

# Width in bytes of one stored key character.
_CHAR_WIDTH = 4


@dataclass(frozen=True, order=True)
class GenericKey:
    """A fixed-width index key made of characters, compared lexicographically."""

    data: tuple[str, ...]

    def __post_init__(self) -> None:
        items = tuple(self.data)
        if not all(isinstance(item, str) and len(item) == 1 for item in items):
            raise TypeError("key data must be single characters")
        object.__setattr__(self, "data", items)

    @classmethod
    def from_int(cls, value: int, size: int) -> "GenericKey":
        """Key of ``size`` characters from the decimal digits of ``value``.

        Short numbers are padded on the right with ``'0'``; long ones are cut.
        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError("key value must be an int")
        if value < 0:
            raise ValueError(f"key value must not be negative: {value}")
        if size < 0:
            raise ValueError(f"key size must not be negative: {size}")
        digits = str(value)[:size]
        return cls(tuple(digits.ljust(size, "0")))

    @property
    def byte_size(self) -> int:
        """Bytes the key occupies in a page."""
        return len(self.data) * _CHAR_WIDTH


@dataclass
class BPlusTree:
    """A B+ tree index whose pages live in a buffer pool.

    When no maximum page sizes are given they default to the number of
    key/value slots that fit in a page, which needs ``key_size`` and
    ``value_size`` in bytes.
    """

    index_name: str
    header_page_id: int
    bpm: BufferPoolManager
    comparator: Any = None
    leaf_max_size: Optional[int] = None
    internal_max_size: Optional[int] = None
    key_size: Optional[int] = field(default=None, kw_only=True)
    value_size: Optional[int] = field(default=None, kw_only=True)
    log: list[str] = field(default_factory=list, init=False)

    def __post_init__(self) -> None:
        if self.leaf_max_size is None:
            self.leaf_max_size = self._default_slots(BPLUS_TREE_LEAF_PAGE_HEADER_SIZE)
        if self.internal_max_size is None:
            self.internal_max_size = self._default_slots(BPLUS_TREE_INTERNAL_PAGE_HEADER_SIZE)
        if self.leaf_max_size < 1 or self.internal_max_size < 1:
            raise ValueError("maximum page sizes must be positive")

    def _default_slots(self, header_size: int) -> int:
        if self.key_size is None or self.value_size is None:
            raise ValueError("key_size and value_size are needed to size pages")
        return slot_count(header_size, self.key_size, self.value_size)