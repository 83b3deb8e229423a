"""Record identifiers."""

from __future__ import annotations

from dataclasses import dataclass

_U32_MAX = 2**32 - 1


@dataclass(frozen=True, order=True)
class RID:
    """A record id: the page holding a tuple and its slot in that page."""

    page_id: int
    slot_num: int

    def __post_init__(self) -> None:
        if self.page_id < 0:
            raise ValueError(f"page id must not be negative: {self.page_id}")
        if not 0 <= self.slot_num <= _U32_MAX:
            raise ValueError(f"slot number out of range: {self.slot_num}")