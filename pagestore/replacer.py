"""LRU-K replacement policy for buffer frames."""

from __future__ import annotations

import enum
import itertools
import threading
from dataclasses import dataclass, field
from typing import Optional


class AccessType(enum.Enum):
    """Kind of access that touched a frame."""

    UNKNOWN = enum.auto()
    LOOKUP = enum.auto()
    SCAN = enum.auto()
    INDEX = enum.auto()


@dataclass
class _Node:
    history: list[int] = field(default_factory=list)
    evictable: bool = False


class LruKReplacer:
    """Picks the frame to evict by backward k-distance.

    Frames with fewer than ``k`` recorded accesses count as infinitely
    distant and go first, oldest first access first. Otherwise the frame
    whose latest recorded access is oldest goes. ``len()`` is the number of
    evictable frames.
    """

    def __init__(self, size: int, k: int) -> None:
        if k < 1:
            raise ValueError(f"k must be at least 1, got {k}")
        self._size = size
        self._k = k
        self._nodes: dict[int, _Node] = {}
        self._evictable_count = 0
        self._lock = threading.Lock()
        self._clock = itertools.count()

    def _check_frame_id(self, frame_id: int) -> None:
        if frame_id < 0 or frame_id > self._size:
            raise ValueError(f"invalid frame id {frame_id}")

    def record_access(self, frame_id: int, access_type: Optional[AccessType] = None) -> None:
        """Record an access to ``frame_id`` now, creating its history if new."""
        self._check_frame_id(frame_id)
        with self._lock:
            stamp = next(self._clock)
            node = self._nodes.setdefault(frame_id, _Node())
            if len(node.history) >= self._k:
                node.history.pop()
            node.history.append(stamp)

    def set_evictable(self, frame_id: int, evictable: bool) -> None:
        """Mark a known frame evictable or not; unknown frames are ignored."""
        self._check_frame_id(frame_id)
        with self._lock:
            node = self._nodes.get(frame_id)
            if node is None or node.evictable == evictable:
                return
            node.evictable = evictable
            self._evictable_count += 1 if evictable else -1

    def remove(self, frame_id: int) -> None:
        """Drop an evictable frame and its history, whatever its distance.

        Unknown frames are ignored; removing a non-evictable frame raises
        ValueError.
        """
        with self._lock:
            node = self._nodes.get(frame_id)
            if node is None:
                return
            if not node.evictable:
                raise ValueError(f"frame {frame_id} is not evictable")
            del self._nodes[frame_id]
            self._evictable_count -= 1

    def evict(self) -> Optional[int]:
        """Evict and return the frame with the largest backward k-distance, or None."""
        with self._lock:
            candidates = [(fid, node) for fid, node in self._nodes.items() if node.evictable]
            young = [(node.history[0], fid) for fid, node in candidates if len(node.history) < self._k]
            if young:
                victim = min(young)[1]
            else:
                full = [(node.history[-1], fid) for fid, node in candidates]
                if not full:
                    return None
                victim = min(full)[1]
            del self._nodes[victim]
            self._evictable_count -= 1
            return victim

    def __len__(self) -> int:
        with self._lock:
            return self._evictable_count