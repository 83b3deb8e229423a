"""Buffer frames and the reader/writer lock that guards them."""

from __future__ import annotations

import threading
from typing import Optional

from pagestore.disk import PAGE_SIZE

_PIN_MAX = 2**16 - 1


class ReadWriteLock:
    """Many readers or one writer; waiting writers go before new readers."""

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer or self._waiting_writers:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            if self._readers == 0:
                raise RuntimeError("read lock released without being held")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._waiting_writers += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._waiting_writers -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._cond:
            if not self._writer:
                raise RuntimeError("write lock released without being held")
            self._writer = False
            self._cond.notify_all()


class FrameHeader:
    """One slot of the buffer pool: a page buffer plus its bookkeeping."""

    def __init__(self, frame_id: int) -> None:
        self.frame_id = frame_id
        self.page_id: Optional[int] = None
        self.is_dirty = False
        self.lock = ReadWriteLock()
        self._pin_count = 0
        self._pin_lock = threading.Lock()
        self._data: Optional[bytearray] = bytearray(PAGE_SIZE)

    @property
    def pin_count(self) -> int:
        return self._pin_count

    def incr_pin_count(self) -> int:
        """Pin the frame once more and return the new count."""
        with self._pin_lock:
            if self._pin_count >= _PIN_MAX:
                raise OverflowError("pin count overflow")
            self._pin_count += 1
            return self._pin_count

    def decr_pin_count(self) -> int:
        """Unpin the frame once and return the new count."""
        with self._pin_lock:
            if self._pin_count == 0:
                raise ValueError(f"frame {self.frame_id} is not pinned")
            self._pin_count -= 1
            return self._pin_count

    @property
    def data(self) -> bytearray:
        if self._data is None:
            raise RuntimeError(f"data of frame {self.frame_id} has been taken")
        return self._data

    @data.setter
    def data(self, value: bytes) -> None:
        if len(value) != PAGE_SIZE:
            raise ValueError(f"page data must be {PAGE_SIZE} bytes, got {len(value)}")
        self._data = bytearray(value)

    def take_data(self) -> bytearray:
        """Hand the buffer over, e.g. to a disk request, leaving the frame without one."""
        data = self.data
        self._data = None
        return data

    def reset(self) -> None:
        """Detach the frame from its page and clear its buffer."""
        self.page_id = None
        self.is_dirty = False
        self._data = bytearray(PAGE_SIZE)