"""Buffer pool: caches disk pages in a fixed set of frames."""

from __future__ import annotations

import itertools
import threading
from typing import Callable, Optional, TypeVar

from pagestore.disk import DiskRequest, DiskScheduler, PageOperator
from pagestore.frame import FrameHeader
from pagestore.page_guard import ReadPageGuard, WritePageGuard
from pagestore.replacer import LruKReplacer

_Guard = TypeVar("_Guard", ReadPageGuard, WritePageGuard)


class BufferPoolManager:
    """Maps page ids onto a fixed number of frames, evicting by LRU-K.

    Pages are fetched through read or write guards that pin their frame
    while held. Dirty pages are written out when their frame is evicted
    and read back the next time they are fetched.
    """

    def __init__(self, num_frames: int, k_dist: int, page_operator: PageOperator) -> None:
        self.num_frames = num_frames
        self._scheduler = DiskScheduler(page_operator)
        self._frames = [FrameHeader(frame_id) for frame_id in range(num_frames)]
        self._free_frames = list(range(num_frames))
        self._page_table: dict[int, int] = {}
        self._pin_counts = dict.fromkeys(range(num_frames), 0)
        self._replacer = LruKReplacer(num_frames, k_dist)
        self._written_pages: set[int] = set()
        self._lock = threading.Lock()
        self._page_ids = itertools.count()
        self._page_id_lock = threading.Lock()

    def new_page_id(self) -> int:
        """Hand out the next unused page id."""
        with self._page_id_lock:
            return next(self._page_ids)

    def read_page(self, page_id: int) -> Optional[ReadPageGuard]:
        """Latch a page for reading, or return None if no frame can be freed."""
        return self._fetch(page_id, ReadPageGuard)

    def write_page(self, page_id: int) -> Optional[WritePageGuard]:
        """Latch a page for writing, or return None if no frame can be freed."""
        return self._fetch(page_id, WritePageGuard)

    def delete_page(self, page_id: int) -> bool:
        """Forget a page in memory and on disk.

        Returns False if the page is pinned, True if it was removed or was
        not present at all.
        """
        with self._lock:
            frame_id = self._page_table.get(page_id)
            if frame_id is None:
                self._written_pages.discard(page_id)
                return True
            if self._pin_counts[frame_id]:
                return False
            self._written_pages.discard(page_id)
            self._frames[frame_id].reset()
            del self._page_table[page_id]
            self._replacer.remove(frame_id)
            self._free_frames.append(frame_id)
            return True

    def pin_count(self, page_id: int) -> Optional[int]:
        """Number of guards holding the page, or None if it is not in memory."""
        with self._lock:
            frame_id = self._page_table.get(page_id)
            if frame_id is None:
                return None
            return self._pin_counts[frame_id]

    def close(self) -> None:
        """Stop the background disk scheduler."""
        self._scheduler.shutdown()

    def __enter__(self) -> "BufferPoolManager":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _fetch(self, page_id: int, guard_type: Callable[..., _Guard]) -> Optional[_Guard]:
        frame = self._pin(page_id)
        if frame is None:
            return None
        # The latch is taken outside the pool lock so that waiting for a busy
        # page never blocks access to other pages.
        try:
            return guard_type(frame, self._unpin)
        except BaseException:
            self._unpin(frame.frame_id)
            raise

    def _pin(self, page_id: int) -> Optional[FrameHeader]:
        with self._lock:
            frame_id = self._frame_for(page_id)
            if frame_id is None:
                return None
            self._replacer.record_access(frame_id)
            self._replacer.set_evictable(frame_id, False)
            self._pin_counts[frame_id] += 1
            return self._frames[frame_id]

    def _unpin(self, frame_id: int) -> None:
        with self._lock:
            self._pin_counts[frame_id] -= 1
            if self._pin_counts[frame_id] == 0:
                self._replacer.set_evictable(frame_id, True)

    def _frame_for(self, page_id: int) -> Optional[int]:
        """Frame holding ``page_id``, loading it if needed; caller holds the lock."""
        frame_id = self._page_table.get(page_id)
        if frame_id is not None:
            return frame_id
        if not self._free_frames:
            victim = self._replacer.evict()
            if victim is None:
                return None
            self._evict(victim)
        frame_id = self._free_frames.pop()
        frame = self._frames[frame_id]
        frame.reset()
        frame.page_id = page_id
        if page_id in self._written_pages:
            frame.data = self._scheduler.schedule(DiskRequest.read(page_id)).result()
        self._page_table[page_id] = frame_id
        return frame_id

    def _evict(self, frame_id: int) -> None:
        frame = self._frames[frame_id]
        page_id = frame.page_id
        if page_id is not None:
            if frame.is_dirty:
                request = DiskRequest.write(page_id, bytes(frame.data))
                self._scheduler.schedule(request).result()
                self._written_pages.add(page_id)
            self._page_table.pop(page_id, None)
        frame.reset()
        self._free_frames.append(frame_id)