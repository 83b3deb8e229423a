"""Guards that latch a frame for reading or writing and pin it while held."""

from __future__ import annotations

from typing import Callable, Optional

from pagestore.frame import FrameHeader

ReleaseCallback = Callable[[int], None]


class _PageGuard:
    def __init__(self, frame: FrameHeader, on_release: Optional[ReleaseCallback] = None) -> None:
        self._on_release = on_release
        self._frame: Optional[FrameHeader] = None
        self._lock_frame(frame)
        try:
            frame.incr_pin_count()
            self._prepare(frame)
        except BaseException:
            self._unlock_frame(frame)
            raise
        self._frame = frame

    def _lock_frame(self, frame: FrameHeader) -> None:
        raise NotImplementedError

    def _unlock_frame(self, frame: FrameHeader) -> None:
        raise NotImplementedError

    def _prepare(self, frame: FrameHeader) -> None:
        pass

    def _held(self) -> FrameHeader:
        if self._frame is None:
            raise RuntimeError("page guard has been released")
        return self._frame

    @property
    def frame_id(self) -> int:
        return self._held().frame_id

    @property
    def page_id(self) -> Optional[int]:
        return self._held().page_id

    @property
    def released(self) -> bool:
        return self._frame is None

    def release(self) -> None:
        """Unpin the frame, drop the latch, then report the frame id; idempotent."""
        frame = self._frame
        if frame is None:
            return
        self._frame = None
        frame.decr_pin_count()
        # The latch goes before the callback: the callback may need a lock
        # that another thread holds while waiting for this latch.
        self._unlock_frame(frame)
        if self._on_release is not None:
            self._on_release(frame.frame_id)

    def __enter__(self):
        return self

    def __exit__(self, *args: object) -> None:
        self.release()

    def __del__(self) -> None:
        if getattr(self, "_frame", None) is not None:
            self.release()


class ReadPageGuard(_PageGuard):
    """Shared latch on a frame; ``data`` is a snapshot of the page."""

    def _lock_frame(self, frame: FrameHeader) -> None:
        frame.lock.acquire_read()

    def _unlock_frame(self, frame: FrameHeader) -> None:
        frame.lock.release_read()

    @property
    def data(self) -> bytes:
        return bytes(self._held().data)

    def release(self) -> None:
        super().release()

    def __enter__(self) -> "ReadPageGuard":
        return self

    def __exit__(self, *args: object) -> None:
        self.release()


class WritePageGuard(_PageGuard):
    """Exclusive latch on a frame; marks it dirty and exposes its buffer."""

    def _lock_frame(self, frame: FrameHeader) -> None:
        frame.lock.acquire_write()

    def _unlock_frame(self, frame: FrameHeader) -> None:
        frame.lock.release_write()

    def _prepare(self, frame: FrameHeader) -> None:
        frame.is_dirty = True

    @property
    def data(self) -> bytearray:
        return self._held().data

    def release(self) -> None:
        super().release()

    def __enter__(self) -> "WritePageGuard":
        return self

    def __exit__(self, *args: object) -> None:
        self.release()