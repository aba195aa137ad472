"""Frame scheduling - the render-frame contract between host and animators.

Everything in the engine runs inside per-frame callbacks issued by the host's
animation scheduler (the requestAnimationFrame of whatever renders the globe).
This module defines:

- FrameScheduler: the host contract (request / cancel one-shot frame
  callbacks, read the frame clock)
- HostFrameScheduler: a scheduler whose frames are pumped by the host loop,
  used by non-browser hosts and by the tests
- AnimationHandle: an owned, cancellable pending frame callback
- FrameDrivenAnimator: base class giving an animator exactly one handle,
  cancel-before-acquire, and visibility suspend/resume

Resource Discipline
-------------------
An animator owns at most one AnimationHandle. Acquiring a new handle
releases the previous one first, synchronously, so two callbacks can never
fight over the same output. Releasing is idempotent and also happens on
dispose() and on context-manager exit.

Time Accounting
---------------
Animators measure progress from frame-to-frame deltas. The reference
timestamp is reset to "now" whenever frames (re)start, so time spent paused
or hidden never leaks into the next delta.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

FrameCallback = Callable[[float], None]


class FrameScheduler(ABC):
    """Host animation scheduler contract.

    Frame callbacks are one-shot: each receives the frame timestamp in
    milliseconds and must request another frame to keep animating.
    """

    @abstractmethod
    def request_frame(self, callback: FrameCallback) -> int:
        """Schedule callback for the next frame and return its frame id."""

    @abstractmethod
    def cancel_frame(self, frame_id: int) -> None:
        """Cancel a pending frame. Unknown or already-run ids are ignored."""

    @abstractmethod
    def now_ms(self) -> float:
        """Current frame clock in milliseconds (same timebase as callback timestamps)."""


class HostFrameScheduler(FrameScheduler):
    """Frame scheduler pumped by the host render loop.

    The host calls run_frame() once per rendered frame. Callbacks requested
    while a frame is running are deferred to the following frame, and a
    callback cancelled mid-frame does not run, matching browser semantics.

    Args:
        start_ms: Initial clock value when no clock function is given
        clock: Optional function returning the current time in milliseconds.
               Without it, time only moves when run_frame()/advance() say so.

    Example:
        scheduler = HostFrameScheduler()
        camera = CameraAnimator(scheduler)
        camera.animate_to(CameraPOV(lat=10, lng=20, altitude=1.5), duration_ms=500)
        scheduler.run_frames(count=40, interval_ms=16.0)
    """

    def __init__(self, start_ms: float = 0.0, clock: Callable[[], float] | None = None) -> None:
        self._clock = clock
        self._now_ms = clock() if clock is not None else start_ms
        self._pending: dict[int, FrameCallback] = {}
        self._next_id = 1
        self.frames_run = 0

    def request_frame(self, callback: FrameCallback) -> int:
        frame_id = self._next_id
        self._next_id += 1
        self._pending[frame_id] = callback
        return frame_id

    def cancel_frame(self, frame_id: int) -> None:
        self._pending.pop(frame_id, None)

    def now_ms(self) -> float:
        if self._clock is not None:
            return self._clock()
        return self._now_ms

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def run_frame(self, timestamp_ms: float | None = None) -> int:
        """Run every callback that was pending when the frame started.

        Args:
            timestamp_ms: Frame timestamp. Defaults to the clock function, or the
                          current manual clock. The clock never moves backwards.

        Returns:
            Number of callbacks invoked.
        """
        if timestamp_ms is None:
            timestamp_ms = self._clock() if self._clock is not None else self._now_ms
        self._now_ms = max(self._now_ms, timestamp_ms)
        self.frames_run += 1

        invoked = 0
        for frame_id in list(self._pending):
            callback = self._pending.pop(frame_id, None)
            if callback is None:
                continue  # cancelled by an earlier callback in this frame
            callback(self._now_ms)
            invoked += 1
        return invoked

    def advance(self, delta_ms: float) -> int:
        """Move the manual clock forward and run one frame."""
        return self.run_frame(self._now_ms + max(0.0, delta_ms))

    def advance_clock(self, delta_ms: float) -> None:
        """Move the manual clock forward without running a frame (e.g. while hidden)."""
        self._now_ms += max(0.0, delta_ms)

    def run_frames(self, count: int, interval_ms: float = 1000.0 / 60.0) -> int:
        """Run `count` frames spaced `interval_ms` apart, stopping early once idle.

        Returns:
            Number of frames run.
        """
        frames = 0
        for _ in range(count):
            if not self._pending:
                break
            self.advance(interval_ms)
            frames += 1
        return frames


class AnimationHandle:
    """An owned pending frame callback.

    schedule() requests the next frame (cancelling any frame this handle
    already has pending); release() cancels it and retires the handle for
    good. A released handle never invokes its callback again, even if the
    scheduler already dequeued the frame.
    """

    def __init__(self, scheduler: FrameScheduler, callback: FrameCallback, name: str = "animation") -> None:
        self._scheduler = scheduler
        self._callback = callback
        self.name = name
        self._frame_id: int | None = None
        self._released = False

    @property
    def is_pending(self) -> bool:
        return self._frame_id is not None

    @property
    def is_released(self) -> bool:
        return self._released

    def schedule(self) -> None:
        if self._released:
            raise RuntimeError(f"AnimationHandle '{self.name}' was already released")
        self._cancel_pending()
        self._frame_id = self._scheduler.request_frame(self._on_frame)

    def release(self) -> None:
        self._cancel_pending()
        self._released = True

    def _cancel_pending(self) -> None:
        if self._frame_id is not None:
            self._scheduler.cancel_frame(self._frame_id)
            self._frame_id = None

    def _on_frame(self, timestamp_ms: float) -> None:
        self._frame_id = None
        if not self._released:
            self._callback(timestamp_ms)

    def __enter__(self) -> AnimationHandle:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.release()

    def __repr__(self) -> str:
        status = "released" if self._released else ("pending" if self.is_pending else "idle")
        return f"AnimationHandle({self.name}, {status})"


class FrameDrivenAnimator(ABC):
    """Base class for components that animate on host frames.

    Subclasses implement _on_frame(timestamp_ms) and call:
        _start_frames()    when work begins (cancels the old handle first)
        _continue_frames() at the end of a frame that needs another one
        _stop_frames()     when work is done
        _frame_delta(ts)   to get elapsed milliseconds since the previous frame

    "Running" means there is animation work to do; a running animator that
    is suspended simply has no pending frame until resume().
    """

    def __init__(self, scheduler: FrameScheduler, name: str) -> None:
        self._scheduler = scheduler
        self._name = name
        self._handle: AnimationHandle | None = None
        self._running = False
        self._suspended = False
        self._last_frame_ms = scheduler.now_ms()

    @property
    def scheduler(self) -> FrameScheduler:
        return self._scheduler

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def is_suspended(self) -> bool:
        return self._suspended

    @property
    def has_pending_frame(self) -> bool:
        return self._handle is not None and self._handle.is_pending

    @abstractmethod
    def _on_frame(self, timestamp_ms: float) -> None:
        """Advance the animation by one frame."""

    def _start_frames(self) -> None:
        self._release_handle()
        self._running = True
        self._last_frame_ms = self._scheduler.now_ms()
        if not self._suspended:
            self._acquire_handle()

    def _continue_frames(self) -> None:
        if self._running and not self._suspended and self._handle is not None:
            self._handle.schedule()

    def _stop_frames(self) -> None:
        self._running = False
        self._release_handle()

    def _frame_delta(self, timestamp_ms: float) -> float:
        delta = max(0.0, timestamp_ms - self._last_frame_ms)
        self._last_frame_ms = timestamp_ms
        return delta

    def _acquire_handle(self) -> None:
        self._release_handle()
        self._handle = AnimationHandle(self._scheduler, self._on_frame, name=self._name)
        self._handle.schedule()

    def _release_handle(self) -> None:
        if self._handle is not None:
            self._handle.release()
            self._handle = None

    def suspend(self) -> None:
        """Stop requesting frames while the view is hidden."""
        if self._suspended:
            return
        self._suspended = True
        self._release_handle()
        logger.debug(f"[{self._name.upper()}] suspended (running={self._running})")

    def resume(self) -> None:
        """Resume frames after the view becomes visible; hidden time is not counted."""
        if not self._suspended:
            return
        self._suspended = False
        self._last_frame_ms = self._scheduler.now_ms()
        if self._running:
            self._acquire_handle()
        logger.debug(f"[{self._name.upper()}] resumed (running={self._running})")

    def dispose(self) -> None:
        """Release the frame handle for good (host teardown)."""
        self._stop_frames()

    def __enter__(self) -> FrameDrivenAnimator:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.dispose()
