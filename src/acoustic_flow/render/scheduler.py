"""Frame schedulers that drive the render loop.

A scheduler runs one callback per requested frame and can cancel a
request that has not run yet. The renderer requests the next frame at the
end of each frame, so exactly one request is pending while it runs.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

FrameCallback = Callable[[], None]


class FrameScheduler(ABC):
    """Host scheduler for the render loop."""

    @abstractmethod
    def request_frame(self, callback: FrameCallback) -> Any:
        """Schedule callback for the next frame and return a cancel handle."""

    @abstractmethod
    def cancel_frame(self, handle: Any) -> None:
        """Cancel a pending request. Unknown or spent handles are ignored."""


class ManualScheduler(FrameScheduler):
    """Scheduler advanced explicitly by the caller.

    Used for headless export and in tests: nothing runs until
    :meth:`run_pending` is called.

    Example:
        >>> scheduler = ManualScheduler()
        >>> renderer = WavefieldRenderer(scheduler=scheduler)
        >>> renderer.start(surface, state)
        >>> scheduler.run(10)  # draw ten frames
        10
    """

    def __init__(self):
        self._pending: dict[int, FrameCallback] = {}
        self._next_handle = 0

    @property
    def pending(self) -> int:
        """Number of requests waiting to run."""
        return len(self._pending)

    def request_frame(self, callback: FrameCallback) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: Any) -> None:
        self._pending.pop(handle, None)

    def run_pending(self) -> int:
        """Run the requests queued so far.

        Requests made by the callbacks themselves wait for the next call.

        Returns:
            Number of callbacks run
        """
        batch = list(self._pending)
        ran = 0
        for handle in batch:
            callback = self._pending.pop(handle, None)
            if callback is None:
                continue
            callback()
            ran += 1
        return ran

    def run(self, frames: int) -> int:
        """Run up to ``frames`` rounds, stopping early when nothing is pending.

        Returns:
            Number of rounds that ran at least one callback
        """
        rounds = 0
        for _ in range(frames):
            if not self.run_pending():
                break
            rounds += 1
        return rounds


class MatplotlibTimerScheduler(FrameScheduler):
    """Scheduler backed by single-shot timers of a matplotlib canvas.

    The GUI event loop of the figure's backend fires the timers, so frames
    are only produced while that loop runs (e.g. inside ``plt.show()``).

    Args:
        canvas: Figure canvas providing ``new_timer``
        interval_ms: Delay between frames in milliseconds
    """

    def __init__(self, canvas, interval_ms: int = 16):
        self.canvas = canvas
        self.interval_ms = interval_ms

    def request_frame(self, callback: FrameCallback):
        timer = self.canvas.new_timer(interval=self.interval_ms)
        timer.single_shot = True
        timer.add_callback(callback)
        timer.start()
        return timer

    def cancel_frame(self, handle: Any) -> None:
        if handle is None:
            return
        handle.stop()
        handle.callbacks.clear()
