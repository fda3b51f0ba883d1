from __future__ import annotations

from typing import Callable

from .categories import round_half_up
from .scheduler import Scheduler, TimerHandle


def ease_out_cubic(progress: float) -> float:
    progress = min(max(progress, 0.0), 1.0)
    return 1 - (1 - progress) ** 3


MIN_SEGMENT_FRAMES = 3


class ScoreAnimator:
    """Eases a displayed score toward the latest computed score.

    Retargeting mid-flight starts from the value currently on screen and
    finishes inside the time left in the running animation, but never in
    fewer than MIN_SEGMENT_FRAMES frames.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        duration: float = 0.5,
        frame_interval: float = 0.016,
        initial: int = 0,
        on_frame: Callable[[int], None] | None = None,
    ):
        self._scheduler = scheduler
        self._duration = duration
        self._frame_interval = frame_interval
        self._on_frame = on_frame
        self._displayed = initial
        self._target = initial
        self._start_value = initial
        self._start_time = 0.0
        self._segment = duration
        self._deadline = 0.0
        self._timer: TimerHandle | None = None

    @property
    def displayed(self) -> int:
        return self._displayed

    @property
    def target(self) -> int:
        return self._target

    @property
    def running(self) -> bool:
        return self._timer is not None

    def retarget(self, target: int) -> None:
        now = self._scheduler.now()
        remaining = self._deadline - now if self.running else 0.0
        self._cancel()
        self._target = target
        if self._displayed == target:
            return

        self._start_value = self._displayed
        self._start_time = now
        if remaining > 0:
            self._segment = max(remaining, MIN_SEGMENT_FRAMES * self._frame_interval)
        else:
            self._segment = self._duration
        self._deadline = now + self._segment
        self._tick()

    def stop(self) -> None:
        self._cancel()

    def _cancel(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _tick(self) -> None:
        self._timer = None
        elapsed = self._scheduler.now() - self._start_time
        progress = 1.0 if self._segment <= 0 else min(elapsed / self._segment, 1.0)
        eased = ease_out_cubic(progress)
        value = round_half_up(self._start_value + (self._target - self._start_value) * eased)
        if value != self._displayed:
            self._displayed = value
            if self._on_frame is not None:
                self._on_frame(value)
        if progress < 1.0:
            self._timer = self._scheduler.call_later(self._frame_interval, self._tick)
