"""
Frame scheduling.

The host loop calls `FrameScheduler.dispatch` once per display refresh. At
most one frame is pending at a time; the frame callback requests the next
one when it wants to keep running.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable

from frogger.constants import FIRST_FRAME_MS, FRAME_SCALE_FACTOR, SCREEN_SCALE_FACTOR
from frogger.utils import logger


def screen_scale(width: float, height: float) -> float:
    return (width + height) / 2 * SCREEN_SCALE_FACTOR


def frame_scale(scale: float, rate_ms: float) -> float:
    """
    Motion multiplier for a frame that took `rate_ms` milliseconds.
    """
    return scale * rate_ms * FRAME_SCALE_FACTOR


def default_clock() -> float:
    return time.perf_counter() * 1000


@dataclass(frozen=True)
class Frame:
    count: int
    rate_ms: float
    timestamp: float
    scale: float


class CancelToken:
    """
    Shared flag checked before a pending frame runs.
    """

    def __init__(self):
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


FrameCallback = Callable[[Frame], None]


@dataclass
class _Pending:
    handle: int
    token: CancelToken
    callback: FrameCallback


class FrameScheduler:
    """
    Drives one callback per display refresh and measures frame timing.
    """

    def __init__(
        self,
        width: float,
        height: float,
        clock: Callable[[], float] = default_clock,
    ):
        self._clock = clock
        self._next_handle = 0
        self._pending: _Pending | None = None
        # no frame has run under the current token yet
        self._idle = True
        self.token = CancelToken()
        self.screen_scale = screen_scale(width, height)
        self.frame = self._first_frame(count=0)

    def _first_frame(self, count: int) -> Frame:
        return Frame(
            count=count,
            rate_ms=FIRST_FRAME_MS,
            timestamp=self._clock(),
            scale=frame_scale(self.screen_scale, FIRST_FRAME_MS),
        )

    @property
    def pending(self) -> bool:
        return self._pending is not None and not self._pending.token.cancelled

    def resize(self, width: float, height: float) -> None:
        self.screen_scale = screen_scale(width, height)

    def request_frame(self, callback: FrameCallback) -> int:
        """
        Schedule `callback` for the next dispatch, replacing any pending frame.

        :return: The frame handle, which becomes `Frame.count`
        :rtype: int
        """
        handle = self._next_handle
        self._next_handle += 1
        if self._idle:
            # time the first frame from its request, not from the last run
            self.frame = self._first_frame(count=self.frame.count)
            self._idle = False
        self._pending = _Pending(handle, self.token, callback)
        return handle

    def cancel_frame(self, handle: int | None = None) -> None:
        """
        Drop the pending frame. Safe to call repeatedly or with a stale handle.
        """
        if self._pending is None:
            return
        if handle is None or handle == self._pending.handle:
            logger.debug(f"Cancelled frame {self._pending.handle}")
            self._pending = None

    def cancel(self) -> None:
        """
        Cancel the current token: nothing requested under it will run.
        """
        self.token.cancel()
        self.cancel_frame()

    def restart(self) -> None:
        """
        Start a fresh token after `cancel`.
        """
        self.cancel()
        self.token = CancelToken()
        self._idle = True

    def dispatch(self) -> bool:
        """
        Run the pending frame, if any.

        :return: True when a callback ran
        :rtype: bool
        """
        pending = self._pending
        if pending is None:
            return False

        self._pending = None
        if pending.token.cancelled:
            return False

        now = self._clock()
        rate = now - self.frame.timestamp
        self.frame = Frame(
            count=pending.handle,
            rate_ms=rate,
            timestamp=now,
            scale=frame_scale(self.screen_scale, rate),
        )
        pending.callback(self.frame)
        return True
