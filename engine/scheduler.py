"""
scheduler.py — Frame Scheduler
================================
A single-threaded tick list that stands in for the browser's
requestAnimationFrame: callbacks ask to run on the *next* frame, the
host calls run_frame() once per frame, and a callback that wants to keep
animating must ask again.

    sched = FrameScheduler()
    token = sched.request_frame(callback)   # callback(now_ms)
    sched.cancel_frame(token)               # never runs, even mid-frame
    sched.run_frame()                       # host: once per frame

TracerLoop builds the per-algorithm animation on top of it:

    advance tracer → render → request next frame → (yield to host)

Each loop remembers the token of its one outstanding frame.  start()
cancels that token before issuing a new one, and a callback whose token
is no longer current returns without touching anything, so a new start
can never race a step that was already queued.

Thread safety:
  NOT thread-safe, by design of the host: every call must come from the
  one thread that owns the session (the Flask app runs unthreaded).
"""

import logging
import time
from typing import Callable, Dict, Optional

from engine import tracer
from engine.lane import Lane

logger = logging.getLogger(__name__)

FrameCallback = Callable[[float], None]


def wall_clock_ms() -> float:
    return time.time() * 1000.0


# ---------------------------------------------------------------------------
# FrameScheduler
# ---------------------------------------------------------------------------
class FrameScheduler:
    """
    Attributes:
        frame_count : Number of frames run so far.
        clock       : Zero-arg callable returning "now" in milliseconds.
    """

    def __init__(self, clock: Callable[[], float] = wall_clock_ms):
        self.clock = clock
        self.frame_count: int = 0

        self._next_token: int = 1
        self._pending:  Dict[int, FrameCallback] = {}
        self._running:  Dict[int, FrameCallback] = {}

    def request_frame(self, callback: FrameCallback) -> int:
        token = self._next_token
        self._next_token += 1
        self._pending[token] = callback
        return token

    def cancel_frame(self, token: Optional[int]) -> None:
        if token is None:
            return
        self._pending.pop(token, None)
        # also drop it from the frame in progress, if it has not run yet
        self._running.pop(token, None)

    def run_frame(self, now_ms: Optional[float] = None) -> int:
        """Run every callback queued before this call.  Returns how many ran."""
        if now_ms is None:
            now_ms = self.clock()

        self._running, self._pending = self._pending, {}
        ran = 0
        try:
            for token in sorted(self._running):
                callback = self._running.pop(token, None)
                if callback is None:
                    continue        # cancelled earlier in this frame
                callback(now_ms)
                ran += 1
        finally:
            # an exception in one callback must not strand the rest as "running"
            self._pending.update(self._running)
            self._running = {}
        self.frame_count += 1
        return ran

    @property
    def pending(self) -> int:
        return len(self._pending)

    def is_pending(self, token: Optional[int]) -> bool:
        return token is not None and (token in self._pending or token in self._running)


# ---------------------------------------------------------------------------
# TracerLoop — one self-rescheduling animation per lane
# ---------------------------------------------------------------------------
class TracerLoop:
    """
    Attributes:
        lane      : The lane this loop animates.
        render    : render(lane, now_ms) → SVG; stored on lane.frame.
        on_path   : Called once when the tracer leaves the exploration phase.
    """

    def __init__(
        self,
        scheduler: FrameScheduler,
        lane: Lane,
        render: Callable[[Lane, float], str],
        on_path: Optional[Callable[[Lane], None]] = None,
    ):
        self.scheduler = scheduler
        self.lane      = lane
        self.render    = render
        self.on_path   = on_path

        self._token: Optional[int] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self) -> None:
        """(Re)arm the loop; any previously queued frame is invalidated."""
        self.cancel()
        self._schedule()
        logger.debug("%s loop armed (token %s)", self.lane.info.label, self._token)

    def cancel(self) -> None:
        if self._token is not None:
            self.scheduler.cancel_frame(self._token)
            self._token = None

    @property
    def running(self) -> bool:
        return self.scheduler.is_pending(self._token)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _schedule(self) -> None:
        token_box = {}

        def frame(now_ms: float) -> None:
            self._step(token_box["token"], now_ms)

        token_box["token"] = self._token = self.scheduler.request_frame(frame)

    def _step(self, token: int, now_ms: float) -> None:
        if token != self._token:
            return      # stale: superseded by start() or cancel()

        lane = self.lane
        try:
            before = lane.state
            lane.state = tracer.advance(before, lane.visited_len, lane.path_len)
            if tracer.entered_path(before, lane.state) and self.on_path:
                self.on_path(lane)
            lane.frame = self.render(lane, now_ms)
        except Exception:
            # the loop is dead; do not report it as running
            self._token = None
            raise
        self._schedule()
