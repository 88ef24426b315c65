"""
session.py — Race Session (Control Surface)
=============================================
The ONLY object the web layer talks to.  It owns the maze, one Lane per
competitor, the frame scheduler and the run log, and exposes four
commands:

    generate()  fetch a new maze; on success wipe every lane
    start()     fetch both results concurrently; on success arm both lanes,
                judge them and start both animation loops
    stop()      freeze every tracer where it is and cancel every loop
    resume()    restart loops for the tracers that still have work left

plus tick() for the host to run one animation frame, and frames() to
redraw the current state without advancing anything.

Failure policy:
  A command that fails raises (TransportFailure / IncompletePair /
  NoGridError) AFTER writing the log line and the notice, and leaves
  every lane exactly as it was.  Both solver calls must succeed for a
  start to count.

Thread safety:
  Only the two solver HTTP calls run off-thread, and they only return
  values; all state below is mutated on the caller's thread once both
  calls have finished.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, List, Optional

from algorithms import AlgoId, list_algorithms
from engine import tracer
from engine.eventlog import EventLog
from engine.judge import RunOutcome, compare
from engine.lane import Lane
from engine.scheduler import FrameScheduler, TracerLoop
from errors import IncompletePair, NoGridError, TransportFailure
from grid import GridModel, ResultSummary

logger = logging.getLogger(__name__)

Renderer = Callable[[Optional[GridModel], Lane, float], str]

PAUSE_NOTICE_MS = 1500


class RaceSession:
    """
    Attributes:
        grid    : Current maze, None until the first successful generate().
        lanes   : AlgoId → Lane, in registry order (BFS first).
        outcome : Judge's verdict for the current run, or None.
        paused  : True between stop() and the next resume()/start().
        log     : EventLog shown in the page's log panel.
    """

    def __init__(
        self,
        maze_provider,
        solver_provider,
        renderer: Renderer,
        scheduler: Optional[FrameScheduler] = None,
        event_log: Optional[EventLog] = None,
    ):
        self.maze_provider   = maze_provider
        self.solver_provider = solver_provider
        self.renderer        = renderer
        self.scheduler       = scheduler or FrameScheduler()
        self.log             = event_log or EventLog()

        self.grid:    Optional[GridModel]  = None
        self.outcome: Optional[RunOutcome] = None
        self.winner_text: str = ""
        self.paused:  bool = False

        self.lanes: Dict[AlgoId, Lane] = {info.key: Lane(info) for info in list_algorithms()}
        self.loops: Dict[AlgoId, TracerLoop] = {
            key: TracerLoop(self.scheduler, lane, self._render, self._exploration_done)
            for key, lane in self.lanes.items()
        }

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def generate(self) -> GridModel:
        try:
            grid = self.maze_provider.fetch_grid()
        except TransportFailure:
            self.log.notify("Server offline?")
            self.log.append("Error: could not generate maze (server offline?)", logging.WARNING)
            raise

        self._cancel_loops()
        self.grid = grid
        for lane in self.lanes.values():
            lane.reset()
        self.outcome = None
        self.winner_text = ""
        self.paused = False

        self.log.notify("New maze generated")
        self.log.append(f"Maze generated: {grid.rows}x{grid.cols}")
        return grid

    def start(self) -> RunOutcome:
        if self.grid is None:
            self.log.notify("Generate maze first")
            raise NoGridError()

        self.log.append("Run started: " + " vs ".join(l.info.label for l in self.lanes.values()) + " on current maze")
        try:
            summaries = self._solve_all()
        except TransportFailure:
            self.log.notify("Error running algorithms")
            self.log.append("Error running algorithms", logging.WARNING)
            raise

        self._cancel_loops()
        for key, summary in summaries.items():
            lane = self.lanes[key]
            lane.load(summary)
            self.log.append(
                f"{lane.info.label}: visited={summary.visited_count}, "
                f"pathLen={summary.path_length}, time={summary.elapsed_ms:.2f}ms"
            )

        left, right = (summaries[key] for key in self.lanes)
        self.outcome = compare(left, right)
        self.winner_text = self.outcome.describe()
        self.log.append(self.winner_text)

        self.paused = False
        for loop in self.loops.values():
            loop.start()
        self.log.notify("Algorithms Running...")
        return self.outcome

    def stop(self) -> None:
        self._cancel_loops()
        for lane in self.lanes.values():
            lane.state = tracer.pause(lane.state)
        self.paused = True
        self.log.notify("Animations paused", PAUSE_NOTICE_MS)
        self.log.append("Animations paused by user")

    def resume(self) -> List[AlgoId]:
        """Returns the competitors whose animation was restarted."""
        resumed = []
        for key, lane in self.lanes.items():
            state = tracer.resume(lane.state, lane.visited_len, lane.path_len)
            if not state.active:
                continue
            lane.state = state
            self.loops[key].start()
            resumed.append(key)
        self.paused = False
        self.log.notify("Animations resumed", PAUSE_NOTICE_MS)
        self.log.append("Animations resumed")
        return resumed

    def clear_log(self) -> None:
        self.log.clear()
        self.winner_text = ""

    # ------------------------------------------------------------------
    # Frames
    # ------------------------------------------------------------------
    def tick(self, now_ms: Optional[float] = None) -> Dict[AlgoId, str]:
        """Run one frame; return the current SVG of every lane."""
        if now_ms is None:
            now_ms = self.scheduler.clock()
        self.scheduler.run_frame(now_ms)
        frames = {}
        for key, lane in self.lanes.items():
            if not self.loops[key].running or not lane.frame:
                # no live loop: draw the frozen state directly
                lane.frame = self._render(lane, now_ms)
            frames[key] = lane.frame
        return frames

    def frames(self, now_ms: Optional[float] = None) -> Dict[AlgoId, str]:
        """The current SVG of every lane; never runs a frame."""
        if now_ms is None:
            now_ms = self.scheduler.clock()
        frames = {}
        for key, lane in self.lanes.items():
            if self.loops[key].running and lane.frame:
                frames[key] = lane.frame
            else:
                frames[key] = self._render(lane, now_ms)
        return frames

    @property
    def animating(self) -> bool:
        return any(loop.running for loop in self.loops.values())

    # ------------------------------------------------------------------
    # Snapshot for the page (delivers the pending notice once)
    # ------------------------------------------------------------------
    def snapshot(self) -> dict:
        lanes = {}
        for key, lane in self.lanes.items():
            s = lane.summary
            lanes[key.value] = {
                "label":   lane.info.label,
                "tracer":  lane.state.to_dict(),
                "running": self.loops[key].running,
                "finished": s is not None and tracer.is_terminal(lane.state, lane.path_len),
                "stats": None if s is None else {
                    "time_ms":     s.elapsed_ms,
                    "visited":     s.visited_count,
                    "path_length": s.path_length,
                    "path_found":  s.path_found,
                },
                "badges": self.outcome.badges(key) if self.outcome else [],
            }
        notice = self.log.pop_notice()
        return {
            "has_grid":  self.grid is not None,
            "grid":      None if self.grid is None else {
                "rows":  self.grid.rows,
                "cols":  self.grid.cols,
                "walls": self.grid.wall_count(),
            },
            "frame":     self.scheduler.frame_count,
            "lanes":     lanes,
            "winner":    self.outcome.to_dict() if self.outcome else None,
            "winner_text": self.winner_text,
            "paused":    self.paused,
            "animating": self.animating,
            "log":       self.log.to_list(),
            "notice":    notice.to_dict() if notice else None,
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _solve_all(self) -> Dict[AlgoId, ResultSummary]:
        keys = list(self.lanes)
        with ThreadPoolExecutor(max_workers=len(keys), thread_name_prefix="solve") as pool:
            futures = {key: pool.submit(self.solver_provider.solve, key) for key in keys}

        results: Dict[AlgoId, ResultSummary] = {}
        failures: Dict[AlgoId, BaseException] = {}
        for key, fut in futures.items():
            exc = fut.exception()
            if exc is None:
                results[key] = fut.result()
            elif isinstance(exc, TransportFailure):
                logger.warning("%s solve failed: %s", self.lanes[key].info.label, exc)
                failures[key] = exc
            else:
                raise exc

        if not failures:
            return results
        if results:
            failed = next(iter(failures))
            raise IncompletePair(failed, failures[failed])
        first = next(iter(failures.values()))
        raise TransportFailure(f"all solver calls failed: {first}") from first

    def _cancel_loops(self) -> None:
        for loop in self.loops.values():
            loop.cancel()

    def _render(self, lane: Lane, now_ms: float) -> str:
        return self.renderer(self.grid, lane, now_ms)

    def _exploration_done(self, lane: Lane) -> None:
        self.log.append(f"{lane.info.label}: Exploration complete, showing optimal path...")
