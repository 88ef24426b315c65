"""
engine/
-------
Playback & judging layer.

    from engine import RaceSession, FrameScheduler, compare
"""

from engine.tracer    import TracerPhase, TracerState, advance, pause, resume, has_remaining, build_path_order
from engine.lane      import Lane
from engine.scheduler import FrameScheduler, TracerLoop
from engine.judge     import RunOutcome, compare
from engine.eventlog  import EventLog, LogLine, Notice
from engine.providers import HttpMazeProvider, HttpSolverProvider
from engine.session   import RaceSession

__all__ = [
    "TracerPhase",
    "TracerState",
    "advance",
    "pause",
    "resume",
    "has_remaining",
    "build_path_order",
    "Lane",
    "FrameScheduler",
    "TracerLoop",
    "RunOutcome",
    "compare",
    "EventLog",
    "LogLine",
    "Notice",
    "HttpMazeProvider",
    "HttpSolverProvider",
    "RaceSession",
]
