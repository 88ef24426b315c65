"""
tracer.py — Two-Phase Playback State Machine
==============================================
A tracer replays one finished run cell by cell: first the exploration
order, then the final path.  Every function here is pure — it takes a
TracerState and returns a new one — so the same rules serve the frame
loop, pause/resume and the tests.

State machine:
    EXPLORATION  →  advance() ×visited_len  →  PATH (index reset to 0)
    PATH         →  advance() ×path_len     →  PATH, inactive (frozen on last cell)
    any          →  pause()                 →  same phase/index, inactive
    inactive     →  resume()                →  active again, only if work remains

Edge cases:
    visited_len == 0 : the first advance goes straight to PATH.
    path_len    == 0 : unreachable goal — the first advance is terminal
                       ({PATH, 0, inactive}); nothing is raised.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Iterable

from grid import Cell


# ---------------------------------------------------------------------------
# Phases
# ---------------------------------------------------------------------------
class TracerPhase(Enum):
    EXPLORATION = "exploration"
    PATH        = "path"


# ---------------------------------------------------------------------------
# State
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class TracerState:
    """
    Attributes:
        phase  : EXPLORATION until the exploration replay is done, then PATH.
        index  : Cursor into visited (EXPLORATION) or path (PATH).
        active : False freezes phase and index without resetting them.
    """

    phase:  TracerPhase = TracerPhase.EXPLORATION
    index:  int         = 0
    active: bool        = False

    @classmethod
    def fresh(cls) -> "TracerState":
        """Initial state of every new run."""
        return cls(TracerPhase.EXPLORATION, 0, True)

    @classmethod
    def idle(cls) -> "TracerState":
        """State of a lane that has no run yet."""
        return cls(TracerPhase.EXPLORATION, 0, False)

    def to_dict(self) -> dict:
        return {"phase": self.phase.value, "index": self.index, "active": self.active}


# ---------------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------------
def advance(state: TracerState, visited_len: int, path_len: int) -> TracerState:
    """One frame of playback.  No-op on an inactive tracer."""
    if not state.active:
        return state

    if path_len <= 0:
        return TracerState(TracerPhase.PATH, 0, False)

    if state.phase is TracerPhase.EXPLORATION:
        index = state.index + 1
        if index >= visited_len:
            return TracerState(TracerPhase.PATH, 0, True)
        return replace(state, index=index)

    index = state.index + 1
    if index >= path_len:
        return TracerState(TracerPhase.PATH, max(0, path_len - 1), False)
    return replace(state, index=index)


def entered_path(before: TracerState, after: TracerState) -> bool:
    """True when a transition crossed the EXPLORATION → PATH boundary."""
    return before.phase is TracerPhase.EXPLORATION and after.phase is TracerPhase.PATH


def pause(state: TracerState) -> TracerState:
    if not state.active:
        return state
    return replace(state, active=False)


def has_remaining(state: TracerState, visited_len: int, path_len: int) -> bool:
    """Is there unconsumed animation left for resume() to play?"""
    if state.phase is TracerPhase.EXPLORATION:
        # an empty exploration still owes the path replay
        return state.index < visited_len or path_len > 0
    return state.index < path_len - 1


def resume(state: TracerState, visited_len: int, path_len: int) -> TracerState:
    if state.active or not has_remaining(state, visited_len, path_len):
        return state
    return replace(state, active=True)


def is_terminal(state: TracerState, path_len: int) -> bool:
    return (
        not state.active
        and state.phase is TracerPhase.PATH
        and state.index >= max(0, path_len - 1)
    )


# ---------------------------------------------------------------------------
# Path order index
# ---------------------------------------------------------------------------
def build_path_order(path: Iterable[Cell]) -> Dict[Cell, int]:
    """cell → rank along the path; only used to phase-shift the path pulse."""
    return {cell: i for i, cell in enumerate(path)}
