"""
result.py — ResultSummary
==========================
What one solver call reports about one algorithm's run on the current
maze.  Received once per run and never mutated; the next "start"
replaces it.

Payload shape (GET /api/solve/<BFS|AStar>):

    {
      "visitedOrder": [{"x": 1, "y": 1}, ...],   # exploration order, as discovered
      "path":         [{"x": 1, "y": 1}, ...],   # start → goal
      "timeMs":       0.84,
      "visitedNodes": 412,
      "pathLength":   71
    }

Numeric fields that are missing, non-numeric, NaN/inf or negative are
read as 0 so nothing undefined ever reaches the judge's arithmetic.
Missing lists are read as empty — an unreachable goal is a normal result.
"""

import math
from dataclasses import dataclass
from typing import Any, Tuple

from algorithms import AlgoId
from errors import PayloadError
from grid.cell import Cell


@dataclass(frozen=True)
class ResultSummary:
    """
    Attributes:
        algo          : Which competitor produced this run.
        visited       : Cells in the order the search visited them.
        path          : Final path cells, start → goal (empty = unreachable).
        elapsed_ms    : Solver wall time in milliseconds.
        visited_count : Cells the solver reports as visited.
        path_length   : Path length the solver reports.
    """

    algo:          AlgoId
    visited:       Tuple[Cell, ...] = ()
    path:          Tuple[Cell, ...] = ()
    elapsed_ms:    float = 0.0
    visited_count: int   = 0
    path_length:   int   = 0

    @property
    def path_found(self) -> bool:
        return bool(self.path)

    @classmethod
    def from_dict(cls, algo: AlgoId, data: Any) -> "ResultSummary":
        if not isinstance(data, dict):
            raise PayloadError("<root>", f"expected an object, got {type(data).__name__}")
        return cls(
            algo=algo,
            visited=_cells(data, "visitedOrder"),
            path=_cells(data, "path"),
            elapsed_ms=float(_number(data.get("timeMs"))),
            visited_count=int(_number(data.get("visitedNodes"))),
            path_length=int(_number(data.get("pathLength"))),
        )


def _number(v: Any) -> float:
    """Coerce a payload number, defaulting anything unusable to 0."""
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        return 0
    if not math.isfinite(v) or v < 0:
        return 0
    return v


def _cells(data: dict, key: str) -> Tuple[Cell, ...]:
    raw = data.get(key)
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise PayloadError(key, f"expected a list of cells, got {type(raw).__name__}")
    return tuple(Cell.from_dict(item, f"{key}[{i}]") for i, item in enumerate(raw))
