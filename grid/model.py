"""
model.py — GridModel
=====================
The maze both competitors run on.  Produced by the external maze
provider, parsed once, and never touched again: a new "generate"
replaces it wholesale.

Payload shape (GET /api/generate):

    {
      "rows": 25, "cols": 38,
      "maze": [[1, 1, 0, ...], ...],     # 1 = wall, 0 = open
      "start": {"x": 1, "y": 1},
      "goal":  {"x": 23, "y": 36}
    }

Extra keys (the provider also echoes the last solve) are ignored.
"""

from dataclasses import dataclass
from typing import Any, Iterator, Tuple

from errors import PayloadError
from grid.cell import Cell


@dataclass(frozen=True)
class GridModel:
    """
    Attributes:
        rows, cols : Grid dimensions (both ≥ 1).
        blocked    : rows × cols tuple-of-tuples, True for wall cells.
        start      : Start cell (drawn green).
        goal       : Goal cell (drawn red).
    """

    rows:    int
    cols:    int
    blocked: Tuple[Tuple[bool, ...], ...]
    start:   Cell
    goal:    Cell

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def in_bounds(self, cell: Cell) -> bool:
        return 0 <= cell.x < self.rows and 0 <= cell.y < self.cols

    def is_blocked(self, cell: Cell) -> bool:
        return self.blocked[cell.x][cell.y]

    def cells(self) -> Iterator[Tuple[Cell, bool]]:
        """Yield (cell, blocked) in row-major order."""
        for r in range(self.rows):
            for c in range(self.cols):
                cell = Cell(r, c)
                yield cell, self.is_blocked(cell)

    def wall_count(self) -> int:
        return sum(sum(1 for w in row if w) for row in self.blocked)

    @classmethod
    def from_dict(cls, data: Any) -> "GridModel":
        """Validate a provider payload.  Raises PayloadError on any shape problem."""
        if not isinstance(data, dict):
            raise PayloadError("<root>", f"expected an object, got {type(data).__name__}")

        rows = _positive_int(data, "rows")
        cols = _positive_int(data, "cols")

        maze = data.get("maze")
        if not isinstance(maze, list) or len(maze) != rows:
            raise PayloadError("maze", f"expected {rows} rows")

        blocked = []
        for r, row in enumerate(maze):
            if not isinstance(row, list) or len(row) != cols:
                raise PayloadError(f"maze[{r}]", f"expected {cols} columns")
            blocked.append(tuple(v == 1 for v in row))

        start = Cell.from_dict(data.get("start"), "start")
        goal  = Cell.from_dict(data.get("goal"), "goal")

        grid = cls(rows=rows, cols=cols, blocked=tuple(blocked), start=start, goal=goal)
        for name, cell in (("start", start), ("goal", goal)):
            if not grid.in_bounds(cell):
                raise PayloadError(name, f"{tuple(cell)} lies outside a {rows}x{cols} grid")
        return grid

    def __repr__(self) -> str:
        return f"GridModel({self.rows}x{self.cols}, start={tuple(self.start)}, goal={tuple(self.goal)})"


def _positive_int(data: dict, key: str) -> int:
    v = data.get(key)
    if not isinstance(v, int) or isinstance(v, bool) or v < 1:
        raise PayloadError(key, f"expected a positive integer, got {v!r}")
    return v
