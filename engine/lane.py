from dataclasses import dataclass, field
from typing import Dict, Optional

from algorithms import AlgoInfo
from engine.tracer import TracerState, build_path_order
from grid import Cell, ResultSummary


@dataclass
class Lane:
    """
    One competitor's slot in the session.

    Attributes:
        info       : Registry card (label, colour, solver endpoint).
        summary    : Latest solver result, None until the first successful start.
        path_order : cell → rank along summary.path.
        state      : Tracer state; only the session and this lane's loop write it.
        frame      : Last SVG rendered for this lane ("" before the first frame).
    """

    info:       AlgoInfo
    summary:    Optional[ResultSummary] = None
    path_order: Dict[Cell, int]         = field(default_factory=dict)
    state:      TracerState             = field(default_factory=TracerState.idle)
    frame:      str                     = ""

    @property
    def visited_len(self) -> int:
        return len(self.summary.visited) if self.summary else 0

    @property
    def path_len(self) -> int:
        return len(self.summary.path) if self.summary else 0

    def load(self, summary: ResultSummary) -> None:
        """Arm the lane for a new run."""
        self.summary = summary
        self.path_order = build_path_order(summary.path)
        self.state = TracerState.fresh()
        self.frame = ""

    def reset(self) -> None:
        self.summary = None
        self.path_order = {}
        self.state = TracerState.idle()
        self.frame = ""
