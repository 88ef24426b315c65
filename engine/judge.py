"""
judge.py — Run Comparator
===========================
Given the two finished runs, decide who gets the badges.

    outcome = compare(bfs_summary, astar_summary)
    outcome.fastest   # lower solver time
    outcome.winner    # fewer visited cells; time breaks the tie
    outcome.describe()

Tie policy: equal values always go to the first-listed run (`left`).
For `fastest` that falls out of a stable sort on elapsed time; for
`winner` it is the `<=` in the time comparison.  Both rankings are total,
so each is always exactly one of the two competitors.
"""

import logging
from dataclasses import dataclass
from typing import List

from algorithms import AlgoId, get_algorithm
from grid import ResultSummary

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# RunOutcome
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class RunOutcome:
    left:    ResultSummary
    right:   ResultSummary
    fastest: AlgoId
    winner:  AlgoId

    def badges(self, algo: AlgoId) -> List[str]:
        out = []
        if algo is self.fastest:
            out.append("Fastest")
        if algo is self.winner:
            out.append("Winner")
        return out

    def describe(self) -> str:
        """Winner banner, e.g. 'Winner: A* (visited: BFS 40 vs A* 25; …). …'"""
        l, r = self.left, self.right
        ll, rl = _label(l.algo), _label(r.algo)

        if l.path_length == r.path_length:
            lengths = f"Both shortest path length = {l.path_length}"
        else:
            lengths = f"{ll}={l.path_length}, {rl}={r.path_length}"

        return (
            f"Winner: {_label(self.winner)} "
            f"(visited: {ll} {l.visited_count} vs {rl} {r.visited_count}; "
            f"time: {ll} {l.elapsed_ms:.2f}ms vs {rl} {r.elapsed_ms:.2f}ms). "
            f"{lengths}."
        )

    def to_dict(self) -> dict:
        return {
            "fastest": self.fastest.value,
            "winner":  self.winner.value,
            "text":    self.describe(),
        }


# ---------------------------------------------------------------------------
# Rankings
# ---------------------------------------------------------------------------
def fastest_of(left: ResultSummary, right: ResultSummary) -> AlgoId:
    ranked = sorted((left, right), key=lambda s: s.elapsed_ms)
    return ranked[0].algo


def winner_of(left: ResultSummary, right: ResultSummary) -> AlgoId:
    if left.visited_count != right.visited_count:
        return left.algo if left.visited_count < right.visited_count else right.algo
    return left.algo if left.elapsed_ms <= right.elapsed_ms else right.algo


def compare(left: ResultSummary, right: ResultSummary) -> RunOutcome:
    if left.algo is right.algo:
        raise ValueError(f"cannot judge {left.algo.value} against itself")
    outcome = RunOutcome(
        left=left,
        right=right,
        fastest=fastest_of(left, right),
        winner=winner_of(left, right),
    )
    logger.info("judged: fastest=%s winner=%s", outcome.fastest.value, outcome.winner.value)
    return outcome


def _label(algo: AlgoId) -> str:
    info = get_algorithm(algo)
    return info.label if info else algo.value
