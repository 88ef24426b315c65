
from algorithms import AlgoId
from errors import TransportFailure
from grid import Cell, GridModel, ResultSummary


def make_grid(rows=5, cols=6):
    blocked = tuple(
        tuple(r in (0, rows - 1) or c in (0, cols - 1) for c in range(cols))
        for r in range(rows)
    )
    return GridModel(rows=rows, cols=cols, blocked=blocked, start=Cell(1, 1), goal=Cell(rows - 2, cols - 2))


def make_summary(algo, visited=4, path=3, elapsed_ms=1.0, visited_count=None, path_length=None):
    vis = tuple(Cell(1, 1 + i % 4) for i in range(visited))
    pth = tuple(Cell(1 + i % 3, 1) for i in range(path))
    return ResultSummary(
        algo=algo,
        visited=vis,
        path=pth,
        elapsed_ms=elapsed_ms,
        visited_count=visited if visited_count is None else visited_count,
        path_length=path if path_length is None else path_length,
    )


class FakeMazeProvider:
    def __init__(self, grid=None):
        self.grid = grid or make_grid()
        self.fail = False
        self.calls = 0

    def fetch_grid(self):
        self.calls += 1
        if self.fail:
            raise TransportFailure("maze server offline")
        return self.grid


class FakeSolverProvider:
    def __init__(self, results=None):
        self.results = results or {
            AlgoId.BFS:   make_summary(AlgoId.BFS, visited=6, path=3, elapsed_ms=5.0),
            AlgoId.ASTAR: make_summary(AlgoId.ASTAR, visited=4, path=3, elapsed_ms=7.0),
        }
        self.failing = set()

    def solve(self, algo):
        if algo in self.failing:
            raise TransportFailure(f"{algo.value} solver offline")
        return self.results[algo]


