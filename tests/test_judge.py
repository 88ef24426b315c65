import itertools

import pytest

from algorithms import AlgoId
from engine.judge import compare, fastest_of, winner_of
from grid import ResultSummary

BFS, ASTAR = AlgoId.BFS, AlgoId.ASTAR


def summary(algo, visited, time_ms, path_length=10):
    return ResultSummary(algo=algo, elapsed_ms=time_ms, visited_count=visited, path_length=path_length)


def test_fewer_visited_wins_even_when_slower():
    outcome = compare(summary(BFS, 40, 5.0), summary(ASTAR, 25, 7.0))
    assert outcome.winner is ASTAR
    assert outcome.fastest is BFS


def test_full_tie_goes_to_first_listed():
    outcome = compare(summary(BFS, 10, 3.0), summary(ASTAR, 10, 3.0))
    assert outcome.winner is BFS
    assert outcome.fastest is BFS

    flipped = compare(summary(ASTAR, 10, 3.0), summary(BFS, 10, 3.0))
    assert flipped.winner is ASTAR
    assert flipped.fastest is ASTAR


def test_equal_visited_is_broken_by_time():
    assert winner_of(summary(BFS, 10, 4.0), summary(ASTAR, 10, 3.0)) is ASTAR
    assert winner_of(summary(BFS, 10, 2.0), summary(ASTAR, 10, 3.0)) is BFS


@pytest.mark.parametrize("lv,rv,lt,rt", list(itertools.product([0, 5], [0, 5], [0.0, 1.5], [0.0, 1.5])))
def test_rankings_are_total(lv, rv, lt, rt):
    outcome = compare(summary(BFS, lv, lt), summary(ASTAR, rv, rt))
    assert outcome.winner in (BFS, ASTAR)
    assert outcome.fastest in (BFS, ASTAR)
    assert outcome.fastest is fastest_of(summary(BFS, lv, lt), summary(ASTAR, rv, rt))


def test_badges():
    outcome = compare(summary(BFS, 40, 5.0), summary(ASTAR, 25, 7.0))
    assert outcome.badges(BFS) == ["Fastest"]
    assert outcome.badges(ASTAR) == ["Winner"]

    sweep = compare(summary(BFS, 10, 1.0), summary(ASTAR, 25, 7.0))
    assert sweep.badges(BFS) == ["Fastest", "Winner"]
    assert sweep.badges(ASTAR) == []


def test_describe_same_length():
    outcome = compare(summary(BFS, 40, 5.0, 12), summary(ASTAR, 25, 7.0, 12))
    assert outcome.describe() == (
        "Winner: A* (visited: BFS 40 vs A* 25; time: BFS 5.00ms vs A* 7.00ms). "
        "Both shortest path length = 12."
    )


def test_describe_different_lengths():
    outcome = compare(summary(BFS, 40, 5.0, 12), summary(ASTAR, 25, 7.0, 14))
    assert outcome.describe().endswith("BFS=12, A*=14.")
    assert outcome.to_dict()["winner"] == "astar"


def test_same_algorithm_twice_is_rejected():
    with pytest.raises(ValueError):
        compare(summary(BFS, 1, 1.0), summary(BFS, 2, 2.0))
