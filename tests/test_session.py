import pytest

from algorithms import AlgoId
from engine.tracer import TracerPhase, TracerState
from errors import IncompletePair, NoGridError, TransportFailure

from helpers import make_summary

BFS, ASTAR = AlgoId.BFS, AlgoId.ASTAR


def messages(race):
    return [line.message for line in race.log.lines]


def states(race):
    return {key: lane.state for key, lane in race.lanes.items()}


def test_lanes_follow_registry_order(race):
    assert list(race.lanes) == [BFS, ASTAR]
    assert all(lane.state == TracerState.idle() for lane in race.lanes.values())


def test_start_requires_a_grid(race):
    with pytest.raises(NoGridError):
        race.start()
    assert race.log.pop_notice().message == "Generate maze first"
    assert not race.animating


def test_generate_failure_keeps_previous_state(race, maze_provider):
    race.generate()
    race.start()
    race.tick(0)
    before = (race.grid, states(race), race.outcome)

    maze_provider.fail = True
    with pytest.raises(TransportFailure):
        race.generate()
    assert (race.grid, states(race), race.outcome) == before
    assert race.animating
    assert race.log.pop_notice().message == "Server offline?"


def test_generate_resets_everything(race):
    race.generate()
    race.start()
    race.tick(0)
    race.generate()
    assert race.outcome is None and race.winner_text == ""
    assert not race.animating
    for lane in race.lanes.values():
        assert lane.summary is None and lane.path_order == {}
        assert lane.state == TracerState.idle()
    assert messages(race)[-1] == "Maze generated: 5x6"


def test_start_arms_both_lanes_and_judges(race):
    race.generate()
    outcome = race.start()
    assert outcome.winner is ASTAR      # 4 visited vs 6
    assert outcome.fastest is BFS       # 5.0ms vs 7.0ms
    for lane in race.lanes.values():
        assert lane.state == TracerState.fresh()
        assert lane.path_order == {c: i for i, c in enumerate(lane.summary.path)}
    assert race.animating
    assert race.winner_text.startswith("Winner: A*")
    assert "BFS: visited=6, pathLen=3, time=5.00ms" in messages(race)


@pytest.mark.parametrize("failing,error", [
    ({ASTAR}, IncompletePair),
    ({BFS}, IncompletePair),
    ({BFS, ASTAR}, TransportFailure),
])
def test_start_failure_arms_nothing(race, solver_provider, failing, error):
    race.generate()
    solver_provider.failing = failing
    with pytest.raises(error) as info:
        race.start()
    if error is IncompletePair:
        assert info.value.failed in failing
    assert not race.animating
    assert race.outcome is None
    assert all(lane.summary is None for lane in race.lanes.values())
    assert "Error running algorithms" in messages(race)


def test_failed_restart_keeps_running_animation(race, solver_provider):
    race.generate()
    race.start()
    race.tick(0)
    before = states(race)

    solver_provider.failing = {ASTAR}
    with pytest.raises(IncompletePair):
        race.start()
    assert states(race) == before
    assert race.animating


def test_tick_advances_both_lanes(race):
    race.generate()
    race.start()
    frames = race.tick(0)
    assert set(frames) == {BFS, ASTAR}
    assert all(svg.startswith("<svg") for svg in frames.values())
    assert all(lane.state.index == 1 for lane in race.lanes.values())


def test_stop_freezes_and_resume_continues(race):
    race.generate()
    race.start()
    for t in range(2):
        race.tick(t)
    frozen = states(race)

    race.stop()
    race.stop()
    assert not race.animating and race.paused
    for key, lane in race.lanes.items():
        assert (lane.state.phase, lane.state.index) == (frozen[key].phase, frozen[key].index)
        assert not lane.state.active

    # frames while paused render but do not advance
    race.tick(10)
    assert {k: (s.phase, s.index) for k, s in states(race).items()} == \
           {k: (s.phase, s.index) for k, s in frozen.items()}

    assert race.resume() == [BFS, ASTAR]
    assert not race.paused
    race.tick(20)
    for key, lane in race.lanes.items():
        assert lane.state.index == frozen[key].index + 1


def test_resume_skips_finished_lanes(race, solver_provider):
    solver_provider.results[BFS] = make_summary(BFS, visited=1, path=1, elapsed_ms=1.0)
    solver_provider.results[ASTAR] = make_summary(ASTAR, visited=30, path=5, elapsed_ms=1.0)
    race.generate()
    race.start()
    for t in range(5):
        race.tick(t)
    assert race.lanes[BFS].state == TracerState(TracerPhase.PATH, 0, False)

    race.stop()
    assert race.resume() == [ASTAR]
    assert not race.loops[BFS].running and race.loops[ASTAR].running
    assert not race.lanes[BFS].state.active


def test_exploration_complete_is_logged(race, solver_provider):
    solver_provider.results[BFS] = make_summary(BFS, visited=2, path=2)
    race.generate()
    race.start()
    for t in range(3):
        race.tick(t)
    assert messages(race).count("BFS: Exploration complete, showing optimal path...") == 1


def test_snapshot(race):
    race.generate()
    race.start()
    race.tick(0)
    snap = race.snapshot()
    assert snap["has_grid"] and snap["animating"] and not snap["paused"]
    assert snap["lanes"]["bfs"]["badges"] == ["Fastest"]
    assert snap["lanes"]["astar"]["badges"] == ["Winner"]
    assert snap["lanes"]["bfs"]["stats"] == {"time_ms": 5.0, "visited": 6, "path_length": 3}
    assert snap["lanes"]["astar"]["tracer"] == {"phase": "exploration", "index": 1, "active": True}
    assert snap["winner"]["winner"] == "astar"
    assert snap["notice"] == {"message": "Algorithms Running...", "duration_ms": 1000}
    # notices are delivered once
    assert race.snapshot()["notice"] is None


def test_clear_log(race):
    race.generate()
    race.start()
    race.clear_log()
    assert race.log.lines == [] and race.winner_text == ""
    assert race.outcome is not None


def test_frames_redraws_without_advancing(race):
    race.generate()
    race.start()
    race.tick(0)
    before = states(race)
    frames = race.frames(5)
    assert set(frames) == {BFS, ASTAR}
    assert states(race) == before
    assert race.scheduler.frame_count == 1


def test_snapshot_marks_finished_lanes(race, solver_provider):
    solver_provider.results[BFS] = make_summary(BFS, visited=1, path=1)
    race.generate()
    race.start()
    assert not race.snapshot()["lanes"]["bfs"]["finished"]
    for t in range(3):
        race.tick(t)
    snap = race.snapshot()
    assert snap["lanes"]["bfs"]["finished"]
    assert not snap["lanes"]["astar"]["finished"]
    assert snap["frame"] == 3
