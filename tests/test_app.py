import pytest

import main
from engine import EventLog, FrameScheduler, RaceSession
from ui import render_lane

from helpers import FakeMazeProvider, FakeSolverProvider


@pytest.fixture
def providers():
    return FakeMazeProvider(), FakeSolverProvider()


@pytest.fixture
def client(providers):
    maze, solver = providers
    main.app.extensions["race_session"] = RaceSession(
        maze, solver, renderer=render_lane,
        scheduler=FrameScheduler(clock=lambda: 0.0), event_log=EventLog(),
    )
    main.app.config["TESTING"] = True
    with main.app.test_client() as c:
        yield c
    main.app.extensions.pop("race_session", None)


def test_index_before_generate(client):
    resp = client.get("/")
    assert resp.status_code == 200
    html = resp.get_data(as_text=True)
    assert 'id="canvas-bfs"' in html and 'id="canvas-astar"' in html
    assert "Generate a maze to begin" in html


def test_start_without_grid_is_409(client):
    resp = client.post("/api/start")
    assert resp.status_code == 409
    body = resp.get_json()
    assert body["ok"] is False
    assert body["state"]["notice"]["message"] == "Generate maze first"


def test_generate_failure_is_502(client, providers):
    providers[0].fail = True
    resp = client.post("/api/generate")
    assert resp.status_code == 502
    assert resp.get_json()["state"]["has_grid"] is False


def test_incomplete_pair_is_502(client, providers):
    from algorithms import AlgoId
    client.post("/api/generate")
    providers[1].failing = {AlgoId.ASTAR}
    resp = client.post("/api/start")
    assert resp.status_code == 502
    assert resp.get_json()["state"]["animating"] is False


def test_full_race_flow(client):
    assert client.post("/api/generate").get_json()["ok"]
    state = client.post("/api/start").get_json()["state"]
    assert state["animating"]
    assert state["lanes"]["astar"]["badges"] == ["Winner"]

    frame = client.get("/api/frame").get_json()
    assert set(frame["frames"]) == {"bfs", "astar"}
    assert frame["frames"]["bfs"].startswith("<svg")
    assert frame["state"]["lanes"]["bfs"]["tracer"]["index"] == 1

    state = client.post("/api/stop").get_json()["state"]
    assert state["paused"] and not state["animating"]
    assert state["lanes"]["bfs"]["tracer"] == {"phase": "exploration", "index": 1, "active": False}

    state = client.post("/api/resume").get_json()["state"]
    assert state["animating"] and not state["paused"]

    client.get("/api/frame")
    assert client.get("/api/state").get_json()["lanes"]["bfs"]["tracer"]["index"] == 2

    state = client.post("/api/log/clear").get_json()["state"]
    assert state["log"] == [] and state["winner_text"] == ""


def test_index_after_run_shows_stats(client):
    client.post("/api/generate")
    client.post("/api/start")
    html = client.get("/").get_data(as_text=True)
    assert 'id="time-bfs">5.00<' in html
    assert "Winner" in html


def test_page_load_does_not_advance_the_race(client):
    client.post("/api/generate")
    client.post("/api/start")
    race = main.get_session()
    before = {key: lane.state for key, lane in race.lanes.items()}
    for _ in range(3):
        assert client.get("/").status_code == 200
    assert {key: lane.state for key, lane in race.lanes.items()} == before
    assert race.scheduler.frame_count == 0


def test_routes_hold_the_session_lock(client, providers):
    held = []
    maze = providers[0]
    original = maze.fetch_grid

    def fetch_grid():
        held.append(main.SESSION_LOCK.locked())
        return original()

    maze.fetch_grid = fetch_grid
    client.post("/api/generate")
    assert held == [True]
    assert not main.SESSION_LOCK.locked()


def test_missing_path_shows_on_card(client, providers):
    from algorithms import AlgoId
    from helpers import make_summary
    providers[1].results[AlgoId.BFS] = make_summary(AlgoId.BFS, visited=4, path=0)
    client.post("/api/generate")
    state = client.post("/api/start").get_json()["state"]
    assert state["lanes"]["bfs"]["stats"]["path_found"] is False
    assert state["grid"]["walls"] == 18
    html = client.get("/").get_data(as_text=True)
    assert 'id="path-bfs">no path<' in html


def test_page_script_survives_failed_frames_and_glows_results(client):
    html = client.get("/").get_data(as_text=True)
    assert "Connection lost, retrying..." in html
    assert "result-glow" in html and "800" in html
