import pytest

from engine import EventLog, FrameScheduler, RaceSession
from ui import render_lane

from helpers import FakeMazeProvider, FakeSolverProvider


@pytest.fixture
def maze_provider():
    return FakeMazeProvider()


@pytest.fixture
def solver_provider():
    return FakeSolverProvider()


@pytest.fixture
def race(maze_provider, solver_provider):
    return RaceSession(
        maze_provider,
        solver_provider,
        renderer=render_lane,
        scheduler=FrameScheduler(clock=lambda: 0.0),
        event_log=EventLog(),
    )
