"""Pytest configuration and shared fixtures."""
import pytest
from business_logic.app_state import AppState
from business_logic.session import Session
from json_handler import JsonHandler
from models import Task


class FakeClock:
    """Deterministic epoch-millisecond clock for tests."""

    def __init__(self, start: int = 1_700_000_000_000):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> int:
        self.now += ms
        return self.now


@pytest.fixture
def sample_tasks():
    """Fixture providing a sample collection of tasks."""
    return (
        Task(1, "Buy groceries", created_at=1000),
        Task(2, "Call mom", done=True, created_at=2000, completed_at=2500),
        Task(3, "Write email", created_at=3000),
    )


@pytest.fixture
def sample_state(sample_tasks):
    """Fixture providing an AppState in list mode with sample tasks."""
    return AppState(tasks=sample_tasks)


@pytest.fixture
def empty_state():
    """Fixture providing an AppState with no tasks."""
    return AppState()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def handler(tmp_path):
    """JsonHandler with separate temporary project and home directories."""
    project = tmp_path / "project"
    home = tmp_path / "home"
    project.mkdir()
    home.mkdir()
    return JsonHandler(project_dir=str(project), home_dir=str(home))


@pytest.fixture
def session(handler, clock):
    """Started Session over the temporary handler and fake clock."""
    s = Session(handler=handler, clock=clock)
    s.start()
    return s
