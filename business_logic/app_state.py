"""Application state, events and effects.

AppState is an immutable value. The key router turns (state, event) into a
Transition: the next state plus the side effects (saving, loading, exiting)
that the session must perform. Helpers in this module implement the state
changes shared by several key handlers.
"""
from dataclasses import dataclass, field, replace
from typing import Optional, Tuple, Union

from business_logic.history import UndoHistory
from business_logic.keys import KeyEvent
from business_logic.line_editor import LineEditor
from business_logic.task_operations import TaskCollection, clamp_selection
from config import config
from models import Mode, Notice, Severity, StorageLocation, Task


@dataclass(frozen=True)
class AppState:
    """Everything the UI shows; only `tasks` is ever persisted."""
    tasks: TaskCollection = ()
    selection: int = 0
    mode: Mode = Mode.LIST
    editing_index: Optional[int] = None
    editor: Optional[LineEditor] = None
    history: UndoHistory = field(default_factory=UndoHistory)
    storage: StorageLocation = StorageLocation.PROJECT
    settings_index: int = 0
    notice: Optional[Notice] = None
    exit_armed_until: Optional[int] = None

    @property
    def completed_count(self) -> int:
        return sum(1 for t in self.tasks if t.done)

    @property
    def selected_task(self) -> Optional[Task]:
        if 0 <= self.selection < len(self.tasks):
            return self.tasks[self.selection]
        return None

    def with_tasks(self, tasks: TaskCollection) -> 'AppState':
        """Install a collection and re-clamp the selection to it."""
        return replace(self, tasks=tasks, selection=clamp_selection(self.selection, tasks))


# Events

@dataclass(frozen=True)
class Tick:
    """Periodic clock check; expires notices and the exit window."""


@dataclass(frozen=True)
class TasksLoaded:
    """Result of a LoadTasks effect."""
    location: StorageLocation
    tasks: TaskCollection


@dataclass(frozen=True)
class SaveFinished:
    """Result of a SaveTasks effect."""
    location: StorageLocation
    ok: bool
    announce: bool = False


Event = Union[KeyEvent, Tick, TasksLoaded, SaveFinished]


# Effects

@dataclass(frozen=True)
class SaveTasks:
    tasks: TaskCollection
    location: StorageLocation
    announce: bool = False


@dataclass(frozen=True)
class LoadTasks:
    location: StorageLocation


@dataclass(frozen=True)
class ExitApp:
    pass


Effect = Union[SaveTasks, LoadTasks, ExitApp]


@dataclass(frozen=True)
class Transition:
    state: AppState
    effects: Tuple[Effect, ...] = ()


def save_effect(state: AppState, announce: bool = False) -> SaveTasks:
    return SaveTasks(tasks=state.tasks, location=state.storage, announce=announce)


def apply_change(state: AppState, tasks: TaskCollection) -> Transition:
    """Record the current collection for undo, install `tasks` and persist.

    A collection identical to the current one is not a change: nothing is
    recorded and nothing is saved.
    """
    if tasks is state.tasks:
        return Transition(state)
    new_state = replace(state, history=state.history.record(state.tasks)).with_tasks(tasks)
    return Transition(new_state, (save_effect(new_state),))


def undo(state: AppState) -> Transition:
    result = state.history.undo(state.tasks)
    if result is None:
        return Transition(state)
    history, restored = result
    new_state = replace(state, history=history).with_tasks(restored)
    return Transition(new_state, (save_effect(new_state),))


def redo(state: AppState) -> Transition:
    result = state.history.redo(state.tasks)
    if result is None:
        return Transition(state)
    history, restored = result
    new_state = replace(state, history=history).with_tasks(restored)
    return Transition(new_state, (save_effect(new_state),))


def switch_storage(state: AppState, location: StorageLocation, tasks: TaskCollection) -> AppState:
    """Make `location` active with its loaded tasks.

    The previous collection goes onto the undo history (and the redo stack is
    dropped, as for any other recorded change) so an undo brings the old task
    set back into view.
    """
    return replace(
        state,
        history=state.history.record(state.tasks),
        storage=location,
    ).with_tasks(tasks)


def show_notice(state: AppState, text: str, severity: Severity, now: int, duration_ms: int) -> AppState:
    return replace(state, notice=Notice(text=text, severity=severity, expires_at=now + duration_ms))


def expire_deadlines(state: AppState, now: int) -> AppState:
    """Drop the notice and exit window once their deadlines have passed."""
    if state.notice is not None and now >= state.notice.expires_at:
        state = replace(state, notice=None)
    if state.exit_armed_until is not None and now >= state.exit_armed_until:
        state = replace(state, exit_armed_until=None)
    return state


def save_result_notice(state: AppState, event: SaveFinished, now: int) -> AppState:
    """Report a finished save: failures always, successes when announced."""
    if not event.ok:
        return show_notice(state, "Save failed", Severity.ERROR, now, config.notice_ms)
    if event.announce:
        text = f"Saved ({event.location.label})"
        return show_notice(state, text, Severity.SUCCESS, now, config.notice_ms)
    return state
