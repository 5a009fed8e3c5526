"""Session: runs the state machine against real storage and a real clock.

The reducer stays pure; the session performs the effects it asks for and
feeds each result back in as an event, so a save failure or a storage switch
flows through the same transition function as a keypress.
"""
import logging
from pathlib import Path
from typing import Callable, Optional

from business_logic.app_state import (
    AppState,
    Event,
    ExitApp,
    LoadTasks,
    SaveFinished,
    SaveTasks,
    TasksLoaded,
)
from business_logic.history import UndoHistory
from business_logic.key_router import SETTINGS_CHOICES, reduce
from config import config
from json_handler import JsonHandler
from utils.time_utils import now_ms

logger = logging.getLogger(__name__)


class Session:
    """Owns the current AppState and executes effects.

    Attributes:
        handler: Storage adapter used for loads and saves
        clock: Callable returning epoch milliseconds
        state: Current application state
        exit_requested: Set once an ExitApp effect has run
    """

    def __init__(self, handler: Optional[JsonHandler] = None, clock: Callable[[], int] = now_ms):
        self.handler = handler if handler is not None else JsonHandler()
        self.clock = clock
        self.state = AppState()
        self.exit_requested = False

    def start(self) -> AppState:
        """Choose the startup storage location and load its tasks.

        Prefers the project file, then the global file; with neither present
        the project location is used with an empty collection.
        """
        location = self.handler.detect_initial_location()
        tasks = tuple(self.handler.load_tasks(self.handler.get_file_path(location)))
        logger.info("Starting with %s storage (%d tasks)", location.value, len(tasks))
        self.state = AppState(
            tasks=tasks,
            storage=location,
            settings_index=SETTINGS_CHOICES.index(location),
            history=UndoHistory(limit=config.history_limit),
        )
        return self.state

    @property
    def current_file(self) -> Path:
        """Path of the file backing the active storage location."""
        return self.handler.get_file_path(self.state.storage)

    def dispatch(self, event: Event) -> AppState:
        """Reduce one event and run the effects it produced.

        Args:
            event: Keypress, tick, or effect result

        Returns:
            The state after the event and all follow-up events
        """
        transition = reduce(self.state, event, self.clock())
        self.state = transition.state
        for effect in transition.effects:
            self._perform(effect)
        return self.state

    def _perform(self, effect) -> None:
        if isinstance(effect, SaveTasks):
            path = self.handler.get_file_path(effect.location)
            ok = self.handler.save_tasks(list(effect.tasks), path)
            self.dispatch(SaveFinished(location=effect.location, ok=ok, announce=effect.announce))
        elif isinstance(effect, LoadTasks):
            path = self.handler.get_file_path(effect.location)
            tasks = tuple(self.handler.load_tasks(path))
            self.dispatch(TasksLoaded(location=effect.location, tasks=tasks))
        elif isinstance(effect, ExitApp):
            self.exit_requested = True
        else:
            raise TypeError(f"Unknown effect: {effect!r}")
