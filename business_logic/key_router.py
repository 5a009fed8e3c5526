"""Keystroke routing: the application's state-transition function.

reduce(state, event, now) is pure. Keys are routed in this order:

1. Any keypress clears the current notice.
2. Ctrl+C runs the double-press exit protocol in every mode.
3. While typing (add/edit) the line editor owns every other key.
4. Global shortcuts: undo, redo, help, settings.
5. The active mode's handler (list or settings).
"""
import logging
from dataclasses import replace

from business_logic.app_state import (
    AppState,
    Event,
    ExitApp,
    LoadTasks,
    SaveFinished,
    TasksLoaded,
    Tick,
    Transition,
    apply_change,
    expire_deadlines,
    redo,
    save_effect,
    save_result_notice,
    show_notice,
    switch_storage,
    undo,
)
from business_logic.keys import Key, KeyEvent
from business_logic.line_editor import EditorAction, LineEditor
from business_logic.task_operations import TaskOperations, clamp_selection
from config import config
from models import Mode, Severity, StorageLocation

logger = logging.getLogger(__name__)

SETTINGS_CHOICES = (StorageLocation.PROJECT, StorageLocation.GLOBAL)


def reduce(state: AppState, event: Event, now: int) -> Transition:
    """Compute the next state and the effects for one event.

    Args:
        state: Current application state
        event: Keypress, clock tick, or the result of an earlier effect
        now: Current time in epoch milliseconds

    Returns:
        Transition with the next state and effects to perform in order
    """
    if isinstance(event, Tick):
        return Transition(expire_deadlines(state, now))
    if isinstance(event, SaveFinished):
        return Transition(save_result_notice(state, event, now))
    if isinstance(event, TasksLoaded):
        logger.info("Switched storage to %s (%d tasks)", event.location.value, len(event.tasks))
        return Transition(switch_storage(state, event.location, event.tasks))
    return route_key(state, event, now)


def route_key(state: AppState, event: KeyEvent, now: int) -> Transition:
    """Dispatch a keypress to the handler that owns it in the current mode."""
    state = replace(expire_deadlines(state, now), notice=None)

    if event.is_ctrl("c"):
        return _handle_interrupt(state, now)

    if state.mode in (Mode.ADD, Mode.EDIT):
        return _handle_typing(state, event, now)

    if event.key is Key.ESCAPE and state.mode is Mode.HELP:
        return Transition(replace(state, mode=Mode.LIST))

    handled = _handle_global(state, event)
    if handled is not None:
        return handled

    if state.mode is Mode.LIST:
        return _handle_list(state, event, now)
    if state.mode is Mode.SETTINGS:
        return _handle_settings(state, event)
    return Transition(state)


def _handle_interrupt(state: AppState, now: int) -> Transition:
    """First Ctrl+C arms the exit window, a second one inside it saves and exits."""
    if state.exit_armed_until is not None and now < state.exit_armed_until:
        logger.info("Exit confirmed with Ctrl+C")
        return Transition(state, (save_effect(state, announce=True), ExitApp()))
    deadline = now + config.exit_confirm_ms
    state = show_notice(
        replace(state, exit_armed_until=deadline),
        "Press Ctrl+C again to exit…",
        Severity.WARNING,
        now,
        config.exit_confirm_ms,
    )
    return Transition(state)


def _handle_global(state: AppState, event: KeyEvent):
    """Shortcuts available in every mode except while typing.

    Returns None when the key is not a global shortcut.
    """
    if event.is_ctrl("z") and not (event.shift or event.char == "Z"):
        return undo(state)
    if event.is_ctrl("y") or event.is_ctrl("z"):
        return redo(state)
    if event.is_char("u"):
        return undo(state)
    if event.is_char("r"):
        return redo(state)
    if event.is_char("h") or event.is_char("?"):
        mode = Mode.LIST if state.mode is Mode.HELP else Mode.HELP
        return Transition(replace(state, mode=mode))
    if event.is_char("o"):
        index = SETTINGS_CHOICES.index(state.storage)
        return Transition(replace(state, mode=Mode.SETTINGS, settings_index=index))
    return None


def _handle_list(state: AppState, event: KeyEvent, now: int) -> Transition:
    tasks = state.tasks

    if event.key is Key.UP or event.is_char("k"):
        return Transition(replace(state, selection=clamp_selection(state.selection - 1, tasks)))
    if event.key is Key.DOWN or event.is_char("j"):
        return Transition(replace(state, selection=clamp_selection(state.selection + 1, tasks)))

    if event.is_char(" "):
        return apply_change(state, TaskOperations.toggle_task(tasks, state.selection, now))

    if event.key is Key.ENTER or event.is_char("e"):
        task = state.selected_task
        if task is None:
            return Transition(state)
        return Transition(replace(
            state,
            mode=Mode.EDIT,
            editing_index=state.selection,
            editor=LineEditor(task.text),
        ))

    if event.is_char("a"):
        return Transition(replace(state, mode=Mode.ADD, editor=LineEditor()))

    if event.is_char("d"):
        return apply_change(state, TaskOperations.delete_task(tasks, state.selection))

    if event.is_char("s"):
        return Transition(state, (save_effect(state, announce=True),))

    if event.is_char("q"):
        return Transition(state, (save_effect(state, announce=True), ExitApp()))

    return Transition(state)


def _handle_typing(state: AppState, event: KeyEvent, now: int) -> Transition:
    """Feed the key to the line editor and act on submit/cancel."""
    editor = state.editor if state.editor is not None else LineEditor()
    editor, action = editor.handle(event)

    if action is EditorAction.CANCEL:
        return Transition(_back_to_list(state))

    if action is EditorAction.SUBMIT:
        text = editor.submit()
        if state.mode is Mode.ADD:
            if not text:
                return Transition(_back_to_list(state))
            transition = apply_change(state, TaskOperations.add_task(state.tasks, text, now))
            new_state = replace(transition.state, selection=len(transition.state.tasks) - 1)
            return Transition(_back_to_list(new_state), transition.effects)

        index = state.editing_index if state.editing_index is not None else -1
        transition = apply_change(state, TaskOperations.edit_task_text(state.tasks, index, text))
        return Transition(_back_to_list(transition.state), transition.effects)

    return Transition(replace(state, editor=editor))


def _handle_settings(state: AppState, event: KeyEvent) -> Transition:
    last = len(SETTINGS_CHOICES) - 1

    if event.key is Key.ESCAPE:
        return Transition(replace(state, mode=Mode.LIST))
    if event.key is Key.UP or event.is_char("k"):
        return Transition(replace(state, settings_index=max(0, state.settings_index - 1)))
    if event.key is Key.DOWN or event.is_char("j"):
        return Transition(replace(state, settings_index=min(last, state.settings_index + 1)))
    if event.key is Key.ENTER:
        location = SETTINGS_CHOICES[max(0, min(last, state.settings_index))]
        state = replace(state, mode=Mode.LIST)
        if location is state.storage:
            return Transition(state)
        return Transition(state, (LoadTasks(location),))
    return Transition(state)


def _back_to_list(state: AppState) -> AppState:
    return replace(state, mode=Mode.LIST, editor=None, editing_index=None)
