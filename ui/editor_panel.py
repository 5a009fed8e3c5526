"""Inline line-editor panel used for adding and editing tasks."""
from typing import Optional

from rich.markup import escape
from textual.widgets import Static

from business_logic.app_state import AppState
from business_logic.line_editor import LineEditor
from models import Mode, Task
from utils.time_utils import format_timestamp

ADD_HINT = "Enter: Add   Esc: Cancel   Ctrl+←/→: Word jump   Ctrl+W: Delete word"
EDIT_HINT = "Enter: Save   Esc: Cancel   Ctrl+←/→: Word jump   Ctrl+W: Delete word"


def render_input_line(editor: LineEditor) -> str:
    """Render "> text" with the cursor cell in reverse video.

    At the end of the buffer the cursor cell is a blank.
    """
    cursor = editor.cursor
    under = editor.text[cursor] if cursor < len(editor.text) else " "
    return (
        f"> {escape(editor.before_cursor)}"
        f"[reverse]{escape(under)}[/reverse]"
        f"{escape(editor.text[cursor + 1:])}"
    )


def render_task_dates(task: Task) -> str:
    parts = [f"Created {format_timestamp(task.created_at)}"]
    if task.done:
        parts.append(f"Completed {format_timestamp(task.completed_at)}")
    return "[dim]" + "   ".join(parts) + "[/dim]"


def render_editor(state: AppState) -> str:
    """Render the add or edit panel for the current state."""
    editor = state.editor if state.editor is not None else LineEditor()
    if state.mode is Mode.EDIT:
        lines = ["[bold]Edit task[/bold]", "", render_input_line(editor), ""]
        if state.editing_index is not None and 0 <= state.editing_index < len(state.tasks):
            lines.append(render_task_dates(state.tasks[state.editing_index]))
        lines.append(f"[dim]{EDIT_HINT}[/dim]")
    else:
        lines = ["[bold]Add task[/bold]", render_input_line(editor), f"[dim]{ADD_HINT}[/dim]"]
    return "\n".join(lines)


class EditorPanel(Static):
    """Shows the line editor while in add or edit mode."""

    def __init__(self, app_state: Optional[AppState] = None):
        super().__init__()
        self.app_state = app_state if app_state is not None else AppState()

    def set_state(self, app_state: AppState) -> None:
        self.app_state = app_state
        self.refresh(layout=True)

    def render(self) -> str:
        return render_editor(self.app_state)
