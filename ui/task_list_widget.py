"""Task list widget for displaying and navigating tasks."""
from typing import List, Optional

from rich.markup import escape
from textual.widgets import Static

from business_logic.app_state import AppState
from config import config
from models import Task


def visible_row_count(viewport_rows: int) -> int:
    """Number of task rows that fit once the header and footer are drawn."""
    return max(config.min_visible_rows, viewport_rows - config.header_rows - config.footer_rows)


def scroll_window(selection: int, offset: int, visible: int, total: int) -> int:
    """Return the first visible row so the selection stays in view.

    The band only moves when the selection would leave it, and then by the
    smallest amount that brings it back.

    Args:
        selection: Selected row index
        offset: Current first visible row
        visible: Number of rows in the band
        total: Number of rows overall

    Returns:
        New first visible row, clamped to [0, max(0, total - visible)]
    """
    if selection < offset:
        offset = selection
    if selection > offset + visible - 1:
        offset = selection - (visible - 1)
    return max(0, min(offset, max(0, total - visible)))


def format_task_line(task: Task, selected: bool) -> str:
    """Format one task row as Rich markup."""
    marker = f"[{config.color_primary}]>[/{config.color_primary}] " if selected else "  "
    text = escape(task.text)
    if task.done:
        return f"{marker}[green]{escape('[x]')}[/green] [strike dim]{text}[/]"
    return f"{marker}{escape('[ ]')} {text}"


def render_task_list(state: AppState, offset: int, visible: int) -> str:
    """Render the list view: header, scroll hints and the visible rows.

    Args:
        state: Application state to project
        offset: First visible row
        visible: Number of rows in the band

    Returns:
        Rich markup for the list
    """
    tasks = state.tasks
    header = (
        f"TODOs ({len(tasks)})  Completed: {state.completed_count}  "
        f"{escape('[' + state.storage.label + ']')}"
    )
    lines: List[str] = [f"[bold]{header}[/bold]"]

    if not tasks:
        lines.append("")
        lines.append('[dim]No tasks. Press "a" to add one.[/dim]')
        return "\n".join(lines)

    end = min(len(tasks), offset + visible)
    if offset > 0:
        lines.append(f"[dim]… {offset} more above[/dim]")
    lines.append("")
    for i in range(offset, end):
        lines.append(format_task_line(tasks[i], i == state.selection))
    if end < len(tasks):
        lines.append(f"[dim]… {len(tasks) - end} more below[/dim]")

    return "\n".join(lines)


class TaskListWidget(Static):
    """Widget to display the list of tasks.

    Keeps its own scroll offset between renders so scrolling only happens when
    the selection reaches the edge of the visible band.
    """

    def __init__(self, app_state: Optional[AppState] = None, viewport_rows: int = config.default_viewport_rows):
        super().__init__()
        self.app_state = app_state if app_state is not None else AppState()
        self.viewport_rows = viewport_rows
        self.list_offset = 0

    def set_state(self, app_state: AppState, viewport_rows: Optional[int] = None) -> None:
        """Replace the displayed state and redraw."""
        self.app_state = app_state
        if viewport_rows:
            self.viewport_rows = viewport_rows
        self.refresh(layout=True)

    def render(self) -> str:
        visible = visible_row_count(self.viewport_rows)
        self.list_offset = scroll_window(
            self.app_state.selection, self.list_offset, visible, len(self.app_state.tasks)
        )
        return render_task_list(self.app_state, self.list_offset, visible)
