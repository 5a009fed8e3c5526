"""Custom UI widgets for notex."""
from typing import Optional

from rich.markup import escape
from textual.widgets import Static

from business_logic.app_state import AppState
from models import Mode

INSTRUCTIONS = "h/? Help   o Settings   q Quit"


def render_status(state: AppState, display_path: str) -> str:
    """Render key hints, the storage path and any transient notice.

    Hints and path are shown in list mode only; the notice in every mode.
    """
    lines = []
    if state.mode is Mode.LIST:
        lines.append(f"[dim]{INSTRUCTIONS}[/dim]")
        lines.append(f"[dim]> {escape(display_path)}[/dim]")
    if state.notice is not None:
        color = state.notice.severity.color
        lines.append(f"[{color}]{escape(state.notice.text)}[/{color}]")
    return "\n".join(lines)


class StatusFooter(Static):
    """Footer with key hints and transient notices."""

    DEFAULT_CSS = """
    StatusFooter {
        background: transparent;
        color: #e2e8f0;
        dock: bottom;
        height: auto;
        padding: 0 2;
    }
    """

    def __init__(self, app_state: Optional[AppState] = None, display_path: str = ""):
        super().__init__()
        self.app_state = app_state if app_state is not None else AppState()
        self.display_path = display_path

    def set_state(self, app_state: AppState, display_path: Optional[str] = None) -> None:
        self.app_state = app_state
        if display_path is not None:
            self.display_path = display_path
        self.refresh(layout=True)

    def render(self) -> str:
        return render_status(self.app_state, self.display_path)
