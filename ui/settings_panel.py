"""Settings panel: choose where tasks are stored."""
from typing import Optional

from rich.markup import escape
from textual.widgets import Static

from config import config

SETTINGS_HINT = "Use ↑/↓ then Enter to select. Esc to cancel."


def render_settings(selected: int, project_path: str, global_path: str) -> str:
    """Render the storage chooser with `selected` (0 project, 1 global) highlighted."""
    options = (f"Project ({project_path})", f"Global ({global_path})")
    lines = ["[bold]Settings[/bold]", "Storage location", ""]
    for i, label in enumerate(options):
        if i == selected:
            color = config.color_primary
            lines.append(f"[{color}]> {escape(label)}[/{color}]")
        else:
            lines.append(f"  {escape(label)}")
    lines.append("")
    lines.append(f"[dim]{SETTINGS_HINT}[/dim]")
    return "\n".join(lines)


class SettingsPanel(Static):
    def __init__(self, selected: int = 0, project_path: str = "", global_path: str = ""):
        super().__init__()
        self.selected_index = selected
        self.project_path = project_path
        self.global_path = global_path

    def set_choice(self, selected: int, project_path: Optional[str] = None, global_path: Optional[str] = None) -> None:
        self.selected_index = selected
        if project_path is not None:
            self.project_path = project_path
        if global_path is not None:
            self.global_path = global_path
        self.refresh(layout=True)

    def render(self) -> str:
        return render_settings(self.selected_index, self.project_path, self.global_path)
