"""Help panel showing keyboard shortcuts."""
from typing import List, Optional, Sequence, Tuple

from rich.markup import escape
from textual.widgets import Static

from config import config

HELP_SECTIONS: Sequence[Tuple[str, Sequence[Tuple[str, str]]]] = (
    ("Navigation", (
        ("↑/↓", "Move selection"),
        ("Space", "Toggle done"),
    )),
    ("Editing", (
        ("a", "Add task"),
        ("e / Enter", "Edit task"),
        ("d", "Delete task"),
        ("Esc", "Cancel input"),
        ("Ctrl+←/→", "Word jump"),
        ("Ctrl+W", "Delete word"),
    )),
    ("History", (
        ("u / Ctrl+Z", "Undo"),
        ("r / Ctrl+Y", "Redo"),
    )),
    ("Settings", (
        ("o", "Open settings"),
        ("s", "Save now (autosave on)"),
    )),
    ("App", (
        ("h / ?", "Toggle help"),
        ("q", "Save & quit"),
        ("Ctrl+C ×2", "Exit (confirm)"),
    )),
)

# Each rendered line is (markup, visible width)
_Line = Tuple[str, int]


def _section_lines(title: str, items: Sequence[Tuple[str, str]], key_width: int) -> List[_Line]:
    lines: List[_Line] = [(f"[bold]{title}[/bold]", len(title))]
    color = config.color_primary
    for key, desc in items:
        padded = (key + " ").ljust(key_width)
        lines.append((f"[{color}]{escape(padded)}[/{color}]{escape(desc)}", len(padded) + len(desc)))
    lines.append(("", 0))
    return lines


def _column(sections, key_width: int) -> List[_Line]:
    lines: List[_Line] = []
    for title, items in sections:
        lines.extend(_section_lines(title, items, key_width))
    return lines


def render_help(width: int, storage_label: str, storage_path: str) -> str:
    """Render the shortcut reference.

    Sections are laid out in two columns when the panel is at least
    config.help_two_column_width wide, otherwise in one.

    Args:
        width: Available width in cells
        storage_label: "Project" or "Global"
        storage_path: Path of the active storage file

    Returns:
        Rich markup for the help sheet
    """
    key_width = max(len(key) for _, items in HELP_SECTIONS for key, _ in items) + 2
    out = ["[bold]Help & Shortcuts[/bold]", ""]

    if width >= config.help_two_column_width:
        split = (len(HELP_SECTIONS) + 1) // 2
        left = _column(HELP_SECTIONS[:split], key_width)
        right = _column(HELP_SECTIONS[split:], key_width)
        left_width = max(w for _, w in left) + 4
        for i in range(max(len(left), len(right))):
            l_markup, l_width = left[i] if i < len(left) else ("", 0)
            r_markup, _ = right[i] if i < len(right) else ("", 0)
            out.append((l_markup + " " * (left_width - l_width) + r_markup).rstrip())
    else:
        out.extend(markup for markup, _ in _column(HELP_SECTIONS, key_width))

    out.append(f"[dim]Current storage: {storage_label} ({escape(storage_path)})[/dim]")
    return "\n".join(out)


class HelpPanel(Static):
    """Panel listing keyboard shortcuts; closed with Esc, h or ?."""

    def __init__(self, storage_label: str = "Project", storage_path: str = "", width: Optional[int] = None):
        super().__init__()
        self.storage_label = storage_label
        self.storage_path = storage_path
        self.panel_width = width

    def set_storage(self, storage_label: str, storage_path: str, width: Optional[int] = None) -> None:
        self.storage_label = storage_label
        self.storage_path = storage_path
        if width:
            self.panel_width = width
        self.refresh(layout=True)

    def render(self) -> str:
        width = self.panel_width or self.size.width or 80
        return render_help(width, self.storage_label, self.storage_path)
