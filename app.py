"""Main TUI application for notex."""
import logging
from typing import Optional

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.widgets import Static

from business_logic.app_state import Tick
from business_logic.keys import KeyEvent, parse_key, text_input
from business_logic.session import Session
from config import config
from logging_config import setup_logging
from models import Mode, StorageLocation
from ui.editor_panel import EditorPanel
from ui.help_panel import HelpPanel
from ui.settings_panel import SettingsPanel
from ui.task_list_widget import TaskListWidget
from ui.widgets import StatusFooter
from utils.path_utils import format_display_path

logger = logging.getLogger(__name__)


class NotexApp(App):
    """A terminal TODO list backed by a JSON file."""

    TITLE = "notex"
    ENABLE_COMMAND_PALETTE = False

    CSS = """
    Screen {
        background: #1a1a2e;
    }

    #title {
        height: 1;
        padding: 0 2;
        color: #ff00ff;
        text-style: bold;
    }

    #body {
        height: 1fr;
        padding: 1 2;
        background: #1a1a2e;
    }

    TaskListWidget, EditorPanel, HelpPanel, SettingsPanel {
        height: auto;
        color: #e2e8f0;
    }
    """

    # Ctrl+C must reach the exit protocol instead of Textual's own handling
    BINDINGS = [
        Binding("ctrl+c", "interrupt", "Exit", show=False, priority=True),
    ]

    def __init__(self, session: Optional[Session] = None):
        super().__init__()
        self.session = session if session is not None else Session()
        self.session.start()
        self.tick_interval = None

    def compose(self) -> ComposeResult:
        """Compose the UI."""
        yield Static("notex", id="title")
        yield Container(
            TaskListWidget(self.session.state),
            EditorPanel(self.session.state),
            HelpPanel(),
            SettingsPanel(),
            id="body",
        )
        yield StatusFooter(self.session.state)

    def on_mount(self) -> None:
        """Set up the app after mounting."""
        self.refresh_view()
        # Notices and the Ctrl+C window expire on the next tick after their deadline
        self.tick_interval = self.set_interval(config.tick_interval, self._on_tick)

    def _on_tick(self) -> None:
        before = self.session.state
        if self.session.dispatch(Tick()) is not before:
            self.refresh_view()

    def _send(self, event: KeyEvent) -> None:
        """Route a keypress through the session, then redraw or exit."""
        self.session.dispatch(event)
        if self.session.exit_requested:
            self.exit()
            return
        self.refresh_view()

    def refresh_view(self) -> None:
        """Show the panels for the current mode and push state into them."""
        state = self.session.state
        handler = self.session.handler
        current_path = str(self.session.current_file)

        task_list = self.query_one(TaskListWidget)
        task_list.display = state.mode in (Mode.LIST, Mode.ADD)
        task_list.set_state(state, self.size.height)

        editor = self.query_one(EditorPanel)
        editor.display = state.mode in (Mode.ADD, Mode.EDIT)
        editor.set_state(state)

        help_panel = self.query_one(HelpPanel)
        help_panel.display = state.mode is Mode.HELP
        help_panel.set_storage(state.storage.label, current_path, self.size.width)

        settings = self.query_one(SettingsPanel)
        settings.display = state.mode is Mode.SETTINGS
        settings.set_choice(
            state.settings_index,
            format_display_path(handler.get_file_path(StorageLocation.PROJECT)),
            format_display_path(handler.get_file_path(StorageLocation.GLOBAL)),
        )

        footer = self.query_one(StatusFooter)
        footer.set_state(state, format_display_path(self.session.current_file))

    def on_key(self, event: events.Key) -> None:
        """Hand every keypress to the state machine."""
        event.prevent_default()
        event.stop()
        logger.debug("Key pressed: %s", event.key)
        self._send(parse_key(event.key, event.character))

    def on_paste(self, event: events.Paste) -> None:
        """Pasted text is typed into the editor as one insertion."""
        event.stop()
        self._send(text_input(" ".join(event.text.splitlines())))

    def action_interrupt(self) -> None:
        self._send(parse_key("ctrl+c"))


def main():
    """Run the application."""
    setup_logging(config.log_file, config.log_level)
    app = NotexApp()
    app.run()


if __name__ == "__main__":
    main()
