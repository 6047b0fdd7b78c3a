"""Help screen showing keyboard shortcuts."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Static


class HelpScreen(ModalScreen):
    """Modal help screen showing keyboard shortcuts."""

    DEFAULT_CSS = """
    HelpScreen {
        align: center middle;
    }

    HelpScreen > Vertical {
        width: 64;
        height: auto;
        max-height: 90%;
        padding: 1 2;
        background: $surface;
        border: solid $primary;
    }

    HelpScreen .help-title {
        text-align: center;
        text-style: bold;
        padding-bottom: 1;
        border-bottom: solid $primary-darken-2;
    }

    HelpScreen .help-section {
        height: auto;
        padding: 1 0 0 0;
    }

    HelpScreen .section-title {
        text-style: bold;
        color: $primary;
    }

    HelpScreen .help-row {
        height: 1;
    }

    HelpScreen .help-key {
        width: 18;
        text-style: bold;
    }

    HelpScreen .help-desc {
        width: 1fr;
        color: $text-muted;
    }

    HelpScreen .help-footer {
        text-align: center;
        color: $text-muted;
        padding-top: 1;
        border-top: solid $primary-darken-2;
    }
    """

    BINDINGS = [
        Binding("escape", "dismiss", "Close", show=False),
        Binding("?", "dismiss", "Close", show=False),
        Binding("q", "dismiss", "Close", show=False),
    ]

    SECTIONS: list[tuple[str, list[tuple[str, str]]]] = [
        (
            "Navigation",
            [
                ("k / Up", "Previous task"),
                ("j / Down", "Next task"),
                ("g / Home", "First task"),
                ("G / End", "Last task"),
            ],
        ),
        (
            "Tasks",
            [
                ("n", "New task"),
                ("e / Enter", "Edit task"),
                ("Space", "Toggle completed"),
                ("d", "Delete task"),
            ],
        ),
        (
            "Filter",
            [
                ("1 / 2 / 3", "All / Active / Completed"),
                ("/", "Filter expression"),
                ("Escape", "Close filter / Reset to all"),
                ("limit:N", "Show at most N tasks (default: --limit)"),
            ],
        ),
        (
            "General",
            [
                ("r", "Reload tasks"),
                ("?", "Show this help"),
                ("q", "Quit"),
            ],
        ),
    ]

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static("Keyboard Shortcuts", classes="help-title")
            for title, rows in self.SECTIONS:
                with Vertical(classes="help-section"):
                    yield Static(title, classes="section-title")
                    for key, description in rows:
                        yield self._help_row(key, description)
            yield Static("Press any key to close", classes="help-footer")

    def _help_row(self, key: str, description: str) -> Horizontal:
        """Create a help row with key and description."""
        row = Horizontal(classes="help-row")
        row.compose_add_child(Static(key, classes="help-key"))
        row.compose_add_child(Static(description, classes="help-desc"))
        return row

    def on_key(self, event) -> None:
        """Dismiss on any key press and prevent propagation."""
        event.stop()
        self.dismiss()
