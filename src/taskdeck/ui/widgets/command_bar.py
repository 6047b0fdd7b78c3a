"""Filter expression bar widget."""

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.widget import Widget
from textual.widgets import Input, Static


class CommandBar(Widget):
    """Filter input docked at the bottom of the screen."""

    DEFAULT_CSS = """
    CommandBar {
        height: 1;
        dock: bottom;
        background: $surface;
        display: none;
        layer: command;
    }

    CommandBar.-visible {
        display: block;
    }

    CommandBar .mode-indicator {
        width: auto;
        padding: 0 1;
        background: $primary;
        color: $text;
    }

    CommandBar .filter-input {
        width: 1fr;
        border: none;
        background: $surface;
    }

    CommandBar .filter-input:focus {
        border: none;
    }
    """

    def __init__(self) -> None:
        super().__init__()
        self._expression: str = ""

    def compose(self) -> ComposeResult:
        with Horizontal():
            yield Static("Filter:", classes="mode-indicator")
            yield Input(
                placeholder="all | active | completed  limit:10",
                id="filter-input",
                classes="filter-input",
            )

    def enter_filter_mode(self) -> None:
        """Show the bar and focus the input with the last expression."""
        self.add_class("-visible")
        input_widget = self.query_one("#filter-input", Input)
        input_widget.value = self._expression
        input_widget.focus()

    def exit_filter_mode(self) -> None:
        """Hide the bar without applying."""
        self.remove_class("-visible")

    def remember(self, expression: str) -> None:
        """Record the applied expression for the next time the bar opens."""
        self._expression = expression.strip()

    @property
    def expression(self) -> str:
        """The last applied expression."""
        return self._expression

    @property
    def is_visible(self) -> bool:
        """Check if the bar is visible."""
        return self.has_class("-visible")
