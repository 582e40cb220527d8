"""Interactive demo hosting an EllipsizingLabel."""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual.app import App
from textual.binding import Binding
from textual.widgets import Footer, Input, Static

from ellipsize.constants import FIT_AVAILABLE_HEIGHT
from ellipsize.debug_log import record_transition
from ellipsize.widget import EllipsizingLabel

if TYPE_CHECKING:
    from textual.app import ComposeResult

    from ellipsize.models import DisplayPolicy

SAMPLE_TEXT = (
    "The quick brown fox jumps over the lazy dog. Pack my box with five dozen "
    "liquor jugs. How vexingly quick daft zebras jump; sphinx of black quartz, "
    "judge my vow."
)


class EllipsizeDemoApp(App[None]):
    """Edit text and resize the terminal to watch the label ellipsize."""

    TITLE = "ellipsize"

    CSS = """
    #source {
        dock: top;
    }
    #label {
        height: 1fr;
        border: round $accent;
        padding: 0 1;
    }
    #status {
        height: 1;
        color: $text-muted;
    }
    """

    BINDINGS = [
        Binding("ctrl+up", "more_lines", "More lines"),
        Binding("ctrl+down", "fewer_lines", "Fewer lines"),
        Binding("ctrl+f", "fit_height", "Fit height"),
        Binding("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, text: str = SAMPLE_TEXT, policy: DisplayPolicy | None = None) -> None:
        super().__init__()
        self._initial_text = text
        self._policy = policy

    def compose(self) -> ComposeResult:
        yield Input(value=self._initial_text, id="source")
        yield EllipsizingLabel(self._initial_text, policy=self._policy, id="label")
        yield Static("fits", id="status")
        yield Footer()

    @property
    def label(self) -> EllipsizingLabel:
        return self.query_one("#label", EllipsizingLabel)

    def on_input_changed(self, event: Input.Changed) -> None:
        self.label.text = event.value

    def on_ellipsizing_label_ellipsize_changed(
        self, event: EllipsizingLabel.EllipsizeChanged
    ) -> None:
        label = event.label
        record_transition(
            label.id or "label", event.ellipsized, label.displayed_text, len(label.text)
        )
        self.query_one("#status", Static).update("ellipsized" if event.ellipsized else "fits")

    def action_more_lines(self) -> None:
        label = self.label
        if label.max_lines is FIT_AVAILABLE_HEIGHT:
            label.max_lines = 1
        else:
            label.max_lines = label.max_lines + 1

    def action_fewer_lines(self) -> None:
        label = self.label
        if label.max_lines is not FIT_AVAILABLE_HEIGHT:
            label.max_lines = max(1, label.max_lines - 1)

    def action_fit_height(self) -> None:
        self.label.max_lines = FIT_AVAILABLE_HEIGHT
