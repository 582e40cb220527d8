"""EllipsizingLabel widget: a Textual label that cuts text to its line budget."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from rich.text import Text
from textual.message import Message
from textual.reactive import reactive
from textual.widget import Widget

from ellipsize.constants import FIT_AVAILABLE_HEIGHT
from ellipsize.controller import EllipsizeController
from ellipsize.layout import measure_cells
from ellipsize.models import Geometry, parse_max_lines

if TYPE_CHECKING:
    from textual import events
    from textual.geometry import Size

    from ellipsize.controller import EllipsizeListener
    from ellipsize.models import DisplayPolicy, MaxLines, Measurer


class EllipsizingLabel(Widget):
    """Displays text wrapped to its width and ellipsized when it runs out of lines.

    With ``max_lines`` set to :data:`FIT_AVAILABLE_HEIGHT` the label shows as
    many whole lines as its height allows. Transitions between fitting and
    ellipsized text are posted as :class:`EllipsizingLabel.EllipsizeChanged`.
    An explicit ``max_lines`` overrides the line budget of ``policy``.
    """

    DEFAULT_CSS = """
    EllipsizingLabel {
        width: 1fr;
        height: auto;
    }
    """

    text: reactive[str] = reactive("", layout=True)
    max_lines: reactive[MaxLines] = reactive(FIT_AVAILABLE_HEIGHT, layout=True)

    @dataclass
    class EllipsizeChanged(Message):
        label: EllipsizingLabel
        ellipsized: bool

        @property
        def control(self) -> EllipsizingLabel:
            return self.label

    def __init__(
        self,
        text: str = "",
        *,
        max_lines: MaxLines | str | None = None,
        policy: DisplayPolicy | None = None,
        measurer: Measurer = measure_cells,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
        disabled: bool = False,
    ) -> None:
        super().__init__(name=name, id=id, classes=classes, disabled=disabled)
        self._measurer = measurer
        self._controller = EllipsizeController(measurer, self._host_geometry, policy=policy)
        self._controller.add_listener(self._post_ellipsize_changed)
        if max_lines is not None:
            self._controller.set_max_lines(max_lines)
        self._controller.set_full_text(text)
        self.set_reactive(EllipsizingLabel.text, text)
        self.set_reactive(EllipsizingLabel.max_lines, self._controller.max_lines)

    @property
    def controller(self) -> EllipsizeController:
        return self._controller

    @property
    def displayed_text(self) -> str:
        return self._controller.displayed_text

    def is_ellipsized(self) -> bool:
        return self._controller.is_ellipsized()

    def add_listener(self, listener: EllipsizeListener) -> None:
        self._controller.add_listener(listener)

    def remove_listener(self, listener: EllipsizeListener) -> None:
        self._controller.remove_listener(listener)

    def validate_max_lines(self, value: MaxLines | str) -> MaxLines:
        return parse_max_lines(value)

    def watch_text(self, text: str) -> None:
        self._controller.set_full_text(text)

    def watch_max_lines(self, max_lines: MaxLines) -> None:
        self._controller.set_max_lines(max_lines)

    def set_line_spacing(self, extra: float, multiplier: float) -> None:
        self._controller.set_line_spacing(extra, multiplier)
        self.refresh(layout=True)

    def set_padding(self, top: int, right: int, bottom: int, left: int) -> None:
        self.styles.padding = (top, right, bottom, left)
        self._controller.notify_padding_changed()
        self.refresh(layout=True)

    def on_resize(self, event: events.Resize) -> None:
        self._controller.notify_size_changed()
        self.refresh()

    def get_content_height(self, container: Size, viewport: Size, width: int) -> int:
        layout = self._measurer(
            self.text,
            width,
            self._controller.line_spacing_multiplier,
            self._controller.line_spacing_extra,
        )
        lines = layout.line_count
        if self.max_lines is not FIT_AVAILABLE_HEIGHT:
            lines = min(lines, self.max_lines)
        return layout.line_bottom(lines - 1)

    def render(self) -> Text:
        self._controller.on_about_to_render()
        return Text(self._controller.displayed_text)

    def _host_geometry(self) -> Geometry:
        width, height = self.outer_size
        top, right, bottom, left = self.styles.gutter
        return Geometry(
            width=width,
            height=height,
            padding_top=top,
            padding_right=right,
            padding_bottom=bottom,
            padding_left=left,
        )

    def _post_ellipsize_changed(self, ellipsized: bool) -> None:
        # Runs inside render(); the message is built later so the label is its sender
        self.call_later(self._send_ellipsize_changed, ellipsized)

    def _send_ellipsize_changed(self, ellipsized: bool) -> None:
        self.post_message(self.EllipsizeChanged(self, ellipsized))
