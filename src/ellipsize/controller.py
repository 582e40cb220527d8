"""Staleness tracking and ellipsize notifications around the truncation engine.

The controller collects every input that can change the truncated text, marks
itself stale when one of them changes, and recomputes lazily when the host is
about to paint. Listeners hear about transitions between "fits" and
"ellipsized", never about recomputations that keep the same state.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import replace
from typing import TYPE_CHECKING

from ellipsize.engine import compute_truncation
from ellipsize.errors import InvalidArgumentError
from ellipsize.models import DisplayPolicy, LayoutMetrics, parse_max_lines

if TYPE_CHECKING:
    import re
    from collections.abc import Callable, Iterator

    from ellipsize.models import Geometry, MaxLines, Measurer

log = logging.getLogger(__name__)

type EllipsizeListener = Callable[[bool], object]

__all__ = ["EllipsizeController", "EllipsizeListener", "InvalidArgumentError"]


def _no_descent() -> int:
    return 0


class EllipsizeController:
    """Keeps a host's displayed text truncated to its line budget.

    Args:
        measurer: Wraps text at a width and reports line ends and bottoms.
        geometry: Returns the host's current outer size and padding.
        font_descent: Returns the current font descent; read again on
            :meth:`notify_font_size_changed`.
        apply_text: Called with the new displayed text whenever it changes.
        policy: Initial line budget, end punctuation and ellipsis marker.
    """

    def __init__(
        self,
        measurer: Measurer,
        geometry: Callable[[], Geometry],
        *,
        font_descent: Callable[[], int] = _no_descent,
        apply_text: Callable[[str], object] | None = None,
        policy: DisplayPolicy | None = None,
        line_spacing_extra: float = 0.0,
        line_spacing_multiplier: float = 1.0,
    ) -> None:
        self._measurer = measurer
        self._geometry = geometry
        self._font_descent_source = font_descent
        self._apply_text = apply_text
        self._policy = policy or DisplayPolicy()
        self._line_spacing_extra = line_spacing_extra
        self._line_spacing_multiplier = line_spacing_multiplier
        self._font_descent = font_descent()
        self._listeners: list[EllipsizeListener] = []
        self._full_text = ""
        self._displayed_text = ""
        self._ellipsized = False
        self._stale = True
        self._programmatic_change = False

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def full_text(self) -> str:
        return self._full_text

    @property
    def displayed_text(self) -> str:
        return self._displayed_text

    @property
    def policy(self) -> DisplayPolicy:
        return self._policy

    @property
    def max_lines(self) -> MaxLines:
        return self._policy.max_lines

    @property
    def line_spacing_extra(self) -> float:
        return self._line_spacing_extra

    @property
    def line_spacing_multiplier(self) -> float:
        return self._line_spacing_multiplier

    @property
    def is_stale(self) -> bool:
        return self._stale

    def is_ellipsized(self) -> bool:
        """Whether the last recomputation had to cut the text."""
        return self._ellipsized

    def snapshot_metrics(self) -> LayoutMetrics:
        """Freeze the current geometry and spacing for one layout pass."""
        return LayoutMetrics.from_geometry(
            self._geometry(),
            line_spacing_multiplier=self._line_spacing_multiplier,
            line_spacing_extra=self._line_spacing_extra,
            font_descent=self._font_descent,
        )

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def set_full_text(self, text: str) -> None:
        """Replace the source text. Ignored while the controller applies its own output."""
        if self._programmatic_change:
            return
        self._full_text = text
        self._stale = True

    def set_max_lines(self, max_lines: MaxLines | str) -> None:
        self._policy = replace(self._policy, max_lines=parse_max_lines(max_lines))
        self._stale = True

    def set_line_spacing(self, extra: float, multiplier: float) -> None:
        self._line_spacing_extra = extra
        self._line_spacing_multiplier = multiplier
        self._stale = True

    def set_end_punctuation_pattern(self, pattern: re.Pattern[str]) -> None:
        """Change what gets trimmed before the ellipsis is appended."""
        self._policy = replace(self._policy, end_punctuation=pattern)
        self._stale = True

    def notify_size_changed(self) -> None:
        if self._policy.fits_available_height:
            self._stale = True

    def notify_padding_changed(self) -> None:
        if self._policy.fits_available_height:
            self._stale = True

    def notify_font_size_changed(self) -> None:
        self._font_descent = self._font_descent_source()
        if self._policy.fits_available_height:
            self._stale = True

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def add_listener(self, listener: EllipsizeListener) -> None:
        if listener is None or not callable(listener):
            raise InvalidArgumentError("listener must be a callable taking a bool")
        self._listeners.append(listener)

    def remove_listener(self, listener: EllipsizeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # ------------------------------------------------------------------
    # Render hook
    # ------------------------------------------------------------------

    def on_about_to_render(self) -> None:
        """Recompute if stale, apply the new text and notify on transitions.

        Must be called by the host right before every paint. Listener
        exceptions propagate to the caller.
        """
        if not self._stale:
            return

        result = compute_truncation(
            self._full_text, self._policy, self.snapshot_metrics(), self._measurer
        )
        log.debug(
            "Recomputed %d of %d chars, ellipsized=%s",
            len(result.displayed_text),
            len(self._full_text),
            result.ellipsized,
        )
        if result.displayed_text != self._displayed_text:
            if self._apply_text is not None:
                with self._programmatic():
                    self._apply_text(result.displayed_text)
            self._displayed_text = result.displayed_text
        self._stale = False

        if result.ellipsized != self._ellipsized:
            self._ellipsized = result.ellipsized
            log.debug("Ellipsize state changed to %s", result.ellipsized)
            for listener in list(self._listeners):
                listener(result.ellipsized)

    @contextmanager
    def _programmatic(self) -> Iterator[None]:
        self._programmatic_change = True
        try:
            yield
        finally:
            self._programmatic_change = False
