"""Value types shared by the engine, the controller and the widget shell."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from ellipsize.constants import DEFAULT_END_PUNCTUATION, ELLIPSIS, FIT_AVAILABLE_HEIGHT, FitHeight
from ellipsize.errors import InvalidArgumentError

if TYPE_CHECKING:
    from collections.abc import Callable


type MaxLines = int | FitHeight


class LineLayout(Protocol):
    """Result of wrapping one string at one width."""

    @property
    def line_count(self) -> int: ...

    def line_end(self, line: int) -> int:
        """Offset just past the last character of ``line``."""
        ...

    def line_bottom(self, line: int) -> int:
        """Y offset of the bottom edge of ``line``."""
        ...


type Measurer = Callable[[str, int, float, float], LineLayout]
"""``measurer(text, width, spacing_multiplier, spacing_extra) -> LineLayout``."""


@dataclass(frozen=True, slots=True)
class DisplayPolicy:
    """How many lines to show and how to trim the cut point."""

    max_lines: MaxLines = FIT_AVAILABLE_HEIGHT
    end_punctuation: re.Pattern[str] = DEFAULT_END_PUNCTUATION
    ellipsis: str = ELLIPSIS

    @property
    def fits_available_height(self) -> bool:
        return self.max_lines is FIT_AVAILABLE_HEIGHT


@dataclass(frozen=True, slots=True)
class Geometry:
    """Outer size and padding reported by the host."""

    width: int
    height: int
    padding_top: int = 0
    padding_right: int = 0
    padding_bottom: int = 0
    padding_left: int = 0


@dataclass(frozen=True, slots=True)
class LayoutMetrics:
    """Snapshot of everything the layout depends on for one pass."""

    width: int
    height: int
    line_spacing_multiplier: float = 1.0
    line_spacing_extra: float = 0.0
    font_descent: int = 0
    padding_top: int = 0
    padding_bottom: int = 0
    padding_left: int = 0
    padding_right: int = 0

    @classmethod
    def from_geometry(
        cls,
        geometry: Geometry,
        *,
        line_spacing_multiplier: float = 1.0,
        line_spacing_extra: float = 0.0,
        font_descent: int = 0,
    ) -> LayoutMetrics:
        return cls(
            width=geometry.width,
            height=geometry.height,
            line_spacing_multiplier=line_spacing_multiplier,
            line_spacing_extra=line_spacing_extra,
            font_descent=font_descent,
            padding_top=geometry.padding_top,
            padding_bottom=geometry.padding_bottom,
            padding_left=geometry.padding_left,
            padding_right=geometry.padding_right,
        )

    @property
    def content_width(self) -> int:
        return self.width - self.padding_left - self.padding_right

    @property
    def available_height(self) -> int:
        """Height left for whole lines once padding and descent are reserved."""
        return self.height - self.padding_top - self.padding_bottom - self.font_descent


@dataclass(frozen=True, slots=True)
class TruncationResult:
    """Text to display and whether it was cut short."""

    displayed_text: str
    ellipsized: bool


def parse_max_lines(value: object) -> MaxLines:
    """Coerce ``value`` to a line budget.

    Accepts a positive int, :data:`FIT_AVAILABLE_HEIGHT` or its string form
    ``"fit-height"``.
    """
    if value is FIT_AVAILABLE_HEIGHT or value == FIT_AVAILABLE_HEIGHT.value:
        return FIT_AVAILABLE_HEIGHT
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(
            f"max_lines must be a positive int or 'fit-height', got {value!r}"
        )
    if value < 1:
        raise InvalidArgumentError(f"max_lines must be at least 1, got {value}")
    return value
