"""Greedy word wrapping measured in terminal cells.

Terminal counterpart of a GUI static text layout: lines break after runs of
spaces, hard newlines always end a line, and words wider than the line are
split at a character boundary.
"""

from __future__ import annotations

from rich.cells import cell_len


def wrap_offsets(text: str, width: int) -> list[int]:
    """Return the end offset of every wrapped line of ``text``.

    Each offset points just past the line's last character, including any
    trailing spaces and the newline that ended it.
    """
    width = max(1, width)
    ends: list[int] = []
    length = len(text)
    start = 0

    while True:
        newline = text.find("\n", start)
        paragraph_end = length if newline == -1 else newline
        pos = start
        while True:
            cells = 0
            break_at: int | None = None
            i = pos
            while i < paragraph_end:
                char = text[i]
                if char == " ":
                    # Spaces may hang past the edge
                    cells += 1
                    i += 1
                    break_at = i
                    continue
                char_cells = cell_len(char)
                if cells + char_cells > width and i > pos:
                    break
                cells += char_cells
                i += 1
            if i >= paragraph_end:
                ends.append(paragraph_end if newline == -1 else paragraph_end + 1)
                break
            pos = break_at if break_at is not None else i
            ends.append(pos)
        if newline == -1:
            break
        start = newline + 1
        if start == length:
            # A trailing newline opens one more, empty, line
            ends.append(length)
            break

    return ends


class CellLayout:
    """Wrapped layout of a string in a fixed-width terminal column."""

    __slots__ = ("_ends", "_line_height", "text", "width")

    def __init__(
        self,
        text: str,
        width: int,
        spacing_multiplier: float = 1.0,
        spacing_extra: float = 0.0,
    ) -> None:
        self.text = text
        self.width = max(1, width)
        self._ends = wrap_offsets(text, self.width)
        self._line_height = max(1, int(spacing_multiplier + spacing_extra))

    def __repr__(self) -> str:
        return f"CellLayout(width={self.width}, line_count={self.line_count})"

    @property
    def line_count(self) -> int:
        return len(self._ends)

    @property
    def line_height(self) -> int:
        return self._line_height

    def line_end(self, line: int) -> int:
        return self._ends[line]

    def line_bottom(self, line: int) -> int:
        return (line + 1) * self._line_height

    def lines(self) -> list[str]:
        """Text of each line with trailing spaces and newlines removed."""
        result = []
        start = 0
        for end in self._ends:
            result.append(self.text[start:end].rstrip(" \n"))
            start = end
        return result


def measure_cells(
    text: str, width: int, spacing_multiplier: float = 1.0, spacing_extra: float = 0.0
) -> CellLayout:
    """Measurer backed by :class:`CellLayout`."""
    return CellLayout(text, width, spacing_multiplier, spacing_extra)
