"""Shared constants - no circular dependencies."""

from __future__ import annotations

import re
from enum import Enum
from typing import Final


class FitHeight(Enum):
    """Marker type for the fit-to-height line budget."""

    FIT_AVAILABLE_HEIGHT = "fit-height"

    def __repr__(self) -> str:
        return "FIT_AVAILABLE_HEIGHT"


FIT_AVAILABLE_HEIGHT: Final = FitHeight.FIT_AVAILABLE_HEIGHT
"""Line budget sentinel: show as many whole lines as fit vertically."""

ELLIPSIS = "…"

# Trailing dots, commas, ellipses, semicolons, colons and whitespace
DEFAULT_END_PUNCTUATION_SOURCE = r"[\.,…;\:\s]*$"
DEFAULT_END_PUNCTUATION = re.compile(DEFAULT_END_PUNCTUATION_SOURCE, re.DOTALL)

MAX_LOG_MESSAGE_LENGTH = 4096
MAX_LOG_LINES = 2000
