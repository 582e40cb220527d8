"""Ellipsize: fit text into a line budget and report when it gets cut."""

from ellipsize.constants import ELLIPSIS, FIT_AVAILABLE_HEIGHT
from ellipsize.controller import EllipsizeController, InvalidArgumentError
from ellipsize.engine import compute_truncation
from ellipsize.layout import CellLayout, measure_cells
from ellipsize.models import DisplayPolicy, Geometry, LayoutMetrics, TruncationResult

__version__ = "0.1.0"

__all__ = [
    "ELLIPSIS",
    "FIT_AVAILABLE_HEIGHT",
    "CellLayout",
    "DisplayPolicy",
    "EllipsizeController",
    "Geometry",
    "InvalidArgumentError",
    "LayoutMetrics",
    "TruncationResult",
    "compute_truncation",
    "measure_cells",
]
