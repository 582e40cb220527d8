"""Truncation engine: longest prefix plus ellipsis that fits the line budget."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ellipsize.models import TruncationResult

if TYPE_CHECKING:
    import re

    from ellipsize.models import DisplayPolicy, LayoutMetrics, LineLayout, Measurer

log = logging.getLogger(__name__)


def _layout(text: str, metrics: LayoutMetrics, measurer: Measurer) -> LineLayout:
    return measurer(
        text,
        metrics.content_width,
        metrics.line_spacing_multiplier,
        metrics.line_spacing_extra,
    )


def fully_visible_lines(metrics: LayoutMetrics, measurer: Measurer) -> int:
    """Number of lines whose whole height fits; zero or negative when none do."""
    line_height = _layout("", metrics, measurer).line_bottom(0)
    if line_height <= 0:
        return 0
    available = metrics.available_height
    # Truncate toward zero, not floor
    if available < 0:
        return -(-available // line_height)
    return available // line_height


def resolve_line_budget(policy: DisplayPolicy, metrics: LayoutMetrics, measurer: Measurer) -> int:
    """Effective maximum number of lines, never below 1."""
    if policy.fits_available_height:
        budget = fully_visible_lines(metrics, measurer)
    else:
        budget = int(policy.max_lines)
    return max(1, budget)


def strip_end_punctuation(text: str, pattern: re.Pattern[str]) -> str:
    """Remove the first match of ``pattern`` (one pass only)."""
    return pattern.sub("", text, count=1)


def compute_truncation(
    full_text: str,
    policy: DisplayPolicy,
    metrics: LayoutMetrics,
    measurer: Measurer,
) -> TruncationResult:
    """Fit ``full_text`` into the policy's line budget.

    Returns the text unchanged when it already fits. Otherwise keeps the
    lines that fit, drops whole words from the end until the ellipsis fits
    too, trims trailing punctuation and appends the ellipsis. A single word
    that cannot shrink further is ellipsized as is.
    """
    budget = resolve_line_budget(policy, metrics, measurer)
    layout = _layout(full_text, metrics, measurer)
    if layout.line_count <= budget:
        return TruncationResult(full_text, ellipsized=False)

    working = full_text[: layout.line_end(budget - 1)].rstrip()
    while _layout(working + policy.ellipsis, metrics, measurer).line_count > budget:
        last_space = working.rfind(" ")
        if last_space == -1:
            log.debug("Cannot shrink %r below %d lines", working, budget)
            break
        working = working[:last_space]

    working = strip_end_punctuation(working, policy.end_punctuation)
    return TruncationResult(working + policy.ellipsis, ellipsized=True)
