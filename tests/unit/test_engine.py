"""Unit tests for the truncation engine."""

from __future__ import annotations

import re

import pytest

from ellipsize.constants import DEFAULT_END_PUNCTUATION, FIT_AVAILABLE_HEIGHT
from ellipsize.engine import (
    compute_truncation,
    fully_visible_lines,
    resolve_line_budget,
    strip_end_punctuation,
)
from ellipsize.layout import CellLayout, measure_cells
from ellipsize.models import DisplayPolicy, LayoutMetrics, TruncationResult

pytestmark = pytest.mark.unit


def metrics(width: int = 16, height: int = 0, **kwargs) -> LayoutMetrics:
    return LayoutMetrics(width=width, height=height, **kwargs)


def truncate(text: str, max_lines=2, **kwargs) -> TruncationResult:
    policy = DisplayPolicy(max_lines=max_lines)
    return compute_truncation(text, policy, metrics(**kwargs), measure_cells)


class TestComputeTruncation:
    def test_keeps_two_lines_of_three_words(self, fox: str):
        result = truncate(fox, max_lines=2)

        assert result == TruncationResult("The quick brown fox jumps over…", ellipsized=True)
        assert CellLayout(result.displayed_text, 16).line_count == 2

    def test_short_text_is_returned_verbatim(self):
        assert truncate("Short", max_lines=1) == TruncationResult("Short", ellipsized=False)

    def test_empty_text_fits(self):
        assert truncate("", max_lines=1) == TruncationResult("", ellipsized=False)

    def test_text_exactly_at_budget_is_not_ellipsized(self, fox: str):
        assert truncate(fox, max_lines=3) == TruncationResult(fox, ellipsized=False)

    def test_trailing_punctuation_is_stripped_before_ellipsis(self):
        result = truncate("Alpha beta, gamma delta epsilon", max_lines=1, width=12)

        assert result == TruncationResult("Alpha beta…", ellipsized=True)

    def test_drops_words_until_ellipsis_fits(self):
        # "Alpha beta,…" needs 12 cells, one more than available
        result = truncate("Alpha beta, gamma delta epsilon", max_lines=1, width=11)

        assert result == TruncationResult("Alpha…", ellipsized=True)

    def test_single_word_that_cannot_shrink_is_still_ellipsized(self):
        result = truncate("Supercalifragilistic", max_lines=1, width=5)

        assert result == TruncationResult("Super…", ellipsized=True)
        assert CellLayout(result.displayed_text, 5).line_count == 2

    def test_unshrinkable_word_still_loses_trailing_punctuation(self):
        result = truncate("abc.defgh", max_lines=1, width=4)

        assert result == TruncationResult("abc…", ellipsized=True)

    def test_cut_ignores_trailing_whitespace_of_kept_lines(self):
        result = truncate("first line   \nsecond line\nthird", max_lines=1, width=40)

        assert result == TruncationResult("first line…", ellipsized=True)

    def test_leading_whitespace_is_kept_in_the_prefix(self):
        text = "  alpha beta gamma delta epsilon"

        result = truncate(text, max_lines=1, width=14)

        assert result == TruncationResult("  alpha beta…", ellipsized=True)
        assert text.startswith(result.displayed_text[:-1])

    def test_padding_narrows_the_wrapping_width(self, fox: str):
        result = truncate(fox, max_lines=2, width=18, padding_left=1, padding_right=1)

        assert result.displayed_text == "The quick brown fox jumps over…"

    def test_custom_ellipsis_marker(self, fox: str):
        policy = DisplayPolicy(max_lines=2, ellipsis="~")

        result = compute_truncation(fox, policy, metrics(), measure_cells)

        assert result == TruncationResult("The quick brown fox jumps over~", ellipsized=True)

    def test_custom_end_punctuation_pattern(self):
        policy = DisplayPolicy(max_lines=1, end_punctuation=re.compile(r"\Z"))

        result = compute_truncation(
            "Alpha beta, gamma delta epsilon", policy, metrics(width=12), measure_cells
        )

        assert result.displayed_text == "Alpha beta,…"

    def test_explicit_count_ignores_available_height(self, fox: str):
        result = truncate(fox, max_lines=1, height=100)

        assert result.displayed_text == "The quick brown…"

    def test_measurer_receives_content_width_and_spacing(self, fox: str):
        calls: list[tuple[str, int, float, float]] = []

        def recording_measurer(text: str, width: int, mult: float, extra: float) -> CellLayout:
            calls.append((text, width, mult, extra))
            return CellLayout(text, width, mult, extra)

        compute_truncation(
            fox,
            DisplayPolicy(max_lines=2),
            metrics(width=20, padding_left=2, padding_right=2, line_spacing_extra=0.5),
            recording_measurer,
        )

        assert calls[0] == (fox, 16, 1.0, 0.5)
        assert all(width == 16 for _, width, _, _ in calls)


class TestFitAvailableHeight:
    def test_budget_is_whole_lines_that_fit(self):
        budget = resolve_line_budget(
            DisplayPolicy(),
            metrics(height=10, padding_top=1, padding_bottom=1, font_descent=1),
            measure_cells,
        )

        assert budget == 7

    def test_division_truncates_partial_lines(self):
        budget = resolve_line_budget(
            DisplayPolicy(), metrics(height=7, line_spacing_multiplier=2.0), measure_cells
        )

        assert budget == 3

    @pytest.mark.parametrize("height", [0, 1])
    def test_zero_or_negative_budget_clamps_to_one(self, height: int):
        m = metrics(height=height, padding_top=2)

        assert fully_visible_lines(m, measure_cells) <= 0
        assert resolve_line_budget(DisplayPolicy(), m, measure_cells) == 1

    def test_negative_height_truncates_toward_zero(self):
        m = metrics(height=0, padding_top=7, line_spacing_multiplier=2.0)

        assert fully_visible_lines(m, measure_cells) == -3

    def test_huge_heights_are_counted_exactly(self):
        height = 2**60 + 1

        assert fully_visible_lines(metrics(height=height), measure_cells) == height

    def test_clamped_budget_still_truncates(self, fox: str):
        result = truncate(fox, max_lines=FIT_AVAILABLE_HEIGHT, height=0)

        assert result == TruncationResult("The quick brown…", ellipsized=True)

    def test_height_of_two_lines_matches_explicit_two(self, fox: str):
        assert truncate(fox, max_lines=FIT_AVAILABLE_HEIGHT, height=2) == truncate(fox, max_lines=2)

    def test_descent_reserves_space(self, fox: str):
        assert not truncate(fox, max_lines=FIT_AVAILABLE_HEIGHT, height=3).ellipsized
        assert truncate(fox, max_lines=FIT_AVAILABLE_HEIGHT, height=3, font_descent=1).ellipsized


class TestStripEndPunctuation:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("word", "word"),
            ("word.", "word"),
            ("word.,;: ", "word"),
            ("word…", "word"),
            ("a. b", "a. b"),
            ("...", ""),
        ],
    )
    def test_default_pattern(self, text: str, expected: str):
        assert strip_end_punctuation(text, DEFAULT_END_PUNCTUATION) == expected

    def test_strips_a_single_match_only(self):
        assert strip_end_punctuation("wait..", re.compile(r"\.$")) == "wait."
