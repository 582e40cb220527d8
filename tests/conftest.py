"""Pytest fixtures for ellipsize tests."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

import pytest
from hypothesis import Phase, Verbosity, settings

from ellipsize.models import Geometry

_TEST_BASE_DIR = Path(tempfile.mkdtemp(prefix="ellipsize-tests-"))
os.environ["ELLIPSIZE_CONFIG_DIR"] = str(_TEST_BASE_DIR / "config")
os.environ["ELLIPSIZE_DATA_DIR"] = str(_TEST_BASE_DIR / "data")


settings.register_profile(
    "ci",
    max_examples=100,
    deadline=None,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
)
settings.register_profile(
    "dev",
    max_examples=20,
    deadline=500,
)
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    deadline=None,
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


FOX = "The quick brown fox jumps over the lazy dog."
"""Wraps to three lines at a width of 16 cells."""


class FakeHost:
    """Stands in for a widget: mutable geometry, font descent and a text sink."""

    def __init__(self, width: int = 16, height: int = 3, descent: int = 0) -> None:
        self.geometry = Geometry(width=width, height=height)
        self.descent = descent
        self.applied: list[str] = []

    def get_geometry(self) -> Geometry:
        return self.geometry

    def get_descent(self) -> int:
        return self.descent

    def apply_text(self, text: str) -> None:
        self.applied.append(text)


@pytest.fixture
def fox() -> str:
    return FOX


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()


@pytest.fixture
def make_host() -> type[FakeHost]:
    return FakeHost
