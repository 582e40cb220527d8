"""Configuration loader for ellipsize."""

from __future__ import annotations

import re
import tomllib
from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel, Field, field_validator

from ellipsize.constants import DEFAULT_END_PUNCTUATION_SOURCE, ELLIPSIS
from ellipsize.models import DisplayPolicy, parse_max_lines
from ellipsize.paths import get_config_path

if TYPE_CHECKING:
    from pathlib import Path


class DisplayConfig(BaseModel):
    """What to show once text no longer fits."""

    ellipsis: str = Field(default=ELLIPSIS, description="Single character appended to cut text")
    end_punctuation: str = Field(
        default=DEFAULT_END_PUNCTUATION_SOURCE,
        description="Regex for trailing punctuation removed before the ellipsis",
    )
    max_lines: int | Literal["fit-height"] = Field(
        default="fit-height",
        description="Line budget, or 'fit-height' to use every fully visible line",
    )

    @field_validator("ellipsis")
    @classmethod
    def validate_ellipsis(cls, value: str) -> str:
        if len(value) != 1:
            raise ValueError("ellipsis must be exactly one character")
        return value

    @field_validator("end_punctuation")
    @classmethod
    def validate_end_punctuation(cls, value: str) -> str:
        try:
            re.compile(value, re.DOTALL)
        except re.error as exc:
            raise ValueError(f"invalid end_punctuation pattern: {exc}") from exc
        return value

    @field_validator("max_lines")
    @classmethod
    def validate_max_lines(cls, value: int | str) -> int | str:
        parse_max_lines(value)
        return value

    def to_policy(self) -> DisplayPolicy:
        return DisplayPolicy(
            max_lines=parse_max_lines(self.max_lines),
            end_punctuation=re.compile(self.end_punctuation, re.DOTALL),
            ellipsis=self.ellipsis,
        )


class LayoutConfig(BaseModel):
    """Line spacing and font metrics fed to the measurer."""

    line_spacing_extra: float = Field(default=0.0)
    line_spacing_multiplier: float = Field(default=1.0, gt=0)
    font_descent: int = Field(default=0, ge=0)


class EllipsizeConfig(BaseModel):
    """Root configuration model."""

    display: DisplayConfig = Field(default_factory=DisplayConfig)
    layout: LayoutConfig = Field(default_factory=LayoutConfig)

    @classmethod
    def load(cls, config_path: Path | None = None) -> EllipsizeConfig:
        """Load configuration from TOML file or use defaults."""
        if config_path is None:
            config_path = get_config_path()

        if config_path.exists():
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
            return cls.model_validate(data)

        return cls()
