"""Exceptions raised by ellipsize."""

from __future__ import annotations


class InvalidArgumentError(ValueError):
    """Raised when a caller passes an argument the controller cannot use."""
