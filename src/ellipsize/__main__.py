"""CLI entry point for ellipsize."""

from __future__ import annotations

from ellipsize.cli import cli

if __name__ == "__main__":
    cli()
