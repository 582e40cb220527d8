"""Command-line interface for ellipsize."""

from __future__ import annotations

import sys
from dataclasses import replace
from pathlib import Path

import click
from pydantic import ValidationError

from ellipsize import __version__
from ellipsize.config import EllipsizeConfig
from ellipsize.constants import FIT_AVAILABLE_HEIGHT
from ellipsize.debug_log import export_logs_to_file, setup_debug_logging
from ellipsize.engine import compute_truncation
from ellipsize.layout import measure_cells
from ellipsize.models import LayoutMetrics
from ellipsize.paths import get_debug_log_path


def _load_config(config_path: Path | None) -> EllipsizeConfig:
    try:
        return EllipsizeConfig.load(config_path)
    except ValidationError as exc:
        raise click.ClickException(f"Invalid configuration:\n{exc}") from exc


def _read_text(text: str | None) -> str:
    if text is None or text == "-":
        return click.get_text_stream("stdin").read().rstrip("\n")
    return text


@click.group(invoke_without_command=True)
@click.option("--version", is_flag=True, help="Show version and exit")
@click.pass_context
def cli(ctx: click.Context, version: bool) -> None:
    """Fit text into a line budget, ellipsizing what does not fit."""
    if version:
        click.echo(f"ellipsize {__version__}")
        ctx.exit(0)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.argument("text", required=False)
@click.option("--width", "-w", type=click.IntRange(min=1), required=True, help="Width in cells")
@click.option("--max-lines", "-n", type=click.IntRange(min=1), help="Maximum number of lines")
@click.option("--height", type=int, help="Height in cells; fit as many whole lines as possible")
@click.option("--ellipsis", help="Single character appended to cut text")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    help="Config file (defaults to the user config directory)",
)
@click.option(
    "--debug-log",
    type=click.Path(path_type=Path, dir_okay=False),
    help="Write debug logs for this run to a file",
)
@click.option("--verbose", "-v", is_flag=True, help="Report the ellipsized state on stderr")
def fit(
    text: str | None,
    width: int,
    max_lines: int | None,
    height: int | None,
    ellipsis: str | None,
    config_path: Path | None,
    debug_log: Path | None,
    verbose: bool,
) -> None:
    """Print TEXT cut to fit WIDTH and the line budget. Reads stdin when TEXT is '-' or missing."""
    if max_lines is not None and height is not None:
        raise click.BadParameter("use either --max-lines or --height, not both")
    if ellipsis is not None and len(ellipsis) != 1:
        raise click.BadParameter("must be exactly one character", param_hint="--ellipsis")

    if debug_log is not None:
        setup_debug_logging()

    config = _load_config(config_path)
    policy = config.display.to_policy()
    if max_lines is not None:
        policy = replace(policy, max_lines=max_lines)
    elif height is not None:
        policy = replace(policy, max_lines=FIT_AVAILABLE_HEIGHT)
    if ellipsis is not None:
        policy = replace(policy, ellipsis=ellipsis)

    if policy.fits_available_height and height is None:
        raise click.BadParameter(
            "required when the line budget is 'fit-height'", param_hint="--height"
        )

    metrics = LayoutMetrics(
        width=width,
        height=height or 0,
        line_spacing_multiplier=config.layout.line_spacing_multiplier,
        line_spacing_extra=config.layout.line_spacing_extra,
        font_descent=config.layout.font_descent,
    )
    result = compute_truncation(_read_text(text), policy, metrics, measure_cells)

    click.echo(result.displayed_text)
    if verbose:
        click.echo(f"ellipsized: {str(result.ellipsized).lower()}", err=True)

    if debug_log is not None:
        count = export_logs_to_file(debug_log)
        click.echo(f"Wrote {count} log entries to {debug_log}", err=True)


@cli.command()
@click.argument("text", required=False)
@click.option("--config", "config_path", type=click.Path(path_type=Path, dir_okay=False))
@click.option("--debug", is_flag=True, help="Export debug logs to the data directory on exit")
def demo(text: str | None, config_path: Path | None, debug: bool) -> None:
    """Open an interactive label that ellipsizes as you type and resize."""
    from ellipsize.app import SAMPLE_TEXT, EllipsizeDemoApp

    if not sys.stdout.isatty():
        raise click.ClickException("demo needs an interactive terminal")

    config = _load_config(config_path)
    if debug:
        setup_debug_logging()

    EllipsizeDemoApp(text or SAMPLE_TEXT, policy=config.display.to_policy()).run()

    if debug:
        log_path = get_debug_log_path()
        count = export_logs_to_file(log_path)
        click.echo(f"Wrote {count} log entries to {log_path}")
