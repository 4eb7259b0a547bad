#!/usr/bin/env python3
"""
Kinship CLI - Command Line Interface
"""

import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from kinship._version import __version__
from kinship.analyzer import Analyzer
from kinship.core.exceptions import KinshipError
from kinship.core.logging import configure_logging, logger
from kinship.core.settings import Settings
from kinship.reporting.formats import ReportFormat

err_console = Console(stderr=True)


def report_error(error: KinshipError) -> None:
    """Print an error and its suggestions to stderr."""
    err_console.print(f"[bold red]Error:[/bold red] {error.message}", markup=True, highlight=False)
    origin = error.context.get("origin") or error.context.get("path")
    if origin:
        err_console.print(f"  in {origin}", markup=False, highlight=False)
    for suggestion in error.suggestions:
        err_console.print(f"  - {suggestion}", markup=False, highlight=False)


def load_settings(ctx: click.Context) -> Settings:
    obj = ctx.ensure_object(dict)
    if "settings" not in obj:
        settings = Settings(obj.get("config_path"))
        level = "DEBUG" if obj.get("debug") or settings.get("logging.debug_mode") else None
        configure_logging(
            level or settings.get("logging.level", "WARNING"), settings.get("logging.file")
        )
        obj["settings"] = settings
    return obj["settings"]


@click.group()
@click.version_option(version=__version__, prog_name="kinship")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Configuration file (default: ./.kinship.yml)",
)
@click.option("--debug", is_flag=True, help="Log at DEBUG level")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path], debug: bool):
    """Kinship - class and module coupling graphs."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["debug"] = debug


@cli.command()
@click.argument("path", type=click.Path())
@click.option(
    "-f",
    "--format",
    "output_format",
    type=click.Choice(ReportFormat.values(), case_sensitive=False),
    default=None,
    help="Formats are text (default, to STDOUT), html, csv and json",
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the report to this file instead of STDOUT",
)
@click.pass_context
def parse(ctx: click.Context, path: str, output_format: Optional[str], output: Optional[Path]):
    """Build the graph for PATH (a file or a directory) and report it."""
    try:
        settings = load_settings(ctx)
        report_format = ReportFormat.parse(output_format or settings.get("output.format"))
        analyzer = Analyzer.for_files(path, settings=settings)
        rendered = analyzer.report(report_format, output)
    except KinshipError as e:
        logger.error("Analysis failed", code=e.code, error=e.message)
        report_error(e)
        sys.exit(1)

    if output is None:
        click.echo(rendered, nl=False)
    else:
        click.echo(f"Report written to {output}", err=True)


@cli.command()
@click.argument("path", type=click.Path())
@click.pass_context
def classes(ctx: click.Context, path: str):
    """List every class and module found under PATH."""
    try:
        settings = load_settings(ctx)
        names = Analyzer.for_files(path, settings=settings).classes()
    except KinshipError as e:
        logger.error("Analysis failed", code=e.code, error=e.message)
        report_error(e)
        sys.exit(1)

    for name in names:
        click.echo(name)


def main():
    """Entry point for the kinship command."""
    cli(obj={})


if __name__ == "__main__":
    main()
