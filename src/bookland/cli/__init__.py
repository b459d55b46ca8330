# ABOUTME: CLI package for Bookland, built on Click.
# ABOUTME: Defines the root command group, logging setup, and registers subcommands.

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from bookland.cli.commands import add_cmd, cover_cmd, info_cmd, inspect_cmd, ls_cmd, scan_cmd


def _configure_logging(verbosity: int) -> None:
    """Route the bookland loggers through Rich on stderr.

    WARNING by default, INFO with -v, DEBUG with -vv.
    """
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG

    logger = logging.getLogger("bookland")
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)
    logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False))
    logger.setLevel(level)


@click.group()
@click.version_option(package_name="bookland")
@click.option(
    "-v", "--verbose",
    "verbosity",
    count=True,
    help="Show progress logs (-v) or debug details (-vv).",
)
def cli(verbosity: int) -> None:
    """Bookland - a personal ebook library manager."""
    _configure_logging(verbosity)


cli.add_command(scan_cmd.scan)
cli.add_command(add_cmd.add)
cli.add_command(cover_cmd.cover)
cli.add_command(ls_cmd.ls)
cli.add_command(info_cmd.info)
cli.add_command(inspect_cmd.inspect)
