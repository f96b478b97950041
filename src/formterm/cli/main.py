"""Formterm CLI entry point: Click group with subcommands."""

import logging

import click

from formterm import __version__

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group()
@click.version_option(version=__version__, prog_name="formterm")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging verbosity",
)
def cli(log_level: str) -> None:
    """Formterm - write a form once, answer it in a terminal or over the network."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# Import and register subcommands
from formterm.cli.list_forms import list_forms  # noqa: E402
from formterm.cli.serve import serve  # noqa: E402
from formterm.cli.term import term  # noqa: E402

cli.add_command(term)
cli.add_command(serve)
cli.add_command(list_forms)
