"""geocss CLI entry point: Click group with subcommands."""

import logging

import click

from geocss import __version__


@click.group()
@click.version_option(version=__version__, prog_name="geocss")
@click.option("--verbose", "-v", is_flag=True, help="Log parser activity to stderr.")
def cli(verbose: bool) -> None:
    """geocss - parse and inspect CSS-like map stylesheets."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Import and register subcommands
from geocss.cli.inspect import inspect  # noqa: E402
from geocss.cli.validate import validate  # noqa: E402

cli.add_command(validate)
cli.add_command(inspect)
