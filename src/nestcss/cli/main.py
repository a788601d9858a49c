"""nestcss CLI entry point: Click group with subcommands."""

import logging

import click

from nestcss import __version__


@click.group()
@click.version_option(version=__version__, prog_name="nestcss")
@click.option("--verbose", is_flag=True, help="Log parser and store activity to stderr")
def cli(verbose: bool) -> None:
    """nestcss - compile nested CSS-like rule text and query the result."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


# Import and register subcommands
from nestcss.cli.format import format_rules  # noqa: E402
from nestcss.cli.query import query  # noqa: E402
from nestcss.cli.tree import tree  # noqa: E402

cli.add_command(format_rules)
cli.add_command(tree)
cli.add_command(query)
