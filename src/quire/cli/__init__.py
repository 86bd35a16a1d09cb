# ABOUTME: CLI package for quire, built on Click.
# ABOUTME: Defines the root command group and registers subcommands.

import logging

import click

from quire.cli.commands import chapters_cmd, inspect_cmd, remove_cmd
from quire.logging_setup import setup_logging


@click.group()
@click.version_option(package_name="quire")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging.")
def cli(verbose: bool) -> None:
    """quire - inspect and edit EPUB books."""
    setup_logging(logging.DEBUG if verbose else logging.WARNING)


cli.add_command(inspect_cmd.inspect)
cli.add_command(chapters_cmd.chapters)
cli.add_command(remove_cmd.remove)
