"""cargoview CLI -- Runtime and build-time dependency graphs for Cargo packages.

Entry point for the ``cargoview`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    views     -- Print the runtime and build-time dependency graphs.
    platform  -- Print the platform dependencies are resolved for.

Usage::

    cargoview views --manifest-path ./Cargo.toml
    cargoview views -m ./Cargo.toml --features tls --target aarch64-apple-darwin
    cargoview -v views -m ./Cargo.toml --format json
    cargoview platform
"""

from __future__ import annotations

import logging

import click

from cargoview import __version__
from cargoview.cli.platform_cmd import platform_command
from cargoview.cli.views_cmd import views_command

_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _configure_logging(verbosity: int) -> None:
    """Send log records to stderr; -v for INFO, -vv for DEBUG."""
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(format=_LOG_FORMAT)
    logging.getLogger("cargoview").setLevel(level)


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", count=True, help="Increase log verbosity (-v, -vv).")
def cli(verbose: int) -> None:
    """cargoview: dependency graph views for Cargo packages.

    Resolves a manifest with cargo metadata and shows which packages are
    needed to run it and which are additionally needed to build it.
    """
    _configure_logging(verbose)


# Register all subcommands
cli.add_command(views_command)
cli.add_command(platform_command)
