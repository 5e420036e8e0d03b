"""``cargoview platform`` -- Show the platform dependency resolution will use.

Exit Codes:
    0 -- Platform printed.
    1 -- The toolchain could not be queried.
"""

from __future__ import annotations

import sys

import click

from cargoview.core.platform import DEFAULT_RUSTC, resolve_platform
from cargoview.exceptions import ToolchainQueryFailed


@click.command("platform")
@click.option("--target", default=None, help="Explicit platform (echoed verbatim).")
@click.option(
    "--rustc",
    envvar="RUSTC",
    default=DEFAULT_RUSTC,
    show_default=True,
    help="rustc executable (env: RUSTC).",
)
def platform_command(target: str | None, rustc: str) -> None:
    """Print the platform identifier used to filter dependencies."""
    try:
        click.echo(resolve_platform(target, rustc=rustc))
    except ToolchainQueryFailed as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)
