"""``cargoview views --manifest-path <path>`` -- Print runtime and build-time graphs.

Resolves the manifest once with ``cargo metadata`` restricted to a single
platform, builds the full dependency graph and derives two views from it:

- runtime: development and build dependencies excluded;
- build-time: development dependencies excluded.

Nothing is printed unless both views were produced.

Exit Codes:
    0 -- Both views printed.
    1 -- Toolchain query, manifest resolution or graph construction failed.
    2 -- Invalid command-line usage.
"""

from __future__ import annotations

import json
import logging
import sys

import click

from cargoview.core.graph import (
    DependencyGraph,
    build_graph,
    build_time_view,
    prune_unreachable,
    runtime_view,
)
from cargoview.core.metadata import DEFAULT_CARGO, MetadataCommand
from cargoview.core.platform import DEFAULT_RUSTC, resolve_platform
from cargoview.exceptions import CargoViewError

logger = logging.getLogger(__name__)


def _split_features(values: tuple[str, ...]) -> list[str]:
    """Flatten repeated and comma/space separated ``--features`` values."""
    features: list[str] = []
    for value in values:
        features.extend(f for f in value.replace(",", " ").split() if f)
    return features


def compute_views(
    command: MetadataCommand,
    prune: bool = False,
) -> tuple[DependencyGraph, DependencyGraph]:
    """Resolve once and derive the runtime and build-time views.

    Args:
        command: Fully configured metadata command.
        prune: Drop packages unreachable from the roots in both views.

    Returns:
        ``(runtime, build_time)`` views.
    """
    metadata = command.exec()
    graph = build_graph(metadata)
    runtime = runtime_view(graph)
    build_time = build_time_view(graph)
    if prune:
        runtime = prune_unreachable(runtime)
        build_time = prune_unreachable(build_time)
    return runtime, build_time


@click.command("views")
@click.option(
    "--manifest-path", "-m",
    required=True,
    type=click.Path(dir_okay=False),
    help="Path to the Cargo.toml to resolve.",
)
@click.option(
    "--features", "-F",
    multiple=True,
    help="Features to enable (repeatable, comma or space separated).",
)
@click.option("--all-features", is_flag=True, help="Enable all available features.")
@click.option(
    "--no-default-features", is_flag=True, help="Do not enable the default feature.",
)
@click.option(
    "--target",
    default=None,
    help="Platform to resolve for (default: rustc host platform).",
)
@click.option(
    "--cargo",
    envvar="CARGO",
    default=DEFAULT_CARGO,
    show_default=True,
    help="cargo executable (env: CARGO).",
)
@click.option(
    "--rustc",
    envvar="RUSTC",
    default=DEFAULT_RUSTC,
    show_default=True,
    help="rustc executable used to find the host platform (env: RUSTC).",
)
@click.option("--offline", is_flag=True, help="Pass --offline to cargo.")
@click.option("--locked", is_flag=True, help="Pass --locked to cargo.")
@click.option("--frozen", is_flag=True, help="Pass --frozen to cargo.")
@click.option(
    "--prune-unreachable", "prune",
    is_flag=True,
    help="Drop packages no longer reachable from the root in each view.",
)
@click.option(
    "--format", "output_format",
    type=click.Choice(["table", "debug", "json"]),
    default="table",
    show_default=True,
    help="Output format.",
)
def views_command(
    manifest_path: str,
    features: tuple[str, ...],
    all_features: bool,
    no_default_features: bool,
    target: str | None,
    cargo: str,
    rustc: str,
    offline: bool,
    locked: bool,
    frozen: bool,
    prune: bool,
    output_format: str,
) -> None:
    """Print the runtime and build-time dependency graphs of a package.

    The runtime graph holds what must be present to run the package; the
    build-time graph adds what is needed to build it (build scripts,
    procedural macros and their dependencies).

    Exit code 0 on success, 1 if resolution fails.
    """
    try:
        platform = resolve_platform(target, rustc=rustc)
        command = MetadataCommand(
            manifest_path=manifest_path,
            platform=platform,
            features=_split_features(features),
            all_features=all_features,
            no_default_features=no_default_features,
            cargo=cargo,
            offline=offline,
            locked=locked,
            frozen=frozen,
        )
        runtime, build_time = compute_views(command, prune=prune)
    except CargoViewError as exc:
        logger.debug("Aborting", exc_info=True)
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    from cargoview.cli.output import (
        print_views_debug,
        print_views_table,
        views_to_dict,
    )

    if output_format == "json":
        click.echo(json.dumps(views_to_dict(platform, runtime, build_time), indent=2))
    elif output_format == "debug":
        print_views_debug(runtime, build_time)
    else:
        print_views_table(platform, runtime, build_time)
