"""Rich output formatting helpers for the cargoview CLI.

Three presentations of the runtime and build-time views:

- ``table`` -- one rich table of packages per view plus an edge summary.
- ``debug`` -- the raw node lists pretty-printed, runtime view first.
- ``json``  -- a machine-readable document with nodes and edges.
"""

from __future__ import annotations

from collections import Counter
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.pretty import Pretty
from rich.table import Table
from rich.text import Text

from cargoview.core.graph import DependencyGraph, Edge, Node
from cargoview.core.metadata import DepKind

_KIND_STYLES: dict[DepKind, str] = {
    DepKind.NORMAL: "green",
    DepKind.BUILD: "yellow",
    DepKind.DEVELOPMENT: "cyan",
}

console = Console()


def kind_style(kind: DepKind) -> str:
    """Return the Rich style string for a dependency kind."""
    return _KIND_STYLES.get(kind, "white")


def node_to_dict(node: Node) -> dict[str, Any]:
    return {
        "id": node.id.repr,
        "name": node.name,
        "version": node.version,
        "source": node.source,
        "features": {name: list(enables) for name, enables in node.features.items()},
    }


def edge_to_dict(edge: Edge) -> dict[str, Any]:
    return {
        "from": edge.source.repr,
        "to": edge.target.repr,
        "name": edge.name,
        "kind": edge.kind.value,
        "scope": "host" if edge.scope.is_host else "target",
        "platform": edge.scope.platform,
        "cfg": edge.cfg,
    }


def graph_to_dict(graph: DependencyGraph) -> dict[str, Any]:
    """Convert a graph to a JSON-serializable dict."""
    return {
        "roots": [root.repr for root in graph.roots],
        "nodes": [node_to_dict(node) for node in graph.nodes],
        "edges": [edge_to_dict(edge) for edge in graph.edges],
    }


def views_to_dict(
    platform: str,
    runtime: DependencyGraph,
    build_time: DependencyGraph,
) -> dict[str, Any]:
    return {
        "platform": platform,
        "runtime": graph_to_dict(runtime),
        "build_time": graph_to_dict(build_time),
    }


def print_graph_table(title: str, graph: DependencyGraph) -> None:
    """Print the packages of one view and a per-kind edge summary.

    Args:
        title: Table title.
        graph: The view to print.
    """
    roots = set(graph.roots)
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Package", style="bold")
    table.add_column("Version")
    table.add_column("Source", style="dim")
    table.add_column("Deps", justify="right")
    table.add_column("Features", justify="right")

    for node in graph.nodes:
        name = f"{node.name} (root)" if node.id in roots else node.name
        table.add_row(
            Text(name),
            Text(node.version),
            Text(node.source or "local"),
            str(len(graph.dependencies_of(node.id))),
            str(len(node.features)),
        )
    console.print(table)

    counts = Counter(edge.kind for edge in graph.edges)
    parts = [f"[bold]{graph.node_count}[/bold] packages", f"{graph.edge_count} edges"]
    for kind in DepKind:
        if counts[kind]:
            parts.append(f"[{kind_style(kind)}]{counts[kind]} {kind.name.lower()}[/{kind_style(kind)}]")
    console.print(" | ".join(parts))


def print_views_table(
    platform: str,
    runtime: DependencyGraph,
    build_time: DependencyGraph,
) -> None:
    header = Text.assemble(("Platform: ", ""), (platform, "bold"))
    console.print(Panel(header, title="cargoview"))
    print_graph_table("Runtime dependency graph", runtime)
    console.print()
    print_graph_table("Build-time dependency graph", build_time)


def print_views_debug(runtime: DependencyGraph, build_time: DependencyGraph) -> None:
    """Print both node lists in debug form, runtime view first."""
    console.print("Normal dependency tree:")
    console.print(Pretty(runtime.nodes, expand_all=True))
    console.print("Build-time dependency tree:")
    console.print(Pretty(build_time.nodes, expand_all=True))

