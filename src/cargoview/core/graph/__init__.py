"""Package dependency graph: construction, kind/scope filtering and views.

All public names are re-exported here, so callers can write
``from cargoview.core.graph import GraphBuilder, runtime_view``.

A graph G = (N, E, R) has one node per unique package identity in N, one
edge per declared dependency relation in E (each tagged with a dependency
kind and a scope) and the set R of root packages under analysis. Views are
derived graphs G' = (N, E', R) with E' a subset of E.
"""

from cargoview.core.graph.builder import GraphBuilder, build_graph, edge_scope
from cargoview.core.graph.filters import (
    BUILD_TIME_RULES,
    RUNTIME_RULES,
    ExclusionRule,
    build_time_view,
    filter_edges,
    is_excluded,
    prune_unreachable,
    runtime_view,
)
from cargoview.core.graph.graph import DependencyGraph
from cargoview.core.graph.models import Edge, Node, Scope, ScopePattern

__all__ = [
    "BUILD_TIME_RULES",
    "RUNTIME_RULES",
    "DependencyGraph",
    "Edge",
    "ExclusionRule",
    "GraphBuilder",
    "Node",
    "Scope",
    "ScopePattern",
    "build_graph",
    "build_time_view",
    "edge_scope",
    "filter_edges",
    "is_excluded",
    "prune_unreachable",
    "runtime_view",
]
