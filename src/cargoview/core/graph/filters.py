"""Kind/scope edge filtering and the standard graph views.

A view is derived from a base graph by dropping every edge matched by at
least one ``ExclusionRule``. Exclusion is a union over rules, so the order
of the rules never changes the result and contradictory rules cannot exist.

Filtering removes edges only. A package whose edges were all dropped stays
in the node table; callers that want a minimal graph apply
``prune_unreachable`` to the filtered view as a separate step.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from cargoview.core.graph.graph import DependencyGraph
from cargoview.core.graph.models import Edge, Scope, ScopePattern
from cargoview.core.metadata.models import DepKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExclusionRule:
    """Drop edges of ``kind`` whose scope matches ``scope``.

    Attributes:
        kind: Dependency kind the rule applies to.
        scope: ``ALL`` matches every scope, ``HOST`` only host scopes and
            ``TARGET`` only target scopes.
        platform: With ``TARGET``, restricts the rule to edges for this exact
            platform string. Ignored for the other patterns.
    """

    kind: DepKind
    scope: ScopePattern = ScopePattern.ALL
    platform: str | None = None

    def matches_scope(self, scope: Scope) -> bool:
        if self.scope is ScopePattern.ALL:
            return True
        if self.scope is ScopePattern.HOST:
            return scope.is_host
        if scope.is_host:
            return False
        return self.platform is None or scope.platform == self.platform

    def matches(self, edge: Edge) -> bool:
        """True if the rule excludes ``edge``."""
        return edge.kind is self.kind and self.matches_scope(edge.scope)


# Everything needed to run the package: tests and build tooling excluded.
RUNTIME_RULES: tuple[ExclusionRule, ...] = (
    ExclusionRule(DepKind.DEVELOPMENT, ScopePattern.ALL),
    ExclusionRule(DepKind.BUILD, ScopePattern.ALL),
)

# Everything needed to build and run the package: only tests excluded.
BUILD_TIME_RULES: tuple[ExclusionRule, ...] = (
    ExclusionRule(DepKind.DEVELOPMENT, ScopePattern.ALL),
)


def is_excluded(edge: Edge, rules: Iterable[ExclusionRule]) -> bool:
    return any(rule.matches(edge) for rule in rules)


def filter_edges(graph: DependencyGraph, rules: Iterable[ExclusionRule]) -> DependencyGraph:
    """Return a new graph without the edges matched by ``rules``.

    Args:
        graph: The base graph. It is not modified.
        rules: Exclusion rules, in any order.

    Returns:
        A graph with every node and root of ``graph`` and the retained
        edges in their original order.
    """
    rules = tuple(rules)
    kept = [edge for edge in graph.edges if not is_excluded(edge, rules)]
    logger.debug(
        "Filtered %d of %d edges with %d rules",
        graph.edge_count - len(kept), graph.edge_count, len(rules),
    )
    return DependencyGraph(graph.nodes, kept, graph.roots)


def runtime_view(graph: DependencyGraph) -> DependencyGraph:
    """Dependencies needed to run the package (normal edges only)."""
    return filter_edges(graph, RUNTIME_RULES)


def build_time_view(graph: DependencyGraph) -> DependencyGraph:
    """Dependencies needed to build and run the package."""
    return filter_edges(graph, BUILD_TIME_RULES)


def prune_unreachable(graph: DependencyGraph) -> DependencyGraph:
    """Drop packages that cannot be reached from the graph roots.

    This is an opt-in post-filter step; the standard views keep every
    package. Edges leaving a dropped package are dropped with it. A graph
    without roots prunes down to an empty graph.
    """
    reachable = graph.reachable_from()
    nodes = [node for node in graph.nodes if node.id in reachable]
    edges = [edge for edge in graph.edges if edge.source in reachable]
    logger.debug(
        "Pruned %d unreachable packages", graph.node_count - len(nodes),
    )
    return DependencyGraph(nodes, edges, graph.roots)
