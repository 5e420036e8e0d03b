"""GraphBuilder: turn a flat resolved package set into a DependencyGraph.

The resolver reports packages and their edges as a flat table with no
structural guarantees, so the builder is where referential integrity is
checked: every edge must point at a package of the same response.

Construction:

1. One node per package identity, in resolver order. A repeated identity
   keeps its first occurrence; later entries (and their edges) are ignored.
2. One edge per declared dependency, tagged with kind and scope. An edge to
   an unknown identity raises ``DanglingEdge``.
3. Cycles are accepted as they are.

Exclusion rules registered with ``ignore_kind`` are applied to the finished
graph, which gives the same result as calling ``filter_edges`` on it.
"""

from __future__ import annotations

import logging

from cargoview.core.graph.filters import ExclusionRule, filter_edges
from cargoview.core.graph.graph import DependencyGraph
from cargoview.core.graph.models import Edge, Node, Scope, ScopePattern
from cargoview.core.metadata.models import (
    DepKind,
    PackageId,
    RawDependency,
    RawPackage,
    ResolvedMetadata,
)
from cargoview.exceptions import DanglingEdge

logger = logging.getLogger(__name__)


def edge_scope(dependent: RawPackage, dep: RawDependency, platform: str) -> Scope:
    """Determine where a dependency edge is consumed.

    Build dependencies and every dependency of a procedural macro are
    compiled for the host. Anything else is compiled for ``platform``, the
    platform the resolution was filtered to; a ``cfg`` condition on the edge
    already held for that platform, or cargo would have pruned the edge.
    """
    if dep.kind is DepKind.BUILD or dependent.proc_macro:
        return Scope.host()
    return Scope.target(platform)


class GraphBuilder:
    """Builds a DependencyGraph from ResolvedMetadata."""

    def __init__(self) -> None:
        self._rules: list[ExclusionRule] = []

    @property
    def rules(self) -> tuple[ExclusionRule, ...]:
        return tuple(self._rules)

    def ignore_kind(
        self,
        kind: DepKind,
        scope: ScopePattern = ScopePattern.ALL,
        platform: str | None = None,
    ) -> GraphBuilder:
        """Exclude edges of ``kind`` in ``scope`` from built graphs.

        Returns the builder so calls can be chained.
        """
        self._rules.append(ExclusionRule(kind, scope, platform))
        return self

    def build(self, metadata: ResolvedMetadata) -> DependencyGraph:
        """Build the graph for ``metadata``.

        Raises:
            DanglingEdge: If an edge references a package id absent from
                ``metadata.packages``.
        """
        nodes: dict[PackageId, Node] = {}
        sources: list[RawPackage] = []
        for pkg in metadata.packages:
            if pkg.id in nodes:
                logger.warning("Ignoring duplicate package entry %s", pkg.id)
                continue
            nodes[pkg.id] = Node.from_raw(pkg)
            sources.append(pkg)

        edges: list[Edge] = []
        for pkg in sources:
            for dep in pkg.dependencies:
                if dep.package not in nodes:
                    raise DanglingEdge(pkg.id.repr, dep.package.repr)
                edges.append(
                    Edge(
                        source=pkg.id,
                        target=dep.package,
                        kind=dep.kind,
                        scope=edge_scope(pkg, dep, metadata.platform),
                        name=dep.name,
                        cfg=dep.target_cfg,
                    )
                )

        for root in metadata.roots:
            if root not in nodes:
                raise DanglingEdge("<root>", root.repr)

        graph = DependencyGraph(nodes.values(), edges, metadata.roots)
        logger.info(
            "Built dependency graph with %d packages and %d edges",
            graph.node_count, graph.edge_count,
        )
        if self._rules:
            graph = filter_edges(graph, self._rules)
        return graph


def build_graph(metadata: ResolvedMetadata) -> DependencyGraph:
    """Build the full, unfiltered graph for ``metadata``."""
    return GraphBuilder().build(metadata)
