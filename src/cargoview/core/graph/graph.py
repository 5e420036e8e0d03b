"""DependencyGraph: the in-memory package graph and its traversal queries.

A graph owns a node table keyed by ``PackageId`` (insertion ordered), a list
of edges and the ids of its root packages. Graphs are built once by
``GraphBuilder`` and never modified afterwards; every filtering step returns
a new graph instance.
"""

from __future__ import annotations

from collections import defaultdict, deque
from typing import Iterable, Iterator

from cargoview.core.graph.models import Edge, Node
from cargoview.core.metadata.models import PackageId


class DependencyGraph:
    """A directed, possibly cyclic, package dependency graph.

    The constructor copies its inputs so callers cannot change a graph
    through the containers they passed in. Edges are expected to reference
    known nodes; ``GraphBuilder`` enforces this before constructing a graph.

    Thread safety: instances are never mutated after construction and may be
    read from several threads.
    """

    def __init__(
        self,
        nodes: Iterable[Node] = (),
        edges: Iterable[Edge] = (),
        roots: Iterable[PackageId] = (),
    ) -> None:
        self._nodes: dict[PackageId, Node] = {}
        for node in nodes:
            self._nodes.setdefault(node.id, node)
        self._edges: tuple[Edge, ...] = tuple(edges)
        self._roots: tuple[PackageId, ...] = tuple(r for r in roots if r in self._nodes)

        self._outgoing: dict[PackageId, list[Edge]] = defaultdict(list)
        self._incoming: dict[PackageId, list[Edge]] = defaultdict(list)
        for edge in self._edges:
            self._outgoing[edge.source].append(edge)
            self._incoming[edge.target].append(edge)

    # -- basic accessors ----------------------------------------------------

    @property
    def nodes(self) -> list[Node]:
        """All nodes, in the order they were added."""
        return list(self._nodes.values())

    @property
    def edges(self) -> list[Edge]:
        """All edges, in the order they were added."""
        return list(self._edges)

    @property
    def roots(self) -> tuple[PackageId, ...]:
        """Ids of the packages being analyzed."""
        return self._roots

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    @property
    def edge_count(self) -> int:
        return len(self._edges)

    def __contains__(self, pkg_id: object) -> bool:
        return pkg_id in self._nodes

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes.values())

    def __len__(self) -> int:
        return len(self._nodes)

    def get_node(self, pkg_id: PackageId) -> Node | None:
        """Return the node for ``pkg_id``, or None if it is not in the graph."""
        return self._nodes.get(pkg_id)

    def dependencies_of(self, pkg_id: PackageId) -> list[Edge]:
        """Outgoing edges of a package (what it depends on)."""
        return list(self._outgoing.get(pkg_id, ()))

    def dependents_of(self, pkg_id: PackageId) -> list[Edge]:
        """Incoming edges of a package (what depends on it)."""
        return list(self._incoming.get(pkg_id, ()))

    # -- traversal ----------------------------------------------------------

    def reachable_from(self, start: Iterable[PackageId] | None = None) -> set[PackageId]:
        """Return every package reachable from ``start`` (roots by default).

        The start packages themselves are included. Cycles are handled by
        the visited set.
        """
        queue: deque[PackageId] = deque(
            pkg for pkg in (self._roots if start is None else start) if pkg in self._nodes
        )
        visited: set[PackageId] = set(queue)
        while queue:
            current = queue.popleft()
            for edge in self._outgoing.get(current, ()):
                if edge.target not in visited:
                    visited.add(edge.target)
                    queue.append(edge.target)
        return visited

    def detect_cycles(self) -> list[list[PackageId]]:
        """Find dependency cycles using iterative DFS coloring.

        Cycles are legal in cargo graphs (a crate may dev-depend on a crate
        that depends on it), so this is purely informational.

        Returns:
            One path per back edge found, starting and ending at the same
            package (e.g. ``[a, b, a]``). Empty if the graph is acyclic.
        """
        WHITE, GRAY, BLACK = 0, 1, 2
        color: dict[PackageId, int] = {pkg: WHITE for pkg in self._nodes}
        cycles: list[list[PackageId]] = []

        for start in self._nodes:
            if color[start] != WHITE:
                continue
            color[start] = GRAY
            path: list[PackageId] = [start]
            stack: list[Iterator[Edge]] = [iter(self._outgoing.get(start, ()))]
            while stack:
                edge = next(stack[-1], None)
                if edge is None:
                    color[path.pop()] = BLACK
                    stack.pop()
                    continue
                nxt = edge.target
                if color[nxt] == GRAY:
                    cycles.append(path[path.index(nxt):] + [nxt])
                elif color[nxt] == WHITE:
                    color[nxt] = GRAY
                    path.append(nxt)
                    stack.append(iter(self._outgoing.get(nxt, ())))
        return cycles

    def __repr__(self) -> str:
        return (
            f"DependencyGraph(nodes={self.node_count}, edges={self.edge_count}, "
            f"roots={[r.repr for r in self._roots]})"
        )
