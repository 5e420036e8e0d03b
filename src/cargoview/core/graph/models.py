"""Graph data models: scopes, nodes and edges.

Nodes and edges are immutable so that a filtered view can share them with
the graph it was derived from without any risk of one view changing another.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from cargoview.core.metadata.models import DepKind, PackageId, RawPackage


# ---------------------------------------------------------------------------
# Scope: Where an edge is consumed
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Scope:
    """Consumption context of a dependency edge.

    A host-scoped edge is compiled for the machine running the build (build
    scripts, procedural macros and their dependencies). A target-scoped edge
    is compiled for ``platform``, the platform the resolution was filtered to.
    """

    is_host: bool
    platform: str | None = None

    @classmethod
    def host(cls) -> Scope:
        return cls(is_host=True)

    @classmethod
    def target(cls, platform: str) -> Scope:
        return cls(is_host=False, platform=platform)

    def __str__(self) -> str:
        if self.is_host:
            return "host"
        return f"target({self.platform})"


class ScopePattern(Enum):
    """Scope selector used by exclusion rules."""

    ALL = "all"
    HOST = "host"
    TARGET = "target"


# ---------------------------------------------------------------------------
# Node: One unique package
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Node:
    """A vertex of the dependency graph.

    Equality and hashing use ``id`` only. The feature table maps each
    feature name to the features and dependencies it enables, in the order
    cargo listed them.
    """

    id: PackageId
    name: str = field(default="", compare=False)
    version: str = field(default="", compare=False)
    source: str | None = field(default=None, compare=False)
    features: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: MappingProxyType({}), compare=False
    )

    @classmethod
    def from_raw(cls, pkg: RawPackage) -> Node:
        """Create a node from a raw package, copying its feature table."""
        return cls(
            id=pkg.id,
            name=pkg.name,
            version=pkg.version,
            source=pkg.source,
            features=MappingProxyType(
                {name: tuple(enables) for name, enables in pkg.features.items()}
            ),
        )

    def __str__(self) -> str:
        return self.id.repr


# ---------------------------------------------------------------------------
# Edge: A dependency relation
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Edge:
    """A directed edge from a dependent package to one of its dependencies.

    Attributes:
        source: The dependent.
        target: The dependency.
        kind: Why the dependency exists.
        scope: Where the dependency is consumed.
        name: Name the dependent uses for the dependency.
        cfg: The ``cfg(...)`` expression or platform the dependency is
            declared under, or None when it is unconditional.
    """

    source: PackageId
    target: PackageId
    kind: DepKind
    scope: Scope
    name: str = ""
    cfg: str | None = None

    def __str__(self) -> str:
        return f"{self.source} -> {self.target} ({self.kind.name.lower()}, {self.scope})"
