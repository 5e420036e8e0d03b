"""Raw data models for a resolved ``cargo metadata`` response.

These types describe the flat package list exactly as the resolver hands it
over: one entry per package with its feature table and its resolved
dependency edges. They carry no graph structure and no referential
guarantees; turning them into a graph is the job of
``cargoview.core.graph.builder``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping


# ---------------------------------------------------------------------------
# PackageId: Opaque package identity
# ---------------------------------------------------------------------------


@dataclass(frozen=True, order=True)
class PackageId:
    """Globally unique identity of one resolved package.

    Wraps cargo's package id string, which encodes name, version and source.
    Two packages with the same ``repr`` are the same package; nothing else
    takes part in equality or hashing.

    Examples of ``repr``::

        serde 1.0.203 (registry+https://github.com/rust-lang/crates.io-index)
        registry+https://github.com/rust-lang/crates.io-index#serde@1.0.203
        path+file:///home/me/app#0.1.0
    """

    repr: str

    def __str__(self) -> str:
        return self.repr


# ---------------------------------------------------------------------------
# DepKind: Why a dependency edge exists
# ---------------------------------------------------------------------------


class DepKind(Enum):
    """Declared purpose of a dependency edge.

    The values are the strings cargo uses in ``dep_kinds[].kind``, with
    ``normal`` standing in for cargo's ``null``.
    """

    NORMAL = "normal"
    DEVELOPMENT = "dev"
    BUILD = "build"

    @classmethod
    def from_cargo(cls, value: str | None) -> DepKind:
        """Map a cargo ``dep_kinds[].kind`` value to a DepKind.

        Raises:
            ValueError: For values cargo does not document.
        """
        if value is None:
            return cls.NORMAL
        return cls(value)


# ---------------------------------------------------------------------------
# Raw package set
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RawDependency:
    """One resolved dependency edge as reported by cargo.

    Attributes:
        package: Identity of the dependency package.
        name: Name the dependent uses for the dependency (may be renamed).
        kind: Dependency kind.
        target_cfg: Platform or ``cfg(...)`` expression the edge is limited
            to, or None when it applies to every platform.
    """

    package: PackageId
    name: str
    kind: DepKind = DepKind.NORMAL
    target_cfg: str | None = None


@dataclass(frozen=True)
class RawPackage:
    """One package of the resolved set, with its outgoing edges.

    Attributes:
        id: Package identity.
        name: Package name.
        version: Package version string.
        source: Package source (registry or git URL), None for local paths.
        features: Feature name to the features/dependencies it enables.
            Copied into a read-only mapping of tuples on construction.
        dependencies: Resolved outgoing edges, one per (dependency, kind).
        proc_macro: True if the package is a procedural macro crate and so
            is only ever compiled for the host.
    """

    id: PackageId
    name: str
    version: str
    source: str | None = None
    features: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    dependencies: tuple[RawDependency, ...] = ()
    proc_macro: bool = False

    def __post_init__(self) -> None:
        frozen = MappingProxyType(
            {name: tuple(enables) for name, enables in self.features.items()}
        )
        object.__setattr__(self, "features", frozen)
        object.__setattr__(self, "dependencies", tuple(self.dependencies))


@dataclass(frozen=True)
class ResolvedMetadata:
    """The complete resolved package set for one manifest.

    Attributes:
        packages: Packages in resolver order. Identities are expected to be
            unique but this is not enforced here.
        root: The package the manifest describes, or None for a virtual
            workspace manifest.
        workspace_members: Identities of all workspace members.
        platform: Platform the resolution was filtered to.
    """

    packages: tuple[RawPackage, ...]
    root: PackageId | None = None
    workspace_members: tuple[PackageId, ...] = ()
    platform: str = ""

    @property
    def roots(self) -> tuple[PackageId, ...]:
        """Packages the dependency graph is rooted at."""
        if self.root is not None:
            return (self.root,)
        return self.workspace_members

    @property
    def edge_count(self) -> int:
        """Total number of declared dependency edges."""
        return sum(len(pkg.dependencies) for pkg in self.packages)
