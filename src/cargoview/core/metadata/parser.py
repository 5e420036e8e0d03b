"""Parse ``cargo metadata --format-version 1`` output into ResolvedMetadata.

Only the parts of the document needed to rebuild the resolved graph are
read::

    {
      "packages": [{"id", "name", "version", "source", "features",
                    "targets": [{"kind": [...]}]}],
      "resolve": {
        "root": "<id>" | null,
        "nodes": [{"id", "deps": [{"name", "pkg",
                                   "dep_kinds": [{"kind", "target"}]}]}]
      },
      "workspace_members": ["<id>", ...]
    }

Dependency ids are copied through unchecked; whether they name a known
package is verified by the graph builder.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from cargoview.core.metadata.models import (
    DepKind,
    PackageId,
    RawDependency,
    RawPackage,
    ResolvedMetadata,
)
from cargoview.exceptions import ManifestResolutionFailed

logger = logging.getLogger(__name__)


def _malformed(detail: str) -> ManifestResolutionFailed:
    return ManifestResolutionFailed(f"Malformed cargo metadata output: {detail}")


def _require(mapping: Any, key: str, kind: type | tuple[type, ...], where: str) -> Any:
    """Fetch ``mapping[key]`` and check its type."""
    if not isinstance(mapping, dict):
        raise _malformed(f"{where} is not an object")
    if key not in mapping:
        raise _malformed(f"{where} has no {key!r} field")
    value = mapping[key]
    if not isinstance(value, kind):
        raise _malformed(f"{where}.{key} has unexpected type {type(value).__name__}")
    return value


def _parse_features(raw: Any, where: str) -> dict[str, list[str]]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise _malformed(f"{where}.features is not an object")
    features: dict[str, list[str]] = {}
    for name, enables in raw.items():
        if not isinstance(enables, list) or not all(isinstance(e, str) for e in enables):
            raise _malformed(f"{where}.features[{name!r}] is not a list of strings")
        features[name] = list(enables)
    return features


def _is_proc_macro(pkg: dict[str, Any]) -> bool:
    for target in pkg.get("targets") or ():
        if isinstance(target, dict) and "proc-macro" in (target.get("kind") or ()):
            return True
    return False


def _parse_dep_kinds(dep: dict[str, Any], where: str) -> list[tuple[DepKind, str | None]]:
    """Return (kind, target cfg) pairs for one resolved dependency.

    Cargo older than 1.41 omits ``dep_kinds``; such edges are treated as
    normal, unconditional dependencies.
    """
    if "dep_kinds" not in dep:
        return [(DepKind.NORMAL, None)]
    raw_kinds = dep["dep_kinds"]
    if not isinstance(raw_kinds, list):
        raise _malformed(f"{where}.dep_kinds is not a list")
    pairs: list[tuple[DepKind, str | None]] = []
    for raw in raw_kinds:
        if not isinstance(raw, dict):
            raise _malformed(f"{where}.dep_kinds entry is not an object")
        try:
            kind = DepKind.from_cargo(raw.get("kind"))
        except ValueError:
            raise _malformed(
                f"{where} has unknown dependency kind {raw.get('kind')!r}"
            ) from None
        target = raw.get("target")
        if target is not None and not isinstance(target, str):
            raise _malformed(f"{where}.dep_kinds target is not a string")
        pairs.append((kind, target))
    return pairs


def _parse_node_deps(node: dict[str, Any], where: str) -> tuple[RawDependency, ...]:
    edges: list[RawDependency] = []
    if "deps" in node:
        for dep in _require(node, "deps", list, where):
            pkg = PackageId(_require(dep, "pkg", str, f"{where}.deps"))
            name = dep.get("name") or pkg.repr
            for kind, target in _parse_dep_kinds(dep, f"{where}.deps[{name!r}]"):
                edges.append(RawDependency(pkg, name, kind, target))
    else:
        for dep_id in _require(node, "dependencies", list, where):
            if not isinstance(dep_id, str):
                raise _malformed(f"{where}.dependencies entry is not a string")
            edges.append(RawDependency(PackageId(dep_id), dep_id))
    return tuple(edges)


def parse_metadata(document: str | bytes | dict[str, Any], platform: str) -> ResolvedMetadata:
    """Convert a ``cargo metadata`` document into a ResolvedMetadata.

    Args:
        document: The JSON text printed by cargo, or an already decoded
            object.
        platform: The platform the resolution was filtered to.

    Returns:
        The resolved package set, packages in cargo's order.

    Raises:
        ManifestResolutionFailed: If the document is not valid JSON, has
            no dependency resolution, or lacks required fields.
    """
    if isinstance(document, (str, bytes)):
        try:
            data = json.loads(document)
        except ValueError as exc:
            raise _malformed(f"invalid JSON ({exc})") from exc
    else:
        data = document

    packages = _require(data, "packages", list, "metadata")
    resolve = data.get("resolve") if isinstance(data, dict) else None
    if resolve is None:
        raise _malformed("no dependency resolution (was --no-deps used?)")
    nodes = _require(resolve, "nodes", list, "resolve")

    edges_by_id: dict[str, tuple[RawDependency, ...]] = {}
    known_ids = {p.get("id") for p in packages if isinstance(p, dict)}
    for index, node in enumerate(nodes):
        node_id = _require(node, "id", str, f"resolve.nodes[{index}]")
        if node_id not in known_ids:
            raise _malformed(f"resolve node {node_id!r} has no package entry")
        edges_by_id.setdefault(node_id, _parse_node_deps(node, f"resolve.nodes[{index}]"))

    raw_packages: list[RawPackage] = []
    for index, pkg in enumerate(packages):
        where = f"packages[{index}]"
        pkg_id = _require(pkg, "id", str, where)
        source = pkg.get("source")
        raw_packages.append(
            RawPackage(
                id=PackageId(pkg_id),
                name=_require(pkg, "name", str, where),
                version=_require(pkg, "version", str, where),
                source=source if isinstance(source, str) else None,
                features=_parse_features(pkg.get("features"), where),
                dependencies=edges_by_id.get(pkg_id, ()),
                proc_macro=_is_proc_macro(pkg),
            )
        )

    root = resolve.get("root")
    if root is not None and not isinstance(root, str):
        raise _malformed("resolve.root is not a string")
    members = data.get("workspace_members") or []
    if not isinstance(members, list) or not all(isinstance(m, str) for m in members):
        raise _malformed("workspace_members is not a list of strings")

    metadata = ResolvedMetadata(
        packages=tuple(raw_packages),
        root=PackageId(root) if root is not None else None,
        workspace_members=tuple(PackageId(m) for m in members),
        platform=platform,
    )
    logger.info(
        "Parsed %d packages with %d dependency edges for %s",
        len(metadata.packages), metadata.edge_count, platform,
    )
    return metadata
