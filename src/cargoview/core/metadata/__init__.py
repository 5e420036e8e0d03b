"""Metadata Adapter: run ``cargo metadata`` and read its resolved package set.

All public names are re-exported here so callers can write
``from cargoview.core.metadata import MetadataCommand``.
"""

from cargoview.core.metadata.command import DEFAULT_CARGO, MetadataCommand
from cargoview.core.metadata.models import (
    DepKind,
    PackageId,
    RawDependency,
    RawPackage,
    ResolvedMetadata,
)
from cargoview.core.metadata.parser import parse_metadata

__all__ = [
    "DEFAULT_CARGO",
    "MetadataCommand",
    "DepKind",
    "PackageId",
    "RawDependency",
    "RawPackage",
    "ResolvedMetadata",
    "parse_metadata",
]
