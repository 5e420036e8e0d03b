"""Platform Resolver: pick the platform ``cargo metadata`` is filtered to."""

from cargoview.core.platform.resolver import (
    DEFAULT_RUSTC,
    parse_host_platform,
    query_host_platform,
    resolve_platform,
)

__all__ = [
    "DEFAULT_RUSTC",
    "parse_host_platform",
    "query_host_platform",
    "resolve_platform",
]
