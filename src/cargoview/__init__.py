"""cargoview: runtime and build-time dependency graph views for Cargo packages."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"
