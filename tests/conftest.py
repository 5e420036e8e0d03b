"""Shared fixtures for cargoview tests.

``cargo_metadata_doc`` is a trimmed ``cargo metadata --format-version 1``
document for a small binary crate::

    app --normal--> serde --normal--> serde_derive (proc-macro) --> proc-macro2
    app --normal, cfg(unix)--> libc
    app --build--> cc --normal--> libc
    app --dev--> tempfile
"""

from __future__ import annotations

import json
from typing import Any

import pytest

REGISTRY = "registry+https://github.com/rust-lang/crates.io-index"

APP_ID = "app 0.1.0 (path+file:///work/app)"
SERDE_ID = f"serde 1.0.203 ({REGISTRY})"
SERDE_DERIVE_ID = f"serde_derive 1.0.203 ({REGISTRY})"
PROC_MACRO2_ID = f"proc-macro2 1.0.86 ({REGISTRY})"
CC_ID = f"cc 1.0.98 ({REGISTRY})"
TEMPFILE_ID = f"tempfile 3.10.1 ({REGISTRY})"
LIBC_ID = f"libc 0.2.155 ({REGISTRY})"

HOST_PLATFORM = "x86_64-unknown-linux-gnu"


def _package(
    pkg_id: str,
    features: dict[str, list[str]] | None = None,
    target_kind: str = "lib",
) -> dict[str, Any]:
    name, version = pkg_id.split(" ")[:2]
    source = None if "path+file" in pkg_id else REGISTRY
    return {
        "name": name,
        "version": version,
        "id": pkg_id,
        "source": source,
        "features": features or {},
        "targets": [{"kind": [target_kind], "name": name}],
    }


def _dep(pkg_id: str, *kinds: tuple[str | None, str | None]) -> dict[str, Any]:
    return {
        "name": pkg_id.split(" ")[0].replace("-", "_"),
        "pkg": pkg_id,
        "dep_kinds": [{"kind": kind, "target": target} for kind, target in kinds],
    }


@pytest.fixture
def cargo_metadata_doc() -> dict[str, Any]:
    """A decoded cargo metadata document (7 packages, 7 edges)."""
    return {
        "packages": [
            _package(APP_ID, {"default": ["std"], "std": ["serde/std"]}, "bin"),
            _package(SERDE_ID, {"default": ["std"], "std": [], "derive": ["serde_derive"]}),
            _package(SERDE_DERIVE_ID, target_kind="proc-macro"),
            _package(PROC_MACRO2_ID),
            _package(CC_ID),
            _package(TEMPFILE_ID),
            _package(LIBC_ID, {"default": ["std"], "std": []}),
        ],
        "workspace_members": [APP_ID],
        "resolve": {
            "nodes": [
                {
                    "id": APP_ID,
                    "dependencies": [SERDE_ID, LIBC_ID, CC_ID, TEMPFILE_ID],
                    "deps": [
                        _dep(SERDE_ID, (None, None)),
                        _dep(LIBC_ID, (None, "cfg(unix)")),
                        _dep(CC_ID, ("build", None)),
                        _dep(TEMPFILE_ID, ("dev", None)),
                    ],
                    "features": ["default", "std"],
                },
                {
                    "id": SERDE_ID,
                    "dependencies": [SERDE_DERIVE_ID],
                    "deps": [_dep(SERDE_DERIVE_ID, (None, None))],
                    "features": ["default", "std"],
                },
                {
                    "id": SERDE_DERIVE_ID,
                    "dependencies": [PROC_MACRO2_ID],
                    "deps": [_dep(PROC_MACRO2_ID, (None, None))],
                    "features": [],
                },
                {"id": PROC_MACRO2_ID, "dependencies": [], "deps": [], "features": []},
                {
                    "id": CC_ID,
                    "dependencies": [LIBC_ID],
                    "deps": [_dep(LIBC_ID, (None, None))],
                    "features": [],
                },
                {"id": TEMPFILE_ID, "dependencies": [], "deps": [], "features": []},
                {"id": LIBC_ID, "dependencies": [], "deps": [], "features": []},
            ],
            "root": APP_ID,
        },
        "target_directory": "/work/app/target",
        "version": 1,
        "workspace_root": "/work/app",
    }


@pytest.fixture
def cargo_metadata_json(cargo_metadata_doc: dict[str, Any]) -> str:
    """The same document as printed by cargo."""
    return json.dumps(cargo_metadata_doc)


@pytest.fixture
def pkg_ids() -> dict[str, str]:
    """Package id strings of the sample document, keyed by crate name."""
    return {
        "app": APP_ID,
        "serde": SERDE_ID,
        "serde_derive": SERDE_DERIVE_ID,
        "proc-macro2": PROC_MACRO2_ID,
        "cc": CC_ID,
        "tempfile": TEMPFILE_ID,
        "libc": LIBC_ID,
    }


@pytest.fixture
def host_platform() -> str:
    return HOST_PLATFORM
