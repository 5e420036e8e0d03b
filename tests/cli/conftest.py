"""Shared fixtures for CLI tests.

``fake_toolchain`` replaces ``subprocess.run`` with a stand-in for rustc and
cargo, recording every command line it receives.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass, field
from unittest.mock import patch

import pytest
from click.testing import CliRunner

RUSTC_VV = (
    "rustc 1.79.0 (129f3b996 2024-06-10)\n"
    "binary: rustc\n"
    "host: x86_64-unknown-linux-gnu\n"
    "release: 1.79.0\n"
)


@dataclass
class FakeToolchain:
    """Scripted rustc/cargo responses."""

    metadata: str = ""
    rustc_output: str = RUSTC_VV
    rustc_returncode: int = 0
    cargo_returncode: int = 0
    cargo_stderr: str = ""
    calls: list[list[str]] = field(default_factory=list)

    def run(self, cmd: list[str], **kwargs) -> subprocess.CompletedProcess:
        self.calls.append(list(cmd))
        if cmd[1:] == ["-vV"]:
            return subprocess.CompletedProcess(cmd, self.rustc_returncode, self.rustc_output, "")
        return subprocess.CompletedProcess(
            cmd, self.cargo_returncode, self.metadata, self.cargo_stderr,
        )

    @property
    def cargo_calls(self) -> list[list[str]]:
        return [c for c in self.calls if "metadata" in c]

    @property
    def rustc_calls(self) -> list[list[str]]:
        return [c for c in self.calls if c[1:] == ["-vV"]]


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click CliRunner for invoking commands."""
    return CliRunner()


@pytest.fixture
def fake_toolchain(cargo_metadata_json: str):
    toolchain = FakeToolchain(metadata=cargo_metadata_json)
    with patch("subprocess.run", side_effect=toolchain.run):
        yield toolchain
