"""Tests for MetadataCommand argument construction and execution.

``subprocess.run`` is patched; the tests check the exact cargo command line,
that the platform filter is always applied, and that failures surface as
ManifestResolutionFailed without retrying.
"""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from cargoview.core.metadata import MetadataCommand
from cargoview.exceptions import ManifestResolutionFailed

_RUN = "cargoview.core.metadata.command.subprocess.run"


def _completed(stdout: str = "", returncode: int = 0, stderr: str = "") -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(["cargo"], returncode, stdout=stdout, stderr=stderr)


class TestArgs:
    """Tests for the cargo command line."""

    def test_minimal(self) -> None:
        cmd = MetadataCommand(manifest_path="Cargo.toml", platform="x86_64-unknown-linux-gnu")
        assert cmd.args() == [
            "cargo", "metadata", "--format-version", "1",
            "--manifest-path", "Cargo.toml",
            "--filter-platform", "x86_64-unknown-linux-gnu",
        ]

    def test_features_joined(self) -> None:
        cmd = MetadataCommand("Cargo.toml", "p", features=["tls", "json"])
        args = cmd.args()
        assert args[args.index("--features") + 1] == "tls,json"

    def test_conflicting_feature_options_forwarded_as_is(self) -> None:
        cmd = MetadataCommand(
            "Cargo.toml", "p", features=["tls"], all_features=True, no_default_features=True,
        )
        args = cmd.args()
        assert "--features" in args
        assert "--all-features" in args
        assert "--no-default-features" in args

    def test_no_feature_flags_by_default(self) -> None:
        args = MetadataCommand("Cargo.toml", "p").args()
        assert "--features" not in args
        assert "--all-features" not in args
        assert "--no-default-features" not in args

    def test_platform_filter_always_present(self) -> None:
        args = MetadataCommand("Cargo.toml", "wasm32-unknown-unknown", all_features=True).args()
        assert args[args.index("--filter-platform") + 1] == "wasm32-unknown-unknown"

    def test_custom_cargo_and_network_flags(self) -> None:
        cmd = MetadataCommand(
            "Cargo.toml", "p", cargo="/usr/local/bin/cargo", offline=True, locked=True, frozen=True,
        )
        args = cmd.args()
        assert args[0] == "/usr/local/bin/cargo"
        assert args[-3:] == ["--offline", "--locked", "--frozen"]


class TestExec:
    """Tests for running cargo."""

    def test_parses_stdout(self, cargo_metadata_json: str) -> None:
        cmd = MetadataCommand("Cargo.toml", "x86_64-unknown-linux-gnu")
        with patch(_RUN, return_value=_completed(cargo_metadata_json)) as run:
            metadata = cmd.exec()
        run.assert_called_once()
        assert run.call_args.args[0] == cmd.args()
        assert len(metadata.packages) == 7
        assert metadata.platform == "x86_64-unknown-linux-gnu"

    def test_nonzero_exit(self) -> None:
        cmd = MetadataCommand("missing/Cargo.toml", "p")
        stderr = "error: manifest path `missing/Cargo.toml` does not exist\n"
        with patch(_RUN, return_value=_completed("", 101, stderr)) as run:
            with pytest.raises(ManifestResolutionFailed) as excinfo:
                cmd.exec()
        run.assert_called_once()
        assert excinfo.value.returncode == 101
        assert excinfo.value.stderr == stderr
        assert "does not exist" in str(excinfo.value)

    def test_missing_cargo_binary(self) -> None:
        cmd = MetadataCommand("Cargo.toml", "p", cargo="no-such-cargo")
        with patch(_RUN, side_effect=FileNotFoundError("no-such-cargo")):
            with pytest.raises(ManifestResolutionFailed, match="no-such-cargo"):
                cmd.exec()

    def test_malformed_output(self) -> None:
        with patch(_RUN, return_value=_completed("warning: something\n{")):
            with pytest.raises(ManifestResolutionFailed) as excinfo:
                MetadataCommand("Cargo.toml", "p").exec()
        assert excinfo.value.returncode is None


@pytest.mark.skipif(sys.platform == "win32", reason="needs a POSIX shell script")
class TestUndecodableOutput:
    """cargo output that is not UTF-8 is malformed resolver output."""

    def test_invalid_utf8_raises(self, tmp_path: Path) -> None:
        cargo = tmp_path / "cargo"
        cargo.write_text("#!/bin/sh\nprintf '\\377\\376{'\n")
        cargo.chmod(0o755)
        cmd = MetadataCommand("Cargo.toml", "p", cargo=str(cargo))
        with pytest.raises(ManifestResolutionFailed, match="not valid UTF-8"):
            cmd.exec()
