"""Invocation of ``cargo metadata``.

``MetadataCommand`` holds the feature and platform configuration for one
resolution and turns it into a single blocking ``cargo metadata`` call. The
resolver is deterministic for a given manifest and configuration, so a
failed call is reported and never retried.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass, field

from cargoview.core.metadata.models import ResolvedMetadata
from cargoview.core.metadata.parser import parse_metadata
from cargoview.exceptions import ManifestResolutionFailed

logger = logging.getLogger(__name__)

DEFAULT_CARGO: str = "cargo"


@dataclass
class MetadataCommand:
    """Configuration for one ``cargo metadata`` invocation.

    Feature options are forwarded as given. Passing both ``features`` and
    ``all_features`` is not an error here; cargo decides what it accepts.
    The platform filter is always applied.

    Attributes:
        manifest_path: Path to the ``Cargo.toml`` to resolve.
        platform: Platform identifier passed to ``--filter-platform``.
        features: Explicit features to enable.
        all_features: Enable every feature of the selected packages.
        no_default_features: Do not enable the ``default`` feature.
        cargo: The cargo executable.
        offline: Forward ``--offline``.
        locked: Forward ``--locked``.
        frozen: Forward ``--frozen``.
    """

    manifest_path: str
    platform: str
    features: list[str] = field(default_factory=list)
    all_features: bool = False
    no_default_features: bool = False
    cargo: str = DEFAULT_CARGO
    offline: bool = False
    locked: bool = False
    frozen: bool = False

    def args(self) -> list[str]:
        """Return the full argument vector, executable first."""
        cmd = [
            self.cargo, "metadata",
            "--format-version", "1",
            "--manifest-path", str(self.manifest_path),
        ]
        if self.features:
            cmd += ["--features", ",".join(self.features)]
        if self.all_features:
            cmd.append("--all-features")
        if self.no_default_features:
            cmd.append("--no-default-features")
        cmd += ["--filter-platform", self.platform]
        if self.offline:
            cmd.append("--offline")
        if self.locked:
            cmd.append("--locked")
        if self.frozen:
            cmd.append("--frozen")
        return cmd

    def exec(self) -> ResolvedMetadata:
        """Run cargo once and parse its output.

        Returns:
            The resolved package set.

        Raises:
            ManifestResolutionFailed: If cargo cannot be started, exits
                non-zero, or prints output that cannot be parsed.
        """
        cmd = self.args()
        logger.debug("Running %s", " ".join(cmd))
        try:
            proc = subprocess.run(cmd, capture_output=True, text=True, check=False)
        except OSError as exc:
            raise ManifestResolutionFailed(
                f"Failed to invoke {self.cargo!r}, is it in your PATH? ({exc})"
            ) from exc
        except UnicodeDecodeError as exc:
            raise ManifestResolutionFailed(
                f"Malformed cargo metadata output: not valid UTF-8 ({exc})"
            ) from exc

        if proc.returncode != 0:
            stderr = (proc.stderr or "").strip()
            raise ManifestResolutionFailed(
                f"cargo metadata exited with status {proc.returncode}"
                + (f": {stderr}" if stderr else ""),
                returncode=proc.returncode,
                stderr=proc.stderr,
            )
        return parse_metadata(proc.stdout, self.platform)
