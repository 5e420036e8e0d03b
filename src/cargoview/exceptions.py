"""cargoview exception hierarchy.

All public exceptions inherit from CargoViewError, giving callers a single
base class to catch when they want to handle any cargoview-specific failure
without swallowing unrelated errors. Every error here is fatal for the run:
there is no retry and no partial result.
"""

from __future__ import annotations


class CargoViewError(Exception):
    """Base exception for all cargoview errors."""


class ToolchainQueryFailed(CargoViewError):
    """Raised when the default platform cannot be obtained from the toolchain.

    Covers a missing or non-executable ``rustc`` binary, a non-zero exit
    status from ``rustc -vV``, and output without a usable ``host:`` line.
    """


class ManifestResolutionFailed(CargoViewError):
    """Raised when ``cargo metadata`` fails or returns unusable output.

    Attributes:
        returncode: Exit status of the cargo process, or None when the
            failure happened before or after the process ran (missing
            binary, malformed JSON).
        stderr: Captured standard error of the cargo process, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        returncode: int | None = None,
        stderr: str | None = None,
    ) -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class DanglingEdge(CargoViewError):
    """Raised when a dependency edge references an unknown package id.

    The resolver output lists every package it resolved, so an edge whose
    endpoint is missing means the response is inconsistent or in a format
    this tool does not understand.

    Attributes:
        source: Package id of the dependent.
        target: Package id that could not be found.
    """

    def __init__(self, source: str, target: str) -> None:
        super().__init__(
            f"Dependency edge {source!r} -> {target!r} points to a package "
            f"that is not part of the resolved package set"
        )
        self.source = source
        self.target = target
