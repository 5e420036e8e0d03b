"""Target platform resolution.

The platform identifier handed to ``cargo metadata --filter-platform`` is
either supplied by the caller or taken from the ``host:`` line that
``rustc -vV`` prints, for example::

    rustc 1.79.0 (129f3b996 2024-06-10)
    binary: rustc
    commit-hash: 129f3b9964af4d4a709d1383930ade12dfe7c081
    host: x86_64-unknown-linux-gnu
    release: 1.79.0
    LLVM version: 18.1.7

The platform is always an explicit value returned to the caller; nothing
here caches it or stores it globally.
"""

from __future__ import annotations

import logging
import subprocess

from cargoview.exceptions import ToolchainQueryFailed

logger = logging.getLogger(__name__)

DEFAULT_RUSTC: str = "rustc"

_HOST_PREFIX = "host: "


def parse_host_platform(output: str) -> str:
    """Extract the host platform from ``rustc -vV`` output.

    Args:
        output: Full standard output of ``rustc -vV``.

    Returns:
        The value of the first ``host:`` line, without surrounding
        whitespace or line terminators.

    Raises:
        ToolchainQueryFailed: If no non-empty ``host:`` line is present.
    """
    for line in output.splitlines():
        if line.startswith(_HOST_PREFIX):
            host = line[len(_HOST_PREFIX):].strip()
            if host:
                return host
            break
    raise ToolchainQueryFailed(
        "Failed to parse rustc output to determine the current platform"
    )


def query_host_platform(rustc: str = DEFAULT_RUSTC) -> str:
    """Ask the active Rust toolchain for its default (host) platform.

    Args:
        rustc: The rustc executable to invoke.

    Returns:
        The host platform identifier, e.g. ``x86_64-unknown-linux-gnu``.

    Raises:
        ToolchainQueryFailed: If rustc cannot be run, exits non-zero, or
            prints no host line.
    """
    cmd = [rustc, "-vV"]
    logger.debug("Running %s", " ".join(cmd))
    try:
        proc = subprocess.run(cmd, capture_output=True, text=True, check=False)
    except OSError as exc:
        raise ToolchainQueryFailed(
            f"Failed to invoke {rustc!r}, is it in your PATH? ({exc})"
        ) from exc
    except UnicodeDecodeError as exc:
        raise ToolchainQueryFailed(
            f"{' '.join(cmd)} printed output that is not valid UTF-8 ({exc})"
        ) from exc

    if proc.returncode != 0:
        detail = (proc.stderr or "").strip()
        raise ToolchainQueryFailed(
            f"{' '.join(cmd)} exited with status {proc.returncode}"
            + (f": {detail}" if detail else "")
        )
    return parse_host_platform(proc.stdout)


def resolve_platform(platform: str | None, *, rustc: str = DEFAULT_RUSTC) -> str:
    """Return the platform to restrict dependency resolution to.

    A supplied platform is used verbatim; cargo is the authority on whether
    it is valid. Without one, the toolchain host platform is used.

    Args:
        platform: Explicit platform identifier, or None.
        rustc: The rustc executable used for the fallback query.

    Returns:
        A concrete platform identifier.
    """
    if platform is not None:
        logger.info("Using requested platform %s", platform)
        return platform
    host = query_host_platform(rustc)
    logger.info("Using toolchain host platform %s", host)
    return host
