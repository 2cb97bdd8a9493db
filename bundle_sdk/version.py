"""
Version helpers for bundle-sdk.

A static PEP 440 `__version__` plus an optional `git describe` suffix for dev
checkouts (shown by `bundle-sdk version`).
"""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass
from typing import Optional

__version__ = "0.1.0"

# Version of the data item format written by this package (ANS-104 "1").
FORMAT_VERSION = "1"


@dataclass(frozen=True)
class VersionInfo:
    base: str
    git: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.base if not self.git else f"{self.base} ({self.git})"


def _find_git_root(start: str) -> Optional[str]:
    root = start
    for _ in range(6):
        if os.path.isdir(os.path.join(root, ".git")):
            return root
        parent = os.path.dirname(root)
        if parent == root:
            return None
        root = parent
    return None


def _git_describe(cwd: Optional[str] = None) -> Optional[str]:
    """`git describe --tags --dirty --always` when inside a checkout, else None."""
    root = _find_git_root(cwd or os.path.dirname(os.path.abspath(__file__)))
    if root is None:
        return None
    try:
        out = subprocess.run(
            ["git", "describe", "--tags", "--dirty", "--always"],
            cwd=root,
            check=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
        )
    except (OSError, subprocess.CalledProcessError):
        return None
    return out.stdout.strip() or None


def version_info() -> VersionInfo:
    return VersionInfo(base=__version__, git=_git_describe())


def version() -> str:
    """Human-friendly string, e.g. '0.1.0 (v0.1.0-3-gabc1234)'."""
    return str(version_info())


__all__ = ["__version__", "FORMAT_VERSION", "VersionInfo", "version_info", "version"]
