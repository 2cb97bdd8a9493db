"""
bundle_sdk.cli
==============

Command-line interface (`bundle-sdk` console script). Typer is only imported
when the CLI is actually used.

    >>> from bundle_sdk.cli import main
    >>> main()  # runs the CLI
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, List

__all__: List[str] = ["main", "run", "app"]

_SUBMODULE = "bundle_sdk.cli.main"


def __getattr__(name: str) -> Any:
    if name in __all__:
        return getattr(import_module(_SUBMODULE), name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
