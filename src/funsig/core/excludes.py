"""Directory exclusion rules for directory scans.

Two tiers:

HIDDEN: any directory whose name starts with "." is never traversed
    (VCS internals, editor state, tool caches).

DEPENDENCY_DIRS: directories owned by package managers. They hold
    third-party code that would swamp the declaration index, so scans
    skip them. Callers may add names through
    ``ExtractionConfig.extra_excluded_dirs``.
"""

from __future__ import annotations

from collections.abc import Iterable

DEPENDENCY_DIRS: frozenset[str] = frozenset(
    (
        # -------------------------------------------------------------------------
        # JavaScript/Node.js ecosystem
        # -------------------------------------------------------------------------
        "node_modules",
        "bower_components",
        "jspm_packages",
        # -------------------------------------------------------------------------
        # Python ecosystem
        # -------------------------------------------------------------------------
        "venv",
        "virtualenv",
        "__pycache__",
        "site-packages",
        "__pypackages__",
        # -------------------------------------------------------------------------
        # PHP / Go / Ruby vendoring
        # -------------------------------------------------------------------------
        "vendor",
        # -------------------------------------------------------------------------
        # CocoaPods
        # -------------------------------------------------------------------------
        "Pods",
    )
)


def is_hidden_dir(dirname: str) -> bool:
    """Check if a directory name is hidden (dot-prefixed)."""
    return dirname.startswith(".")


def is_excluded_dir(dirname: str, extra: Iterable[str] = ()) -> bool:
    """Check if a directory should be skipped during a scan."""
    return is_hidden_dir(dirname) or dirname in DEPENDENCY_DIRS or dirname in set(extra)
