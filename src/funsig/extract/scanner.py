"""Directory scanning: extension auto-detection and file discovery.

Hidden directories and package-manager directories are never entered.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Sequence
from pathlib import Path

import structlog

from funsig.core.excludes import is_excluded_dir

logger = structlog.get_logger()

DEFAULT_EXTENSIONS: tuple[str, ...] = (".js", ".ts", ".jsx", ".tsx")


def _walk(root: Path, extra_excluded: Iterable[str]) -> Iterable[Path]:
    """Yield files under root, pruning excluded directories in place."""
    extra = tuple(extra_excluded)

    def _raise(err: OSError) -> None:
        raise err

    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
        dirnames[:] = sorted(d for d in dirnames if not is_excluded_dir(d, extra))
        for filename in sorted(filenames):
            yield Path(dirpath) / filename


def detect_file_extensions(
    directory: str | Path,
    defaults: Sequence[str] = DEFAULT_EXTENSIONS,
    extra_excluded: Iterable[str] = (),
) -> list[str]:
    """Distinct file extensions present under ``directory``, lowercased.

    Unsupported extensions are kept; the grammar resolver warns about and
    skips their files. Falls back to ``defaults`` when no file has an
    extension or the scan fails.
    """
    found: set[str] = set()
    try:
        for path in _walk(Path(directory), extra_excluded):
            ext = path.suffix.lower()
            if ext:
                found.add(ext)
    except OSError as e:
        logger.warning("extension_detection_failed", directory=str(directory), error=str(e))
        return list(defaults)
    if not found:
        logger.debug("no_extensions_detected", directory=str(directory), defaults=list(defaults))
        return list(defaults)
    return sorted(found)


def find_files(
    directory: str | Path,
    extensions: Iterable[str],
    extra_excluded: Iterable[str] = (),
) -> list[Path]:
    """Files under ``directory`` whose extension is in ``extensions``, sorted.

    Raises:
        OSError: When the directory cannot be walked.
    """
    wanted = {ext.lower() for ext in extensions}
    root = Path(directory)
    if not root.is_dir():
        raise NotADirectoryError(f"Not a directory: {root}")
    return sorted(p for p in _walk(root, extra_excluded) if p.suffix.lower() in wanted)
