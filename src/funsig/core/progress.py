"""Console feedback for the CLI: status lines and a file progress bar.

Everything here writes to stderr, leaving stdout free for JSON output.
The progress bar only appears on an interactive terminal for scans large
enough to be worth watching; while it is live, console log handlers are
muted so log lines do not tear the bar.

Usage::

    status("Parsing directory src/")
    for path in progress(files, desc="Parsing", label=lambda p: p.name):
        ...
    status(f"Found {pluralize(n, 'declaration')}", style="success")
"""

from __future__ import annotations

import sys
import threading
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from typing import TypeVar

import structlog
from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    TextColumn,
    TimeElapsedColumn,
)

logger = structlog.get_logger()

# Scans with fewer files finish before a bar is readable
BAR_MIN_ITEMS = 50

_console = Console(stderr=True, highlight=False)

_MARKERS = {
    "success": "[green]✓[/green]",
    "error": "[red]✗[/red]",
    "warning": "[yellow]![/yellow]",
    "info": " ",
}

_mute = threading.local()


def is_console_suppressed() -> bool:
    """True while a live display owns the terminal on this thread."""
    return getattr(_mute, "depth", 0) > 0


@contextmanager
def suppress_console_logs() -> Iterator[None]:
    """Mute console log handlers for the duration of the block. Nests."""
    _mute.depth = getattr(_mute, "depth", 0) + 1
    try:
        yield
    finally:
        _mute.depth -= 1


def status(message: str, *, style: str = "info", indent: int = 0) -> None:
    """Print one status line; ``style`` picks the leading marker."""
    marker = _MARKERS.get(style)
    line = f"{marker} {message}" if marker else message
    _console.print(" " * indent + line)
    logger.debug("status", message=message, style=style)


def pluralize(count: int, singular: str, plural: str | None = None) -> str:
    """``pluralize(1, "file")`` -> "1 file", ``pluralize(3, "file")`` -> "3 files"."""
    return f"{count} {singular if count == 1 else (plural or singular + 's')}"


def _bar_wanted(total: int | None, force: bool) -> bool:
    if total is None or not sys.stderr.isatty():
        return False
    return force or total >= BAR_MIN_ITEMS


T = TypeVar("T")


def progress(
    items: Iterable[T],
    *,
    desc: str = "Working",
    label: Callable[[T], str] | None = None,
    force: bool = False,
) -> Iterator[T]:
    """Yield ``items`` unchanged, drawing a transient bar when it helps.

    ``label`` names the current item in the bar (e.g. the file being
    parsed). Iterables without ``len()`` never get a bar.
    """
    total = len(items) if hasattr(items, "__len__") else None  # type: ignore[arg-type]
    if not _bar_wanted(total, force):
        yield from items
        return

    columns = (
        TextColumn("[cyan]{task.description}"),
        BarColumn(bar_width=30),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        TextColumn("[dim]{task.fields[current]}"),
    )
    with (
        suppress_console_logs(),
        Progress(*columns, console=_console, transient=True) as bar,
    ):
        task = bar.add_task(desc, total=total, current="")
        for item in items:
            if label is not None:
                bar.update(task, current=label(item))
            yield item
            bar.advance(task)
    logger.debug("progress_done", desc=desc, total=total)
