"""structlog setup for funsig.

Modules log through ``structlog.get_logger()``; ``configure_logging`` routes
those events through stdlib handlers, one per configured output. Each
output renders either human-readable console lines or JSON lines.

Every top-level parse run calls ``set_run_id()``, and the id is stamped on
all events emitted during that run so the log of one directory scan can be
pulled out of a shared file.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from pathlib import Path
from typing import TYPE_CHECKING, Any
from uuid import uuid4

import structlog

if TYPE_CHECKING:
    from funsig.config.models import LoggingConfig, LogOutputConfig

_run_id: ContextVar[str | None] = ContextVar("funsig_run_id", default=None)


def get_run_id() -> str | None:
    return _run_id.get()


def set_run_id(run_id: str | None = None) -> str:
    """Start a parse run. Generates a short random id when none is given."""
    value = run_id or uuid4().hex[:12]
    _run_id.set(value)
    return value


def clear_run_id() -> None:
    _run_id.set(None)


def _stamp_run_id(
    _logger: structlog.types.WrappedLogger,
    _method: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    run_id = _run_id.get()
    if run_id is not None:
        event_dict.setdefault("run_id", run_id)
    return event_dict


def _level(name: str | None, fallback: int = logging.INFO) -> int:
    if not name:
        return fallback
    value = logging.getLevelName(name.upper())
    return value if isinstance(value, int) else fallback


class ConsoleSuppressingFilter(logging.Filter):
    """Drops console records while a progress bar is on screen."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: ARG002
        from funsig.core.progress import is_console_suppressed

        return not is_console_suppressed()


_PRE_CHAIN: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.processors.add_log_level,
    structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", key="timestamp"),
    _stamp_run_id,  # type: ignore[list-item]
]


def _renderer(fmt: str, *, colors: bool) -> structlog.types.Processor:
    if fmt == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=colors, pad_event_to=0, pad_level=False)


def _build_handler(output: LogOutputConfig, default_level: int) -> logging.Handler:
    handler: logging.Handler
    stream = {"stderr": sys.stderr, "stdout": sys.stdout}.get(output.destination)
    if stream is not None:
        handler = logging.StreamHandler(stream)
        handler.addFilter(ConsoleSuppressingFilter())
        colors = stream.isatty()
    else:
        path = Path(output.destination)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, mode="a", encoding="utf-8")
        colors = False

    handler.setLevel(_level(output.level, default_level))
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=_renderer(output.format, colors=colors),
            foreign_pre_chain=_PRE_CHAIN,
        )
    )
    return handler


def configure_logging(
    *,
    config: LoggingConfig | None = None,
    json_format: bool = False,
    level: str = "INFO",
) -> None:
    """Install structlog and the root handlers.

    Args:
        config: Full logging section. When given, ``json_format`` and
            ``level`` are ignored.
        json_format: Single stderr output rendering JSON lines.
        level: Level for the single stderr output.
    """
    from funsig.config.models import LoggingConfig, LogOutputConfig

    if config is None:
        fmt = "json" if json_format else "console"
        config = LoggingConfig(level=level, outputs=[LogOutputConfig(format=fmt)])

    default_level = _level(config.level)
    structlog.configure(
        processors=[*_PRE_CHAIN, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(default_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Reconfiguration (CLI config load after group options) must take effect
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(default_level)
    for output in config.outputs:
        root.addHandler(_build_handler(output, default_level))


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    bound = structlog.get_logger()
    return bound.bind(logger=name) if name else bound  # type: ignore[no-any-return]
