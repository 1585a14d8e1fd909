"""Core module exports."""

from funsig.core.errors import (
    ConfigError,
    ErrorCode,
    FunsigError,
    GrammarError,
    InternalError,
    SourceError,
)
from funsig.core.logging import (
    clear_run_id,
    configure_logging,
    get_logger,
    get_run_id,
    set_run_id,
)
from funsig.core.progress import progress, status

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCode",
    "FunsigError",
    "GrammarError",
    "InternalError",
    "SourceError",
    # Logging
    "clear_run_id",
    "configure_logging",
    "get_logger",
    "get_run_id",
    "set_run_id",
    # Progress
    "progress",
    "status",
]
