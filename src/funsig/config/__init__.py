"""Config module exports."""

from funsig.config.loader import load_config
from funsig.config.models import (
    ExtractionConfig,
    FunsigConfig,
    LoggingConfig,
    LogOutputConfig,
)

__all__ = [
    "load_config",
    "FunsigConfig",
    "ExtractionConfig",
    "LoggingConfig",
    "LogOutputConfig",
]
