"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (FUNSIG__SECTION__KEY)
3. Project YAML (<root>/.funsig.yaml)
4. Global YAML (~/.config/funsig/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    FUNSIG__<SECTION>__<KEY>=<VALUE>

Examples:
    FUNSIG__LOGGING__LEVEL=DEBUG
    FUNSIG__EXTRACTION__COMMENT_MAX_DISTANCE=5
    FUNSIG__EXTRACTION__LEGACY_DEPENDENCIES=true
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        FUNSIG__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every visited declaration.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ExtractionConfig(BaseModel):
    """Declaration extraction configuration.

    Env vars:
        FUNSIG__EXTRACTION__COMMENT_MAX_DISTANCE: Max lines between a comment and its declaration
        FUNSIG__EXTRACTION__MAX_FILE_SIZE_MB: Skip files larger than this
        FUNSIG__EXTRACTION__LEGACY_DEPENDENCIES: Emit flat function list with dependOn
    """

    comment_max_distance: int = Field(
        default=9,
        description="A comment is associated with a declaration only if it ends at most "
        "this many lines above the declaration's first line.",
    )
    default_extensions: list[str] = Field(
        default_factory=lambda: [".js", ".ts", ".jsx", ".tsx"],
        description="Extensions used when auto-detection finds nothing or fails.",
    )
    extra_excluded_dirs: list[str] = Field(
        default_factory=list,
        description="Directory names skipped during scans, in addition to hidden "
        "and package-manager directories.",
    )
    max_file_size_mb: int = Field(
        default=5,
        description="Files larger than this (MB) produce an empty record; 0 disables "
        "the limit.",
    )
    legacy_dependencies: bool = Field(
        default=False,
        description="Emit a flat function list with heuristic dependOn edges.",
    )

    @field_validator("comment_max_distance", "max_file_size_mb")
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"Must be >= 0, got {v}")
        return v

    @field_validator("default_extensions")
    @classmethod
    def validate_extensions(cls, v: list[str]) -> list[str]:
        for ext in v:
            if not ext.startswith("."):
                raise ValueError(f"Extension must start with '.': {ext}")
        return [ext.lower() for ext in v]


class FunsigConfig(BaseModel):
    """Root configuration for funsig.

    All settings can be configured via:
    1. Environment variables: FUNSIG__SECTION__KEY
    2. YAML config files (project or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
