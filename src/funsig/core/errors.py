"""funsig error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Extraction (grammar loading, source reading)
- 9xxx: Internal

Extraction errors never cross the ``parse_file`` / ``parse_directory``
boundary: they are logged there and converted to empty results.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Self


class ErrorCode(IntEnum):
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    GRAMMAR_NOT_AVAILABLE = 3001
    SOURCE_READ_FAILED = 3002
    SOURCE_TOO_LARGE = 3003

    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class FunsigError(Exception):
    """Base error: a code, a human message and structured details."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def _build(cls, code: ErrorCode, message: str, **details: Any) -> Self:
        return cls(code=code, message=message, details=details)

    @property
    def error_name(self) -> str:
        """Code name used as the ``error`` field of log events."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": int(self.code),
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{int(self.code)}] {self.error_name}: {self.message}"


class ConfigError(FunsigError):
    """Config file or value rejected."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> ConfigError:
        return cls._build(
            ErrorCode.CONFIG_PARSE_ERROR,
            f"Failed to parse config at {path}: {reason}",
            path=path,
            reason=reason,
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> ConfigError:
        return cls._build(
            ErrorCode.CONFIG_INVALID_VALUE,
            f"Invalid value for '{field}': {reason}",
            field=field,
            value=str(value),
            reason=reason,
        )


class GrammarError(FunsigError):
    """A tree-sitter grammar could not be loaded."""

    @classmethod
    def not_available(cls, grammar: str, module: str, reason: str) -> GrammarError:
        hint = f" Install the '{module}' package." if module else ""
        return cls._build(
            ErrorCode.GRAMMAR_NOT_AVAILABLE,
            f"Grammar '{grammar}' is not available: {reason}.{hint}",
            grammar=grammar,
            module=module,
            reason=reason,
        )


class SourceError(FunsigError):
    """A source file could not be read for parsing."""

    @classmethod
    def read_failed(cls, path: str, reason: str) -> SourceError:
        return cls._build(
            ErrorCode.SOURCE_READ_FAILED,
            f"Cannot read {path}: {reason}",
            path=path,
            reason=reason,
        )

    @classmethod
    def too_large(cls, path: str, size: int, limit: int) -> SourceError:
        return cls._build(
            ErrorCode.SOURCE_TOO_LARGE,
            f"{path} is {size:,} bytes, exceeds limit of {limit:,} bytes",
            path=path,
            size=size,
            limit=limit,
        )


class InternalError(FunsigError):
    """Broken invariant inside funsig itself. Never converted to a result."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> InternalError:
        return cls._build(ErrorCode.INTERNAL_ERROR, f"Internal error: {reason}", **details)
