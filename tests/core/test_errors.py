"""Tests for error types and codes."""

import pytest

from funsig.core.errors import (
    ConfigError,
    ErrorCode,
    FunsigError,
    GrammarError,
    InternalError,
    SourceError,
)


class TestErrorCode:
    """Error code value tests."""

    @pytest.mark.parametrize(
        ("code", "expected_range"),
        [
            (ErrorCode.CONFIG_PARSE_ERROR, 2000),
            (ErrorCode.CONFIG_INVALID_VALUE, 2000),
            (ErrorCode.GRAMMAR_NOT_AVAILABLE, 3000),
            (ErrorCode.SOURCE_READ_FAILED, 3000),
            (ErrorCode.SOURCE_TOO_LARGE, 3000),
            (ErrorCode.INTERNAL_ERROR, 9000),
        ],
    )
    def test_given_error_code_when_checked_then_in_correct_range(
        self, code: ErrorCode, expected_range: int
    ) -> None:
        """Error codes fall within their designated numeric range."""
        # Given
        error_code = code

        # When
        value = error_code.value

        # Then
        assert expected_range <= value < expected_range + 1000


class TestFunsigError:
    """Base error behavior tests."""

    def test_given_error_when_to_dict_then_serializes_all_fields(self) -> None:
        """Error serializes to dict with all required fields."""
        # Given
        error = FunsigError(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message="Test message",
            retryable=True,
            details={"key": "value"},
        )

        # When
        result = error.to_dict()

        # Then
        assert result == {
            "code": 2001,
            "error": "CONFIG_PARSE_ERROR",
            "message": "Test message",
            "retryable": True,
            "details": {"key": "value"},
        }

    def test_given_error_when_str_then_includes_code_and_name(self) -> None:
        """String form carries numeric code, name and message."""
        # Given
        error = FunsigError(code=ErrorCode.INTERNAL_ERROR, message="boom")

        # When
        text = str(error)

        # Then
        assert text == "[9001] INTERNAL_ERROR: boom"

    def test_given_error_when_raised_then_catchable_as_exception(self) -> None:
        """Errors are real exceptions."""
        with pytest.raises(FunsigError) as exc_info:
            raise GrammarError.not_available("ruby", "tree-sitter-ruby", "not installed")

        assert exc_info.value.code == ErrorCode.GRAMMAR_NOT_AVAILABLE


class TestConfigError:
    """Config error factory tests."""

    def test_parse_error_includes_path(self) -> None:
        """parse_error records path and reason."""
        error = ConfigError.parse_error("/tmp/.funsig.yaml", "bad indent")

        assert error.code == ErrorCode.CONFIG_PARSE_ERROR
        assert "/tmp/.funsig.yaml" in error.message
        assert error.details == {"path": "/tmp/.funsig.yaml", "reason": "bad indent"}

    def test_invalid_value_stringifies_value(self) -> None:
        """invalid_value stores the offending value as a string."""
        error = ConfigError.invalid_value("extraction.comment_max_distance", -1, "Must be >= 0")

        assert error.code == ErrorCode.CONFIG_INVALID_VALUE
        assert error.details["value"] == "-1"
        assert "extraction.comment_max_distance" in error.message


class TestExtractionErrors:
    """Grammar and source error factory tests."""

    def test_grammar_not_available_names_package(self) -> None:
        """Message tells the user which package to install."""
        error = GrammarError.not_available("rust", "tree-sitter-rust", "not installed")

        assert error.error_name == "GRAMMAR_NOT_AVAILABLE"
        assert "tree-sitter-rust" in error.message
        assert error.details["grammar"] == "rust"
        assert error.retryable is False

    def test_source_read_failed(self) -> None:
        error = SourceError.read_failed("/src/a.js", "Permission denied")

        assert error.code == ErrorCode.SOURCE_READ_FAILED
        assert error.details == {"path": "/src/a.js", "reason": "Permission denied"}

    def test_source_too_large_reports_sizes(self) -> None:
        """too_large carries size and limit."""
        error = SourceError.too_large("/src/big.js", 6_000_000, 5_242_880)

        assert error.code == ErrorCode.SOURCE_TOO_LARGE
        assert error.details["size"] == 6_000_000
        assert error.details["limit"] == 5_242_880
        assert "5,242,880" in error.message


class TestInternalError:
    def test_unexpected_keeps_details(self) -> None:
        error = InternalError.unexpected("state corrupted", node_kind="program")

        assert error.code == ErrorCode.INTERNAL_ERROR
        assert error.details == {"node_kind": "program"}
