"""Tests for structured logging."""

import json
import logging
from pathlib import Path

import pytest
import structlog

from funsig.config.models import LoggingConfig, LogOutputConfig
from funsig.core.logging import (
    clear_run_id,
    configure_logging,
    get_logger,
    get_run_id,
    set_run_id,
)
from funsig.core.progress import suppress_console_logs


def _json_lines(path: Path) -> list[dict]:
    return [json.loads(line) for line in path.read_text().splitlines() if line]


class TestRunId:
    """Parse-run correlation id."""

    def setup_method(self) -> None:
        clear_run_id()

    def test_given_explicit_id_when_set_then_returned(self) -> None:
        # Given
        run_id = "scan-42"

        # When
        returned = set_run_id(run_id)

        # Then
        assert returned == "scan-42"
        assert get_run_id() == "scan-42"

    def test_given_no_id_when_set_then_short_hex_generated(self) -> None:
        # When
        run_id = set_run_id()

        # Then
        assert len(run_id) == 12
        int(run_id, 16)

    def test_given_two_runs_when_set_then_ids_differ(self) -> None:
        # When
        first = set_run_id()
        second = set_run_id()

        # Then
        assert first != second

    def test_given_active_run_when_cleared_then_none(self) -> None:
        # Given
        set_run_id("done")

        # When
        clear_run_id()

        # Then
        assert get_run_id() is None


class TestConfigureLogging:
    """Handler and renderer setup."""

    def setup_method(self) -> None:
        structlog.reset_defaults()
        logging.getLogger().handlers.clear()
        clear_run_id()

    def teardown_method(self) -> None:
        logging.getLogger().handlers.clear()

    def test_given_json_format_when_logging_then_stderr_gets_json(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        # Given
        configure_logging(json_format=True, level="INFO")

        # When
        get_logger("engine").info("extraction_complete", files=3)

        # Then
        line = capsys.readouterr().err.strip().splitlines()[-1]
        data = json.loads(line)
        assert data["event"] == "extraction_complete"
        assert data["files"] == 3
        assert data["level"] == "info"
        assert data["logger"] == "engine"
        assert "timestamp" in data

    def test_given_run_id_when_logging_then_stamped(self, tmp_path: Path) -> None:
        # Given
        log_file = tmp_path / "run.log"
        configure_logging(
            config=LoggingConfig(outputs=[LogOutputConfig(format="json", destination=str(log_file))])
        )
        set_run_id("abc123")

        # When
        structlog.get_logger().info("file_parsed", path="a.js")

        # Then
        (record,) = _json_lines(log_file)
        assert record["run_id"] == "abc123"
        assert record["path"] == "a.js"

    def test_given_no_run_when_logging_then_no_run_id_key(self, tmp_path: Path) -> None:
        # Given
        log_file = tmp_path / "run.log"
        configure_logging(
            config=LoggingConfig(outputs=[LogOutputConfig(format="json", destination=str(log_file))])
        )

        # When
        structlog.get_logger().info("grammar_loaded", grammar="javascript")

        # Then
        (record,) = _json_lines(log_file)
        assert "run_id" not in record

    def test_given_config_when_configured_then_simple_params_ignored(
        self, tmp_path: Path
    ) -> None:
        # Given
        log_file = tmp_path / "debug.log"
        config = LoggingConfig(
            level="DEBUG",
            outputs=[LogOutputConfig(format="json", destination=str(log_file))],
        )

        # When
        configure_logging(config=config, json_format=False, level="ERROR")
        get_logger().debug("function_found", name="add")

        # Then
        assert _json_lines(log_file)[0]["event"] == "function_found"

    def test_given_per_output_levels_when_logging_then_filtered(self, tmp_path: Path) -> None:
        # Given
        warnings_file = tmp_path / "warnings.log"
        everything_file = tmp_path / "all.log"
        configure_logging(
            config=LoggingConfig(
                level="DEBUG",
                outputs=[
                    LogOutputConfig(
                        format="json", destination=str(warnings_file), level="WARNING"
                    ),
                    LogOutputConfig(format="json", destination=str(everything_file)),
                ],
            )
        )
        logger = get_logger()

        # When
        logger.debug("file_parsed", path="a.js")
        logger.warning("unsupported_extension", path="README.md")

        # Then
        assert [r["event"] for r in _json_lines(warnings_file)] == ["unsupported_extension"]
        assert [r["event"] for r in _json_lines(everything_file)] == [
            "file_parsed",
            "unsupported_extension",
        ]

    def test_given_console_format_when_logging_then_plain_text(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        # Given
        configure_logging(level="INFO")

        # When
        get_logger().warning("json_file_skipped", path="package.json")

        # Then
        err = capsys.readouterr().err
        assert "json_file_skipped" in err
        assert "package.json" in err
        assert not err.lstrip().startswith("{")

    def test_given_live_display_when_logging_then_console_muted(
        self, capsys: pytest.CaptureFixture[str], tmp_path: Path
    ) -> None:
        # Given
        log_file = tmp_path / "file.log"
        configure_logging(
            config=LoggingConfig(
                outputs=[
                    LogOutputConfig(format="json"),
                    LogOutputConfig(format="json", destination=str(log_file)),
                ]
            )
        )

        # When
        with suppress_console_logs():
            get_logger().info("extraction_started", files=120)

        # Then
        assert capsys.readouterr().err == ""
        assert _json_lines(log_file)[0]["event"] == "extraction_started"
