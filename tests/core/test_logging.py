"""Tests for structured logging."""

import json
import logging
from pathlib import Path

import pytest
import structlog

from fkfactory.config.models import LoggingConfig, LogOutputConfig
from fkfactory.core.logging import (
    configure_logging,
    enter_resolution,
    exit_resolution,
    get_logger,
    get_resolution_depth,
)


class TestResolutionDepth:
    """Resolution depth context variable tests."""

    def test_given_fresh_context_when_get_then_zero(self) -> None:
        """Fresh context is at depth zero."""
        # When
        result = get_resolution_depth()

        # Then
        assert result == 0

    def test_given_nested_enter_when_exit_then_depth_restored(self) -> None:
        """Tokens restore the enclosing depth in LIFO order."""
        # Given
        outer = enter_resolution()
        inner = enter_resolution()
        assert get_resolution_depth() == 2

        # When
        exit_resolution(inner)

        # Then
        assert get_resolution_depth() == 1
        exit_resolution(outer)
        assert get_resolution_depth() == 0


class TestLoggingConfiguration:
    """Logging configuration tests."""

    def setup_method(self) -> None:
        """Reset structlog and stdlib logging before each test."""
        structlog.reset_defaults()
        logging.getLogger().handlers.clear()

    def test_given_json_file_output_when_log_then_valid_json(self, tmp_path: Path) -> None:
        """JSON format produces valid JSON with required fields."""
        # Given
        log_file = tmp_path / "fkfactory.log"
        configure_logging(
            config=LoggingConfig(
                level="INFO",
                outputs=[LogOutputConfig(format="json", destination=str(log_file))],
            )
        )
        logger = get_logger("test")

        # When
        logger.info("factory_generated", factory="NoteFactory")

        # Then
        data = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert data["event"] == "factory_generated"
        assert data["factory"] == "NoteFactory"
        assert data["logger"] == "test"
        assert data["level"] == "info"
        assert "timestamp" in data
        assert "resolution_depth" not in data

    def test_given_nested_resolution_when_log_then_depth_tagged(self, tmp_path: Path) -> None:
        """Events emitted while a dependency is created carry the depth."""
        # Given
        log_file = tmp_path / "depth.log"
        configure_logging(
            config=LoggingConfig(
                level="DEBUG",
                outputs=[LogOutputConfig(format="json", destination=str(log_file))],
            )
        )
        logger = get_logger()

        # When
        token = enter_resolution()
        try:
            logger.debug("fk_autocreate", field="person_id")
        finally:
            exit_resolution(token)

        # Then
        data = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert data["resolution_depth"] == 1

    def test_given_config_object_when_configure_then_takes_precedence(
        self, tmp_path: Path
    ) -> None:
        """LoggingConfig object takes precedence over simple params."""
        # Given
        log_file = tmp_path / "test.log"
        config = LoggingConfig(
            level="DEBUG",
            outputs=[LogOutputConfig(format="json", destination=str(log_file))],
        )

        # When
        configure_logging(config=config, json_format=False, level="ERROR")
        get_logger().debug("debug msg")

        # Then
        assert "debug msg" in log_file.read_text()

    def test_given_multi_output_config_when_configure_then_levels_respected(
        self, tmp_path: Path
    ) -> None:
        """Multiple outputs receive logs according to their levels."""
        # Given
        debug_file = tmp_path / "debug.log"
        info_file = tmp_path / "info.log"
        config = LoggingConfig(
            level="DEBUG",
            outputs=[
                LogOutputConfig(format="json", destination=str(info_file), level="INFO"),
                LogOutputConfig(format="console", destination=str(debug_file)),
            ],
        )

        # When
        configure_logging(config=config)
        logger = get_logger()
        logger.debug("debug only")
        logger.info("info msg")

        # Then
        info_content = info_file.read_text()
        assert "info msg" in info_content
        assert "debug only" not in info_content
        debug_content = debug_file.read_text()
        assert "debug only" in debug_content
        assert "info msg" in debug_content

    def test_given_simple_params_when_configure_then_root_level_set(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Simple params configure a single stderr output."""
        # When
        configure_logging(json_format=True, level="WARNING")

        # Then
        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1
        capsys.readouterr()
