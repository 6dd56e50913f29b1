"""
Tests for configuration, preferences and logging setup.
"""

import logging
from unittest.mock import patch

import pytest

import error_coordinator.config as config
from error_coordinator.error_handling import ErrorCoordinator, ErrorSeverity
from error_coordinator.exceptions import ConfigurationError, ErrorCategory
from error_coordinator.logging_config import ErrorEventLogger, setup_logging
from error_coordinator.preferences import (
    InMemoryPreferenceStore,
    haptics_enabled,
    set_haptics_enabled,
)


class TestConfigConstants:
    """Test configuration constants."""

    def test_history_constants(self):
        assert config.MAX_ERROR_HISTORY == 50
        assert config.SUMMARY_RECENT_LIMIT == 5

    def test_haptics_constants(self):
        assert config.CRITICAL_PULSE_DELAY_MS == 200
        assert config.HAPTICS_PREFERENCE_KEY == "haptics_enabled"

    def test_logging_constants(self):
        assert (
            config.LOG_FORMAT == "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )


class TestValidateConfig:
    """Test validate_config()."""

    def test_defaults_are_valid(self):
        config.validate_config()

    def test_invalid_history_size(self):
        with patch.object(config, "MAX_ERROR_HISTORY", 0):
            with pytest.raises(ConfigurationError) as exc_info:
                config.validate_config()
        assert exc_info.value.setting == "MAX_ERROR_HISTORY"

    def test_history_size_above_limit(self):
        with patch.object(config, "MAX_ERROR_HISTORY", 80):
            with pytest.raises(ConfigurationError, match="must not exceed 50"):
                config.validate_config()

    def test_coordinator_validates_config(self):
        with patch.object(config, "LOG_LEVEL", "VERBOSE"):
            with pytest.raises(ConfigurationError):
                ErrorCoordinator()

    def test_negative_pulse_delay(self):
        with patch.object(config, "CRITICAL_PULSE_DELAY_MS", -5):
            with pytest.raises(ConfigurationError):
                config.validate_config()

    def test_unknown_log_level(self):
        with patch.object(config, "LOG_LEVEL", "VERBOSE"):
            with pytest.raises(ConfigurationError, match="LOG_LEVEL"):
                config.validate_config()


class TestPreferences:
    """Test the in-memory preference store."""

    def test_haptics_default_enabled(self):
        with patch.object(config, "HAPTICS_ENABLED_DEFAULT", True):
            assert haptics_enabled(InMemoryPreferenceStore()) is True

    def test_toggle(self):
        store = InMemoryPreferenceStore()
        set_haptics_enabled(store, False)
        assert haptics_enabled(store) is False
        assert store.get_bool("haptics_enabled", True) is False

    def test_initial_values(self):
        store = InMemoryPreferenceStore({"haptics_enabled": False})
        assert haptics_enabled(store) is False


class TestErrorEventLogger:
    """Severity decides the log level of recorded errors."""

    @pytest.mark.parametrize(
        "severity, level",
        [
            (ErrorSeverity.LOW, logging.INFO),
            (ErrorSeverity.MEDIUM, logging.WARNING),
            (ErrorSeverity.HIGH, logging.ERROR),
            (ErrorSeverity.CRITICAL, logging.ERROR),
        ],
    )
    def test_levels(self, caplog, severity, level):
        event_logger = ErrorEventLogger(logging.getLogger("test.error_events"))

        with caplog.at_level(logging.DEBUG, logger="test.error_events"):
            event_logger.record(ErrorCategory.API, severity, "Server error")

        record = caplog.records[-1]
        assert record.levelno == level
        assert record.error_category == "api"
        assert record.error_severity == severity.value

    def test_message_format(self, caplog):
        event_logger = ErrorEventLogger(logging.getLogger("test.error_events"))

        with caplog.at_level(logging.DEBUG, logger="test.error_events"):
            event_logger.record(
                ErrorCategory.SYSTEM,
                ErrorSeverity.CRITICAL,
                "System error occurred",
                "out of memory",
                "Please restart the app",
            )

        assert caplog.records[-1].getMessage() == (
            "CRITICAL [system] System error occurred | Technical: out of memory"
            " | Suggestion: Please restart the app"
        )


class TestSetupLogging:
    """Test package logger configuration."""

    def test_console_only(self):
        logger = setup_logging(level="debug")
        assert logger.name == "error_coordinator"
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_rotating_file_handler(self, tmp_path):
        logger = setup_logging(level="INFO", log_dir=str(tmp_path / "logs"))
        try:
            handler_types = {type(h).__name__ for h in logger.handlers}
            assert "RotatingFileHandler" in handler_types
            assert (tmp_path / "logs").is_dir()
        finally:
            setup_logging(level="INFO")

    def test_repeated_setup_does_not_stack_handlers(self):
        setup_logging()
        logger = setup_logging()
        assert len(logger.handlers) == 1
