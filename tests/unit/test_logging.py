"""Tests for logging setup."""

from __future__ import annotations

import logging

from toursearch.config.settings import ObservabilitySettings
from toursearch.observability.logging import LIBRARY_LOGGERS, setup_logging


class TestSetupLogging:
    def test_library_loggers_quiet_by_default(self) -> None:
        setup_logging(ObservabilitySettings(log_level="info"))
        for name in LIBRARY_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING

    def test_library_loggers_follow_debug(self) -> None:
        setup_logging(ObservabilitySettings(log_level="debug", log_format="console"))
        for name in LIBRARY_LOGGERS:
            assert logging.getLogger(name).level == logging.DEBUG

    def test_defaults_without_settings(self) -> None:
        setup_logging()
        assert logging.getLogger("httpx").level == logging.WARNING
