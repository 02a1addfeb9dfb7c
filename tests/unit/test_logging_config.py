"""Tests for logging setup."""

import logging

from rich.logging import RichHandler

from core.logging_config import setup_logging


class TestSetupLogging:
    """Test logger configuration."""

    def test_default_level_is_warning(self):
        """Should keep normal runs free of debug output."""
        logger = setup_logging()

        assert logger.name == "core"
        assert logger.level == logging.WARNING
        assert logging.getLogger("apps").level == logging.WARNING

    def test_verbose_enables_debug(self):
        """Should switch to DEBUG with verbose."""
        logger = setup_logging(verbose=True)

        assert logger.level == logging.DEBUG
        assert logging.getLogger("core.resolve_composer").getEffectiveLevel() == logging.DEBUG

    def test_repeated_setup_does_not_stack_handlers(self):
        """Should replace handlers rather than add duplicates."""
        setup_logging()
        logger = setup_logging()

        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], RichHandler)
