# tests/test_logging_config.py

"""Tests for the per-run logging configuration."""

import logging
import unittest

from storefront.config.logging_config import setup_logging


class TestLoggingConfig(unittest.TestCase):
    """Verify logging setup behaviour."""

    def setUp(self) -> None:
        """Clean up the storefront logger before each test."""
        root_logger = logging.getLogger("storefront")
        for handler in root_logger.handlers:
            handler.close()
        root_logger.handlers.clear()

    tearDown = setUp

    def test_setup_creates_log_file(self) -> None:
        """setup_logging returns a path that exists on disk."""
        log_path = setup_logging()
        self.assertTrue(log_path.exists())

    def test_log_file_naming_convention(self) -> None:
        """Log file name matches run_YYYYMMDD_HHMMSS.log format."""
        log_path = setup_logging()
        self.assertRegex(log_path.name, r"^run_\d{8}_\d{6}\.log$")

    def test_file_and_console_handlers(self) -> None:
        """File handler at DEBUG, console handler at WARNING."""
        setup_logging()
        root_logger = logging.getLogger("storefront")
        file_handlers = [
            h for h in root_logger.handlers
            if isinstance(h, logging.FileHandler)
        ]
        stream_handlers = [
            h for h in root_logger.handlers
            if isinstance(h, logging.StreamHandler)
            and not isinstance(h, logging.FileHandler)
        ]
        self.assertEqual(len(file_handlers), 1)
        self.assertEqual(file_handlers[0].level, logging.DEBUG)
        self.assertEqual(len(stream_handlers), 1)
        self.assertEqual(stream_handlers[0].level, logging.WARNING)

    def test_console_can_be_disabled(self) -> None:
        """The TUI run logs to file only."""
        setup_logging(console=False)
        handlers = logging.getLogger("storefront").handlers
        self.assertEqual(len(handlers), 1)
        self.assertIsInstance(handlers[0], logging.FileHandler)

    def test_repeated_calls_no_duplicate_handlers(self) -> None:
        """Calling setup_logging twice does not duplicate handlers."""
        setup_logging()
        root_logger = logging.getLogger("storefront")
        count_before = len(root_logger.handlers)
        setup_logging()
        self.assertEqual(count_before, len(root_logger.handlers))

    def test_root_logger_level_is_debug(self) -> None:
        """The root project logger is set to DEBUG."""
        setup_logging()
        self.assertEqual(
            logging.getLogger("storefront").level, logging.DEBUG
        )

    def test_log_file_inside_logs_dir(self) -> None:
        """Log file is created inside the logs/ directory."""
        log_path = setup_logging()
        self.assertEqual(log_path.parent.name, "logs")

    def test_child_logger_records_reach_file(self) -> None:
        """Module loggers write through the per-run file."""
        log_path = setup_logging(console=False)
        logging.getLogger("storefront.controller").error("fetch failed")
        for handler in logging.getLogger("storefront").handlers:
            handler.flush()
        self.assertIn("fetch failed", log_path.read_text(encoding="utf-8"))


if __name__ == "__main__":
    unittest.main()
