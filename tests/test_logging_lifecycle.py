"""
Tests for logging setup and teardown.

Verifies:
- Repeated setup_logging() calls do not stack handlers
- The rotating file log is written under the requested directory
- [PERF] lines get their own console color
- Short logger names for long module paths
"""
import logging

import pytest

import animated.logging.logger as logger_module
from animated.logging.logger import (
    ColoredFormatter,
    SuppressingStreamHandler,
    _teardown_handlers,
    get_logger,
    setup_logging,
)


@pytest.fixture
def isolated_logging(tmp_path):
    """Run setup_logging() against tmp_path and restore module state after."""
    package_logger = logging.getLogger("animated")
    orig_level = package_logger.level
    orig_dir = logger_module._LOG_DIR
    orig_verbose = logger_module._VERBOSE
    yield tmp_path
    _teardown_handlers()
    package_logger.setLevel(orig_level)
    logger_module._LOG_DIR = orig_dir
    logger_module._VERBOSE = orig_verbose


class TestLoggingLifecycle:
    """Test logging setup/teardown lifecycle."""

    def test_repeated_setup_no_duplicate_handlers(self, isolated_logging):
        """Three setup cycles leave exactly one set of handlers."""
        package_logger = logging.getLogger("animated")

        setup_logging(debug=True, log_dir=isolated_logging)
        first_count = len(package_logger.handlers)
        for _ in range(2):
            setup_logging(debug=True, log_dir=isolated_logging)

        assert len(package_logger.handlers) == first_count == 2
        assert sum(isinstance(h, SuppressingStreamHandler) for h in package_logger.handlers) == 1

    def test_teardown_handlers_idempotent(self, isolated_logging):
        """_teardown_handlers() is safe to call multiple times."""
        setup_logging(log_dir=isolated_logging)
        for _ in range(3):
            _teardown_handlers()
        assert logging.getLogger("animated").handlers == []

    def test_file_log_written(self, isolated_logging):
        setup_logging(log_dir=isolated_logging)
        get_logger("animated.props.schema").info("hello from the test")
        _teardown_handlers()

        text = (isolated_logging / "animated.log").read_text(encoding="utf-8")
        assert "logging initialized" in text
        assert "hello from the test" in text

    def test_verbose_implies_debug(self, isolated_logging):
        setup_logging(verbose=True, log_dir=isolated_logging)
        assert logger_module.is_verbose_logging()
        assert logging.getLogger("animated").level == logging.DEBUG


class TestColoredFormatter:

    def _record(self, msg, args=None, level=logging.INFO):
        return logging.LogRecord("test", level, "test.py", 1, msg, args, None)

    def test_level_color(self):
        formatted = ColoredFormatter("%(levelname)s - %(message)s").format(self._record("plain"))
        assert ColoredFormatter.COLORS["INFO"] in formatted

    def test_perf_tag_in_args_gets_perf_color(self):
        """Tags are passed as %s arguments, so the rendered message is checked."""
        record = self._record("%s slow", ("[PERF]",), logging.WARNING)
        formatted = ColoredFormatter("%(message)s").format(record)
        assert formatted.startswith(ColoredFormatter.PERF_COLOR)
        assert record.levelname == "WARNING"


def test_short_name_overrides():
    assert get_logger("animated.animation.animated_value").name == "animated.value"
    assert get_logger("animated.props.schema").name == "animated.props.schema"
