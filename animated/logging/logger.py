"""
Centralized logging configuration for the animated props library.

The library never configures logging on import. Applications (or tests) call
setup_logging() once; everything else only asks for loggers via get_logger().
Rotating file output goes to logs/animated.log, colored console output is
added in debug mode.
"""
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from animated.versioning import get_version_string


_VERBOSE: bool = False
_PERF_METRICS_ENABLED: bool = False
_LOG_DIR: Path = Path.cwd() / "logs"

_LOG_FORMAT = '%(asctime)s - %(name)-30s - %(levelname)-8s - %(message)s'

_env_perf = os.getenv("ANIMATED_PERF_METRICS")
if _env_perf is not None:
    if _env_perf.strip().lower() in ("1", "true", "on", "yes"):
        _PERF_METRICS_ENABLED = True
    elif _env_perf.strip().lower() in ("0", "false", "off", "no"):
        _PERF_METRICS_ENABLED = False


class ColoredFormatter(logging.Formatter):
    """Formatter that colors console lines by level."""

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',       # Cyan
        'INFO': '\033[32m',        # Green
        'WARNING': '\033[33m',     # Yellow
        'ERROR': '\033[31m',       # Red
        'CRITICAL': '\033[35m',    # Magenta
    }
    PERF_COLOR = '\033[38;5;208m'  # Orange for [PERF] telemetry
    RESET = '\033[0m'
    BOLD = '\033[1m'

    def format(self, record):
        original_levelname = record.levelname

        if '[PERF]' in record.getMessage():
            color = self.PERF_COLOR
        else:
            color = self.COLORS.get(record.levelname)

        if color is None:
            return super().format(record)

        record.levelname = f"{self.BOLD}{color}{record.levelname}{self.RESET}"
        try:
            message = super().format(record)
        finally:
            record.levelname = original_levelname
        return f"{color}{message}{self.RESET}"


class SuppressingStreamHandler(logging.StreamHandler):
    """Console handler that collapses runs of records from one source.

    Consecutive DEBUG/INFO records from the same logger and level are folded
    into a single "[N Suppressed: CHECK LOG]" line once the run ends. WARNING
    and above always print. File handlers are unaffected.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._last_key: Optional[tuple] = None
        self._suppress_count: int = 0
        self._last_record: Optional[logging.LogRecord] = None

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self._emit_with_suppression(record)
        except Exception:
            self.handleError(record)

    def _emit_with_suppression(self, record: logging.LogRecord) -> None:
        if record.levelno >= logging.WARNING:
            self._flush_summary()
            self._emit_record(record)
            self._last_key = None
            return

        key = (record.name, record.levelno)
        if key == self._last_key:
            self._suppress_count += 1
            self._last_record = record
            return

        self._flush_summary()
        self._emit_record(record)
        self._last_key = key
        self._last_record = record

    def _emit_record(self, record: logging.LogRecord) -> None:
        """Write one record, degrading glyphs the console cannot encode.

        Narrow console encodings (cp1252, latin-1) get replacement characters
        instead of a UnicodeEncodeError; the file log keeps the original text.
        """
        stream = self.stream
        if stream is None:
            return
        text = self.format(record) + self.terminator
        try:
            stream.write(text)
        except UnicodeEncodeError:
            encoding = getattr(stream, "encoding", None) or "ascii"
            stream.write(text.encode(encoding, errors="replace").decode(encoding, errors="replace"))
        self.flush()

    def _flush_summary(self) -> None:
        if self._suppress_count <= 0 or self._last_record is None:
            self._suppress_count = 0
            return

        last = self._last_record
        summary = logging.LogRecord(
            last.name,
            last.levelno,
            last.pathname,
            last.lineno,
            f"[{self._suppress_count} Suppressed: CHECK LOG]",
            args=None,
            exc_info=None,
        )
        summary.created = last.created
        summary.msecs = last.msecs
        self._suppress_count = 0
        self._emit_record(summary)

    def close(self) -> None:
        try:
            self._flush_summary()
        finally:
            super().close()


def get_log_dir() -> Path:
    """Return the directory used for log files."""
    return _LOG_DIR


def _teardown_handlers() -> None:
    """Flush, close and detach every handler on the package logger."""
    package_logger = logging.getLogger("animated")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        try:
            handler.flush()
        finally:
            handler.close()


def setup_logging(debug: bool = False, verbose: bool = False,
                  log_dir: Optional[Path] = None) -> None:
    """
    Configure logging with file rotation.

    Safe to call repeatedly: handlers from a previous call are torn down
    first, so file descriptors are never duplicated.

    Args:
        debug: If True, log at DEBUG and add console output.
        verbose: Enables high-volume debug output (per-step construction
            details). Implies debug.
        log_dir: Directory for animated.log. Defaults to ./logs.
    """
    global _VERBOSE, _LOG_DIR

    _teardown_handlers()

    debug_enabled = debug or verbose
    if log_dir is not None:
        _LOG_DIR = Path(log_dir)

    log_dir_path = get_log_dir()
    log_dir_path.mkdir(parents=True, exist_ok=True)

    level = logging.DEBUG if debug_enabled else logging.INFO

    # File handler with rotation (1MB max, keep 5 backups)
    file_handler = RotatingFileHandler(
        log_dir_path / "animated.log",
        maxBytes=1 * 1024 * 1024,
        backupCount=5,
        encoding='utf-8'
    )
    file_handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
    file_handler.setLevel(level)

    package_logger = logging.getLogger("animated")
    package_logger.setLevel(level)
    package_logger.addHandler(file_handler)

    if debug_enabled:
        console_handler = SuppressingStreamHandler(sys.stdout)
        if sys.stdout.isatty():
            console_handler.setFormatter(ColoredFormatter(_LOG_FORMAT, datefmt='%H:%M:%S'))
        else:
            console_handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt='%H:%M:%S'))
        console_handler.setLevel(level)
        package_logger.addHandler(console_handler)

    _VERBOSE = bool(verbose)

    package_logger.info("=" * 60)
    package_logger.info(
        "%s logging initialized (debug=%s, verbose=%s, perf=%s)",
        get_version_string(),
        debug_enabled,
        _VERBOSE,
        _PERF_METRICS_ENABLED,
    )
    package_logger.info("=" * 60)


_SHORT_NAME_OVERRIDES = {
    "animated.animation.animated_value": "animated.value",
    "animated.animation.interpolation": "animated.interp",
    "animated.animation.string_interpolation": "animated.interp_str",
    "animated.components.wrapper": "animated.component",
}


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with optional short-name overrides for long module paths."""
    actual = _SHORT_NAME_OVERRIDES.get(name, name)
    return logging.getLogger(actual)


def is_verbose_logging() -> bool:
    """Return True when verbose debug logging is enabled globally."""
    return _VERBOSE


def is_perf_metrics_enabled() -> bool:
    """Return True when PERF metrics/telemetry are enabled globally."""
    return _PERF_METRICS_ENABLED


def set_perf_metrics_enabled(enabled: bool) -> None:
    """Toggle PERF metrics at runtime (overrides ANIMATED_PERF_METRICS)."""
    global _PERF_METRICS_ENABLED
    _PERF_METRICS_ENABLED = bool(enabled)
