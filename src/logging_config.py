"""
Logging Configuration for the League Season Core

Sets up application-wide logging:
- Rotating file handlers so logs stay bounded
- Colored console output
- Per-subsystem log levels (scheduling, standings, season)

The library modules only create loggers; nothing here runs on import.
Applications call ``setup_logging`` (or a preset) once at startup.

Usage Example:
    from logging_config import setup_logging, get_logger

    setup_logging(level="INFO", log_dir="logs")

    logger = get_logger(__name__)
    logger.info("Schedule generation started")

Log Files Created:
- logs/league_season.log: Main log (INFO+)
- logs/league_season_debug.log: Debug log (DEBUG+)
- logs/league_season_error.log: Error log (ERROR+)
"""

import logging
import logging.handlers
import os
from pathlib import Path
from typing import Optional


LOG_FILE_PREFIX = "league_season"

# Log format templates
DETAILED_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "[%(filename)s:%(lineno)d] - %(funcName)s() - %(message)s"
)

SIMPLE_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

CONSOLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Subsystem logger names
SCHEDULING_LOGGERS = (
    "scheduling",
    "scheduling.week_assigner",
    "scheduling.schedule_generator",
    "scheduling.schedule_validator",
)
STANDINGS_LOGGERS = (
    "standings",
    "standings.standings_calculator",
    "standings.tiebreakers",
)
SEASON_LOGGERS = (
    "season",
    "season.season_state",
)


class ColoredFormatter(logging.Formatter):
    """Console formatter that colors the level name."""

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
    }
    RESET = '\033[0m'

    def format(self, record):
        original = record.levelname
        color = self.COLORS.get(original)
        if color:
            record.levelname = f"{color}{original}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


def _rotating_handler(
    log_dir: str,
    suffix: str,
    level: int,
    log_format: str,
    max_bytes: int,
    backup_count: int
) -> logging.Handler:
    name = f"{LOG_FILE_PREFIX}{suffix}.log"
    handler = logging.handlers.RotatingFileHandler(
        filename=os.path.join(log_dir, name),
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding='utf-8'
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(log_format, datefmt=DATE_FORMAT))
    return handler


def setup_logging(
    level: str = "INFO",
    log_dir: str = "logs",
    enable_console: bool = True,
    enable_file: bool = True,
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
    format_style: str = "detailed"
) -> None:
    """
    Configure the root logger.

    Call once at application startup; existing root handlers are replaced.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for log files
        enable_console: Whether to log to console
        enable_file: Whether to log to files
        max_bytes: Size at which a log file rotates
        backup_count: Rotated files kept per log
        format_style: "detailed" or "simple" format for the main log
    """
    numeric_level = getattr(logging, level.upper())

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    if enable_console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(ColoredFormatter(CONSOLE_FORMAT, datefmt=DATE_FORMAT))
        root_logger.addHandler(console_handler)

    if enable_file:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        main_format = DETAILED_FORMAT if format_style == "detailed" else SIMPLE_FORMAT

        root_logger.addHandler(
            _rotating_handler(log_dir, "", logging.INFO, main_format, max_bytes, backup_count)
        )
        root_logger.addHandler(
            _rotating_handler(log_dir, "_debug", logging.DEBUG, DETAILED_FORMAT, max_bytes, backup_count)
        )
        root_logger.addHandler(
            _rotating_handler(log_dir, "_error", logging.ERROR, DETAILED_FORMAT, max_bytes, backup_count)
        )

    root_logger.info(
        f"Logging initialized - Level: {level}, "
        f"Console: {enable_console}, File: {enable_file}"
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: Logger name (typically __name__)
    """
    return logging.getLogger(name)


def log_exception(
    logger: logging.Logger,
    exception: Exception,
    context: Optional[dict] = None,
    level: str = "ERROR"
) -> None:
    """
    Log an exception with traceback and context.

    Exceptions that carry ``to_dict`` (the scheduling and season
    hierarchies) contribute their error code.

    Args:
        logger: Logger instance
        exception: Exception to log
        context: Extra key/values (year, game_id, ...)
        level: Log level (default: ERROR)
    """
    details = dict(context or {})
    error_code = getattr(exception, "error_code", None)
    if error_code:
        details.setdefault("error_code", error_code)

    context_str = ""
    if details:
        context_str = " [" + ", ".join(f"{key}={value}" for key, value in details.items()) + "]"

    logger.log(
        getattr(logging, level.upper()),
        f"Exception occurred{context_str}: {type(exception).__name__}: {exception}",
        exc_info=exception
    )


def configure_module_logger(
    module_name: str,
    level: Optional[str] = None,
    propagate: bool = True
) -> logging.Logger:
    """
    Set the level for one module's logger.

    Args:
        module_name: Logger name (e.g., "scheduling.week_assigner")
        level: Log level for this module (None = inherit from root)
        propagate: Whether to propagate to parent loggers
    """
    logger = logging.getLogger(module_name)
    if level:
        logger.setLevel(getattr(logging, level.upper()))
    logger.propagate = propagate
    return logger


class LogContext:
    """
    Context manager for a temporary log level.

    Example:
        >>> with LogContext(get_logger("scheduling.week_assigner"), "DEBUG"):
        ...     generate_schedule(directory, 2025)
    """

    def __init__(self, logger: logging.Logger, level: str):
        self.logger = logger
        self.new_level = getattr(logging, level.upper())
        self.original_level = logger.level

    def __enter__(self):
        self.logger.setLevel(self.new_level)
        return self.logger

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.logger.setLevel(self.original_level)


# Subsystem presets

def setup_scheduling_logging(level: str = "INFO") -> None:
    """Set the level for schedule generation (week assignment is chatty at DEBUG)."""
    for name in SCHEDULING_LOGGERS:
        configure_module_logger(name, level=level)


def setup_standings_logging(level: str = "INFO") -> None:
    """Set the level for standings and tiebreak computation."""
    for name in STANDINGS_LOGGERS:
        configure_module_logger(name, level=level)


def setup_season_logging(level: str = "INFO") -> None:
    """Set the level for season progression."""
    for name in SEASON_LOGGERS:
        configure_module_logger(name, level=level)


# Environment presets

def setup_production_logging(log_dir: str = "logs") -> None:
    """INFO to files only, simple format."""
    setup_logging(
        level="INFO",
        log_dir=log_dir,
        enable_console=False,
        enable_file=True,
        format_style="simple"
    )


def setup_development_logging(log_dir: str = "logs") -> None:
    """DEBUG to colored console and files, detailed format."""
    setup_logging(
        level="DEBUG",
        log_dir=log_dir,
        enable_console=True,
        enable_file=True,
        format_style="detailed"
    )


def setup_testing_logging() -> None:
    """WARNING to console only, to keep test output quiet."""
    setup_logging(
        level="WARNING",
        enable_console=True,
        enable_file=False,
        format_style="simple"
    )
