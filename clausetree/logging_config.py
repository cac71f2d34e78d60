# clausetree/logging_config.py
"""
Logging configuration for the clause-tree engine.

All engine loggers live under the ``clausetree`` namespace. The level can
be given as an int or a name (``LOG_LEVEL=ERROR`` in the environment ends
up here through Settings).

Developer Mode:
    Set environment variable: CLAUSETREE_DEV_MODE=1
    This enables:
    - DEBUG level logging, whatever level was requested
    - Wider console format with the logger name padded
    - Phase timing checkpoints and raw responses of failed analyses
"""
import logging
import os
import re
import sys
from typing import Optional, Union

ROOT_LOGGER = 'clausetree'


class LogColors:
    """ANSI color codes used by the console formatter."""
    RESET = "\033[0m"

    DEBUG = "\033[36m"      # Cyan
    INFO = "\033[32m"       # Green
    WARNING = "\033[33m"    # Yellow
    ERROR = "\033[31m"      # Red

    DIAGNOSTIC = "\033[33m"  # Yellow
    PASSED = "\033[1;32m"   # Bold Green
    FAILED = "\033[1;31m"   # Bold Red
    TIMING = "\033[35m"     # Magenta


class ColoredFormatter(logging.Formatter):
    """
    Console formatter that colors the level name and analysis milestones.

    Diagnostic lines (``[DUPLICATE_CLAIM] ...``), validation outcomes and
    phase timings each get their own color. Only applies colors on a TTY.
    """

    LEVEL_COLORS = {
        logging.DEBUG: LogColors.DEBUG,
        logging.INFO: LogColors.INFO,
        logging.WARNING: LogColors.WARNING,
        logging.ERROR: LogColors.ERROR,
        logging.CRITICAL: LogColors.ERROR,
    }

    DIAGNOSTIC_LINE = re.compile(r'^\[[A-Z_]+\]')

    def __init__(self, *args, use_colors: bool = True, **kwargs):
        super().__init__(*args, **kwargs)
        self.use_colors = use_colors and sys.stdout.isatty()

    def message_color(self, message: str) -> Optional[str]:
        """Color for a message, or None to leave it plain."""
        if self.DIAGNOSTIC_LINE.match(message):
            return LogColors.DIAGNOSTIC
        if "❌" in message or "FAILED" in message:
            return LogColors.FAILED
        if "✅" in message or "passed" in message:
            return LogColors.PASSED
        if "⏱️" in message or message.startswith("DONE:"):
            return LogColors.TIMING
        return None

    def format(self, record: logging.LogRecord) -> str:
        if not self.use_colors:
            return super().format(record)

        levelname, msg, args = record.levelname, record.msg, record.args
        record.levelname = f"{self.LEVEL_COLORS.get(record.levelno, '')}{levelname}{LogColors.RESET}"

        message = record.getMessage()
        color = self.message_color(message)
        if color:
            record.msg = f"{color}{message}{LogColors.RESET}"
            record.args = ()

        try:
            return super().format(record)
        finally:
            record.levelname, record.msg, record.args = levelname, msg, args


def is_dev_mode() -> bool:
    """True if CLAUSETREE_DEV_MODE is set to 1, yes, true or on."""
    dev_mode = os.getenv('CLAUSETREE_DEV_MODE', '').lower()
    return dev_mode in ('1', 'yes', 'true', 'on')


def resolve_level(level: Union[int, str, None]) -> int:
    """
    Turn a level given as int or name into a logging level.

    Dev mode always resolves to DEBUG. None means INFO.

    Raises:
        ValueError: For an unknown level name
    """
    if is_dev_mode():
        return logging.DEBUG
    if level is None:
        return logging.INFO
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def setup_logging(
    level: Union[int, str, None] = None,
    log_file: Optional[str] = None,
    format_string: Optional[str] = None,
    use_colors: bool = True
) -> logging.Logger:
    """
    Configure the ``clausetree`` logger.

    Args:
        level: Level as int or name (default INFO, DEBUG in dev mode)
        log_file: Optional file path for uncolored log output
        format_string: Custom format string for console messages
        use_colors: Whether to color console output

    Returns:
        The configured ``clausetree`` logger
    """
    dev_mode = is_dev_mode()
    level = resolve_level(level)

    if format_string is None:
        if dev_mode:
            format_string = '[%(asctime)s] %(levelname)-8s | %(name)-34s | %(message)s'
        else:
            format_string = '[%(asctime)s] %(levelname)s - %(name)s - %(message)s'

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    if use_colors:
        console_handler.setFormatter(ColoredFormatter(format_string, datefmt='%H:%M:%S'))
    else:
        console_handler.setFormatter(logging.Formatter(format_string, datefmt='%Y-%m-%d %H:%M:%S'))
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(
            '[%(asctime)s] %(levelname)s - %(name)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        logger.addHandler(file_handler)

    if dev_mode:
        logger.info("🔧 CLAUSETREE_DEV_MODE on - verbose logging active")

    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger for one component, under the ``clausetree`` namespace."""
    return logging.getLogger(f'{ROOT_LOGGER}.{name}')
