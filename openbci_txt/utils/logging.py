"""
Logging Utilities
=================

Centralized logging configuration for openbci_txt.

Every module logs through ``logging.getLogger(__name__)``, so all records
land under the ``openbci_txt`` logger. ``setup_logging`` attaches handlers
to that package logger only; the root logger of the host application is
left alone unless ``logger_name=None`` is passed.

What gets logged:
----------------
- DEBUG: Per-stage details (metadata line count, raw shape, dropped
  rows/columns, device rule), timing
- INFO: One line per loaded file (shape, device, channel count)
- WARNING: Recovered irregularities (ragged rows, empty cleaned matrix,
  failed files in a batch)
- ERROR: Files that could not be parsed

Example Usage:
    ```python
    from openbci_txt.utils.logging import get_logger, setup_logging

    # Setup logging (call once at startup)
    setup_logging(level='DEBUG', log_file='logs/ingest.log')

    # Or take level/format/file from the loaded configuration
    setup_logging_from_config()

    logger = get_logger(__name__)
    logger.info("Processing started")
    ```
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union
from functools import wraps
import time


# =============================================================================
# CONSTANTS
# =============================================================================

PACKAGE_LOGGER = 'openbci_txt'

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DETAILED_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'
SIMPLE_FORMAT = '%(levelname)s - %(message)s'

# Color codes for console output
COLORS = {
    'DEBUG': '\033[36m',      # Cyan
    'INFO': '\033[32m',       # Green
    'WARNING': '\033[33m',    # Yellow
    'ERROR': '\033[31m',      # Red
    'CRITICAL': '\033[35m',   # Magenta
    'RESET': '\033[0m'
}


def _to_level(level: Union[str, int]) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return level


# =============================================================================
# CUSTOM FORMATTER WITH COLORS
# =============================================================================

class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name on interactive consoles."""

    def __init__(self, fmt: str = DEFAULT_FORMAT, use_colors: bool = True):
        super().__init__(fmt)
        self.use_colors = use_colors and sys.stdout.isatty()

    def format(self, record: logging.LogRecord) -> str:
        original_levelname = record.levelname

        if self.use_colors:
            color = COLORS.get(record.levelname, '')
            record.levelname = f"{color}{record.levelname}{COLORS['RESET']}"

        try:
            return super().format(record)
        finally:
            record.levelname = original_levelname


# =============================================================================
# LOGGING SETUP
# =============================================================================

def setup_logging(
    level: Union[str, int] = 'INFO',
    log_file: Optional[str] = None,
    console: bool = True,
    use_colors: bool = True,
    format_string: str = DEFAULT_FORMAT,
    detailed: bool = False,
    logger_name: Optional[str] = PACKAGE_LOGGER
) -> logging.Logger:
    """
    Setup logging for the package.

    Should be called once at application startup. Calling it again replaces
    the handlers it installed before.

    Args:
        level: Log level ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')
        log_file: Optional file path for logging
        console: Whether to log to console
        use_colors: Whether to use colored console output
        format_string: Log format string
        detailed: If True, use detailed format with file/line info
        logger_name: Logger to configure (None for the root logger)

    Returns:
        logging.Logger: The configured logger

    Example:
        >>> setup_logging(level='DEBUG', log_file='logs/ingest.log')
    """
    if detailed:
        format_string = DETAILED_FORMAT

    level = _to_level(level)

    target = logging.getLogger(logger_name)
    target.setLevel(level)

    for handler in list(target.handlers):
        target.removeHandler(handler)
        handler.close()

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(ColoredFormatter(format_string, use_colors))
        target.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(format_string))
        target.addHandler(file_handler)

    # Package handlers already emit; don't duplicate through the root logger
    if logger_name:
        target.propagate = not (console or log_file)

    target.debug(f"Logging configured: level={logging.getLevelName(level)}")
    return target


def setup_logging_from_config(config=None, **overrides) -> logging.Logger:
    """
    Setup logging from the ``logging`` section of the configuration.

    Args:
        config: ConfigManager to read from (default: the global instance)
        **overrides: Keyword arguments passed through to setup_logging

    Example:
        >>> load_config('config/dev.yaml')
        >>> setup_logging_from_config(use_colors=False)
    """
    if config is None:
        from openbci_txt.core.config import get_config
        config = get_config()

    section = config.get_section('logging')
    kwargs = {
        'level': section.get('level', 'INFO'),
        'log_file': section.get('file'),
        'format_string': section.get('format') or DEFAULT_FORMAT,
    }
    kwargs.update(overrides)
    return setup_logging(**kwargs)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a specific module.

    Example:
        >>> logger = get_logger(__name__)
    """
    return logging.getLogger(name)


def set_level(level: Union[str, int], logger_name: Optional[str] = PACKAGE_LOGGER) -> None:
    """
    Set log level for the package logger, another logger, or the root.

    Args:
        level: Log level
        logger_name: Logger to change (None for the root logger)
    """
    logging.getLogger(logger_name).setLevel(_to_level(level))


# =============================================================================
# PERFORMANCE LOGGING DECORATORS
# =============================================================================

def log_execution_time(logger: Optional[logging.Logger] = None,
                       level: int = logging.DEBUG):
    """
    Decorator to log function execution time.

    Args:
        logger: Logger to use (the decorated function's module logger if None)
        level: Log level for timing messages

    Example:
        >>> @log_execution_time()
        ... def load(path):
        ...     ...
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            log = logger or logging.getLogger(func.__module__)

            start_time = time.perf_counter()
            result = func(*args, **kwargs)
            elapsed = time.perf_counter() - start_time

            log.log(level, f"{func.__name__} executed in {elapsed:.3f}s")
            return result

        return wrapper
    return decorator


# =============================================================================
# CONTEXT MANAGER FOR TEMPORARY LOG LEVEL
# =============================================================================

class LogLevel:
    """
    Context manager for temporarily changing log level.

    Example:
        >>> with LogLevel('DEBUG'):
        ...     loader.load('OpenBCI-RAW.txt')
    """

    def __init__(self, level: Union[str, int], logger_name: Optional[str] = PACKAGE_LOGGER):
        self.level = _to_level(level)
        self.logger_name = logger_name
        self.original_level = None

    def __enter__(self):
        logger = logging.getLogger(self.logger_name)
        self.original_level = logger.level
        logger.setLevel(self.level)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        logging.getLogger(self.logger_name).setLevel(self.original_level)
        return False
