"""
Utilities Module
================

Common utilities for openbci_txt.

Available Modules:
-----------------
- logging: Centralized logging configuration

Example Usage:
    ```python
    from openbci_txt.utils import setup_logging, get_logger

    setup_logging(level='INFO', log_file='logs/ingest.log')
    logger = get_logger(__name__)
    ```
"""

from openbci_txt.utils.logging import (
    setup_logging,
    setup_logging_from_config,
    get_logger,
    set_level,
    log_execution_time,
    ColoredFormatter,
    LogLevel,
)

__all__ = [
    'setup_logging',
    'setup_logging_from_config',
    'get_logger',
    'set_level',
    'log_execution_time',
    'ColoredFormatter',
    'LogLevel',
]
