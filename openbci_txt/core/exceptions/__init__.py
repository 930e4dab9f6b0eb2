"""
Custom Exceptions
=================

This module defines all custom exceptions for the OpenBCI text reader.

Exception Hierarchy:
-------------------
OpenBCIReaderError (Base)
├── DataError
│   ├── FileOpenError
│   ├── UnsupportedFormatError
│   ├── EmptyFileError
│   ├── NoDataFoundError
│   └── MalformedDataError
└── ConfigurationError
    ├── ConfigNotFoundError
    └── ConfigValidationError

Only structural failures are raised. Ragged rows, unparsable tokens and
degenerate rows/columns are recovered by the parsing pipeline (NaN padding
and cleaning) and never surface as exceptions.

Example Usage:
    ```python
    from openbci_txt.core.exceptions import NoDataFoundError, FileOpenError

    try:
        recording = loader.load(path)
    except (FileOpenError, NoDataFoundError) as e:
        logger.error(f"Skipping {path}: {e}")
    ```
"""

from typing import Optional


# =============================================================================
# BASE EXCEPTION
# =============================================================================

class OpenBCIReaderError(Exception):
    """
    Base exception for all reader errors.

    Attributes:
        message: Error message
        details: Additional error details
        suggestion: Suggestion for fixing the error
    """

    def __init__(self,
                 message: str,
                 details: str = '',
                 suggestion: str = ''):
        self.message = message
        self.details = details
        self.suggestion = suggestion

        super().__init__(self._full_message())

    def _full_message(self) -> str:
        full_message = self.message
        if self.details:
            full_message += f"\nDetails: {self.details}"
        if self.suggestion:
            full_message += f"\nSuggestion: {self.suggestion}"
        return full_message


# =============================================================================
# DATA ERRORS
# =============================================================================

class DataError(OpenBCIReaderError):
    """Base exception for data-related errors."""

    file_path: Optional[str] = None

    def set_file_path(self, file_path: str) -> None:
        """
        Attach the source file and rebuild the message to name it.

        Parsing stages work on lines and raise without a path; the loader
        calls this before re-raising.
        """
        self.file_path = file_path
        self.message = self._message_for(file_path)
        self.args = (self._full_message(),)

    def _message_for(self, file_path: str) -> str:
        return f"{self.message} in '{file_path}'"


class FileOpenError(DataError):
    """Raised when a file is missing or cannot be read."""

    def __init__(self,
                 file_path: str,
                 reason: str = 'Unknown error',
                 original_error: Optional[Exception] = None):
        message = f"Cannot open file '{file_path}'"
        details = reason

        if original_error:
            details += f" (Original error: {original_error})"

        suggestion = "Check that the file exists and is readable."

        super().__init__(message, details, suggestion)
        self.file_path = file_path
        self.original_error = original_error


class UnsupportedFormatError(DataError):
    """Raised when a file extension is not handled by the loader."""

    def __init__(self,
                 file_path: str,
                 supported: Optional[list] = None):
        message = f"Unsupported file type for '{file_path}'"
        details = f"Supported extensions: {supported}" if supported else ""
        suggestion = "Export the recording as a text (.txt/.csv) file."

        super().__init__(message, details, suggestion)
        self.file_path = file_path
        self.supported = supported


class EmptyFileError(DataError):
    """Raised when a file contains no lines at all."""

    def __init__(self, file_path: str = ''):
        message = self._message_for(file_path) if file_path else "Input is empty"
        details = "No lines were read."
        suggestion = "Check that the export completed and the file is not truncated."

        super().__init__(message, details, suggestion)
        self.file_path = file_path or None

    def _message_for(self, file_path: str) -> str:
        return f"File '{file_path}' is empty"


class NoDataFoundError(DataError):
    """Raised when every line is metadata and no numeric block exists."""

    def __init__(self,
                 file_path: str = '',
                 n_lines: int = 0):
        message = self._message_for(file_path) if file_path else "No numeric data found in input"
        details = f"All {n_lines} lines were classified as metadata."
        suggestion = (
            "Data lines must start with a digit, sign or decimal point; "
            "check that the recording contains samples."
        )

        super().__init__(message, details, suggestion)
        self.file_path = file_path or None
        self.n_lines = n_lines

    def _message_for(self, file_path: str) -> str:
        return f"No numeric data found in '{file_path}'"


class MalformedDataError(DataError):
    """Raised when the data block cannot be tokenized into any column."""

    def __init__(self,
                 reason: str = '',
                 line_number: Optional[int] = None,
                 file_path: str = ''):
        message = "Malformed numeric data block"
        if file_path:
            message = self._message_for(file_path)
        details = reason
        if line_number is not None:
            details += f" (line {line_number})"
        suggestion = "Check the delimiter; only comma and tab are recognised."

        super().__init__(message, details, suggestion)
        self.line_number = line_number
        self.file_path = file_path or None

    def _message_for(self, file_path: str) -> str:
        return f"Malformed numeric data block in '{file_path}'"


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================

class ConfigurationError(OpenBCIReaderError):
    """Base exception for configuration errors."""
    pass


class ConfigNotFoundError(ConfigurationError):
    """Raised when configuration file is not found."""

    def __init__(self, path: str):
        message = f"Configuration file not found: '{path}'"
        details = "The specified configuration file does not exist."
        suggestion = "Check the file path or create the configuration file."

        super().__init__(message, details, suggestion)
        self.path = path


class ConfigValidationError(ConfigurationError):
    """Raised when configuration validation fails."""

    def __init__(self,
                 key: str,
                 expected: str,
                 actual: str = ''):
        message = f"Invalid configuration value for '{key}'"
        details = f"Expected: {expected}"
        if actual:
            details += f", Got: {actual}"
        suggestion = "Update the configuration with a valid value."

        super().__init__(message, details, suggestion)
        self.key = key


# =============================================================================
# EXPORTS
# =============================================================================

__all__ = [
    # Base
    'OpenBCIReaderError',

    # Data
    'DataError',
    'FileOpenError',
    'UnsupportedFormatError',
    'EmptyFileError',
    'NoDataFoundError',
    'MalformedDataError',

    # Configuration
    'ConfigurationError',
    'ConfigNotFoundError',
    'ConfigValidationError',
]
