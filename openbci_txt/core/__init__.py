"""
Core Module
===========

Core building blocks of openbci_txt:
- Abstract loader interface
- Data types for parsed recordings
- Configuration management
- Custom exceptions

Quick Start:
-----------
```python
from openbci_txt.core import (
    # Data Types
    EEGRecording, DeviceKind,

    # Configuration
    ConfigManager, get_config,

    # Exceptions
    NoDataFoundError, FileOpenError
)

config = get_config()
print(config.get('acquisition.sampling_rate.cyton'))  # 250.0
```
"""

# =============================================================================
# Interfaces
# =============================================================================
from openbci_txt.core.interfaces import IDataLoader

# =============================================================================
# Data Types
# =============================================================================
from openbci_txt.core.types import (
    LineKind,
    DeviceKind,
    ParseResult,
    EEGChannelSet,
    EEGRecording,
)

# =============================================================================
# Configuration
# =============================================================================
from openbci_txt.core.config import (
    ConfigManager,
    get_config,
    load_config
)

# =============================================================================
# Exceptions
# =============================================================================
from openbci_txt.core.exceptions import (
    # Base
    OpenBCIReaderError,

    # Data
    DataError,
    FileOpenError,
    UnsupportedFormatError,
    EmptyFileError,
    NoDataFoundError,
    MalformedDataError,

    # Configuration
    ConfigurationError,
    ConfigNotFoundError,
    ConfigValidationError,
)

# =============================================================================
# Module Exports
# =============================================================================
__all__ = [
    # Interfaces
    'IDataLoader',

    # Data Types
    'LineKind',
    'DeviceKind',
    'ParseResult',
    'EEGChannelSet',
    'EEGRecording',

    # Configuration
    'ConfigManager',
    'get_config',
    'load_config',

    # Exceptions
    'OpenBCIReaderError',
    'DataError',
    'FileOpenError',
    'UnsupportedFormatError',
    'EmptyFileError',
    'NoDataFoundError',
    'MalformedDataError',
    'ConfigurationError',
    'ConfigNotFoundError',
    'ConfigValidationError',
]
