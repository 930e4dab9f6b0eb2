"""
openbci-txt
===========

Reader for OpenBCI GUI text exports: finds the numeric block below the
metadata header, parses it into a float matrix, drops empty rows and
columns, classifies the board (Cyton / Ganglion / generic) from the column
count and labels the EEG channels.

Quick Start:
-----------
```python
import openbci_txt

# Setup logging
openbci_txt.setup_logging(level='INFO')

# Load one file
recording = openbci_txt.load_eeg_file('OpenBCI-RAW-2024-01-01.txt')
print(recording.device.value, recording.channel_labels)

# Duration and value range, sampling rate taken from config by device
summary = openbci_txt.summarize(recording)
```

Project Structure:
-----------------
openbci_txt/
├── core/               # Interfaces, types, config, exceptions
├── data/
│   ├── parsing/        # Stateless ingestion stages and pipeline
│   └── loaders/        # File handling, factory, batch loading
├── analysis/           # Time axis and recording summary
└── utils/              # Logging
"""

# Version
__version__ = '1.0.0'

from openbci_txt import core
from openbci_txt import utils

# Convenience imports
from openbci_txt.core import (
    # Configuration
    get_config,
    load_config,
    ConfigManager,

    # Types
    DeviceKind,
    EEGRecording,
)

from openbci_txt.data import (
    IngestionPipeline,
    OpenBCITxtLoader,
    DataLoaderFactory,
    load_eeg_file,
)

from openbci_txt.analysis import (
    summarize,
    time_axis,
)

from openbci_txt.utils import (
    setup_logging,
    get_logger,
)

__all__ = [
    # Modules
    'core',
    'utils',

    # Configuration
    'get_config',
    'load_config',
    'ConfigManager',

    # Types
    'DeviceKind',
    'EEGRecording',

    # Loading
    'IngestionPipeline',
    'OpenBCITxtLoader',
    'DataLoaderFactory',
    'load_eeg_file',

    # Analysis
    'summarize',
    'time_axis',

    # Logging
    'setup_logging',
    'get_logger',

    # Version
    '__version__',
]
