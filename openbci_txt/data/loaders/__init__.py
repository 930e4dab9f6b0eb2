"""
Data Loaders Module
===================

File handling on top of the parsing pipeline.

Available Loaders:
-----------------
- OpenBCITxtLoader: OpenBCI GUI text exports (.txt, .csv, .tsv)
- BaseDataLoader: Base class for implementing custom loaders

Factory Methods:
---------------
- DataLoaderFactory.create(): Create loader by type name
- DataLoaderFactory.create_for_file(): Auto-detect loader from file extension
- create_loader(): Convenience function for quick loader creation
- load_eeg_file(): Load file with automatic loader selection

Usage Examples:
    ```python
    # Method 1: Use factory with auto-detection
    from openbci_txt.data.loaders import DataLoaderFactory

    loader = DataLoaderFactory.create_for_file('OpenBCI-RAW.txt')
    recording = loader.load('OpenBCI-RAW.txt')

    # Method 2: Use the loader directly
    from openbci_txt.data.loaders import OpenBCITxtLoader

    loader = OpenBCITxtLoader()
    loader.initialize({'label_prefix': 'Subject'})
    results = loader.load_multiple(['a.txt', 'b.txt'], max_workers=2)

    # Method 3: Quick one-liner
    from openbci_txt.data.loaders import load_eeg_file

    recording = load_eeg_file('OpenBCI-RAW.txt')
    ```
"""

# Base loader class
from openbci_txt.data.loaders.base_loader import BaseDataLoader, LoadResult

# Text export loader
from openbci_txt.data.loaders.txt_loader import (
    OpenBCITxtLoader,
    create_txt_loader,
    DEFAULT_EXTENSIONS,
)

# Factory and convenience functions
from openbci_txt.data.loaders.factory import (
    DataLoaderFactory,
    create_loader,
    load_eeg_file,
)

# Define public API
__all__ = [
    # Base classes
    'BaseDataLoader',
    'LoadResult',

    # Loaders
    'OpenBCITxtLoader',

    # Factory
    'DataLoaderFactory',

    # Convenience functions
    'create_loader',
    'create_txt_loader',
    'load_eeg_file',

    # Constants
    'DEFAULT_EXTENSIONS',
]
