"""
Data Module
===========

Parsing and loading of OpenBCI text exports.

Sub-modules:
-----------
- parsing: The stateless ingestion stages and pipeline
- loaders: File handling, factory and batch loading

Usage Examples:
    ```python
    from openbci_txt.data import load_eeg_file

    recording = load_eeg_file('OpenBCI-RAW.txt')
    print(f"Loaded: {recording.shape} ({recording.device.value})")

    # Parse lines that are already in memory
    from openbci_txt.data import IngestionPipeline

    recording = IngestionPipeline().run(lines, label_prefix='File1')
    ```
"""

from openbci_txt.data.parsing import (
    LineClassifier,
    HeaderDetector,
    NumericParser,
    DataCleaner,
    ChannelExtractor,
    LabelGenerator,
    IngestionPipeline,
)

from openbci_txt.data.loaders import (
    BaseDataLoader,
    LoadResult,
    OpenBCITxtLoader,
    DataLoaderFactory,
    create_loader,
    create_txt_loader,
    load_eeg_file,
)

__all__ = [
    # Parsing
    'LineClassifier',
    'HeaderDetector',
    'NumericParser',
    'DataCleaner',
    'ChannelExtractor',
    'LabelGenerator',
    'IngestionPipeline',

    # Loaders
    'BaseDataLoader',
    'LoadResult',
    'OpenBCITxtLoader',
    'DataLoaderFactory',
    'create_loader',
    'create_txt_loader',
    'load_eeg_file',
]
