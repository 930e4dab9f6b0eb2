"""
Parsing Module
==============

The text ingestion pipeline, one stage per module:

- LineClassifier: metadata vs data lines
- HeaderDetector: first data line and the header above it
- NumericParser: numeric block -> float matrix (strict, then tolerant)
- DataCleaner: drop all-NaN columns, then all-NaN rows
- ChannelExtractor: device kind and EEG column slice from column count
- LabelGenerator: channel labels from header or prefix
- IngestionPipeline: runs all stages on one file's lines

Usage Example:
    ```python
    from openbci_txt.data.parsing import IngestionPipeline

    with open('OpenBCI-RAW.txt', encoding='utf-8') as f:
        lines = f.read().splitlines()

    recording = IngestionPipeline().run(lines, label_prefix='File1')
    ```
"""

from openbci_txt.data.parsing.line_classifier import (
    LineClassifier,
    split_fields,
    METADATA_PATTERN,
    DELIMITER_PATTERN,
)
from openbci_txt.data.parsing.header_detector import HeaderDetector
from openbci_txt.data.parsing.numeric_parser import (
    NumericParser,
    ParseAttempt,
    parse_token,
    MISSING,
)
from openbci_txt.data.parsing.data_cleaner import DataCleaner
from openbci_txt.data.parsing.channel_extractor import (
    ChannelExtractor,
    DeviceRule,
    DEFAULT_RULES,
)
from openbci_txt.data.parsing.label_generator import LabelGenerator
from openbci_txt.data.parsing.pipeline import IngestionPipeline

__all__ = [
    # Stages
    'LineClassifier',
    'HeaderDetector',
    'NumericParser',
    'DataCleaner',
    'ChannelExtractor',
    'LabelGenerator',

    # Pipeline
    'IngestionPipeline',

    # Supporting types
    'ParseAttempt',
    'DeviceRule',

    # Helpers and constants
    'split_fields',
    'parse_token',
    'MISSING',
    'METADATA_PATTERN',
    'DELIMITER_PATTERN',
    'DEFAULT_RULES',
]
