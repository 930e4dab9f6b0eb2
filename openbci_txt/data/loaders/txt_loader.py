"""
OpenBCI Text Export Loader
==========================

This module implements the data loader for the text exports written by the
OpenBCI GUI (``OpenBCI-RAW-*.txt``) and similar comma/tab separated dumps.

File Structure:
--------------
- Zero or more metadata lines, starting with a letter, ``%`` or ``#``
  (board banner, sample rate note, comments, column header)
- A numeric block: one sample per line, comma or tab separated
    column 1      sample index
    columns 2..   EEG channels (8 for Cyton, 4 for Ganglion)
    trailing      accelerometer / auxiliary / timestamps

The numeric block is parsed by the IngestionPipeline; this loader only
adds file handling and configuration.

Usage Example:
    ```python
    from openbci_txt.data.loaders import OpenBCITxtLoader

    loader = OpenBCITxtLoader()
    loader.initialize({'label_prefix': 'Subject'})

    recording = loader.load('OpenBCI-RAW-2024-01-01_10-00-00.txt')
    print(recording.device, recording.channel_labels)

    # Compare two sessions
    first, second = loader.load_pair('session1.txt', 'session2.txt')
    ```
"""

from typing import Dict, List, Optional, Any, Sequence
from pathlib import Path
import logging

from openbci_txt.core.exceptions import OpenBCIReaderError
from openbci_txt.core.types.eeg_data import EEGRecording
from openbci_txt.data.loaders.base_loader import BaseDataLoader
from openbci_txt.data.parsing import (
    ChannelExtractor,
    HeaderDetector,
    IngestionPipeline,
    split_fields,
)


# Configure module logger
logger = logging.getLogger(__name__)


# Extensions accepted when no configuration overrides them
DEFAULT_EXTENSIONS: List[str] = ['.txt', '.csv', '.tsv']


class OpenBCITxtLoader(BaseDataLoader):
    """
    Data loader for OpenBCI text exports.

    Attributes:
        _pipeline (IngestionPipeline): Stateless parsing stages
        _extensions (List[str]): Accepted file extensions

    Example:
        >>> loader = OpenBCITxtLoader()
        >>> recording = loader.load('OpenBCI-RAW.txt')
        >>> recording.device.value, recording.n_channels
        ('cyton', 8)
    """

    def __init__(self, pipeline: Optional[IngestionPipeline] = None):
        """Initialize the text loader."""
        super().__init__()

        self._pipeline: IngestionPipeline = pipeline or IngestionPipeline()
        self._extensions: List[str] = DEFAULT_EXTENSIONS.copy()

    # =========================================================================
    # ABSTRACT PROPERTY IMPLEMENTATIONS
    # =========================================================================

    @property
    def name(self) -> str:
        return "openbci_txt"

    @property
    def supported_extensions(self) -> List[str]:
        return list(self._extensions)

    # =========================================================================
    # TEMPLATE METHOD IMPLEMENTATIONS
    # =========================================================================

    def _initialize_specific(self, config: Dict[str, Any]) -> None:
        """
        Handle text-specific options.

        - extensions: Override the accepted file extensions
        """
        extensions = config.get('extensions')
        if extensions:
            self._extensions = [
                ext if ext.startswith('.') else f'.{ext}' for ext in extensions
            ]
            logger.debug(f"Accepting extensions: {self._extensions}")

    def _build_recording(self,
                         lines: Sequence[str],
                         file_path: Path,
                         label_prefix: str) -> EEGRecording:
        return self._pipeline.run(
            lines,
            label_prefix=label_prefix,
            source_file=str(file_path),
        )

    def _validate_file_format(self, file_path: Path) -> bool:
        """A text export is valid if at least one line is a data line."""
        lines = self._read_lines(file_path)
        classifier = self._pipeline.header_detector.classifier
        return any(classifier.is_data(line) for line in lines)

    def _get_file_info_specific(self, file_path: Path) -> Dict[str, Any]:
        """
        Get structural information from the header region.

        Only the header and the first data line are inspected; the numeric
        block is never parsed.
        """
        lines = self._read_lines(file_path)
        detector: HeaderDetector = self._pipeline.header_detector
        extractor: ChannelExtractor = self._pipeline.extractor

        info: Dict[str, Any] = {'n_lines': len(lines)}

        try:
            parse_result = detector.detect(lines)
        except OpenBCIReaderError as e:
            logger.warning(f"Could not get detailed info: {e.message}")
            info.update({
                'data_start_line': None,
                'header_tokens': [],
                'n_columns_first_row': 0,
                'device_guess': None,
                'error': e.message,
            })
            return info

        first_row = lines[parse_result.data_start_line - 1]
        n_columns = len(split_fields(first_row))
        rule = extractor.classify(n_columns)

        info.update({
            'data_start_line': parse_result.data_start_line,
            'header_tokens': list(parse_result.header_tokens),
            'n_metadata_lines': parse_result.n_metadata_lines,
            'n_columns_first_row': n_columns,
            'device_guess': rule.device.value,
            'n_channels_guess': len(rule.columns(n_columns)),
        })
        return info

    # =========================================================================
    # ADDITIONAL UTILITY METHODS
    # =========================================================================

    @property
    def pipeline(self) -> IngestionPipeline:
        """The parsing pipeline used by this loader."""
        return self._pipeline


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def create_txt_loader(
    label_prefix: str = 'File',
    encoding: str = 'utf-8-sig',
    **kwargs
) -> OpenBCITxtLoader:
    """
    Create and initialize an OpenBCITxtLoader with common settings.

    Args:
        label_prefix: Prefix for synthesized channel labels
        encoding: Text encoding of the files
        **kwargs: Additional configuration options

    Returns:
        OpenBCITxtLoader: Initialized loader

    Example:
        >>> loader = create_txt_loader(label_prefix='Session')
        >>> recording = loader.load('OpenBCI-RAW.txt')
    """
    loader = OpenBCITxtLoader()
    config = {
        'label_prefix': label_prefix,
        'encoding': encoding,
        **kwargs
    }

    loader.initialize(config)
    return loader
