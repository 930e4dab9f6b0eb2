"""
EEG Data Types
==============

This module defines the data types that flow through the text ingestion
pipeline.

Data Types:
----------
1. LineKind: Metadata / Data classification of a raw line
2. DeviceKind: Board family inferred from column count
3. ParseResult: Header tokens and the 1-based index of the first data line
4. EEGChannelSet: EEG column slice of the cleaned matrix, tagged with device
5. EEGRecording: Everything produced for one file

Design Principles:
-----------------
- Produced once, never mutated afterwards
- Numpy-backed; missing cells are NaN, never zero
- No array is shared between two recordings

Matrix Orientation:
------------------
Matrices keep the orientation of the text export: rows are samples and
columns are file columns (sample index, EEG channels, auxiliary channels).

Example Usage:
    ```python
    from openbci_txt.core.types import EEGRecording, DeviceKind

    recording = loader.load('OpenBCI-RAW-2024-01-01.txt')
    if recording.device is DeviceKind.CYTON:
        print(recording.channel_labels)

    t = recording.time_axis(250.0)
    ```
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Any, Tuple
import numpy as np


class LineKind(Enum):
    """Classification of a single raw line."""
    METADATA = 'metadata'
    DATA = 'data'


class DeviceKind(Enum):
    """
    Board family inferred from the cleaned matrix's column count.

    The value is the lowercase name used as a configuration key
    (e.g. ``acquisition.sampling_rate.cyton``).
    """
    CYTON = 'cyton'
    GANGLION = 'ganglion'
    GENERIC = 'generic'

    @property
    def expected_channels(self) -> Optional[int]:
        """Number of EEG channels the board records, None if unknown."""
        return {
            DeviceKind.CYTON: 8,
            DeviceKind.GANGLION: 4,
        }.get(self)


@dataclass(frozen=True)
class ParseResult:
    """
    Result of scanning a file for the start of its numeric block.

    Attributes:
        header_tokens: Column names from the line directly above the data,
            empty if the data starts on line 1
        data_start_line: 1-based index of the first data line
    """
    header_tokens: Tuple[str, ...]
    data_start_line: int

    def __post_init__(self):
        if self.data_start_line < 1:
            raise ValueError(
                f"data_start_line must be >= 1, got {self.data_start_line}"
            )

    @property
    def has_header(self) -> bool:
        """Whether a header line was found."""
        return len(self.header_tokens) > 0

    @property
    def n_metadata_lines(self) -> int:
        """Number of lines skipped before the numeric block."""
        return self.data_start_line - 1


@dataclass(frozen=True)
class EEGChannelSet:
    """
    EEG columns sliced out of a cleaned matrix.

    Attributes:
        data: Channel data, shape (n_samples, n_channels)
        device: Device classification that selected the slice
        columns: 0-based column indices in the cleaned matrix
    """
    data: np.ndarray
    device: DeviceKind
    columns: Tuple[int, ...] = ()

    def __post_init__(self):
        if self.data.ndim != 2:
            raise ValueError(
                f"data must be 2D (samples, channels), got {self.data.ndim}D"
            )

    @property
    def n_channels(self) -> int:
        """Number of channels."""
        return self.data.shape[1]

    @property
    def n_samples(self) -> int:
        """Number of samples."""
        return self.data.shape[0]

    @property
    def shape(self) -> Tuple[int, int]:
        """Data shape (n_samples, n_channels)."""
        return self.data.shape

    @property
    def is_empty(self) -> bool:
        return self.data.size == 0


@dataclass
class EEGRecording:
    """
    Container for everything parsed from one text export.

    Attributes:
        data: Cleaned matrix, shape (n_samples, n_columns)
        channels: EEG channel slice with its device classification
        channel_labels: One label per EEG channel
        header_tokens: Tokens of the detected header line
        data_start_line: 1-based index of the first data line
        source_file: Path the recording was read from
        metadata: Parse details (raw shape, strategy, padded rows, ...)
    """
    data: np.ndarray
    channels: EEGChannelSet
    channel_labels: List[str] = field(default_factory=list)
    header_tokens: Tuple[str, ...] = ()
    data_start_line: int = 1
    source_file: str = ''
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Validate data after initialization."""
        if self.data.ndim != 2:
            raise ValueError(
                f"data must be 2D (samples, columns), got {self.data.ndim}D"
            )

        if len(self.channel_labels) != self.channels.n_channels:
            raise ValueError(
                f"Number of channel labels ({len(self.channel_labels)}) "
                f"doesn't match number of channels ({self.channels.n_channels})"
            )

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def device(self) -> DeviceKind:
        """Device classification."""
        return self.channels.device

    @property
    def n_channels(self) -> int:
        """Number of EEG channels."""
        return self.channels.n_channels

    @property
    def n_samples(self) -> int:
        """Number of samples (rows) after cleaning."""
        return self.data.shape[0]

    @property
    def n_columns(self) -> int:
        """Number of columns after cleaning."""
        return self.data.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        """Cleaned matrix shape (n_samples, n_columns)."""
        return self.data.shape

    @property
    def eeg(self) -> np.ndarray:
        """EEG channel data, shape (n_samples, n_channels)."""
        return self.channels.data

    @property
    def is_empty(self) -> bool:
        """True when cleaning left no rows or no columns."""
        return self.data.size == 0

    def time_axis(self, sampling_rate: float) -> np.ndarray:
        """Time axis in seconds for the given sampling rate."""
        from openbci_txt.analysis.summary import time_axis
        return time_axis(self.n_samples, sampling_rate)

    def __repr__(self) -> str:
        return (
            f"EEGRecording("
            f"shape={self.shape}, "
            f"device={self.device.value}, "
            f"channels={self.n_channels})"
        )
