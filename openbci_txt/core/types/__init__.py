"""
Core Types Module
=================

This module exports all core data types for the OpenBCI text reader.

Available Types:
---------------
- LineKind: Metadata / Data line classification
- DeviceKind: Cyton, Ganglion or Generic board
- ParseResult: Header tokens and data start line
- EEGChannelSet: EEG channel slice tagged with its device kind
- EEGRecording: Per-file result of the ingestion pipeline

Example Usage:
    ```python
    from openbci_txt.core.types import EEGRecording, DeviceKind

    recording = load_eeg_file('OpenBCI-RAW.txt')
    assert recording.device in DeviceKind
    ```
"""

from openbci_txt.core.types.eeg_data import (
    LineKind,
    DeviceKind,
    ParseResult,
    EEGChannelSet,
    EEGRecording,
)

__all__ = [
    'LineKind',
    'DeviceKind',
    'ParseResult',
    'EEGChannelSet',
    'EEGRecording',
]
