"""
Core Interfaces
===============

Abstract interfaces implemented by pluggable components.

- IDataLoader: Reads a recording file into an EEGRecording
"""

from openbci_txt.core.interfaces.i_data_loader import IDataLoader

__all__ = [
    'IDataLoader',
]
