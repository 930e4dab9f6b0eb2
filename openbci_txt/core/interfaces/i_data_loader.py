"""
IDataLoader Interface
=====================

This module defines the abstract interface for data loaders.

Data loaders are responsible for:
- Reading a recording file (the file handle is released before parsing)
- Running the ingestion pipeline on its lines
- Returning a standardized EEGRecording
- Isolating failures when several files are loaded together

Design Principles:
- All data loaders MUST implement this interface
- New export formats are added by writing a loader, not by touching the
  parsing stages
- Loaders are registered with the DataLoaderFactory

Example Usage:
    ```python
    from openbci_txt.data.loaders import DataLoaderFactory

    loader = DataLoaderFactory.create('openbci_txt', {'encoding': 'utf-8'})
    recording = loader.load('OpenBCI-RAW-2024-01-01.txt')

    print(f"Device: {recording.device.value}")
    print(f"Channels: {recording.channel_labels}")
    ```
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Any, Union
from pathlib import Path

from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from openbci_txt.core.types.eeg_data import EEGRecording
    from openbci_txt.data.loaders.base_loader import LoadResult


class IDataLoader(ABC):
    """
    Abstract interface for recording loaders.

    Attributes:
        name (str): Unique identifier for the loader (e.g., "openbci_txt")
        supported_extensions (List[str]): File extensions this loader can handle

    Methods:
        initialize: Configure the loader with settings
        load: Load one recording
        load_multiple: Load several recordings independently
        validate_file: Check if a file can be loaded by this loader
        get_file_info: Get structural information without a full parse
    """

    # =========================================================================
    # ABSTRACT PROPERTIES
    # =========================================================================

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Unique identifier for this data loader.

        Returns:
            str: Loader name (e.g., "openbci_txt")
        """
        pass

    @property
    @abstractmethod
    def supported_extensions(self) -> List[str]:
        """
        List of file extensions this loader can handle.

        Returns:
            List[str]: Supported extensions including the dot (e.g., [".txt"])
        """
        pass

    # =========================================================================
    # ABSTRACT METHODS
    # =========================================================================

    @abstractmethod
    def initialize(self, config: Dict[str, Any]) -> None:
        """
        Initialize the data loader with configuration settings.

        Args:
            config: Dictionary containing loader configuration
                Expected keys (all optional):
                - 'encoding': Text encoding of the file
                - 'label_prefix': Prefix for synthesized channel labels
                - 'verbose': Enable debug logging

        Raises:
            ConfigValidationError: If configuration is invalid
        """
        pass

    @abstractmethod
    def load(self,
             file_path: Union[str, Path],
             label_prefix: Optional[str] = None) -> 'EEGRecording':
        """
        Load one recording.

        Args:
            file_path: Path to the recording file
            label_prefix: Prefix for synthesized channel labels
                (defaults to the configured prefix)

        Returns:
            EEGRecording: Parsed recording

        Raises:
            FileOpenError: If the file is missing or unreadable
            EmptyFileError: If the file has no lines
            NoDataFoundError: If the file has no numeric data line
            MalformedDataError: If the data block yields no column
        """
        pass

    @abstractmethod
    def load_multiple(self,
                      file_paths: List[Union[str, Path]],
                      fail_fast: bool = False,
                      max_workers: Optional[int] = None) -> List['LoadResult']:
        """
        Load several recordings independently.

        A failure in one file never affects the others. With
        ``fail_fast=False`` every file gets a LoadResult (holding either a
        recording or the error); with ``fail_fast=True`` the first error,
        in input order, is raised.

        Args:
            file_paths: Paths to load
            fail_fast: Raise the first error instead of collecting it
            max_workers: Thread count; 1 loads sequentially

        Returns:
            List[LoadResult]: One result per path, in input order
        """
        pass

    @abstractmethod
    def validate_file(self, file_path: Union[str, Path]) -> bool:
        """
        Check if a file can be loaded by this loader.

        Args:
            file_path: Path to the file to validate

        Returns:
            bool: True if file can be loaded, False otherwise
        """
        pass

    @abstractmethod
    def get_file_info(self, file_path: Union[str, Path]) -> Dict[str, Any]:
        """
        Get structural information without parsing the numeric block.

        Args:
            file_path: Path to the recording file

        Returns:
            Dict containing at least:
                - 'data_start_line': 1-based index of the first data line
                - 'header_tokens': Tokens of the header line
                - 'n_columns_first_row': Field count of the first data line
                - 'file_format': Loader name
                - 'file_size_mb': File size in megabytes
        """
        pass

    # =========================================================================
    # CONCRETE METHODS
    # =========================================================================

    def get_supported_extensions(self) -> List[str]:
        """Get list of file extensions supported by this loader."""
        return self.supported_extensions

    def can_load(self, file_path: Union[str, Path]) -> bool:
        """
        Quick check if this loader can handle a given file.

        Checks the file extension only. For more thorough validation, use
        validate_file().
        """
        path = Path(file_path)
        return path.suffix.lower() in [ext.lower() for ext in self.supported_extensions]

    def __repr__(self) -> str:
        """String representation of the loader."""
        return f"{self.__class__.__name__}(name='{self.name}', extensions={self.supported_extensions})"
