"""
Base Data Loader Implementation
===============================

This module provides the base implementation of the IDataLoader interface.

The BaseDataLoader implements:
- Common initialization logic (encoding, label prefix, verbosity)
- File path validation and line reading
- Per-file failure isolation for batch loading
- Logging

Design Pattern:
- Template Method Pattern: ``load`` validates the path, reads the lines
  (closing the file before parsing starts) and hands them to
  ``_build_recording``, which subclasses implement.

Usage:
    ```python
    class MyLoader(BaseDataLoader):
        @property
        def name(self) -> str:
            return "mine"

        @property
        def supported_extensions(self) -> List[str]:
            return [".dat"]

        def _build_recording(self, lines, file_path, label_prefix):
            ...
    ```
"""

from abc import abstractmethod
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Dict, List, Optional, Any, Sequence, Union
from pathlib import Path
import codecs
import logging
import os

from openbci_txt.core.exceptions import (
    ConfigValidationError,
    DataError,
    EmptyFileError,
    FileOpenError,
    OpenBCIReaderError,
    UnsupportedFormatError,
)
from openbci_txt.core.interfaces.i_data_loader import IDataLoader
from openbci_txt.core.types.eeg_data import EEGRecording
from openbci_txt.utils.logging import log_execution_time


# Configure module logger
logger = logging.getLogger(__name__)


@dataclass
class LoadResult:
    """
    Outcome of loading one file in a batch.

    Attributes:
        file_path: Path that was loaded
        recording: Parsed recording, None on failure
        error: Error raised for this file, None on success
    """
    file_path: str
    recording: Optional[EEGRecording] = None
    error: Optional[OpenBCIReaderError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> EEGRecording:
        """Return the recording, or raise the stored error."""
        if self.error is not None:
            raise self.error
        return self.recording


class BaseDataLoader(IDataLoader):
    """
    Base implementation of the IDataLoader interface.

    Attributes:
        _config (Dict): Loader configuration
        _initialized (bool): Whether initialize() has been called
        _verbose (bool): Enable verbose logging
        _encoding (str): Text encoding used to read files
        _label_prefix (str): Prefix for synthesized channel labels
        _max_workers (int): Default thread count for load_multiple

    Template Methods (must be overridden):
        _build_recording: Turn a file's lines into an EEGRecording
        _validate_file_format: Format-specific check
        _get_file_info_specific: Format-specific structural info
    """

    def __init__(self):
        """Initialize the base data loader."""
        self._config: Dict[str, Any] = {}

        self._initialized: bool = False
        self._verbose: bool = False

        self._encoding: str = 'utf-8-sig'
        self._label_prefix: str = 'File'
        self._max_workers: int = 1

        logger.debug(f"{self.__class__.__name__} instantiated")

    # =========================================================================
    # INTERFACE IMPLEMENTATION
    # =========================================================================

    def initialize(self, config: Dict[str, Any]) -> None:
        """
        Initialize the data loader with configuration settings.

        Args:
            config: Dictionary containing loader configuration
                - 'encoding' (str, optional): File encoding (default: utf-8-sig)
                - 'label_prefix' (str, optional): Label prefix (default: File)
                - 'max_workers' (int, optional): Threads for load_multiple
                - 'verbose' (bool, optional): Enable verbose logging

        Raises:
            ConfigValidationError: If configuration is invalid
        """
        logger.debug(f"Initializing {self.name} data loader")

        self._config = config.copy()

        encoding = config.get('encoding', 'utf-8-sig')
        try:
            codecs.lookup(encoding)
        except LookupError:
            raise ConfigValidationError('encoding', 'a known text encoding', str(encoding))
        self._encoding = encoding

        self._label_prefix = str(config.get('label_prefix', 'File'))

        max_workers = config.get('max_workers', 1)
        if not isinstance(max_workers, int) or max_workers < 1:
            raise ConfigValidationError('max_workers', 'an integer >= 1', repr(max_workers))
        self._max_workers = max_workers

        self._verbose = config.get('verbose', False)
        if self._verbose:
            logging.getLogger('openbci_txt').setLevel(logging.DEBUG)

        self._initialize_specific(config)

        self._initialized = True
        logger.debug(f"{self.name} loader initialized")

    @log_execution_time()
    def load(self,
             file_path: Union[str, Path],
             label_prefix: Optional[str] = None) -> EEGRecording:
        """
        Load one recording.

        1. Validates the file path and extension
        2. Reads all lines (the file is closed before parsing)
        3. Builds the recording (format-specific)

        Args:
            file_path: Path to the recording file
            label_prefix: Prefix for synthesized labels (default: configured)

        Returns:
            EEGRecording: Parsed recording

        Raises:
            FileOpenError: If the file doesn't exist or can't be read
            UnsupportedFormatError: If the extension is not supported
            EmptyFileError, NoDataFoundError, MalformedDataError: On
                structural failures
        """
        if not self._initialized:
            logger.debug("Loader not initialized, using default configuration")
            self.initialize({})

        file_path = Path(file_path)
        logger.info(f"Loading EEG data from: {file_path}")

        self._validate_file_path(file_path)
        lines = self._read_lines(file_path)
        if not lines:
            logger.error(f"File is empty: {file_path}")
            raise EmptyFileError(str(file_path))

        prefix = self._label_prefix if label_prefix is None else label_prefix
        try:
            recording = self._build_recording(lines, file_path, prefix)
        except DataError as e:
            if e.file_path is None:
                e.set_file_path(str(file_path))
            logger.error(f"Failed to parse {file_path}: {e.message}")
            raise

        if recording.is_empty:
            logger.warning(f"{file_path.name}: no valid samples left after cleaning")

        logger.info(
            f"Loaded {recording.n_samples} samples x {recording.n_columns} columns "
            f"from {file_path.name} "
            f"({recording.device.value}, {recording.n_channels} EEG channels)"
        )

        return recording

    def load_multiple(
        self,
        file_paths: List[Union[str, Path]],
        fail_fast: bool = False,
        max_workers: Optional[int] = None,
        label_prefixes: Optional[Sequence[str]] = None
    ) -> List[LoadResult]:
        """
        Load several recordings independently.

        Args:
            file_paths: Paths to load
            fail_fast: Raise the first error (in input order) instead of
                collecting it in the result
            max_workers: Thread count (default: configured, 1 = sequential)
            label_prefixes: One label prefix per file (default:
                ``<prefix>1``, ``<prefix>2``, ...)

        Returns:
            List[LoadResult]: One result per path, in input order

        Example:
            >>> results = loader.load_multiple(['a.txt', 'b.txt'])
            >>> [r.ok for r in results]
            [True, False]
        """
        if not self._initialized:
            self.initialize({})

        if label_prefixes is None:
            label_prefixes = [
                f"{self._label_prefix}{i}" for i in range(1, len(file_paths) + 1)
            ]
        elif len(label_prefixes) != len(file_paths):
            raise ValueError(
                f"Got {len(label_prefixes)} label prefixes for {len(file_paths)} files"
            )

        workers = max_workers or self._max_workers
        logger.info(f"Loading {len(file_paths)} files (workers={workers})")

        results: List[LoadResult] = []

        if workers <= 1 or len(file_paths) <= 1:
            for path, prefix in zip(file_paths, label_prefixes):
                result = self._load_isolated(path, prefix)
                if fail_fast and not result.ok:
                    raise result.error
                results.append(result)
        else:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                futures = [
                    executor.submit(self._load_isolated, path, prefix)
                    for path, prefix in zip(file_paths, label_prefixes)
                ]
                for future in futures:
                    result = future.result()
                    if fail_fast and not result.ok:
                        for pending in futures:
                            pending.cancel()
                        raise result.error
                    results.append(result)

        n_failed = sum(1 for r in results if not r.ok)
        if n_failed:
            logger.warning(f"{n_failed} of {len(results)} files failed to load")

        return results

    def load_pair(self,
                  first: Union[str, Path],
                  second: Union[str, Path]) -> List[LoadResult]:
        """
        Load two recordings for side-by-side comparison.

        Labels are prefixed ``<prefix>1`` and ``<prefix>2``. Neither file's
        failure affects the other; inspect each LoadResult.
        """
        return self.load_multiple([first, second])

    def validate_file(self, file_path: Union[str, Path]) -> bool:
        """
        Check if a file can be loaded by this loader.

        1. Checks file existence
        2. Validates file extension
        3. Checks the file is readable
        4. Runs the format-specific check

        Returns:
            bool: True if file is valid and loadable
        """
        file_path = Path(file_path)

        if not file_path.is_file():
            logger.debug(f"File does not exist: {file_path}")
            return False

        if not self.can_load(file_path):
            logger.debug(f"Unsupported extension: {file_path.suffix}")
            return False

        if not os.access(file_path, os.R_OK):
            logger.debug(f"File not readable: {file_path}")
            return False

        try:
            return self._validate_file_format(file_path)
        except OpenBCIReaderError as e:
            logger.debug(f"Format validation failed: {e.message}")
            return False

    def get_file_info(self, file_path: Union[str, Path]) -> Dict[str, Any]:
        """
        Get structural information without parsing the numeric block.

        Args:
            file_path: Path to the recording file

        Returns:
            Dict with format-specific keys plus 'file_format',
            'file_size_mb' and 'file_path'
        """
        file_path = Path(file_path)
        self._validate_file_path(file_path)

        file_size_mb = file_path.stat().st_size / (1024 * 1024)

        info = self._get_file_info_specific(file_path)

        info['file_format'] = self.name
        info['file_size_mb'] = round(file_size_mb, 2)
        info['file_path'] = str(file_path)

        return info

    # =========================================================================
    # TEMPLATE METHODS
    # =========================================================================

    @abstractmethod
    def _build_recording(self,
                         lines: Sequence[str],
                         file_path: Path,
                         label_prefix: str) -> EEGRecording:
        """
        Turn the lines of a file into a recording.

        Args:
            lines: All lines of the file
            file_path: Source path
            label_prefix: Prefix for synthesized channel labels

        Returns:
            EEGRecording: Parsed recording
        """
        pass

    @abstractmethod
    def _validate_file_format(self, file_path: Path) -> bool:
        """Format-specific validation."""
        pass

    @abstractmethod
    def _get_file_info_specific(self, file_path: Path) -> Dict[str, Any]:
        """Format-specific file information."""
        pass

    def _initialize_specific(self, config: Dict[str, Any]) -> None:
        """Override to add format-specific initialization."""
        pass

    # =========================================================================
    # HELPER METHODS
    # =========================================================================

    def _validate_file_path(self, file_path: Path) -> None:
        """
        Validate that a file path is valid and readable.

        Raises:
            FileOpenError: If file doesn't exist or is not readable
            UnsupportedFormatError: If extension is unsupported
        """
        if not file_path.exists():
            raise FileOpenError(str(file_path), "File not found")

        if not file_path.is_file():
            raise FileOpenError(str(file_path), "Not a regular file")

        if not self.can_load(file_path):
            raise UnsupportedFormatError(str(file_path), self.supported_extensions)

        if not os.access(file_path, os.R_OK):
            raise FileOpenError(str(file_path), "Permission denied")

    def _load_isolated(self, file_path: Union[str, Path], label_prefix: str) -> LoadResult:
        """Load one file, capturing any reader error in the result."""
        try:
            recording = self.load(file_path, label_prefix=label_prefix)
        except OpenBCIReaderError as e:
            logger.warning(f"Skipping {file_path}: {e.message}")
            return LoadResult(file_path=str(file_path), error=e)
        return LoadResult(file_path=str(file_path), recording=recording)

    def _read_lines(self, file_path: Path) -> List[str]:
        """
        Read all lines of a text file.

        The handle is closed before this returns, on success or failure.
        Undecodable bytes are replaced rather than aborting the read.

        Raises:
            FileOpenError: If the file cannot be read
        """
        try:
            with open(file_path, 'r', encoding=self._encoding, errors='replace') as f:
                return f.read().splitlines()
        except OSError as e:
            raise FileOpenError(str(file_path), "Read failed", original_error=e) from e

    def get_config(self) -> Dict[str, Any]:
        """Get the current loader configuration."""
        return self._config.copy()

    def __repr__(self) -> str:
        """String representation of the loader."""
        init_status = "initialized" if self._initialized else "not initialized"
        return (
            f"{self.__class__.__name__}("
            f"name='{self.name}', "
            f"extensions={self.supported_extensions}, "
            f"status={init_status})"
        )
