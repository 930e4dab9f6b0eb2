"""
Data Loader Factory
===================

This module implements the Factory pattern for creating data loaders.
It provides a centralized way to instantiate appropriate loaders based on
file extension or explicit type specification.

The factory supports:
- Automatic loader selection based on file extension
- Manual loader creation by type name
- Registration of custom loaders

Design Patterns Used:
- Factory Method: Creates loader instances
- Registry Pattern: Maintains available loader types

Usage Examples:
    ```python
    from openbci_txt.data.loaders import DataLoaderFactory

    # Create loader by file extension (automatic detection)
    loader = DataLoaderFactory.create_for_file('OpenBCI-RAW.txt')

    # Create loader by type name with configuration
    loader = DataLoaderFactory.create('openbci_txt', config={
        'label_prefix': 'Subject',
        'encoding': 'latin-1',
    })

    # Register custom loader
    DataLoaderFactory.register('custom', MyCustomLoader)
    ```
"""

from typing import Dict, Type, Optional, Any, Union, List
from pathlib import Path
import logging

from openbci_txt.core.config import get_config
from openbci_txt.core.interfaces.i_data_loader import IDataLoader
from openbci_txt.core.exceptions import UnsupportedFormatError

from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from openbci_txt.core.types.eeg_data import EEGRecording


# Configure module logger
logger = logging.getLogger(__name__)


class DataLoaderFactory:
    """
    Factory class for creating data loader instances.

    Class Attributes:
        _loaders (Dict): Registry of loader name -> loader class mappings
        _extension_map (Dict): Registry of extension -> loader name mappings

    Thread Safety:
        The factory is thread-safe for read operations. Registration
        should be done during initialization before concurrent access.

    Example:
        >>> loader = DataLoaderFactory.create('openbci_txt')
        >>> recording = loader.load('OpenBCI-RAW.txt')
    """

    # Registry of available loaders: name -> class
    _loaders: Dict[str, Type[IDataLoader]] = {}

    # Extension to loader name mapping
    _extension_map: Dict[str, str] = {}

    _initialized: bool = False

    @classmethod
    def _ensure_initialized(cls) -> None:
        """Register the built-in loaders on first use."""
        if cls._initialized:
            return

        from openbci_txt.data.loaders.txt_loader import OpenBCITxtLoader
        cls.register('openbci_txt', OpenBCITxtLoader)

        cls._initialized = True
        logger.debug(f"DataLoaderFactory initialized with {len(cls._loaders)} loaders")

    @classmethod
    def register(
        cls,
        name: str,
        loader_class: Type[IDataLoader],
        extensions: Optional[List[str]] = None
    ) -> None:
        """
        Register a new loader type with the factory.

        Args:
            name: Unique name for the loader
            loader_class: The loader class (must implement IDataLoader)
            extensions: File extensions to map to this loader (taken from
                an instance if None)

        Raises:
            TypeError: If loader_class doesn't implement IDataLoader
        """
        if not isinstance(loader_class, type):
            raise TypeError(f"loader_class must be a class, got {type(loader_class)}")

        if not issubclass(loader_class, IDataLoader):
            raise TypeError(
                f"{loader_class.__name__} must implement IDataLoader interface"
            )

        name = name.lower()
        if name in cls._loaders:
            logger.warning(f"Overwriting existing loader registration: '{name}'")

        cls._loaders[name] = loader_class
        logger.debug(f"Registered loader: '{name}' -> {loader_class.__name__}")

        if extensions is None:
            extensions = loader_class().supported_extensions

        for ext in extensions:
            ext_lower = ext.lower()
            if ext_lower in cls._extension_map:
                logger.debug(
                    f"Extension '{ext}' remapped: "
                    f"{cls._extension_map[ext_lower]} -> {name}"
                )
            cls._extension_map[ext_lower] = name

    @classmethod
    def unregister(cls, name: str) -> bool:
        """
        Remove a loader from the registry.

        Returns:
            bool: True if loader was removed, False if not found
        """
        name = name.lower()
        if name not in cls._loaders:
            return False

        del cls._loaders[name]

        extensions_to_remove = [
            ext for ext, loader in cls._extension_map.items()
            if loader == name
        ]
        for ext in extensions_to_remove:
            del cls._extension_map[ext]

        logger.info(f"Unregistered loader: '{name}'")
        return True

    @classmethod
    def create(
        cls,
        loader_type: str,
        config: Optional[Dict[str, Any]] = None,
        auto_initialize: bool = True
    ) -> IDataLoader:
        """
        Create a data loader instance by type name.

        Args:
            loader_type: Type of loader to create (e.g., 'openbci_txt')
            config: Optional configuration dictionary for initialization,
                applied on top of the ``loader`` configuration section
            auto_initialize: Whether to call initialize() automatically

        Returns:
            IDataLoader: New loader instance

        Raises:
            ValueError: If loader_type is not registered
        """
        cls._ensure_initialized()

        loader_type = loader_type.lower()

        if loader_type not in cls._loaders:
            available = ', '.join(cls._loaders.keys())
            raise ValueError(
                f"Unknown loader type: '{loader_type}'. "
                f"Available types: {available}"
            )

        loader_class = cls._loaders[loader_type]
        loader = loader_class()

        logger.debug(f"Created loader instance: {loader_class.__name__}")

        if auto_initialize:
            # Explicit config overrides the 'loader' section of the global config
            merged = get_config().get_section('loader')
            merged.update(config or {})
            loader.initialize(merged)

        return loader

    @classmethod
    def create_for_file(
        cls,
        file_path: Union[str, Path],
        config: Optional[Dict[str, Any]] = None
    ) -> IDataLoader:
        """
        Create a loader appropriate for the given file.

        Args:
            file_path: Path to the file to load
            config: Optional configuration dictionary

        Returns:
            IDataLoader: Appropriate loader for the file type

        Raises:
            UnsupportedFormatError: If the file extension is not supported
        """
        cls._ensure_initialized()

        file_path = Path(file_path)
        extension = file_path.suffix.lower()

        if extension not in cls._extension_map:
            raise UnsupportedFormatError(
                str(file_path), sorted(cls._extension_map.keys())
            )

        loader_type = cls._extension_map[extension]
        logger.debug(f"Auto-detected loader type '{loader_type}' for '{extension}'")

        return cls.create(loader_type, config)

    @classmethod
    def get_available_types(cls) -> List[str]:
        """Get list of registered loader types."""
        cls._ensure_initialized()
        return list(cls._loaders.keys())

    @classmethod
    def get_supported_extensions(cls) -> Dict[str, str]:
        """
        Get mapping of supported extensions to loader types.

        Example:
            >>> DataLoaderFactory.get_supported_extensions()
            {'.txt': 'openbci_txt', '.csv': 'openbci_txt', '.tsv': 'openbci_txt'}
        """
        cls._ensure_initialized()
        return cls._extension_map.copy()

    @classmethod
    def can_load(cls, file_path: Union[str, Path]) -> bool:
        """Check if the factory can create a loader for the given file."""
        cls._ensure_initialized()

        extension = Path(file_path).suffix.lower()
        return extension in cls._extension_map

    @classmethod
    def reset(cls) -> None:
        """
        Reset the factory to uninitialized state.

        Primarily used for testing. Clears all registered loaders.
        """
        cls._loaders.clear()
        cls._extension_map.clear()
        cls._initialized = False
        logger.debug("DataLoaderFactory reset")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def create_loader(
    loader_type: str,
    **config
) -> IDataLoader:
    """
    Convenience function to create a data loader.

    Example:
        >>> loader = create_loader('openbci_txt', label_prefix='Subject')
    """
    return DataLoaderFactory.create(loader_type, config=config)


def load_eeg_file(
    file_path: Union[str, Path],
    label_prefix: Optional[str] = None,
    **config
) -> 'EEGRecording':
    """
    Load a recording with automatic loader detection.

    Args:
        file_path: Path to the recording file
        label_prefix: Prefix for synthesized channel labels
        **config: Configuration options for the loader

    Returns:
        EEGRecording: Loaded recording

    Example:
        >>> recording = load_eeg_file('OpenBCI-RAW.txt')
        >>> print(f"Loaded: {recording.shape}")
    """
    loader = DataLoaderFactory.create_for_file(file_path, config=config)
    return loader.load(file_path, label_prefix=label_prefix)
