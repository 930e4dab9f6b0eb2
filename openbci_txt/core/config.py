"""
Configuration Manager
=====================

This module implements the central configuration management for the reader.

The configuration manager is responsible for:
- Holding hardcoded defaults (encoding, label prefix, sampling rates)
- Loading overrides from YAML/JSON files
- Providing typed, dot-notation access to configuration values

The parsing pipeline itself never reads configuration; only the loader
(encoding, label prefix) and the summary layer (sampling rate per device)
consult it.

Configuration Hierarchy:
-----------------------
1. Default config (hardcoded fallbacks)
2. Config files, merged in load order
3. Runtime overrides (programmatic)

Each level overrides values from previous levels.

Example Usage:
    ```python
    from openbci_txt.core.config import get_config

    config = get_config()
    config.load('configs/lab.yaml')

    fs = config.get_float('acquisition.sampling_rate.ganglion')
    # Returns: 125.0

    config.set('loader.encoding', 'latin-1')
    loader_config = config.get_section('loader')
    ```
"""

from typing import Dict, List, Optional, Any, Union
from pathlib import Path
import yaml
import json
import os
import logging
import threading
from copy import deepcopy

from openbci_txt.core.exceptions import ConfigNotFoundError, ConfigValidationError

# Configure logging
logger = logging.getLogger(__name__)


class ConfigManager:
    """
    Central configuration manager.

    Implements the Singleton pattern with thread-safe access.

    Attributes:
        _instance: Singleton instance
        _lock: Thread lock
        _config: Hierarchical configuration dictionary
        _sources: Track which file each value came from
        _defaults: Default values
    """

    _instance: Optional['ConfigManager'] = None
    _lock: threading.Lock = threading.Lock()

    # =========================================================================
    # SINGLETON PATTERN
    # =========================================================================

    def __new__(cls) -> 'ConfigManager':
        """Singleton pattern implementation."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        """Initialize the configuration manager."""
        if self._initialized:
            return

        self._config: Dict[str, Any] = {}
        self._sources: Dict[str, str] = {}
        self._loaded_files: List[str] = []
        self._defaults: Dict[str, Any] = {}

        self._environment: str = os.getenv('OPENBCI_TXT_ENV', 'development')

        self._init_defaults()

        self._initialized = True
        logger.debug(f"ConfigManager initialized (env: {self._environment})")

    @classmethod
    def get_instance(cls) -> 'ConfigManager':
        """
        Get the singleton configuration manager.

        Returns:
            ConfigManager: The singleton instance
        """
        return cls()

    @classmethod
    def reset(cls) -> None:
        """Reset the configuration manager (mainly for testing)."""
        with cls._lock:
            if cls._instance is not None:
                cls._instance._config.clear()
                cls._instance._sources.clear()
                cls._instance._loaded_files.clear()
                cls._instance._initialized = False
            cls._instance = None
        logger.debug("ConfigManager reset")

    # =========================================================================
    # DEFAULT CONFIGURATION
    # =========================================================================

    def _init_defaults(self) -> None:
        """Initialize hardcoded default values."""
        self._defaults = {
            'loader': {
                'encoding': 'utf-8-sig',
                'label_prefix': 'File',
                'extensions': ['.txt', '.csv', '.tsv'],
                'max_workers': 1,
            },

            # Sampling frequency per board family (Hz). Only the time axis
            # and summary layer use these.
            'acquisition': {
                'sampling_rate': {
                    'cyton': 250.0,
                    'ganglion': 125.0,
                    'generic': 250.0,
                },
                'units': 'uV',
            },

            'logging': {
                'level': 'INFO',
                'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                'file': None,
            },
        }

        self._config = deepcopy(self._defaults)
        logger.debug("Default configuration initialized")

    # =========================================================================
    # LOADING CONFIGURATION
    # =========================================================================

    def load(self,
             path: Union[str, Path],
             merge: bool = True) -> 'ConfigManager':
        """
        Load configuration from a file.

        Args:
            path: Path to configuration file (YAML or JSON)
            merge: If True, merge with existing config. If False, replace
                everything except the defaults.

        Returns:
            Self for method chaining

        Raises:
            ConfigNotFoundError: If file doesn't exist
            ValueError: If file format is unsupported

        Example:
            >>> config.load('configs/lab.yaml')
        """
        path = Path(path)

        if not path.exists():
            raise ConfigNotFoundError(str(path))

        if path.suffix.lower() in ['.yaml', '.yml']:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        elif path.suffix.lower() == '.json':
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        else:
            raise ValueError(f"Unsupported config format: {path.suffix}")

        if not isinstance(data, dict):
            raise ConfigValidationError(
                str(path), 'a mapping at the top level', type(data).__name__
            )

        if not merge:
            self._config = deepcopy(self._defaults)
            self._sources.clear()

        self._merge_config(data, str(path))

        self._loaded_files.append(str(path))
        logger.info(f"Loaded configuration from {path}")

        return self

    def _merge_config(self,
                      new_config: Dict[str, Any],
                      source: str) -> None:
        """
        Deep merge new configuration into existing.

        Args:
            new_config: New configuration to merge
            source: Source identifier (file path)
        """
        def deep_merge(base: Dict, update: Dict, prefix: str = '') -> Dict:
            for key, value in update.items():
                full_key = f"{prefix}.{key}" if prefix else key

                if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                    deep_merge(base[key], value, full_key)
                else:
                    base[key] = value
                    self._sources[full_key] = source

            return base

        deep_merge(self._config, new_config)

    # =========================================================================
    # ACCESSING CONFIGURATION
    # =========================================================================

    def get(self,
            key: str,
            default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Args:
            key: Configuration key (e.g., 'acquisition.sampling_rate.cyton')
            default: Default value if key not found

        Returns:
            Configuration value or default

        Example:
            >>> config.get('loader.encoding')
            'utf-8-sig'
            >>> config.get('nonexistent', default='fallback')
            'fallback'
        """
        keys = key.split('.')
        value = self._config

        try:
            for k in keys:
                value = value[k]
            return value
        except (KeyError, TypeError):
            return default

    def get_int(self, key: str, default: int = 0) -> int:
        """Get configuration value as integer."""
        value = self.get(key, default)
        return int(value) if value is not None else default

    def get_float(self, key: str, default: float = 0.0) -> float:
        """Get configuration value as float."""
        value = self.get(key, default)
        return float(value) if value is not None else default

    def get_list(self, key: str, default: Optional[List] = None) -> List:
        """Get configuration value as list."""
        value = self.get(key, default)
        if value is None:
            return default or []
        if isinstance(value, list):
            return value
        return [value]

    def get_section(self, key: str) -> Dict[str, Any]:
        """
        Get a configuration section as dictionary.

        Args:
            key: Section key (e.g., 'loader')

        Returns:
            Configuration section as dict (deep copy)
        """
        value = self.get(key, {})
        return deepcopy(value) if isinstance(value, dict) else {}

    def get_source(self, key: str) -> str:
        """Get the source (file) where a value was defined, or 'default'."""
        return self._sources.get(key, 'default')

    def get_sampling_rate(self, device: str) -> float:
        """
        Sampling frequency configured for a board family.

        Args:
            device: Device name ('cyton', 'ganglion', 'generic')

        Returns:
            float: Sampling rate in Hz (falls back to the generic rate)
        """
        rates = self.get_section('acquisition.sampling_rate')
        rate = rates.get(device.lower(), rates.get('generic'))
        if rate is None:
            raise ConfigValidationError(
                f'acquisition.sampling_rate.{device}', 'a positive number', 'missing'
            )
        return float(rate)

    # =========================================================================
    # MODIFYING CONFIGURATION
    # =========================================================================

    def set(self,
            key: str,
            value: Any,
            source: str = 'runtime') -> 'ConfigManager':
        """
        Set a configuration value.

        Args:
            key: Configuration key (dot notation)
            value: Value to set
            source: Source identifier

        Returns:
            Self for method chaining

        Example:
            >>> config.set('acquisition.sampling_rate.cyton', 500)
        """
        keys = key.split('.')
        config = self._config

        for k in keys[:-1]:
            if k not in config or not isinstance(config[k], dict):
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value
        self._sources[key] = source

        logger.debug(f"Set {key} = {value}")
        return self

    # =========================================================================
    # SAVING CONFIGURATION
    # =========================================================================

    def save(self,
             path: Union[str, Path],
             sections: Optional[List[str]] = None) -> None:
        """
        Save configuration to a file.

        Args:
            path: Output file path (.yaml, .yml or .json)
            sections: If specified, only save these sections
        """
        path = Path(path)

        if sections:
            data = {s: self.get_section(s) for s in sections}
        else:
            data = deepcopy(self._config)

        path.parent.mkdir(parents=True, exist_ok=True)

        if path.suffix.lower() in ['.yaml', '.yml']:
            with open(path, 'w', encoding='utf-8') as f:
                yaml.safe_dump(data, f, default_flow_style=False)
        elif path.suffix.lower() == '.json':
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2)
        else:
            raise ValueError(f"Unsupported format: {path.suffix}")

        logger.info(f"Saved configuration to {path}")

    def export(self) -> Dict[str, Any]:
        """Export full configuration as a deep-copied dictionary."""
        return deepcopy(self._config)

    # =========================================================================
    # UTILITY METHODS
    # =========================================================================

    def validate(self) -> List[str]:
        """
        Validate configuration values.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        rates = self.get('acquisition.sampling_rate')
        if not isinstance(rates, dict) or not rates:
            errors.append("Missing required configuration: acquisition.sampling_rate")
        else:
            for device, rate in rates.items():
                try:
                    if float(rate) <= 0:
                        errors.append(
                            f"acquisition.sampling_rate.{device} must be > 0, got {rate}"
                        )
                except (TypeError, ValueError):
                    errors.append(
                        f"acquisition.sampling_rate.{device} must be a number, got {rate!r}"
                    )

        if not self.get('loader.encoding'):
            errors.append("Missing required configuration: loader.encoding")

        if self.get_int('loader.max_workers', 1) < 1:
            errors.append(
                f"loader.max_workers must be >= 1, got {self.get('loader.max_workers')}"
            )

        return errors

    def get_environment(self) -> str:
        """Get current environment name."""
        return self._environment

    def __repr__(self) -> str:
        """String representation."""
        return f"ConfigManager(env='{self._environment}', files={len(self._loaded_files)})"


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def get_config() -> ConfigManager:
    """
    Get the singleton ConfigManager instance.

    Returns:
        ConfigManager: The singleton instance
    """
    return ConfigManager.get_instance()


def load_config(path: Union[str, Path]) -> ConfigManager:
    """
    Load configuration from file.

    Args:
        path: Configuration file path

    Returns:
        ConfigManager instance
    """
    return get_config().load(path)
