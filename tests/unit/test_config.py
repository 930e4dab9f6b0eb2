"""
Unit Tests for Configuration
============================

Test Coverage:
- ConfigManager defaults and dot-notation access
- YAML/JSON loading, merging and saving
- Validation and sampling rate lookup
"""

import json

import pytest
import yaml

from openbci_txt.core.config import ConfigManager, get_config, load_config
from openbci_txt.core.exceptions import ConfigNotFoundError, ConfigValidationError


class TestConfigManager:
    """Test cases for ConfigManager."""

    def setup_method(self):
        """Reset the singleton before each test."""
        ConfigManager.reset()

    def teardown_method(self):
        ConfigManager.reset()

    def test_singleton(self):
        """Test that every accessor returns the same instance."""
        assert ConfigManager() is ConfigManager.get_instance() is get_config()

    def test_defaults(self):
        """Test built-in default values."""
        config = get_config()

        assert config.get('loader.encoding') == 'utf-8-sig'
        assert config.get('loader.label_prefix') == 'File'
        assert config.get_list('loader.extensions') == ['.txt', '.csv', '.tsv']
        assert config.get_float('acquisition.sampling_rate.cyton') == 250.0
        assert config.get_float('acquisition.sampling_rate.ganglion') == 125.0
        assert config.get_source('loader.encoding') == 'default'

    def test_get_missing_key(self):
        """Test default is returned for unknown keys."""
        config = get_config()

        assert config.get('nope.nothing', default='fallback') == 'fallback'
        assert config.get('nope') is None

    def test_set_dot_notation(self):
        """Test set with dot notation creates and overrides keys."""
        config = get_config()
        config.set('acquisition.sampling_rate.cyton', 500)
        config.set('loader.label_prefix', 'Lab')

        assert config.get_sampling_rate('cyton') == 500.0
        assert config.get('loader.label_prefix') == 'Lab'
        assert config.get_source('loader.label_prefix') == 'runtime'

    def test_get_section_is_copy(self):
        """Test that mutating a section does not change the config."""
        config = get_config()
        section = config.get_section('loader')
        section['encoding'] = 'ascii'

        assert config.get('loader.encoding') == 'utf-8-sig'

    def test_load_yaml_merges(self, tmp_path):
        """Test a YAML file is deep-merged over the defaults."""
        path = tmp_path / 'lab.yaml'
        path.write_text(yaml.safe_dump({
            'acquisition': {'sampling_rate': {'cyton': 500}},
            'loader': {'label_prefix': 'Subject'},
        }))

        config = load_config(path)

        assert config.get('acquisition.sampling_rate.cyton') == 500
        assert config.get('acquisition.sampling_rate.ganglion') == 125.0
        assert config.get('loader.label_prefix') == 'Subject'
        assert config.get_source('loader.label_prefix') == str(path)

    def test_load_json(self, tmp_path):
        """Test JSON configuration files."""
        path = tmp_path / 'lab.json'
        path.write_text(json.dumps({'loader': {'encoding': 'latin-1'}}))

        config = get_config().load(path)

        assert config.get('loader.encoding') == 'latin-1'

    def test_load_replace(self, tmp_path):
        """Test merge=False discards earlier runtime values."""
        config = get_config()
        config.set('loader.label_prefix', 'Runtime')
        path = tmp_path / 'lab.yaml'
        path.write_text(yaml.safe_dump({'loader': {'encoding': 'ascii'}}))

        config.load(path, merge=False)

        assert config.get('loader.label_prefix') == 'File'
        assert config.get('loader.encoding') == 'ascii'

    def test_load_missing(self, tmp_path):
        """Test ConfigNotFoundError for a missing file."""
        with pytest.raises(ConfigNotFoundError):
            get_config().load(tmp_path / 'missing.yaml')

    def test_load_unsupported_format(self, tmp_path):
        """Test unsupported extensions are rejected."""
        path = tmp_path / 'lab.ini'
        path.write_text('[loader]\n')

        with pytest.raises(ValueError):
            get_config().load(path)

    def test_load_non_mapping(self, tmp_path):
        """Test a top-level list is rejected."""
        path = tmp_path / 'lab.yaml'
        path.write_text('- a\n- b\n')

        with pytest.raises(ConfigValidationError):
            get_config().load(path)

    def test_save_roundtrip(self, tmp_path):
        """Test a saved section can be loaded back."""
        config = get_config()
        config.set('acquisition.sampling_rate.ganglion', 200)
        path = tmp_path / 'out' / 'saved.yaml'

        config.save(path, sections=['acquisition'])
        ConfigManager.reset()
        reloaded = load_config(path)

        assert reloaded.get('acquisition.sampling_rate.ganglion') == 200

    def test_validate_defaults(self):
        """Test the defaults are valid."""
        assert get_config().validate() == []

    def test_validate_errors(self):
        """Test invalid values are reported."""
        config = get_config()
        config.set('acquisition.sampling_rate.cyton', -1)
        config.set('acquisition.sampling_rate.ganglion', 'fast')
        config.set('loader.max_workers', 0)

        errors = config.validate()

        assert len(errors) == 3

    def test_get_sampling_rate(self):
        """Test per-device rate lookup with generic fallback."""
        config = get_config()

        assert config.get_sampling_rate('cyton') == 250.0
        assert config.get_sampling_rate('GANGLION') == 125.0
        assert config.get_sampling_rate('daisy') == 250.0

    def test_get_sampling_rate_missing(self):
        """Test a missing rate raises ConfigValidationError."""
        config = get_config()
        config.set('acquisition.sampling_rate', {})

        with pytest.raises(ConfigValidationError):
            config.get_sampling_rate('cyton')

    def test_environment(self, monkeypatch):
        """Test the environment name comes from OPENBCI_TXT_ENV."""
        monkeypatch.setenv('OPENBCI_TXT_ENV', 'lab')
        ConfigManager.reset()

        assert get_config().get_environment() == 'lab'


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
