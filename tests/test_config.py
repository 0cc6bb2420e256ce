"""Tests for maskedit.config — configuration loading, validation, ConfigManager."""

from __future__ import annotations

import json

import pytest

from maskedit.config import (
    DEFAULT_CONFIG,
    ConfigManager,
    _sanitize_json_text,
    load_config,
    validate_config,
)


# ------------------------------------------------------------------
# DEFAULT_CONFIG
# ------------------------------------------------------------------

class TestDefaultConfig:
    EXPECTED_KEYS = {
        'mask',
        'placeholder',
        'filter',
        'filter_pattern',
        'overtype',
        'read_only',
        'debug',
    }

    def test_contains_all_expected_keys(self):
        assert set(DEFAULT_CONFIG.keys()) == self.EXPECTED_KEYS

    def test_masking_disabled_by_default(self):
        assert DEFAULT_CONFIG['mask'] == ''
        assert DEFAULT_CONFIG['placeholder'] == '_'
        assert DEFAULT_CONFIG['filter'] == 'any'


# ------------------------------------------------------------------
# validate_config
# ------------------------------------------------------------------

class TestValidateConfig:
    def test_valid_data_passes(self):
        result = validate_config({
            'mask': '(000) 000-0000',
            'placeholder': '#',
            'filter': 'DigitsOnly',
            'overtype': True,
            'read_only': False,
            'debug': True,
        })
        assert result['mask'] == '(000) 000-0000'
        assert result['placeholder'] == '#'
        assert result['filter'] == 'digits'
        assert result['overtype'] is True

    def test_invalid_mask(self):
        with pytest.raises(ValueError, match="'mask'"):
            validate_config({'mask': '00\\'})

    def test_mask_wrong_type(self):
        with pytest.raises(ValueError, match="'mask'"):
            validate_config({'mask': 42})

    @pytest.mark.parametrize("placeholder", ['', '__', 5])
    def test_invalid_placeholder(self, placeholder):
        with pytest.raises(ValueError, match="'placeholder'"):
            validate_config({'placeholder': placeholder})

    def test_unknown_filter(self):
        with pytest.raises(ValueError, match="'filter'"):
            validate_config({'filter': 'roman-numerals'})

    def test_custom_filter_requires_pattern(self):
        with pytest.raises(ValueError, match="'filter_pattern'"):
            validate_config({'filter': 'custom'})

    def test_custom_filter_bad_pattern(self):
        with pytest.raises(ValueError, match="'filter_pattern'"):
            validate_config({'filter': 'custom', 'filter_pattern': '('})

    def test_custom_filter_valid(self):
        result = validate_config({'filter': 'custom', 'filter_pattern': r'\d*'})
        assert result['filter'] == 'custom'
        assert result['filter_pattern'] == r'\d*'

    @pytest.mark.parametrize("key", ['overtype', 'read_only', 'debug'])
    def test_invalid_bool(self, key):
        with pytest.raises(ValueError, match=key):
            validate_config({key: 'yes'})

    def test_none_returns_defaults(self):
        assert validate_config(None) == DEFAULT_CONFIG

    def test_empty_dict_returns_defaults(self):
        assert validate_config({}) == DEFAULT_CONFIG


# ------------------------------------------------------------------
# _sanitize_json_text
# ------------------------------------------------------------------

class TestSanitizeJsonText:
    def test_removes_hash_comments(self):
        text = '{\n  # field mask\n  "mask": "00"\n}'
        assert json.loads(_sanitize_json_text(text)) == {"mask": "00"}

    def test_removes_slash_comments(self):
        text = '{\n  "debug": true // inline comment\n}'
        assert json.loads(_sanitize_json_text(text)) == {"debug": True}

    def test_keeps_slashes_inside_strings(self):
        text = '{\n  "mask": "00//00",\n}'
        assert json.loads(_sanitize_json_text(text)) == {"mask": "00//00"}

    def test_removes_trailing_commas(self):
        text = '{"a": [1, 2,\n], "b": 3,\n}'
        assert json.loads(_sanitize_json_text(text)) == {"a": [1, 2], "b": 3}


# ------------------------------------------------------------------
# load_config
# ------------------------------------------------------------------

class TestLoadConfig:
    def test_missing_file_returns_defaults(self, tmp_path):
        assert load_config(str(tmp_path / "nope.json")) == DEFAULT_CONFIG

    def test_merges_present_keys(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text('{"mask": "LL-00", "overtype": true}', encoding='utf-8')
        config = load_config(str(path))
        assert config['mask'] == 'LL-00'
        assert config['overtype'] is True
        assert config['placeholder'] == '_'

    def test_tolerates_comments(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text('{\n  # phone\n  "mask": "000-0000",\n}', encoding='utf-8')
        assert load_config(str(path))['mask'] == '000-0000'

    def test_invalid_values_are_ignored(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text('{"mask": "0\\\\", "debug": true}', encoding='utf-8')
        assert load_config(str(path)) == DEFAULT_CONFIG

    def test_garbage_is_ignored(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text('not json at all', encoding='utf-8')
        assert load_config(str(path)) == DEFAULT_CONFIG

    def test_user_config_fallback(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        user_dir = tmp_path / ".config" / "maskedit"
        user_dir.mkdir(parents=True)
        (user_dir / "config.json").write_text('{"placeholder": "*"}', encoding='utf-8')
        assert load_config()['placeholder'] == '*'


# ------------------------------------------------------------------
# ConfigManager
# ------------------------------------------------------------------

class TestConfigManager:
    def test_defaults_without_file(self, tmp_path):
        mgr = ConfigManager(str(tmp_path / "config.json"))
        assert mgr.get_all() == DEFAULT_CONFIG
        assert mgr.reload() is False

    def test_set_validates(self, tmp_path):
        mgr = ConfigManager(str(tmp_path / "config.json"))
        mgr.set('mask', '00:00')
        assert mgr.get('mask') == '00:00'
        with pytest.raises(ValueError):
            mgr.set('placeholder', 'xx')
        assert mgr.get('placeholder') == '_'

    def test_save_and_reload(self, tmp_path):
        path = tmp_path / "sub" / "config.json"
        mgr = ConfigManager(str(path))
        mgr.update({'mask': 'LL-00', 'filter': 'alphanumeric'})
        mgr.save()
        assert json.loads(path.read_text(encoding='utf-8'))['mask'] == 'LL-00'

        other = ConfigManager(str(path))
        assert other.get('mask') == 'LL-00'
        assert other.get('filter') == 'alphanumeric'
        assert list(path.parent.glob("*.tmp")) == []

    def test_reset_to_defaults(self, tmp_path):
        mgr = ConfigManager(str(tmp_path / "config.json"))
        mgr.set('debug', True)
        mgr.reset_to_defaults()
        assert mgr.get('debug') is False

    def test_config_path(self, tmp_path):
        path = str(tmp_path / "c.json")
        assert ConfigManager(path).config_path == path
