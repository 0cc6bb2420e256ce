"""Configuration loader and validator for maskedit.

Provides ``load_config(path)`` which reads a JSON config (with
comment and trailing-comma tolerant sanitizer) and merges user
overrides from ``~/.config/maskedit/config.json``.

Also provides ``validate_config(conf)`` which normalizes and
validates config keys, raising ``ValueError`` on invalid values.
"""

from __future__ import annotations

import json
import logging
import os
import re

from maskedit.core.engine import DEFAULT_PLACEHOLDER, validate_placeholder
from maskedit.core.filters import FilterCategory, custom_filter
from maskedit.core.parser import compile_mask
from maskedit.errors import MaskError
from maskedit.utils.persistence import save_json

logger = logging.getLogger(__name__)

USER_CONFIG_PATH = '~/.config/maskedit/config.json'

# Single source of truth for default configuration
DEFAULT_CONFIG: dict = {
    'mask': '',
    'placeholder': DEFAULT_PLACEHOLDER,
    'filter': FilterCategory.ANY.value,
    'filter_pattern': None,
    'overtype': False,
    'read_only': False,
    'debug': False,
}


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------

def _sanitize_json_text(s: str) -> str:
    """Remove ``#``/``//`` comments and trailing commas from JSON-like text."""
    # Hash-style line comments
    s = re.sub(r"^[ \t]*#.*$", "", s, flags=re.MULTILINE)
    # C++-style line comments (only outside of string values at line end)
    s = re.sub(r"^([^\"\n]*(?:\"[^\"\n]*\"[^\"\n]*)*)//.*$", r"\1", s, flags=re.MULTILINE)
    # Trailing commas before } or ]
    s = re.sub(r",[ \t\r\n]+(\}|\])", r"\1", s)
    return s


# ------------------------------------------------------------------
# Validation
# ------------------------------------------------------------------

def _validate_bool(conf: dict, key: str) -> bool:
    value = conf.get(key, DEFAULT_CONFIG[key])
    if not isinstance(value, bool):
        raise ValueError(f"Invalid '{key}': must be boolean")
    return value


def validate_config(conf: dict | None) -> dict:
    """Validate and normalize configuration dictionary.

    Returns a normalized dict with all expected keys.
    Raises ``ValueError`` on invalid values (``MaskError`` is a subclass).
    """
    if conf is None:
        conf = {}

    out = dict(DEFAULT_CONFIG)

    # mask — string, must compile
    mask = conf.get('mask', DEFAULT_CONFIG['mask'])
    if not isinstance(mask, str):
        raise ValueError("Invalid 'mask': must be a string")
    try:
        compile_mask(mask)
    except MaskError as exc:
        raise ValueError(f"Invalid 'mask': {exc}") from exc
    out['mask'] = mask

    # placeholder — single printable character
    placeholder = conf.get('placeholder', DEFAULT_CONFIG['placeholder'])
    try:
        out['placeholder'] = validate_placeholder(placeholder)
    except MaskError as exc:
        raise ValueError(f"Invalid 'placeholder': {exc}") from exc

    # filter — category name
    try:
        category = FilterCategory.parse(conf.get('filter', DEFAULT_CONFIG['filter']))
    except MaskError as exc:
        raise ValueError(f"Invalid 'filter': {exc}") from exc
    out['filter'] = category.value

    # filter_pattern — regex, required for custom
    pattern = conf.get('filter_pattern', DEFAULT_CONFIG['filter_pattern'])
    if pattern is not None and not isinstance(pattern, str):
        raise ValueError("Invalid 'filter_pattern': must be a string or null")
    if category is FilterCategory.CUSTOM:
        if not pattern:
            raise ValueError("Invalid 'filter_pattern': required when filter is 'custom'")
        try:
            custom_filter(pattern)
        except MaskError as exc:
            raise ValueError(f"Invalid 'filter_pattern': {exc}") from exc
    out['filter_pattern'] = pattern

    for key in ('overtype', 'read_only', 'debug'):
        out[key] = _validate_bool(conf, key)

    return out


def _read_and_merge(path: str, target_config: dict) -> bool:
    """Read a JSON file, validate, and merge into *target_config*.

    Returns True on success, False on any error.
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            raw = f.read()
    except OSError as exc:
        logger.warning("Cannot read config %s: %s", path, exc)
        return False

    try:
        cfg = json.loads(raw)
    except json.JSONDecodeError:
        try:
            cfg = json.loads(_sanitize_json_text(raw))
        except json.JSONDecodeError as exc:
            logger.warning("JSON parse error in %s: %s", path, exc)
            return False

    if not isinstance(cfg, dict):
        logger.warning("Invalid config %s: top level must be an object", path)
        return False

    try:
        validated = validate_config({**target_config, **cfg})
    except ValueError as verr:
        logger.warning("Invalid config %s: %s", path, verr)
        return False

    # Only override keys explicitly present in source
    for k in cfg:
        if k in validated:
            target_config[k] = validated[k]
    return True


# ------------------------------------------------------------------
# Top-level loader
# ------------------------------------------------------------------

def load_config(config_path: str | None = None) -> dict:
    """Load and merge configuration.

    If *config_path* is given, uses only that file (returns defaults if
    the file does not exist).  Otherwise falls back to
    ``~/.config/maskedit/config.json``.

    Returns the effective configuration dict (always has all default keys).
    """
    config = dict(DEFAULT_CONFIG)
    path = config_path if config_path is not None else os.path.expanduser(USER_CONFIG_PATH)
    if os.path.exists(path):
        logger.debug("Loading config from %s", path)
        _read_and_merge(path, config)
    return config


# ------------------------------------------------------------------
# ConfigManager
# ------------------------------------------------------------------

class ConfigManager:
    """Field configuration with load/save/validate."""

    def __init__(self, config_path: str | None = None):
        self._config_path = config_path or os.path.expanduser(USER_CONFIG_PATH)
        self._config: dict = dict(DEFAULT_CONFIG)
        self.reload()

    def reload(self) -> bool:
        """Reset to defaults, then overlay from file. Returns True if a file was merged."""
        self._config = dict(DEFAULT_CONFIG)
        if os.path.exists(self._config_path):
            return _read_and_merge(self._config_path, self._config)
        return False

    def save(self, target_path: str | None = None) -> None:
        """Atomically save configuration to file."""
        save_json(target_path or self._config_path, self.get_all())

    def get(self, key: str, default=None):
        return self._config.get(key, default)

    def set(self, key: str, value) -> None:
        """Set one value; raises ``ValueError`` if the result is invalid."""
        self.update({key: value})

    def update(self, updates: dict) -> None:
        """Validate and apply several values at once."""
        self._config = validate_config({**self._config, **updates})

    def get_all(self) -> dict:
        return dict(self._config)

    def reset_to_defaults(self) -> None:
        self._config = dict(DEFAULT_CONFIG)

    @property
    def config_path(self) -> str:
        return self._config_path
