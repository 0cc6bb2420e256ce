"""Tests for MaskCache — memoized engine per (mask, placeholder)."""

import pytest

from maskedit.core.cache import MaskCache
from maskedit.errors import InvalidMaskError, InvalidPlaceholderError


def test_empty_mask_returns_none():
    assert MaskCache().get("", "_", "abc") is None


def test_same_key_returns_same_instance():
    cache = MaskCache()
    first = cache.get("00-00", "_", "")
    first.set("12")
    again = cache.get("00-00", "_", "ignored")
    assert again is first
    assert again.to_display_string() == "12-__"
    assert cache.builds == 1


def test_new_engine_is_seeded_with_plain_text():
    cache = MaskCache()
    engine = cache.get("(000) 000-0000", "_", "5551234567")
    assert engine.to_display_string() == "(555) 123-4567"


def test_placeholder_change_rebuilds():
    cache = MaskCache()
    first = cache.get("00", "_", "1")
    second = cache.get("00", "*", "1")
    assert second is not first
    assert second.to_display_string() == "1*"
    assert cache.builds == 2


def test_mask_change_rebuilds():
    cache = MaskCache()
    first = cache.get("00", "_", "")
    second = cache.get("000", "_", "")
    assert second is not first
    assert len(second) == 3


def test_invalid_mask_keeps_previous_engine():
    cache = MaskCache()
    engine = cache.get("00", "_", "")
    with pytest.raises(InvalidMaskError):
        cache.get("0\\", "_", "")
    assert cache.engine is engine
    assert cache.get("00", "_", "") is engine


def test_invalid_placeholder_keeps_previous_engine():
    cache = MaskCache()
    engine = cache.get("00", "_", "")
    with pytest.raises(InvalidPlaceholderError):
        cache.get("00", "", "")
    assert cache.engine is engine


def test_invalidate_forces_rebuild():
    cache = MaskCache()
    first = cache.get("00", "_", "")
    cache.invalidate()
    assert cache.engine is None
    assert cache.get("00", "_", "") is not first
