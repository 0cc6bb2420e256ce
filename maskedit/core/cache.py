"""MaskCache — one memoized MaskEngine per field, keyed by (mask, placeholder)."""

from __future__ import annotations

import logging

from maskedit.core.engine import MaskEngine, validate_placeholder
from maskedit.core.parser import compile_mask

logger = logging.getLogger(__name__)


class MaskCache:
    """Rebuilds the engine only when the mask or the placeholder changes."""

    def __init__(self):
        self._key: tuple[str, str] | None = None
        self._engine: MaskEngine | None = None
        self.builds = 0

    def get(self, mask: str, placeholder: str, current_plain_text: str = "") -> MaskEngine | None:
        """Return the engine for ``(mask, placeholder)``; None when *mask* is empty.

        A fresh engine is seeded with ``set(current_plain_text)``.  If the new
        mask or placeholder is invalid the error propagates and the previous
        engine stays cached.
        """
        key = (mask, placeholder)
        if key == self._key:
            return self._engine

        pattern = compile_mask(mask)
        validate_placeholder(placeholder)
        if pattern.is_empty:
            engine = None
        else:
            engine = MaskEngine(pattern, placeholder)
            engine.set(current_plain_text)
            self.builds += 1

        logger.debug(
            "Mask engine rebuilt: mask=%r placeholder=%r (previous=%r)",
            mask, placeholder, self._key,
        )
        self._key = key
        self._engine = engine
        return engine

    @property
    def engine(self) -> MaskEngine | None:
        """Currently cached engine without change detection."""
        return self._engine

    def invalidate(self) -> None:
        self._key = None
        self._engine = None
