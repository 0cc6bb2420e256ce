"""EditController: host-facing orchestration of masked editing.

The host forwards text-input and key events together with the cursor; the
controller drives the cached MaskEngine and the whole-string filter and
returns an :class:`EditResult` telling the host what to display and whether
to suppress its own default editing.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional

import maskedit.log  # registers TRACE level and logger.trace()
from maskedit.core.cache import MaskCache
from maskedit.core.engine import DEFAULT_PLACEHOLDER, MaskEngine
from maskedit.core.event_bus import EventBus
from maskedit.core.events import (
    ConfigEventData,
    EditEventData,
    EditKey,
    EditResult,
    Event,
    EventType,
)
from maskedit.core.filters import DEFAULT_REGISTRY, FilterCategory, FilterRegistry

logger = logging.getLogger(__name__)

_UNSET: Any = object()


class EditController:
    """Turns host events into mask edits for a single text field."""

    def __init__(
        self,
        mask: str = "",
        placeholder: str = DEFAULT_PLACEHOLDER,
        filter_category: FilterCategory | str = FilterCategory.ANY,
        filter_pattern: Optional[str] = None,
        read_only: bool = False,
        text: str = "",
        event_bus: Optional[EventBus] = None,
        registry: Optional[FilterRegistry] = None,
        debug: bool = False,
    ):
        """Initialize the controller.

        Args:
            mask: Mask pattern; empty disables masking.
            placeholder: Character rendered for unset slots.
            filter_category: Whole-string filter applied to every edit.
            filter_pattern: Regular expression for the CUSTOM category.
            read_only: Reject every edit event.
            text: Initial field text, coerced through the mask.
            event_bus: Optional bus receiving edit and config events.
            registry: Filter registry (defaults to the built-in one).
            debug: Log every decision at DEBUG level.

        Raises:
            MaskError: if the mask, placeholder or filter is invalid.
        """
        self.cache = MaskCache()
        self.bus = event_bus
        self.registry = registry or DEFAULT_REGISTRY
        self.read_only = read_only
        self.debug = debug
        self.text = ""

        self._mask = ""
        self._placeholder = DEFAULT_PLACEHOLDER
        self._filter_category = FilterCategory.ANY
        self._filter_pattern: Optional[str] = None
        self._configure(mask, placeholder, filter_category, filter_pattern, text)

    @classmethod
    def from_config(cls, config: Dict[str, Any], event_bus: Optional[EventBus] = None) -> "EditController":
        """Build a controller from a (validated) configuration dict."""
        from maskedit.config import validate_config

        conf = validate_config(config)
        return cls(
            mask=conf['mask'],
            placeholder=conf['placeholder'],
            filter_category=conf['filter'],
            filter_pattern=conf['filter_pattern'],
            read_only=conf['read_only'],
            event_bus=event_bus,
            debug=conf['debug'],
        )

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def mask(self) -> str:
        return self._mask

    @property
    def placeholder(self) -> str:
        return self._placeholder

    @property
    def filter_category(self) -> FilterCategory:
        return self._filter_category

    @property
    def filter_pattern(self) -> Optional[str]:
        return self._filter_pattern

    @property
    def engine(self) -> Optional[MaskEngine]:
        """The active engine, or None when masking is disabled."""
        return self.cache.get(self._mask, self._placeholder, self.plain_text)

    @property
    def plain_text(self) -> str:
        """Field content without literals and placeholders."""
        engine = self.cache.engine
        return engine.plain_text() if engine is not None else self.text

    @property
    def completed(self) -> bool:
        engine = self.cache.engine
        return engine.mask_completed if engine is not None else True

    def on_config_changed(
        self,
        mask: str = _UNSET,
        placeholder: str = _UNSET,
        filter_category: FilterCategory | str = _UNSET,
        filter_pattern: Optional[str] = _UNSET,
    ) -> EditResult:
        """Apply a configuration change and re-render the field.

        Omitted arguments keep their current value.  On ``MaskError`` the
        previous configuration stays active and the error propagates.
        """
        self._configure(
            self._mask if mask is _UNSET else mask,
            self._placeholder if placeholder is _UNSET else placeholder,
            self._filter_category if filter_category is _UNSET else filter_category,
            self._filter_pattern if filter_pattern is _UNSET else filter_pattern,
            self.plain_text,
        )
        logger.info(
            "Field reconfigured: mask=%r placeholder=%r filter=%s",
            self._mask, self._placeholder, self._filter_category.name,
        )
        self._publish(EventType.CONFIG_CHANGED, ConfigEventData(
            mask=self._mask,
            placeholder=self._placeholder,
            filter_category=self._filter_category.value,
            filter_pattern=self._filter_pattern,
        ))
        return EditResult(self.text, 0, consumed=False, completed=self.completed)

    def _configure(self, mask, placeholder, filter_category, filter_pattern, plain_text: str) -> None:
        # Validate everything before touching state
        category = FilterCategory.parse(filter_category)
        self.registry.filter_for(category, filter_pattern)
        engine = self.cache.get(mask, placeholder, plain_text)

        self._mask = mask
        self._placeholder = placeholder
        self._filter_category = category
        self._filter_pattern = filter_pattern
        self.text = engine.to_display_string() if engine is not None else plain_text

    def set_text(self, text: str) -> str:
        """Coerce host-supplied *text* through the mask and return the display."""
        before = self.text
        engine = self.engine
        if engine is None:
            self.text = text
        else:
            engine.set(text)
            self.text = engine.to_display_string()
        self._publish(EventType.EDIT_APPLIED, EditEventData("set", before, self.text, 0))
        return self.text

    # ------------------------------------------------------------------
    # Event handling
    # ------------------------------------------------------------------

    def _clamp(self, cursor: int) -> int:
        return max(0, min(cursor, len(self.text)))

    def _next_edit_position(self, engine: MaskEngine, position: int) -> int:
        found = engine.find_edit_position_from(position, forward=True)
        return position if found is None else found

    def _filter_ok(self, text: str) -> bool:
        return self.registry.validate(self._filter_category, text, self._filter_pattern)

    @staticmethod
    def _spliced_plain_text(engine: MaskEngine, text: str, cursor: int) -> str:
        """Plain text with *text* spliced in at the display *cursor*."""
        cells = engine.snapshot()
        index = sum(1 for i in engine.edit_positions if i < cursor and cells[i] is not None)
        plain = engine.plain_text()
        return plain[:index] + text + plain[index:]

    def handle_text_input(self, text: str, cursor: int, overtype: bool = False) -> EditResult:
        """Handle typed or pasted *text* at *cursor*.

        Returns:
            EditResult with the new display text, cursor and consumed flag.
        """
        cursor = self._clamp(cursor)
        logger.trace("TextInput: %r at %d overtype=%s", text, cursor, overtype)  # type: ignore[attr-defined]

        if self.read_only:
            return self._reject("text", cursor, "read_only")

        engine = self.engine
        if engine is None:
            candidate = self.text[:cursor] + text + self.text[cursor:]
            if not self._filter_ok(candidate):
                return self._reject("text", cursor, "filter")
            # Host applies its default editing and reports back via set_text()
            return EditResult(self.text, cursor, consumed=False, completed=True)

        before = self.text
        snapshot = engine.snapshot()
        position = cursor
        applied = False

        if cursor < len(self.text):
            position = self._next_edit_position(engine, position)
            if overtype:
                applied = engine.replace_at(text, position)
            else:
                applied = engine.insert_at(text, position)
            if applied:
                position = engine.last_position + 1
            position = self._next_edit_position(engine, position)

        # The filter judges the resulting plain text even when the mask refused
        # the edit; a veto from both is reported as a filter rejection.
        if applied:
            candidate = engine.plain_text()
        else:
            candidate = self._spliced_plain_text(engine, text, cursor)
        if not self._filter_ok(candidate):
            if applied:
                engine.restore(snapshot)
            return self._reject("text", cursor, "filter")

        self.text = engine.to_display_string()
        position = self._clamp(position)
        if not applied:
            if self.debug:
                logger.debug("Mask rejected %r at %d on %r", text, cursor, before)
            self._publish(EventType.EDIT_REJECTED, EditEventData("text", before, self.text, position, "mask"))
        else:
            self._publish(EventType.EDIT_APPLIED, EditEventData("text", before, self.text, position))
        return EditResult(self.text, position, consumed=True, completed=engine.mask_completed)

    def handle_key(self, key: EditKey | str, cursor: int, overtype: bool = False) -> EditResult:
        """Handle Delete, Backspace or Space at *cursor*."""
        if isinstance(key, str):
            key = EditKey[key.upper()]
        if key is EditKey.SPACE:
            return self.handle_text_input(" ", cursor, overtype=overtype)

        cursor = self._clamp(cursor)
        action = key.name.lower()
        logger.trace("Key: %s at %d", key.name, cursor)  # type: ignore[attr-defined]

        if self.read_only:
            return self._reject(action, cursor, "read_only")

        engine = self.engine
        if engine is None:
            return EditResult(self.text, cursor, consumed=False, completed=True)

        if key is EditKey.DELETE:
            if cursor >= len(self.text):
                return EditResult(self.text, cursor, consumed=False, completed=engine.mask_completed)
            position = cursor
        else:
            if cursor <= 0:
                return EditResult(self.text, cursor, consumed=False, completed=engine.mask_completed)
            position = cursor - 1

        before = self.text
        if engine.remove_at(position):
            self.text = engine.to_display_string()
            self._publish(EventType.EDIT_APPLIED, EditEventData(action, before, self.text, position))
            return EditResult(self.text, position, consumed=True, completed=engine.mask_completed)

        self._publish(EventType.EDIT_REJECTED, EditEventData(action, before, self.text, cursor, "mask"))
        return EditResult(self.text, cursor, consumed=True, completed=engine.mask_completed)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _reject(self, action: str, cursor: int, reason: str) -> EditResult:
        if self.debug:
            logger.debug("Rejected %s at %d: %s", action, cursor, reason)
        self._publish(EventType.EDIT_REJECTED, EditEventData(action, self.text, self.text, cursor, reason))
        return EditResult(self.text, cursor, consumed=True, completed=self.completed)

    def _publish(self, event_type: EventType, data: Any) -> None:
        if self.bus is not None and self.bus.has_subscribers(event_type):
            self.bus.publish(Event(event_type, data, time.time()))
