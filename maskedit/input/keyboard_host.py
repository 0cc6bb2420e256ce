"""KeyboardFieldHost — reference host feeding evdev key events to an EditController.

Plays the part of the text widget: it owns the cursor, tracks Shift /
Caps Lock / Insert toggles, and performs default text editing whenever the
controller leaves an event unconsumed.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from evdev import ecodes

import maskedit.log  # registers TRACE level and logger.trace()
from maskedit.core.events import EditKey, EditResult
from maskedit.handlers.edit_controller import EditController
from maskedit.input.key_mapper import SHIFT_KEYS, keycode_to_char

logger = logging.getLogger(__name__)

KEY_PRESS = 1
KEY_REPEAT = 2

EDIT_KEYS = {
    ecodes.KEY_DELETE: EditKey.DELETE,
    ecodes.KEY_BACKSPACE: EditKey.BACKSPACE,
}


class KeyboardFieldHost:
    """Single-line field driven by raw evdev events."""

    def __init__(self, controller: EditController, overtype: bool = False, debug: bool = False):
        self.controller = controller
        self.debug = debug
        self.cursor = 0
        self.overtype = overtype
        self.shift_pressed = False
        self.caps_lock = False

    @property
    def text(self) -> str:
        return self.controller.text

    # ------------------------------------------------------------------
    # Event entry points
    # ------------------------------------------------------------------

    def feed(self, events: Iterable) -> None:
        for event in events:
            self.handle_raw_event(event)

    def handle_raw_event(self, event) -> Optional[bool]:
        """Process one evdev event.

        Returns:
            None for events that do not touch the field, otherwise whether
            the controller consumed the edit.
        """
        if getattr(event, "type", None) != ecodes.EV_KEY:
            return None

        code = event.code
        value = event.value  # 0=release, 1=press, 2=repeat
        logger.trace("RawEvent: code=%d value=%d cursor=%d", code, value, self.cursor)  # type: ignore[attr-defined]

        if code in SHIFT_KEYS:
            self.shift_pressed = value != 0
            return None
        if value not in (KEY_PRESS, KEY_REPEAT):
            return None

        if code == ecodes.KEY_INSERT:
            if value == KEY_PRESS:
                self.overtype = not self.overtype
                logger.debug("Overtype %s", "on" if self.overtype else "off")
            return None
        if code == ecodes.KEY_CAPSLOCK:
            if value == KEY_PRESS:
                self.caps_lock = not self.caps_lock
            return None
        if self._navigate(code):
            return None

        if code in EDIT_KEYS:
            return self._edit_key(EDIT_KEYS[code])
        if code == ecodes.KEY_SPACE:
            return self.type_text(" ")

        ch = keycode_to_char(code, shift=self.shift_pressed, caps_lock=self.caps_lock)
        if not ch:
            return None
        return self.type_text(ch)

    def paste(self, text: str) -> bool:
        """Insert a clipboard chunk at the cursor as one event."""
        return self.type_text(text)

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def type_text(self, text: str) -> bool:
        result = self.controller.handle_text_input(text, self.cursor, overtype=self.overtype)
        if result.consumed:
            self._apply(result)
            return True
        # Default editing: plain insertion at the cursor
        current = self.controller.text
        self.controller.set_text(current[:self.cursor] + text + current[self.cursor:])
        self.cursor = min(self.cursor + len(text), len(self.controller.text))
        return False

    def _edit_key(self, key: EditKey) -> bool:
        result = self.controller.handle_key(key, self.cursor, overtype=self.overtype)
        if result.consumed:
            self._apply(result)
            return True
        current = self.controller.text
        if key is EditKey.DELETE and self.cursor < len(current):
            self.controller.set_text(current[:self.cursor] + current[self.cursor + 1:])
        elif key is EditKey.BACKSPACE and self.cursor > 0:
            self.controller.set_text(current[:self.cursor - 1] + current[self.cursor:])
            self.cursor -= 1
        return False

    def _apply(self, result: EditResult) -> None:
        self.cursor = result.cursor
        if self.debug:
            logger.debug("Field → %r cursor=%d", result.text, result.cursor)

    def _navigate(self, code: int) -> bool:
        length = len(self.controller.text)
        if code == ecodes.KEY_LEFT:
            self.cursor = max(0, self.cursor - 1)
        elif code == ecodes.KEY_RIGHT:
            self.cursor = min(length, self.cursor + 1)
        elif code == ecodes.KEY_HOME:
            self.cursor = 0
        elif code == ecodes.KEY_END:
            self.cursor = length
        else:
            return False
        return True
