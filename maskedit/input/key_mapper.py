"""evdev keycode → character mapping for the reference keyboard host (US QWERTY)."""

from __future__ import annotations

from evdev import ecodes

# keycode → (plain, shifted)
KEYCODE_TO_CHARS: dict[int, tuple[str, str]] = {
    ecodes.KEY_1: ("1", "!"), ecodes.KEY_2: ("2", "@"), ecodes.KEY_3: ("3", "#"),
    ecodes.KEY_4: ("4", "$"), ecodes.KEY_5: ("5", "%"), ecodes.KEY_6: ("6", "^"),
    ecodes.KEY_7: ("7", "&"), ecodes.KEY_8: ("8", "*"), ecodes.KEY_9: ("9", "("),
    ecodes.KEY_0: ("0", ")"),
    ecodes.KEY_MINUS: ("-", "_"), ecodes.KEY_EQUAL: ("=", "+"),
    ecodes.KEY_LEFTBRACE: ("[", "{"), ecodes.KEY_RIGHTBRACE: ("]", "}"),
    ecodes.KEY_SEMICOLON: (";", ":"), ecodes.KEY_APOSTROPHE: ("'", '"'),
    ecodes.KEY_GRAVE: ("`", "~"), ecodes.KEY_BACKSLASH: ("\\", "|"),
    ecodes.KEY_COMMA: (",", "<"), ecodes.KEY_DOT: (".", ">"), ecodes.KEY_SLASH: ("/", "?"),
    # keypad
    ecodes.KEY_KP0: ("0", "0"), ecodes.KEY_KP1: ("1", "1"), ecodes.KEY_KP2: ("2", "2"),
    ecodes.KEY_KP3: ("3", "3"), ecodes.KEY_KP4: ("4", "4"), ecodes.KEY_KP5: ("5", "5"),
    ecodes.KEY_KP6: ("6", "6"), ecodes.KEY_KP7: ("7", "7"), ecodes.KEY_KP8: ("8", "8"),
    ecodes.KEY_KP9: ("9", "9"), ecodes.KEY_KPMINUS: ("-", "-"), ecodes.KEY_KPPLUS: ("+", "+"),
    ecodes.KEY_KPDOT: (".", "."), ecodes.KEY_KPSLASH: ("/", "/"), ecodes.KEY_KPASTERISK: ("*", "*"),
}

for _letter in "abcdefghijklmnopqrstuvwxyz":
    KEYCODE_TO_CHARS[getattr(ecodes, f"KEY_{_letter.upper()}")] = (_letter, _letter.upper())

SHIFT_KEYS = {ecodes.KEY_LEFTSHIFT, ecodes.KEY_RIGHTSHIFT}

_KEYPAD = {
    ecodes.KEY_KP0, ecodes.KEY_KP1, ecodes.KEY_KP2, ecodes.KEY_KP3, ecodes.KEY_KP4,
    ecodes.KEY_KP5, ecodes.KEY_KP6, ecodes.KEY_KP7, ecodes.KEY_KP8, ecodes.KEY_KP9,
    ecodes.KEY_KPMINUS, ecodes.KEY_KPPLUS, ecodes.KEY_KPDOT, ecodes.KEY_KPSLASH,
    ecodes.KEY_KPASTERISK,
}


def keycode_to_char(keycode: int, shift: bool = False, caps_lock: bool = False) -> str:
    """Return the character typed by *keycode*. Empty string if it types nothing."""
    chars = KEYCODE_TO_CHARS.get(keycode)
    if chars is None:
        return ""
    plain, shifted = chars
    if plain.isalpha():
        return shifted if shift != caps_lock else plain
    return shifted if shift else plain


def char_to_keycode(ch: str) -> tuple[int, bool] | None:
    """Inverse lookup: ``(keycode, needs_shift)`` for *ch*, main block only."""
    if ch == " ":
        return ecodes.KEY_SPACE, False
    for code, (plain, shifted) in KEYCODE_TO_CHARS.items():
        if code in _KEYPAD:
            continue
        if ch == plain:
            return code, False
        if ch == shifted:
            return code, True
    return None
