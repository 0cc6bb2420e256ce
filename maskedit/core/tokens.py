"""Mask token definitions (dataclasses) and character classes."""

from __future__ import annotations

import string
from dataclasses import dataclass
from enum import Enum
from typing import Union


class CharClass(Enum):
    """Character class of an editable slot.

    Value is ``(designator, required)``.  Optional classes also accept a
    space, which is stored as a real character (not as "unset").
    """

    DIGIT = ("0", True)
    DIGIT_OR_SPACE = ("9", False)
    DIGIT_OR_SIGN = ("#", False)
    LETTER = ("L", True)
    LETTER_OR_SPACE = ("?", False)
    ALPHANUMERIC = ("A", True)
    ALPHANUMERIC_OR_SPACE = ("a", False)
    ANY = ("&", True)
    ANY_OPTIONAL = ("C", False)

    @property
    def designator(self) -> str:
        return self.value[0]

    @property
    def required(self) -> bool:
        return self.value[1]

    def accepts(self, ch: str) -> bool:
        """Return True if the single character *ch* fits this class."""
        if len(ch) != 1 or not ch.isprintable():
            return False
        if ch == " " and not self.required:
            return True
        if self in (CharClass.DIGIT, CharClass.DIGIT_OR_SPACE):
            return ch in string.digits
        if self is CharClass.DIGIT_OR_SIGN:
            return ch in string.digits or ch in "+-"
        if self in (CharClass.LETTER, CharClass.LETTER_OR_SPACE):
            return ch.isalpha()
        if self in (CharClass.ALPHANUMERIC, CharClass.ALPHANUMERIC_OR_SPACE):
            return ch.isalnum()
        # ANY / ANY_OPTIONAL
        return True


DESIGNATORS: dict[str, CharClass] = {cls.designator: cls for cls in CharClass}


class CaseConversion(Enum):
    NONE = "|"
    UPPER = ">"
    LOWER = "<"

    def apply(self, ch: str) -> str:
        if self is CaseConversion.UPPER:
            return ch.upper()
        if self is CaseConversion.LOWER:
            return ch.lower()
        return ch


CASE_MODIFIERS: dict[str, CaseConversion] = {c.value: c for c in CaseConversion}

ESCAPE = "\\"


@dataclass(frozen=True)
class Literal:
    char: str


@dataclass(frozen=True)
class Slot:
    char_class: CharClass
    case: CaseConversion = CaseConversion.NONE

    def coerce(self, ch: str) -> str | None:
        """Case-convert *ch* and return it if accepted, else None."""
        converted = self.case.apply(ch)
        if len(converted) != 1 or not self.char_class.accepts(converted):
            return None
        return converted


Token = Union[Literal, Slot]


@dataclass(frozen=True)
class MaskPattern:
    """Compiled, immutable mask: the source string and its tokens."""

    source: str
    tokens: tuple[Token, ...] = ()

    def __len__(self) -> int:
        return len(self.tokens)

    @property
    def is_empty(self) -> bool:
        return not self.tokens

    def is_editable(self, index: int) -> bool:
        return isinstance(self.tokens[index], Slot)
