"""Whole-string filter validators.

A filter gates the complete plain text an edit would produce, on top of the
per-slot character classes checked by the engine.  Filters are stateless
strategy objects held in a registry keyed by :class:`FilterCategory`.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from enum import Enum
from functools import lru_cache

from maskedit.errors import InvalidFilterError

logger = logging.getLogger(__name__)


class FilterCategory(Enum):
    ANY = "any"
    DIGITS = "digits"
    LETTERS = "letters"
    ALPHANUMERIC = "alphanumeric"
    HEXADECIMAL = "hexadecimal"
    CUSTOM = "custom"

    @classmethod
    def parse(cls, value: "FilterCategory | str") -> "FilterCategory":
        """Accept an enum member or a name such as ``'digits'`` / ``'DigitsOnly'``."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise InvalidFilterError(f"Invalid filter category: {value!r}")
        key = value.strip().lower().replace("_", "").replace("-", "")
        if key.endswith("only"):
            key = key[: -len("only")]
        aliases = {"digit": "digits", "letter": "letters", "hex": "hexadecimal"}
        key = aliases.get(key, key)
        for member in cls:
            if member.value == key:
                return member
        raise InvalidFilterError(f"Invalid filter category: {value!r}")


class BaseFilter(ABC):
    @abstractmethod
    def is_text_valid(self, text: str) -> bool:
        """Return True if *text* is acceptable as a whole."""


class AnyFilter(BaseFilter):
    def is_text_valid(self, text: str) -> bool:
        return True


class RegexFilter(BaseFilter):
    """Full-match filter; the empty string is valid unless the pattern says otherwise."""

    def __init__(self, pattern: str):
        self.pattern = pattern
        try:
            self._regex = re.compile(pattern)
        except re.error as exc:
            raise InvalidFilterError(f"Invalid filter pattern {pattern!r}: {exc}") from exc

    def is_text_valid(self, text: str) -> bool:
        return self._regex.fullmatch(text) is not None

    def __repr__(self) -> str:
        return f"RegexFilter({self.pattern!r})"


class CharPredicateFilter(BaseFilter):
    """Every character must satisfy a str predicate (``str.isdigit`` etc.)."""

    def __init__(self, predicate, name: str):
        self._predicate = predicate
        self.name = name

    def is_text_valid(self, text: str) -> bool:
        return all(self._predicate(ch) for ch in text)

    def __repr__(self) -> str:
        return f"CharPredicateFilter({self.name})"


@lru_cache(maxsize=64)
def custom_filter(pattern: str) -> RegexFilter:
    return RegexFilter(pattern)


class FilterRegistry:
    """Maps categories to filters; CUSTOM is resolved per pattern."""

    def __init__(self):
        self._filters: dict[FilterCategory, BaseFilter] = {
            FilterCategory.ANY: AnyFilter(),
            FilterCategory.DIGITS: RegexFilter(r"[0-9]*"),
            FilterCategory.LETTERS: CharPredicateFilter(str.isalpha, "letters"),
            FilterCategory.ALPHANUMERIC: CharPredicateFilter(str.isalnum, "alphanumeric"),
            FilterCategory.HEXADECIMAL: RegexFilter(r"[0-9A-Fa-f]*"),
        }

    def register(self, category: FilterCategory, flt: BaseFilter) -> None:
        if category is FilterCategory.CUSTOM:
            raise InvalidFilterError("CUSTOM filters are built from a pattern, not registered")
        self._filters[category] = flt

    def filter_for(self, category: FilterCategory | str, pattern: str | None = None) -> BaseFilter:
        category = FilterCategory.parse(category)
        if category is FilterCategory.CUSTOM:
            if not pattern:
                raise InvalidFilterError("CUSTOM filter requires a pattern")
            return custom_filter(pattern)
        return self._filters[category]

    def validate(self, category: FilterCategory | str, text: str, pattern: str | None = None) -> bool:
        valid = self.filter_for(category, pattern).is_text_valid(text)
        if not valid:
            logger.debug("Filter %s rejected %r", FilterCategory.parse(category).name, text)
        return valid


DEFAULT_REGISTRY = FilterRegistry()


def validate(category: FilterCategory | str, text: str, pattern: str | None = None) -> bool:
    """Validate *text* against *category* using the default registry."""
    return DEFAULT_REGISTRY.validate(category, text, pattern)
