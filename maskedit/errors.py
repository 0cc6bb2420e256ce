"""Exception hierarchy for mask configuration errors.

Only configuration-time problems raise. Per-keystroke edits report failure
through ``False``/``None`` return values and never raise.
"""

from __future__ import annotations


class MaskError(ValueError):
    """Base class for invalid masking configuration."""


class InvalidMaskError(MaskError):
    """The mask pattern cannot be compiled."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid mask {pattern!r}: {reason}")


class InvalidPlaceholderError(MaskError):
    """The placeholder is not a single printable character."""

    def __init__(self, placeholder: object):
        self.placeholder = placeholder
        super().__init__(
            f"Invalid placeholder {placeholder!r}: must be a single printable character"
        )


class InvalidFilterError(MaskError):
    """Unknown filter category or unusable custom pattern."""
