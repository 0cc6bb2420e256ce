"""Mask pattern compiler.

Designators (``0 9 # L ? A a & C``) become editable slots, ``>``/``<``/``|``
switch case conversion for the slots that follow, ``\\`` escapes the next
character into a literal, everything else is a literal.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from maskedit.core.tokens import (
    CASE_MODIFIERS,
    DESIGNATORS,
    ESCAPE,
    CaseConversion,
    Literal,
    MaskPattern,
    Slot,
    Token,
)
from maskedit.errors import InvalidMaskError

logger = logging.getLogger(__name__)


@lru_cache(maxsize=128)
def compile_mask(pattern: str) -> MaskPattern:
    """Compile *pattern* into a :class:`MaskPattern`.

    An empty string yields an empty pattern, which callers treat as
    "masking disabled".

    Raises:
        InvalidMaskError: dangling escape, non-printable character, or a
            non-empty pattern with no positions.
    """
    if not isinstance(pattern, str):
        raise InvalidMaskError(repr(pattern), "mask must be a string")
    if not pattern:
        return MaskPattern(source="")

    tokens: list[Token] = []
    case = CaseConversion.NONE
    escaped = False

    for index, ch in enumerate(pattern):
        if not ch.isprintable():
            raise InvalidMaskError(pattern, f"non-printable character at {index}")
        if escaped:
            tokens.append(Literal(ch))
            escaped = False
        elif ch == ESCAPE:
            escaped = True
        elif ch in CASE_MODIFIERS:
            case = CASE_MODIFIERS[ch]
        elif ch in DESIGNATORS:
            tokens.append(Slot(DESIGNATORS[ch], case))
        else:
            tokens.append(Literal(ch))

    if escaped:
        raise InvalidMaskError(pattern, "dangling escape at end of mask")
    if not tokens:
        raise InvalidMaskError(pattern, "mask has no positions")

    compiled = MaskPattern(source=pattern, tokens=tuple(tokens))
    logger.debug(
        "Compiled mask %r: %d positions, %d editable",
        pattern, len(compiled), sum(1 for t in tokens if isinstance(t, Slot)),
    )
    return compiled
