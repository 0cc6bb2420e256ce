"""MaskEngine — edit operations over a SlotBuffer for one compiled mask.

All mutating operations work on a copy of the buffer and commit only when
the whole request succeeds, so a ``False`` return never leaves a partial
edit behind.  Insertion shifts assigned cells right across literals up to
the last editable cell; removal compacts only the literal-delimited run that
contains the edit position.
"""

from __future__ import annotations

import logging

import maskedit.log  # registers TRACE level and logger.trace()
from maskedit.core.buffer import SlotBuffer
from maskedit.core.parser import compile_mask
from maskedit.core.tokens import MaskPattern
from maskedit.errors import InvalidMaskError, InvalidPlaceholderError

logger = logging.getLogger(__name__)

DEFAULT_PLACEHOLDER = "_"


def validate_placeholder(placeholder: object) -> str:
    """Return *placeholder* if it is a single printable character."""
    if not isinstance(placeholder, str) or len(placeholder) != 1 or not placeholder.isprintable():
        raise InvalidPlaceholderError(placeholder)
    return placeholder


class MaskEngine:
    """Owns one MaskPattern, its SlotBuffer and the placeholder character."""

    def __init__(self, mask: MaskPattern | str, placeholder: str = DEFAULT_PLACEHOLDER):
        pattern = compile_mask(mask) if isinstance(mask, str) else mask
        if pattern.is_empty:
            raise InvalidMaskError(pattern.source, "empty mask disables masking")
        self.pattern = pattern
        self.placeholder = validate_placeholder(placeholder)
        self._buffer = SlotBuffer(pattern)
        self.edit_positions: tuple[int, ...] = tuple(
            i for i in range(len(pattern)) if pattern.is_editable(i)
        )
        # Index of the last cell written by the latest successful edit.
        self.last_position: int | None = None

    def __len__(self) -> int:
        return len(self._buffer)

    def __repr__(self) -> str:
        return f"MaskEngine({self.pattern.source!r}, display={self.to_display_string()!r})"

    @property
    def mask(self) -> str:
        return self.pattern.source

    # ------------------------------------------------------------------
    # Rendering and queries
    # ------------------------------------------------------------------

    def to_display_string(self) -> str:
        """Render literals verbatim and unset editable cells as the placeholder."""
        return "".join(
            self.placeholder if value is None else value
            for value in self._buffer.values()
        )

    def plain_text(self) -> str:
        """Assigned editable characters only, in order (no literals, no placeholders)."""
        return "".join(
            self._buffer[i] for i in self.edit_positions if self._buffer[i] is not None
        )

    @property
    def assigned_count(self) -> int:
        return sum(1 for i in self.edit_positions if self._buffer[i] is not None)

    @property
    def mask_full(self) -> bool:
        """True when every editable cell is assigned."""
        return self.assigned_count == len(self.edit_positions)

    @property
    def mask_completed(self) -> bool:
        """True when every required editable cell is assigned."""
        for i in self.edit_positions:
            slot = self._buffer.slot(i)
            if slot.char_class.required and self._buffer[i] is None:
                return False
        return True

    def find_edit_position_from(self, position: int, forward: bool = True) -> int | None:
        """Return the nearest editable index from *position* (inclusive), or None."""
        n = len(self._buffer)
        if forward:
            indices = range(max(position, 0), n)
        else:
            indices = range(min(position, n - 1), -1, -1)
        for index in indices:
            if self._buffer.is_editable(index):
                return index
        return None

    # ------------------------------------------------------------------
    # State management
    # ------------------------------------------------------------------

    def clear(self) -> None:
        self._buffer.clear()
        self.last_position = None

    def snapshot(self) -> tuple[str | None, ...]:
        return self._buffer.snapshot()

    def restore(self, cells: tuple[str | None, ...]) -> None:
        self._buffer.restore(cells)

    def _commit(self, work: SlotBuffer, last: int | None, op: str) -> None:
        self._buffer = work
        self.last_position = last
        logger.trace("%s → %r (last=%s)", op, self.to_display_string(), last)  # type: ignore[attr-defined]

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def set(self, text: str) -> bool:
        """Replace the buffer contents with *text*.

        Literals are skipped (and consumed when *text* repeats them), a
        placeholder in *text* leaves its cell unset, and characters rejected
        by the current slot are dropped.  Returns True when nothing was
        dropped or left over.
        """
        work = SlotBuffer(self.pattern)
        n = len(work)
        cell = 0
        last: int | None = None
        clean = True

        for ch in text:
            matched_literal = False
            while cell < n and not work.is_editable(cell):
                if ch == work[cell]:
                    matched_literal = True
                    cell += 1
                    break
                cell += 1
            if matched_literal:
                continue
            if cell >= n:
                clean = False
                break
            if ch == self.placeholder:
                cell += 1
                continue
            value = work.slot(cell).coerce(ch)
            if value is None:
                clean = False
                continue
            work.put(cell, value)
            last = cell
            cell += 1

        self._commit(work, last, f"set({text!r})")
        if not clean:
            logger.debug("set(%r) on mask %r dropped characters", text, self.mask)
        return clean

    def insert_at(self, text: str, position: int) -> bool:
        """Insert *text* at *position*, shifting later assigned cells right."""
        if not text or not 0 <= position < len(self._buffer):
            return False
        work = self._buffer.copy()
        pos: int | None = position
        last = None
        for ch in text:
            pos = self.find_edit_position_from(pos, forward=True)
            if pos is None or not self._insert_char(work, ch, pos):
                logger.debug("insert_at(%r, %d) rejected at %s", text, position, pos)
                return False
            last = pos
            pos += 1
        self._commit(work, last, f"insert_at({text!r}, {position})")
        return True

    def _insert_char(self, work: SlotBuffer, ch: str, pos: int) -> bool:
        value = work.slot(pos).coerce(ch)
        if value is None:
            return False
        # Assigned cells from pos up to the first free editable cell move one
        # editable position right, hopping over literals.
        chain = []
        for i in self.edit_positions:
            if i < pos:
                continue
            chain.append(i)
            if work[i] is None:
                break
        else:
            return False  # would spill past the last editable cell
        for dst, src in zip(reversed(chain), reversed(chain[:-1])):
            moved = work.slot(dst).coerce(work[src])
            if moved is None:
                return False
            work.put(dst, moved)
        work.put(pos, value)
        return True

    def replace_at(self, text: str, position: int) -> bool:
        """Overwrite cells starting at *position* with *text* (overtype)."""
        if not text or not 0 <= position < len(self._buffer):
            return False
        work = self._buffer.copy()
        pos: int | None = position
        last = None
        for ch in text:
            pos = self.find_edit_position_from(pos, forward=True)
            if pos is None:
                return False
            value = work.slot(pos).coerce(ch)
            if value is None:
                logger.debug("replace_at(%r, %d) rejected %r at %d", text, position, ch, pos)
                return False
            work.put(pos, value)
            last = pos
            pos += 1
        self._commit(work, last, f"replace_at({text!r}, {position})")
        return True

    def remove_at(self, position: int) -> bool:
        """Clear the cell at *position* and compact the rest of its run left.

        A literal position is a successful no-op.
        """
        if not 0 <= position < len(self._buffer):
            return False
        if not self._buffer.is_editable(position):
            self.last_position = position
            return True
        work = self._buffer.copy()
        _, end = work.run_bounds(position)
        for i in range(position, end - 1):
            following = work[i + 1]
            if following is None:
                work.put(i, None)
                continue
            moved = work.slot(i).coerce(following)
            if moved is None:
                logger.debug("remove_at(%d): %r does not fit cell %d", position, following, i)
                return False
            work.put(i, moved)
        work.put(end - 1, None)
        self._commit(work, position, f"remove_at({position})")
        return True
