"""SlotBuffer: per-position runtime state of a compiled mask.

Contains:
- one cell per mask token (literal char, editable char, or None = unset)
- run_bounds() for literal-delimited runs of editable cells
- snapshot()/restore() for all-or-nothing edits
"""

from __future__ import annotations

from maskedit.core.tokens import Literal, MaskPattern, Slot


class SlotBuffer:
    def __init__(self, pattern: MaskPattern):
        self.pattern = pattern
        self._cells: list[str | None] = [
            token.char if isinstance(token, Literal) else None
            for token in pattern.tokens
        ]

    def __len__(self) -> int:
        return len(self._cells)

    def __getitem__(self, index: int) -> str | None:
        return self._cells[index]

    def slot(self, index: int) -> Slot | None:
        token = self.pattern.tokens[index]
        return token if isinstance(token, Slot) else None

    def is_editable(self, index: int) -> bool:
        return self.pattern.is_editable(index)

    def is_assigned(self, index: int) -> bool:
        return self.is_editable(index) and self._cells[index] is not None

    def put(self, index: int, value: str | None) -> None:
        """Write an editable cell; ``None`` clears it."""
        if not self.is_editable(index):
            raise ValueError(f"cell {index} is a literal and cannot be written")
        self._cells[index] = value

    def clear(self):
        """Unset every editable cell; literals keep their fixed char."""
        for index in range(len(self._cells)):
            if self.is_editable(index):
                self._cells[index] = None

    def run_bounds(self, index: int) -> tuple[int, int]:
        """Return ``(start, end)`` (end exclusive) of the editable run at *index*."""
        start = index
        while start > 0 and self.is_editable(start - 1):
            start -= 1
        end = index
        while end < len(self._cells) and self.is_editable(end):
            end += 1
        return start, end

    def snapshot(self) -> tuple[str | None, ...]:
        return tuple(self._cells)

    def restore(self, cells: tuple[str | None, ...]) -> None:
        if len(cells) != len(self._cells):
            raise ValueError("snapshot does not match buffer length")
        self._cells = list(cells)

    def copy(self) -> "SlotBuffer":
        clone = SlotBuffer(self.pattern)
        clone._cells = list(self._cells)
        return clone

    def values(self) -> list[str | None]:
        return list(self._cells)
