"""Positions and selections addressing a rich-text document."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

Position = Tuple[int, int]  # (block index, offset into the block's text)


@dataclass(frozen=True, slots=True)
class Selection:
    """Anchor/focus pair as reported by the host.

    ``anchor`` is where the user started selecting and ``focus`` where the
    caret is now, so ``focus`` may come first in document order. Use
    ``start``/``end`` for the normalized range.
    """

    anchor: Position
    focus: Position

    @classmethod
    def caret(cls, block: int, offset: int) -> "Selection":
        return cls((block, offset), (block, offset))

    @property
    def collapsed(self) -> bool:
        return tuple(self.anchor) == tuple(self.focus)

    @property
    def start(self) -> Position:
        return min(tuple(self.anchor), tuple(self.focus))

    @property
    def end(self) -> Position:
        return max(tuple(self.anchor), tuple(self.focus))
