"""Validation helpers shared by the resolver, engine and editing primitives."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .state import Position, Selection
from .sync import InvalidSelection

if TYPE_CHECKING:
    from .model import RichDocument


def ensure_position(document: "RichDocument", position: Position) -> Position:
    try:
        block, offset = position
    except (TypeError, ValueError) as exc:
        raise InvalidSelection("Malformed position", position=position) from exc
    if not isinstance(block, int) or not isinstance(offset, int):
        raise InvalidSelection("Position must hold integers", position=position)
    if block < 0 or block >= document.block_count:
        raise InvalidSelection("Block index out of range", position=position)
    if offset < 0 or offset > document.blocks[block].length:
        raise InvalidSelection("Offset out of range", position=position)
    return (block, offset)


def ensure_selection(
    document: "RichDocument", selection: Selection
) -> tuple[Position, Position]:
    """Validate both ends and return them in document order."""

    if not isinstance(selection, Selection):
        raise InvalidSelection(f"Expected a Selection, got {type(selection).__name__}")
    anchor = ensure_position(document, selection.anchor)
    focus = ensure_position(document, selection.focus)
    if anchor <= focus:
        return anchor, focus
    return focus, anchor
