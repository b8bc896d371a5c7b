"""Boundary types shared with the host UI."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Protocol

from .state import Position, Selection


@dataclass(slots=True)
class DocumentMirror:
    """Host-friendly snapshot of an editing session."""

    text: str
    markup: str
    selection: Optional[Selection]
    attributes: dict[str, str] = field(default_factory=dict)


class SelectionProvider(Protocol):
    """Supplies the live selection at the moment an action runs."""

    def current_selection(self) -> Selection:
        """Return the host's current anchor/focus pair."""
        ...


class RenderSink(Protocol):
    """Receives serialized markup whenever the document changes."""

    def render(self, markup: str) -> None:
        """Display ``markup``; the sink never writes back into the document."""
        ...


class StaticSelectionProvider:
    """Selection provider holding one selection set programmatically."""

    def __init__(self, selection: Optional[Selection] = None) -> None:
        self.selection = selection or Selection.caret(0, 0)

    def select(self, anchor: Position, focus: Optional[Position] = None) -> Selection:
        self.selection = Selection(anchor, anchor if focus is None else focus)
        return self.selection

    def current_selection(self) -> Selection:
        return self.selection


class InvalidSelection(RuntimeError):
    """Raised when a selection or position does not fit the document."""

    def __init__(self, message: str, *, position: object | None = None) -> None:
        super().__init__(message)
        self.position = position
