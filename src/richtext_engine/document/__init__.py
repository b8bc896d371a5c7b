"""Rich-text document model, positions and host boundary types."""

from .model import (
    NO_MARKS,
    Alignment,
    Block,
    InlineRun,
    Mark,
    MarkSet,
    RichDocument,
    mark_set,
    merge_runs,
    split_runs,
)
from .state import Position, Selection
from .sync import (
    DocumentMirror,
    InvalidSelection,
    RenderSink,
    SelectionProvider,
    StaticSelectionProvider,
)
from .validation import ensure_position, ensure_selection

__all__ = [
    "Alignment",
    "Block",
    "DocumentMirror",
    "InlineRun",
    "InvalidSelection",
    "Mark",
    "MarkSet",
    "NO_MARKS",
    "Position",
    "RenderSink",
    "RichDocument",
    "Selection",
    "SelectionProvider",
    "StaticSelectionProvider",
    "ensure_position",
    "ensure_selection",
    "mark_set",
    "merge_runs",
    "split_runs",
]
