"""Range resolution and the toggle/alignment formatting operations."""

from .engine import commit_span, is_marked, set_block_alignment, toggle_inline_mark
from .resolver import ResolvedSpan, SpanSegment, block_range, resolve

__all__ = [
    "ResolvedSpan",
    "SpanSegment",
    "block_range",
    "commit_span",
    "is_marked",
    "resolve",
    "set_block_alignment",
    "toggle_inline_mark",
]
