"""Tagged-text serialization of rich documents."""

from .parser import MalformedMarkup, parse, parse_line
from .serializer import BREAK, MARK_ORDER, MARK_TAGS, serialize, serialize_block

__all__ = [
    "BREAK",
    "MARK_ORDER",
    "MARK_TAGS",
    "MalformedMarkup",
    "parse",
    "parse_line",
    "serialize",
    "serialize_block",
]
