"""UI-agnostic rich-text formatting engine."""

__all__ = [
    "adapters",
    "document",
    "formatting",
    "markup",
    "runtime",
]

__version__ = "0.1.0"
