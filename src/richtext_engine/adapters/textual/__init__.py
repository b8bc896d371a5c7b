"""Textual host adapter; the runnable demo lives in ``.app``."""

from .controller import TOOLBAR_COMMANDS, TextualFormattingAdapter, TextualUIHooks

__all__ = ["TOOLBAR_COMMANDS", "TextualFormattingAdapter", "TextualUIHooks"]
