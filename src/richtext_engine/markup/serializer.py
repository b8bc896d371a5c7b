"""Render a document as line-oriented tagged text."""

from __future__ import annotations

import html

from richtext_engine.document.model import (
    Alignment,
    Block,
    InlineRun,
    Mark,
    RichDocument,
)

# Outermost first.
MARK_ORDER = (Mark.BOLD, Mark.ITALIC, Mark.UNDERLINE)
MARK_TAGS = {Mark.BOLD: "b", Mark.ITALIC: "i", Mark.UNDERLINE: "u"}
BREAK = "<br>\n"


def serialize_run(run: InlineRun) -> str:
    text = html.escape(run.text, quote=False)
    for mark in reversed(MARK_ORDER):
        if mark in run.marks:
            tag = MARK_TAGS[mark]
            text = f"<{tag}>{text}</{tag}>"
    return text


def serialize_block(block: Block) -> str:
    line = "".join(serialize_run(run) for run in block.runs)
    if block.alignment is Alignment.LEFT:
        return line
    return f'<p align="{block.alignment.value}">{line}</p>'


def serialize(document: RichDocument) -> str:
    """Blocks joined by ``<br>`` line breaks; equal documents give equal text."""

    return BREAK.join(serialize_block(block) for block in document.blocks)


__all__ = [
    "BREAK",
    "MARK_ORDER",
    "MARK_TAGS",
    "serialize",
    "serialize_block",
    "serialize_run",
]
