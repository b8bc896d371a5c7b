"""Editing session façade: the action surface a host UI talks to."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import Callable, ContextManager, Optional

from richtext_engine.document import (
    Alignment,
    DocumentMirror,
    InvalidSelection,
    Mark,
    Position,
    RenderSink,
    RichDocument,
    Selection,
    SelectionProvider,
    StaticSelectionProvider,
    ensure_position,
)
from richtext_engine.formatting import set_block_alignment, toggle_inline_mark
from richtext_engine.markup import parse, serialize
from richtext_engine.runtime import telemetry

FONT_SIZES = (12, 14, 16, 18, 20, 24, 28, 32)
DEFAULT_FONT_SIZE = 16


@dataclass(slots=True)
class ActionResult:
    """Outcome of one host action."""

    applied: bool
    status: str = "ok"
    message: Optional[str] = None
    cursor: Optional[Position] = None

    @property
    def failed(self) -> bool:
        return self.status == "invalid_selection"


class EditingSession:
    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[RichDocument] = None,
        selection_provider: Optional[SelectionProvider] = None,
        render_sink: Optional[RenderSink] = None,
        font_size: int = DEFAULT_FONT_SIZE,
    ) -> None:
        self.name = name
        self.document = document or RichDocument()
        self.selection_provider: SelectionProvider = (
            selection_provider or StaticSelectionProvider()
        )
        self.render_sink = render_sink
        self.font_size = _check_font_size(font_size)

    @classmethod
    def from_text(cls, text: str, **kwargs) -> "EditingSession":
        return cls(document=RichDocument.from_text(text), **kwargs)

    @classmethod
    def from_markup(cls, markup: str, **kwargs) -> "EditingSession":
        """Load a session from markup; ``MalformedMarkup`` propagates."""

        return cls(document=parse(markup), **kwargs)

    def attach(
        self,
        *,
        selection_provider: Optional[SelectionProvider] = None,
        render_sink: Optional[RenderSink] = None,
    ) -> None:
        if selection_provider is not None:
            self.selection_provider = selection_provider
        if render_sink is not None:
            self.render_sink = render_sink
            self.render()

    def current_selection(self) -> Selection:
        return self.selection_provider.current_selection()

    def markup(self) -> str:
        return serialize(self.document)

    def render(self) -> None:
        if self.render_sink is not None:
            self.render_sink.render(self.markup())

    def mirror(self, markup: Optional[str] = None) -> DocumentMirror:
        return DocumentMirror(
            text=self.document.plain_text,
            markup=self.markup() if markup is None else markup,
            selection=self.current_selection(),
            attributes={
                "font_size": str(self.font_size),
                "blocks": str(self.document.block_count),
                "version": str(self.document.version),
            },
        )

    # -- action surface ------------------------------------------------------

    def toggle_mark(self, mark: Mark | str) -> ActionResult:
        mark = Mark(mark)
        return self._run(
            f"toggle_{mark.value}",
            lambda selection: toggle_inline_mark(self.document, selection, mark),
        )

    def set_alignment(self, alignment: Alignment | str) -> ActionResult:
        alignment = Alignment(alignment)
        return self._run(
            f"align_{alignment.value}",
            lambda selection: set_block_alignment(self.document, selection, alignment),
        )

    def insert_text(self, text: str) -> ActionResult:
        """Type ``text`` over the current selection; ``\\n`` breaks the line."""

        def operation(selection: Selection) -> Position:
            cursor = self.document.delete_range(selection.anchor, selection.focus)
            return self.document.insert_text(cursor, text)

        return self._run("insert_text", operation)

    def delete_backward(self) -> ActionResult:
        """Delete the selection, or the character (or line break) before the caret."""

        def operation(selection: Selection) -> Position:
            if not selection.collapsed:
                return self.document.delete_range(selection.anchor, selection.focus)
            block, offset = ensure_position(self.document, selection.focus)
            if offset > 0:
                return self.document.delete_range((block, offset - 1), (block, offset))
            if block > 0:
                previous = (block - 1, self.document.blocks[block - 1].length)
                return self.document.delete_range(previous, (block, 0))
            return (block, offset)

        return self._run("delete_backward", operation)

    def set_font_size(self, size: int) -> ActionResult:
        size = _check_font_size(size)
        if size == self.font_size:
            return ActionResult(applied=False, status="noop", message="font_size")
        self.font_size = size
        telemetry.record_event(
            "session.font_size", data={"session": self.name, "size": size}
        )
        return ActionResult(applied=True, message="font_size")

    def _run(
        self, label: str, operation: Callable[[Selection], object]
    ) -> ActionResult:
        selection = self.current_selection()
        with Transaction(self, label) as tx:
            try:
                outcome = operation(selection)
            except InvalidSelection as exc:
                telemetry.record_event(
                    "session.invalid_selection",
                    level="warning",
                    data={"session": self.name, "action": label, "reason": str(exc)},
                )
                return ActionResult(
                    applied=False, status="invalid_selection", message=str(exc)
                )
            changed = tx.commit()

        cursor = outcome if isinstance(outcome, tuple) else None
        return ActionResult(
            applied=changed,
            status="ok" if changed else "noop",
            message=label,
            cursor=cursor,
        )


class Transaction(AbstractContextManager["Transaction"]):
    """Groups one action under a telemetry span and renders once on commit."""

    def __init__(self, session: EditingSession, label: str) -> None:
        self.session = session
        self.label = label
        self.changed = False
        self._version_before = session.document.version
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Transaction":
        self._version_before = self.session.document.version
        self._span_cm = telemetry.span(
            name=f"session::{self.label}",
            component=True,
            metadata={"session": self.session.name},
        )
        self._span_cm.__enter__()
        return self

    def commit(self) -> bool:
        self.changed = self.session.document.version != self._version_before
        return self.changed

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        if exc_type is None and self.changed:
            self.session.render()
        return False


def _check_font_size(size: int) -> int:
    if size not in FONT_SIZES:
        raise ValueError(f"Unsupported font size {size}; expected one of {FONT_SIZES}")
    return size


__all__ = [
    "ActionResult",
    "DEFAULT_FONT_SIZE",
    "EditingSession",
    "FONT_SIZES",
    "Transaction",
]
