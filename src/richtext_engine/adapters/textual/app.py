"""Executable Textual app hosting a rich-text editing session."""

from __future__ import annotations

import argparse
import os
from pathlib import Path
from typing import Callable, Optional, Sequence

try:  # pragma: no cover - imported only when the demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static, TextArea
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use richtext_engine.adapters.textual.app"
    ) from exc

from richtext_engine.document import DocumentMirror, Position, Selection
from richtext_engine.session import (
    DEFAULT_FONT_SIZE,
    FONT_SIZES,
    ActionResult,
    EditingSession,
)

from .controller import TextualFormattingAdapter, TextualUIHooks

PLACEHOLDER = "Start typing here..."


class FormattingTextArea(TextArea):
    """Read-only TextArea whose edits are routed through the session."""

    def __init__(
        self,
        text: str,
        *,
        on_text: Callable[[str], ActionResult],
        on_backspace: Callable[[], ActionResult],
        **kwargs,
    ) -> None:
        super().__init__(text, read_only=True, **kwargs)
        self._on_text = on_text
        self._on_backspace = on_backspace

    async def on_key(self, event: events.Key) -> None:
        if event.key == "enter":
            result = self._on_text("\n")
        elif event.key == "backspace":
            result = self._on_backspace()
        elif event.is_printable and event.character:
            result = self._on_text(event.character)
        else:
            return
        event.prevent_default()
        event.stop()
        if result.cursor is not None:
            self.move_cursor(result.cursor)

    def reload(self, text: str, cursor: Optional[Position] = None) -> None:
        if text == self.text:
            return
        location = cursor or self.cursor_location
        self.load_text(text)
        self.move_cursor(location)


class RichTextApp(App[None]):
    """Text area, markup preview and status line around one session."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#editor {
		height: 2fr;
		border: round $accent;
	}

	#preview {
		height: 1fr;
		border: round $surface-lighten-2;
		padding: 0 1;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        Binding("ctrl+b", "format('bold')", "Bold", priority=True),
        Binding("ctrl+t", "format('italic')", "Italic", priority=True),
        Binding("ctrl+u", "format('underline')", "Underline", priority=True),
        Binding("f5", "format('align-left')", "Left", priority=True),
        Binding("f6", "format('align-center')", "Center", priority=True),
        Binding("f7", "format('align-right')", "Right", priority=True),
        Binding("f8", "format('align-justify')", "Justify", priority=True),
        Binding("f2", "font_size(-1)", "Smaller", priority=True),
        Binding("f3", "font_size(1)", "Larger", priority=True),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, session: EditingSession) -> None:
        super().__init__()
        self.session = session
        self.adapter: TextualFormattingAdapter | None = None
        self._editor: FormattingTextArea | None = None
        self._preview: Static | None = None
        self._status: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="editor-area"):
            self._editor = FormattingTextArea(
                self.session.document.plain_text,
                on_text=self._type_text,
                on_backspace=self._backspace,
                id="editor",
            )
            yield self._editor
            self._preview = Static("", id="preview", markup=False)
            yield self._preview
        self._status = Static("", id="status-line")
        yield self._status
        yield Footer()

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            read_selection=self._read_selection,
            update_preview=self._update_preview,
            update_status=self._update_status,
        )
        self.adapter = TextualFormattingAdapter(self.session, hooks)
        if self._editor:
            self._editor.focus()

    def action_format(self, command: str) -> None:
        if self.adapter:
            self.adapter.handle_command(command)

    def action_font_size(self, step: int) -> None:
        if not self.adapter:
            return
        index = FONT_SIZES.index(self.session.font_size) + step
        index = max(0, min(len(FONT_SIZES) - 1, index))
        self.adapter.handle_command(f"font-size:{FONT_SIZES[index]}")

    def _type_text(self, text: str) -> ActionResult:
        assert self.adapter is not None
        result = self.adapter.handle_text(text)
        self._sync_editor(result)
        return result

    def _backspace(self) -> ActionResult:
        assert self.adapter is not None
        result = self.adapter.handle_backspace()
        self._sync_editor(result)
        return result

    def _sync_editor(self, result: ActionResult) -> None:
        if self._editor and result.applied:
            self._editor.reload(self.session.document.plain_text, result.cursor)

    def _read_selection(self) -> Selection:
        if not self._editor:
            return Selection.caret(0, 0)
        current = self._editor.selection
        return Selection(tuple(current.start), tuple(current.end))

    def _update_preview(self, mirror: DocumentMirror) -> None:
        self.sub_title = f"{mirror.attributes.get('font_size', DEFAULT_FONT_SIZE)}px"
        if self._preview:
            self._preview.update(f"markup: {mirror.markup}")

    def _update_status(self, status: str) -> None:
        if self._status:
            self._status.update(status)


def _env_int(key: str, fallback: int) -> int:
    value = os.environ.get(key)
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the rich-text editor demo.")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--text", default=PLACEHOLDER, help="Initial plain text")
    source.add_argument(
        "--markup-file", type=Path, help="Load the document from a markup file"
    )
    parser.add_argument(
        "--font-size",
        type=int,
        choices=FONT_SIZES,
        default=_env_int("RICHTEXT_ENGINE_FONT_SIZE", DEFAULT_FONT_SIZE),
        help=f"Editor font size (default: {DEFAULT_FONT_SIZE})",
    )
    return parser.parse_args(argv)


def build_session(args: argparse.Namespace) -> EditingSession:
    if args.markup_file is not None:
        return EditingSession.from_markup(
            args.markup_file.read_text(encoding="utf-8"), font_size=args.font_size
        )
    return EditingSession.from_text(args.text, font_size=args.font_size)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    RichTextApp(build_session(args)).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
