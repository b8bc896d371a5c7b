"""Textual-facing adapter that wires an EditingSession into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict

from richtext_engine.document import DocumentMirror, Selection
from richtext_engine.session import ActionResult, EditingSession


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks the adapter uses to read from and update Textual widgets."""

    read_selection: Callable[[], Selection]
    update_preview: Callable[[DocumentMirror], None]
    update_status: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


TOOLBAR_COMMANDS: Dict[str, Callable[[EditingSession], ActionResult]] = {
    "bold": lambda session: session.toggle_mark("bold"),
    "italic": lambda session: session.toggle_mark("italic"),
    "underline": lambda session: session.toggle_mark("underline"),
    "align-left": lambda session: session.set_alignment("left"),
    "align-center": lambda session: session.set_alignment("center"),
    "align-right": lambda session: session.set_alignment("right"),
    "align-justify": lambda session: session.set_alignment("justify"),
}


class TextualFormattingAdapter:
    """Selection provider and render sink for a Textual host.

    Toolbar buttons and key bindings resolve to command names such as
    ``"bold"`` or ``"font-size:18"``; typing goes through ``handle_text``.
    """

    def __init__(self, session: EditingSession, hooks: TextualUIHooks) -> None:
        self.session = session
        self.hooks = hooks
        session.attach(selection_provider=self, render_sink=self)

    # SelectionProvider
    def current_selection(self) -> Selection:
        return self.hooks.read_selection()

    # RenderSink
    def render(self, markup: str) -> None:
        self._log("render <-", chars=len(markup))
        self.hooks.update_preview(self.session.mirror(markup))

    def handle_command(self, command: str) -> ActionResult:
        self._log("command ->", command=command)
        if command.startswith("font-size:"):
            result = self.session.set_font_size(int(command.split(":", 1)[1]))
            if result.applied:
                self.hooks.update_preview(self.session.mirror())
        else:
            try:
                action = TOOLBAR_COMMANDS[command]
            except KeyError as exc:
                raise ValueError(f"Unknown toolbar command '{command}'") from exc
            result = action(self.session)
        self._report(command, result)
        return result

    def handle_text(self, text: str) -> ActionResult:
        result = self.session.insert_text(text)
        self._report("insert", result)
        return result

    def handle_backspace(self) -> ActionResult:
        result = self.session.delete_backward()
        self._report("backspace", result)
        return result

    def _report(self, label: str, result: ActionResult) -> None:
        if result.failed:
            self.hooks.update_status(f"{label}: {result.message}")
        else:
            self.hooks.update_status(f"{label}:{result.status}")
        self._log(
            "result <-",
            applied=result.applied,
            status=result.status,
            cursor=result.cursor,
        )

    def _log(self, prefix: str, **fields: object) -> None:
        parts = [prefix, f"version={self.session.document.version}"]
        parts.extend(f"{key}={value!r}" for key, value in fields.items())
        self.hooks.log(" ".join(parts))


__all__ = ["TOOLBAR_COMMANDS", "TextualFormattingAdapter", "TextualUIHooks"]
