from __future__ import annotations

from typing import List

import pytest

from richtext_engine.document import Alignment, Selection, StaticSelectionProvider
from richtext_engine.markup import MalformedMarkup
from richtext_engine.session import DEFAULT_FONT_SIZE, EditingSession


class RecordingSink:
    def __init__(self) -> None:
        self.frames: List[str] = []

    def render(self, markup: str) -> None:
        self.frames.append(markup)


def make_session(
    text: str = "Hello world",
) -> tuple[EditingSession, StaticSelectionProvider, RecordingSink]:
    provider = StaticSelectionProvider()
    sink = RecordingSink()
    session = EditingSession.from_text(
        text, selection_provider=provider, render_sink=sink
    )
    return session, provider, sink


def test_toggle_mark_reads_selection_and_renders() -> None:
    session, provider, sink = make_session()
    provider.select((0, 0), (0, 5))

    result = session.toggle_mark("bold")

    assert result.applied is True
    assert result.status == "ok"
    assert sink.frames == ["<b>Hello</b> world"]

    session.toggle_mark("bold")

    assert sink.frames[-1] == "Hello world"


def test_collapsed_toggle_is_noop_without_render() -> None:
    session, provider, sink = make_session()
    provider.select((0, 3))

    result = session.toggle_mark("italic")

    assert result.applied is False
    assert result.status == "noop"
    assert sink.frames == []


def test_set_alignment_on_caret_renders_attribute() -> None:
    session, provider, sink = make_session()
    provider.select((0, 6))

    result = session.set_alignment("center")

    assert result.applied is True
    assert session.document.blocks[0].alignment is Alignment.CENTER
    assert sink.frames == ['<p align="center">Hello world</p>']


def test_invalid_selection_is_reported_not_raised() -> None:
    session, provider, sink = make_session()
    provider.selection = Selection((0, 0), (3, 1))

    result = session.toggle_mark("underline")

    assert result.failed
    assert result.status == "invalid_selection"
    assert result.applied is False
    assert session.markup() == "Hello world"
    assert sink.frames == []


def test_unknown_alignment_is_a_programming_error() -> None:
    session, _, _ = make_session()

    with pytest.raises(ValueError):
        session.set_alignment("middle")


def test_insert_text_replaces_selection_and_returns_cursor() -> None:
    session, provider, sink = make_session()
    provider.select((0, 6), (0, 11))

    result = session.insert_text("there")

    assert result.cursor == (0, 11)
    assert session.document.plain_text == "Hello there"
    assert sink.frames[-1] == "Hello there"


def test_enter_splits_block() -> None:
    session, provider, _ = make_session()
    provider.select((0, 5))

    result = session.insert_text("\n")

    assert result.cursor == (1, 0)
    assert session.markup() == "Hello<br>\n world"


def test_typed_text_inherits_bold() -> None:
    session, provider, _ = make_session()
    provider.select((0, 0), (0, 5))
    session.toggle_mark("bold")
    provider.select((0, 5))

    session.insert_text("!")

    assert session.markup() == "<b>Hello!</b> world"


def test_delete_backward_joins_lines() -> None:
    session, provider, _ = make_session("ab\ncd")
    provider.select((1, 0))

    result = session.delete_backward()

    assert result.cursor == (0, 2)
    assert session.document.plain_text == "abcd"


def test_delete_backward_at_document_start_is_noop() -> None:
    session, provider, sink = make_session()
    provider.select((0, 0))

    result = session.delete_backward()

    assert result.status == "noop"
    assert sink.frames == []


@pytest.mark.parametrize("caret", [Selection.caret(7, 0), Selection.caret(-1, 0)])
def test_delete_backward_with_caret_outside_document_is_reported(
    caret: Selection,
) -> None:
    session, provider, sink = make_session("ab\ncd")
    provider.selection = caret

    result = session.delete_backward()

    assert result.failed
    assert result.status == "invalid_selection"
    assert session.document.plain_text == "ab\ncd"
    assert sink.frames == []


def test_font_size_is_view_state_only() -> None:
    session, _, sink = make_session()
    assert session.font_size == DEFAULT_FONT_SIZE

    result = session.set_font_size(24)

    assert result.applied is True
    assert session.mirror().attributes["font_size"] == "24"
    assert session.markup() == "Hello world"
    assert session.set_font_size(24).status == "noop"
    with pytest.raises(ValueError):
        session.set_font_size(13)


def test_from_markup_loads_document() -> None:
    session = EditingSession.from_markup('<p align="right"><u>hi</u></p>')

    assert session.document.blocks[0].alignment is Alignment.RIGHT
    assert session.markup() == '<p align="right"><u>hi</u></p>'


def test_from_markup_rejects_malformed_input() -> None:
    with pytest.raises(MalformedMarkup):
        EditingSession.from_markup("<b>oops")


def test_independent_sessions_do_not_share_documents() -> None:
    first, first_provider, _ = make_session()
    second, _, _ = make_session()
    first_provider.select((0, 0), (0, 5))

    first.toggle_mark("bold")

    assert first.markup() == "<b>Hello</b> world"
    assert second.markup() == "Hello world"


def test_attach_render_sink_pushes_current_markup() -> None:
    session = EditingSession.from_text("abc")
    sink = RecordingSink()

    session.attach(render_sink=sink)

    assert sink.frames == ["abc"]
