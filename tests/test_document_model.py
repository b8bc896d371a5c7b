from __future__ import annotations

import pytest

from richtext_engine.document import (
    Alignment,
    Block,
    InlineRun,
    InvalidSelection,
    Mark,
    RichDocument,
    merge_runs,
    split_runs,
)


def bold(text: str) -> InlineRun:
    return InlineRun(text, frozenset({Mark.BOLD}))


def test_new_document_has_one_empty_block() -> None:
    document = RichDocument()

    assert document.block_count == 1
    block = document.blocks[0]
    assert block.alignment is Alignment.LEFT
    assert block.runs == [InlineRun("")]
    assert document.plain_text == ""


def test_empty_block_list_is_replaced_by_placeholder() -> None:
    document = RichDocument(blocks=[])

    assert document.block_count == 1
    assert document.blocks[0].runs == [InlineRun("")]


def test_run_marks_accept_strings() -> None:
    run = InlineRun("x", frozenset({"bold", "italic"}))

    assert run.marks == frozenset({Mark.BOLD, Mark.ITALIC})
    assert run.has(Mark.BOLD)


def test_merge_runs_joins_equal_styles_and_drops_empties() -> None:
    runs = [InlineRun("a"), InlineRun(""), InlineRun("b"), bold("c"), bold("d")]

    assert merge_runs(runs) == [InlineRun("ab"), bold("cd")]


def test_merge_runs_keeps_placeholder_for_empty_block() -> None:
    assert merge_runs([InlineRun(""), bold("")]) == [InlineRun("")]


def test_block_construction_normalizes_runs() -> None:
    block = Block(runs=[InlineRun("Hel"), InlineRun("lo")], alignment="center")

    assert block.runs == [InlineRun("Hello")]
    assert block.alignment is Alignment.CENTER


def test_split_runs_splits_inside_a_run() -> None:
    left, right = split_runs([InlineRun("Hello"), bold("World")], 7)

    assert left == [InlineRun("Hello"), bold("Wo")]
    assert right == [bold("rld")]


def test_split_runs_on_boundary_keeps_runs_whole() -> None:
    left, right = split_runs([InlineRun("Hello"), bold("World")], 5)

    assert left == [InlineRun("Hello")]
    assert right == [bold("World")]


def test_from_text_creates_one_block_per_line() -> None:
    document = RichDocument.from_text("one\ntwo\n")

    assert [block.text for block in document.blocks] == ["one", "two", ""]


def test_insert_text_inherits_style_from_left() -> None:
    document = RichDocument(blocks=[Block(runs=[bold("Hi"), InlineRun(" there")])])

    cursor = document.insert_text((0, 2), "!!")

    assert cursor == (0, 4)
    assert document.blocks[0].runs == [bold("Hi!!"), InlineRun(" there")]
    assert document.version == 1


def test_insert_text_with_explicit_marks() -> None:
    document = RichDocument.from_text("ab")

    document.insert_text((0, 1), "X", marks=["underline"])

    assert document.blocks[0].runs == [
        InlineRun("a"),
        InlineRun("X", frozenset({Mark.UNDERLINE})),
        InlineRun("b"),
    ]


def test_insert_line_break_splits_block_and_keeps_alignment() -> None:
    document = RichDocument(
        blocks=[Block(runs=[InlineRun("Hello world")], alignment=Alignment.RIGHT)]
    )

    cursor = document.split_block((0, 5))

    assert cursor == (1, 0)
    assert [block.text for block in document.blocks] == ["Hello", " world"]
    assert all(block.alignment is Alignment.RIGHT for block in document.blocks)


def test_insert_multiline_text() -> None:
    document = RichDocument.from_text("ad")

    cursor = document.insert_text((0, 1), "b\nx\nc")

    assert cursor == (2, 1)
    assert document.plain_text == "ab\nx\ncd"


def test_delete_range_joins_blocks() -> None:
    document = RichDocument(
        blocks=[
            Block(runs=[InlineRun("Hello")], alignment=Alignment.CENTER),
            Block(runs=[InlineRun("big")]),
            Block(runs=[bold("World")]),
        ]
    )

    cursor = document.delete_range((2, 2), (0, 4))

    assert cursor == (0, 4)
    assert document.block_count == 1
    assert document.blocks[0].runs == [InlineRun("Hell"), bold("rld")]
    assert document.blocks[0].alignment is Alignment.CENTER


def test_delete_range_collapsed_is_noop() -> None:
    document = RichDocument.from_text("abc")

    assert document.delete_range((0, 1), (0, 1)) == (0, 1)
    assert document.version == 0


@pytest.mark.parametrize("position", [(1, 0), (0, 4), (-1, 0), (0, -1), ("0", 0)])
def test_out_of_range_positions_are_rejected(position) -> None:
    document = RichDocument.from_text("abc")

    with pytest.raises(InvalidSelection):
        document.insert_text(position, "x")
    assert document.plain_text == "abc"


def test_structural_equality_ignores_version() -> None:
    first = RichDocument.from_text("abc")
    second = RichDocument.from_text("abc")
    second.touch()

    assert first == second
    assert first.copy() == first
