"""Block/run tree backing a rich-text editing session."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Iterable, List, Optional, Sequence, Tuple

from .state import Position
from .validation import ensure_position


class Mark(str, Enum):
    """Inline styles a run can carry."""

    BOLD = "bold"
    ITALIC = "italic"
    UNDERLINE = "underline"


class Alignment(str, Enum):
    """Block-level text alignment."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    JUSTIFY = "justify"


MarkSet = FrozenSet[Mark]
NO_MARKS: MarkSet = frozenset()


def mark_set(marks: Iterable[Mark | str] = ()) -> MarkSet:
    return frozenset(Mark(mark) for mark in marks)


@dataclass(frozen=True, slots=True)
class InlineRun:
    """Contiguous text sharing one style set."""

    text: str
    marks: MarkSet = NO_MARKS

    def __post_init__(self) -> None:
        if not isinstance(self.marks, frozenset) or not all(
            isinstance(mark, Mark) for mark in self.marks
        ):
            object.__setattr__(self, "marks", mark_set(self.marks))

    @property
    def length(self) -> int:
        return len(self.text)

    def has(self, mark: Mark) -> bool:
        return mark in self.marks

    def with_mark(self, mark: Mark) -> "InlineRun":
        return InlineRun(self.text, self.marks | {mark})

    def without_mark(self, mark: Mark) -> "InlineRun":
        return InlineRun(self.text, self.marks - {mark})

    def split(self, offset: int) -> Tuple["InlineRun", "InlineRun"]:
        return InlineRun(self.text[:offset], self.marks), InlineRun(
            self.text[offset:], self.marks
        )


def merge_runs(runs: Iterable[InlineRun]) -> List[InlineRun]:
    """Collapse neighbours with equal style sets and drop empty runs.

    A block with no text keeps a single unstyled placeholder run.
    """

    merged: List[InlineRun] = []
    for run in runs:
        if not run.text:
            continue
        if merged and merged[-1].marks == run.marks:
            merged[-1] = InlineRun(merged[-1].text + run.text, run.marks)
        else:
            merged.append(run)
    if not merged:
        merged.append(InlineRun(""))
    return merged


def split_runs(
    runs: Sequence[InlineRun], offset: int
) -> Tuple[List[InlineRun], List[InlineRun]]:
    """Partition ``runs`` at a character offset, splitting the run it falls in."""

    left: List[InlineRun] = []
    right: List[InlineRun] = []
    cursor = 0
    for run in runs:
        run_end = cursor + run.length
        if run_end <= offset:
            left.append(run)
        elif cursor >= offset:
            right.append(run)
        else:
            head, tail = run.split(offset - cursor)
            left.append(head)
            right.append(tail)
        cursor = run_end
    return left, right


@dataclass(slots=True)
class Block:
    """One paragraph: an alignment plus its ordered runs."""

    runs: List[InlineRun] = field(default_factory=lambda: [InlineRun("")])
    alignment: Alignment = Alignment.LEFT

    def __post_init__(self) -> None:
        self.alignment = Alignment(self.alignment)
        self.runs = merge_runs(self.runs)

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)

    @property
    def length(self) -> int:
        return sum(run.length for run in self.runs)

    def copy(self) -> "Block":
        return Block(runs=list(self.runs), alignment=self.alignment)

    def style_at(self, offset: int) -> MarkSet:
        """Style a character typed at ``offset`` inherits (from its left)."""

        left, right = split_runs(self.runs, offset)
        if left and left[-1].text:
            return left[-1].marks
        if right and right[0].text:
            return right[0].marks
        return NO_MARKS


@dataclass(slots=True)
class RichDocument:
    """Ordered, never-empty sequence of blocks.

    ``version`` is bumped by every committed mutation and is ignored by
    equality, so two documents with the same structure compare equal.
    """

    blocks: List[Block] = field(default_factory=lambda: [Block()])
    version: int = field(default=0, compare=False)

    def __post_init__(self) -> None:
        self.blocks = list(self.blocks) or [Block()]

    @classmethod
    def from_text(cls, text: str) -> "RichDocument":
        return cls(blocks=[Block(runs=[InlineRun(line)]) for line in text.split("\n")])

    @property
    def block_count(self) -> int:
        return len(self.blocks)

    @property
    def plain_text(self) -> str:
        return "\n".join(block.text for block in self.blocks)

    def copy(self) -> "RichDocument":
        return RichDocument(
            blocks=[block.copy() for block in self.blocks], version=self.version
        )

    def touch(self) -> int:
        self.version += 1
        return self.version

    def insert_text(
        self,
        position: Position,
        text: str,
        marks: Optional[Iterable[Mark | str]] = None,
    ) -> Position:
        """Insert ``text`` at ``position``; each ``\\n`` starts a new block.

        Returns the position right after the inserted text.
        """

        index, offset = ensure_position(self, position)
        if not text:
            return (index, offset)
        block = self.blocks[index]
        style = block.style_at(offset) if marks is None else mark_set(marks)
        left, right = split_runs(block.runs, offset)
        lines = text.split("\n")

        if len(lines) == 1:
            block.runs = merge_runs([*left, InlineRun(text, style), *right])
            self.touch()
            return (index, offset + len(text))

        replacement = [
            Block(runs=[*left, InlineRun(lines[0], style)], alignment=block.alignment)
        ]
        replacement.extend(
            Block(runs=[InlineRun(line, style)], alignment=block.alignment)
            for line in lines[1:-1]
        )
        replacement.append(
            Block(runs=[InlineRun(lines[-1], style), *right], alignment=block.alignment)
        )
        self.blocks[index : index + 1] = replacement
        self.touch()
        return (index + len(lines) - 1, len(lines[-1]))

    def split_block(self, position: Position) -> Position:
        return self.insert_text(position, "\n")

    def delete_range(self, start: Position, end: Position) -> Position:
        """Remove the text between two positions, joining boundary blocks."""

        start = ensure_position(self, start)
        end = ensure_position(self, end)
        if start > end:
            start, end = end, start
        if start == end:
            return start

        first = self.blocks[start[0]]
        head, _ = split_runs(first.runs, start[1])
        _, tail = split_runs(self.blocks[end[0]].runs, end[1])
        first.runs = merge_runs([*head, *tail])
        del self.blocks[start[0] + 1 : end[0] + 1]
        self.touch()
        return start
