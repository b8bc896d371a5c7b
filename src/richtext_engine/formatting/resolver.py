"""Map a host selection onto boundary-aligned runs of the document."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Mapping, Optional

from richtext_engine.document.model import InlineRun, RichDocument, split_runs
from richtext_engine.document.state import Position, Selection
from richtext_engine.document.validation import ensure_selection
from richtext_engine.runtime.telemetry import span


@dataclass(frozen=True, slots=True)
class SpanSegment:
    """One covered run: its block, its index in the working runs, its range."""

    block_index: int
    run_index: int
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start


@dataclass(frozen=True, slots=True)
class ResolvedSpan:
    """Immutable description of the runs a selection covers.

    ``working_runs`` holds, for every block the selection crosses, a copy of
    its runs already split at the selection boundaries. Segment run indices
    point into those copies, never into the live document.
    """

    start: Position
    end: Position
    segments: tuple[SpanSegment, ...]
    working_runs: Mapping[int, tuple[InlineRun, ...]] = field(
        default_factory=dict
    )
    version: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "working_runs", MappingProxyType(dict(self.working_runs))
        )

    @property
    def empty(self) -> bool:
        return not self.segments

    def run_for(self, segment: SpanSegment) -> InlineRun:
        return self.working_runs[segment.block_index][segment.run_index]

    def covered_runs(self) -> Iterator[InlineRun]:
        for segment in self.segments:
            yield self.run_for(segment)

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.covered_runs())


def _split_at_bounds(
    runs: tuple[InlineRun, ...], low: int, high: int
) -> list[InlineRun]:
    for offset in (low, high):
        left, right = split_runs(runs, offset)
        runs = (*left, *right)
    return list(runs)


def resolve(document: RichDocument, selection: Selection) -> Optional[ResolvedSpan]:
    """Resolve ``selection`` to the runs covering ``[start, end)``.

    Returns ``None`` for a collapsed selection. Raises ``InvalidSelection`` if
    either end falls outside the document.
    """

    start, end = ensure_selection(document, selection)
    if start == end:
        return None

    with span(
        "formatting::resolve",
        component="formatting",
        metadata={"start": start, "end": end},
    ) as handle:
        working: dict[int, tuple[InlineRun, ...]] = {}
        segments: list[SpanSegment] = []
        for index in range(start[0], end[0] + 1):
            block = document.blocks[index]
            low = start[1] if index == start[0] else 0
            high = end[1] if index == end[0] else block.length
            runs = _split_at_bounds(tuple(block.runs), low, high)
            working[index] = tuple(runs)

            cursor = 0
            for run_index, run in enumerate(runs):
                run_end = cursor + run.length
                if run.text and cursor >= low and run_end <= high:
                    segments.append(SpanSegment(index, run_index, cursor, run_end))
                cursor = run_end

        handle.add_metadata("segments", len(segments))
        return ResolvedSpan(
            start=start,
            end=end,
            segments=tuple(segments),
            working_runs=working,
            version=document.version,
        )


def block_range(document: RichDocument, selection: Selection) -> range:
    """Indices of the blocks a selection touches.

    A collapsed selection touches the block holding the caret. A multi-block
    selection that starts at the end of its first block, or ends at offset 0
    of its last block, covers no character of that block, so it is left out.
    """

    start, end = ensure_selection(document, selection)
    first, last = start[0], end[0]
    if last > first:
        if start[1] == document.blocks[first].length:
            first += 1
        if end[1] == 0:
            last -= 1
    return range(first, last + 1)


__all__ = ["ResolvedSpan", "SpanSegment", "block_range", "resolve"]
