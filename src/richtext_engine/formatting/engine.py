"""Toggle inline marks and set block alignment over a selection."""

from __future__ import annotations

from richtext_engine.document.model import Alignment, Mark, RichDocument, merge_runs
from richtext_engine.document.state import Selection
from richtext_engine.document.sync import InvalidSelection
from richtext_engine.runtime.telemetry import span

from .resolver import ResolvedSpan, block_range, resolve


def is_marked(resolved: ResolvedSpan, mark: Mark) -> bool:
    """True when every covered run already carries ``mark``."""

    return not resolved.empty and all(run.has(mark) for run in resolved.covered_runs())


def commit_span(
    document: RichDocument, resolved: ResolvedSpan, mark: Mark, *, remove: bool
) -> RichDocument:
    """Write the toggled working runs back into their blocks."""

    if resolved.version != document.version:
        raise InvalidSelection(
            f"Span resolved against version {resolved.version}, "
            f"document is at {document.version}",
            position=resolved.start,
        )

    updated = {index: list(runs) for index, runs in resolved.working_runs.items()}
    for segment in resolved.segments:
        runs = updated[segment.block_index]
        run = runs[segment.run_index]
        runs[segment.run_index] = (
            run.without_mark(mark) if remove else run.with_mark(mark)
        )

    for index, runs in updated.items():
        document.blocks[index].runs = merge_runs(runs)
    document.touch()
    return document


def toggle_inline_mark(
    document: RichDocument, selection: Selection, mark: Mark | str
) -> RichDocument:
    """Add ``mark`` to the selected text, or remove it if all of it has it.

    Collapsed selections and selections covering no characters leave the
    document untouched.
    """

    mark = Mark(mark)
    resolved = resolve(document, selection)
    if resolved is None or resolved.empty:
        return document

    with span(
        "formatting::toggle_mark",
        component="formatting",
        metadata={"mark": mark.value, "start": resolved.start, "end": resolved.end},
    ) as handle:
        remove = is_marked(resolved, mark)
        handle.add_metadata("remove", remove)
        return commit_span(document, resolved, mark, remove=remove)


def set_block_alignment(
    document: RichDocument, selection: Selection, alignment: Alignment | str
) -> RichDocument:
    """Align every block the selection touches, including a bare caret's block."""

    alignment = Alignment(alignment)
    indices = block_range(document, selection)

    with span(
        "formatting::set_alignment",
        component="formatting",
        metadata={"alignment": alignment.value, "blocks": len(indices)},
    ):
        changed = False
        for index in indices:
            block = document.blocks[index]
            if block.alignment is not alignment:
                block.alignment = alignment
                changed = True
        if changed:
            document.touch()
        return document


__all__ = [
    "commit_span",
    "is_marked",
    "set_block_alignment",
    "toggle_inline_mark",
]
