"""Parse serialized markup back into a document."""

from __future__ import annotations

import html
import re

from richtext_engine.document.model import (
    Alignment,
    Block,
    InlineRun,
    Mark,
    RichDocument,
)
from richtext_engine.runtime.telemetry import span

from .serializer import BREAK, MARK_TAGS

TAG_MARKS = {tag: mark for mark, tag in MARK_TAGS.items()}
TAG_PATTERN = re.compile(r"<(/?)([A-Za-z]+)>")
CONTAINER_PATTERN = re.compile(r'<p align="([^"]*)">(.*)</p>', re.DOTALL)


class MalformedMarkup(ValueError):
    """Raised when markup has unbalanced, unknown or misplaced tags."""

    def __init__(self, message: str, *, line: int, column: int | None = None) -> None:
        location = f"line {line}" if column is None else f"line {line}, column {column}"
        super().__init__(f"{message} ({location})")
        self.line = line
        self.column = column


def _parse_runs(body: str, line_no: int) -> list[InlineRun]:
    runs: list[InlineRun] = []
    open_marks: list[Mark] = []
    pos = 0
    while pos < len(body):
        lt = body.find("<", pos)
        if lt == -1:
            lt = len(body)
        if lt > pos:
            runs.append(InlineRun(html.unescape(body[pos:lt]), frozenset(open_marks)))
            pos = lt
            continue

        match = TAG_PATTERN.match(body, pos)
        if match is None or match.group(2).lower() not in TAG_MARKS:
            raise MalformedMarkup("Unrecognized tag", line=line_no, column=pos)
        closing, mark = bool(match.group(1)), TAG_MARKS[match.group(2).lower()]
        if closing:
            if not open_marks or open_marks[-1] is not mark:
                raise MalformedMarkup(
                    f"Unbalanced closing tag for {mark.value}", line=line_no, column=pos
                )
            open_marks.pop()
        else:
            if mark in open_marks:
                raise MalformedMarkup(
                    f"Nested duplicate {mark.value} tag", line=line_no, column=pos
                )
            open_marks.append(mark)
        pos = match.end()

    if open_marks:
        raise MalformedMarkup(
            f"Unclosed {open_marks[-1].value} tag", line=line_no, column=len(body)
        )
    return runs


def parse_line(line: str, line_no: int = 1) -> Block:
    if "\n" in line:
        raise MalformedMarkup("Line break without <br>", line=line_no)

    alignment = Alignment.LEFT
    body = line
    container = CONTAINER_PATTERN.fullmatch(line)
    if container is not None:
        try:
            alignment = Alignment(container.group(1))
        except ValueError as exc:
            raise MalformedMarkup(
                f"Unknown alignment '{container.group(1)}'", line=line_no
            ) from exc
        body = container.group(2)
    return Block(runs=_parse_runs(body, line_no), alignment=alignment)


def parse(markup: str) -> RichDocument:
    """Build a document from ``markup``; nothing is returned on failure."""

    with span(
        "markup::parse", component="markup", metadata={"chars": len(markup)}
    ) as handle:
        blocks = [
            parse_line(line, line_no)
            for line_no, line in enumerate(markup.split(BREAK), start=1)
        ]
        handle.add_metadata("blocks", len(blocks))
        return RichDocument(blocks=blocks)


__all__ = ["MalformedMarkup", "parse", "parse_line"]
