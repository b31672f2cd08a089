"""GitHub-flavoured Markdown tables."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from bs4 import Tag

from ..escape import escape_table_cell
from ..options import Options
from ..precompute import NodeMetadata
from ..whitespace import collapse_text
from .base import Rule, Walker, attribute, child_tags

MIN_COLUMN_WIDTH = 3
TEXT_ALIGN_RE = re.compile(r"text-align\s*:\s*(left|center|right)", re.IGNORECASE)
ROW_GROUPS = frozenset({"thead", "tbody", "tfoot"})


class Alignment(str, Enum):
    NONE = "none"
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"

    @classmethod
    def of(cls, cell: Tag) -> Alignment:
        align = attribute(cell, "align")
        if align is not None:
            try:
                return cls(align.strip().lower())
            except ValueError:
                return cls.NONE
        match = TEXT_ALIGN_RE.search(attribute(cell, "style") or "")
        if match:
            return cls(match.group(1).lower())
        return cls.NONE

    def pad(self, text: str, width: int) -> str:
        if self is Alignment.RIGHT:
            return f"{text:>{width}}"
        if self is Alignment.CENTER:
            return f"{text:^{width}}"
        return f"{text:<{width}}"

    def separator(self, width: int) -> str:
        if self is Alignment.LEFT:
            return ":" + "-" * (width - 1)
        if self is Alignment.CENTER:
            return ":" + "-" * (width - 2) + ":"
        if self is Alignment.RIGHT:
            return "-" * (width - 1) + ":"
        return "-" * width


@dataclass(slots=True)
class Cell:
    content: str
    alignment: Alignment


def _row(tr: Tag, walker: Walker) -> list[Cell]:
    return [
        Cell(
            content=escape_table_cell(collapse_text(walker.convert_children(cell))),
            alignment=Alignment.of(cell),
        )
        for cell in child_tags(tr, "th", "td")
    ]


def render_table(rows: list[list[Cell]], caption: str | None = None) -> str:
    if not rows:
        return ""
    columns = max(len(row) for row in rows)
    widths = [MIN_COLUMN_WIDTH] * columns
    alignments = [Alignment.NONE] * columns
    for row in rows:
        for index, cell in enumerate(row):
            widths[index] = max(widths[index], len(cell.content))
            if alignments[index] is Alignment.NONE:
                alignments[index] = cell.alignment

    lines: list[str] = []
    for row_index, row in enumerate(rows):
        texts = [cell.content for cell in row] + [""] * (columns - len(row))
        padded = (
            alignments[index].pad(text, widths[index]) for index, text in enumerate(texts)
        )
        lines.append("| " + " | ".join(padded) + " |")
        if row_index == 0:
            separators = (
                alignment.separator(width) for alignment, width in zip(alignments, widths)
            )
            lines.append("| " + " | ".join(separators) + " |")

    result = "\n\n" + "\n".join(lines) + "\n"
    if caption:
        result += f"\n*{caption}*"
    return result + "\n"


class TableRule(Rule):
    tags = frozenset({"table"})

    def convert(
        self, element: Tag, metadata: NodeMetadata | None, options: Options, walker: Walker
    ) -> str:
        rows: list[list[Cell]] = []
        caption: str | None = None
        for child in child_tags(element):
            if child.name == "caption":
                caption = collapse_text(walker.convert_children(child)) or None
            elif child.name in ROW_GROUPS:
                rows.extend(_row(tr, walker) for tr in child_tags(child, "tr"))
            elif child.name == "tr":
                rows.append(_row(child, walker))
        return render_table([row for row in rows if row], caption)


__all__ = ["Alignment", "Cell", "TableRule", "render_table"]
