"""Whole-document clean-up applied after rendering."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from .options import LinkStyle, Options
from .whitespace import collapse_newlines

INLINE_LINK_RE = re.compile(r'(?<!!)\[([^\[\]]+)\]\(([^)\s]+)(?:\s+"((?:[^"\\]|\\.)*)")?\)')


def escape_link_newlines(text: str) -> str:
    """Replace newlines inside ``[...]`` with a literal ``\\n``."""

    if "[" not in text:
        return text
    out: list[str] = []
    depth = 0
    index = 0
    length = len(text)
    while index < length:
        char = text[index]
        if char == "\\" and index + 1 < length and text[index + 1] in "[]":
            out.append(text[index : index + 2])
            index += 2
            continue
        if char == "[":
            depth += 1
        elif char == "]":
            depth = max(0, depth - 1)
        elif char == "\n" and depth > 0:
            out.append("\\n")
            index += 1
            continue
        out.append(char)
        index += 1
    return "".join(out)


@dataclass(slots=True)
class ReferenceTable:
    numbers: dict[str, int] = field(default_factory=dict)
    definitions: list[tuple[int, str, str | None]] = field(default_factory=list)

    def number_for(self, url: str, title: str | None) -> int:
        number = self.numbers.get(url)
        if number is None:
            number = len(self.numbers) + 1
            self.numbers[url] = number
            self.definitions.append((number, url, title))
        return number

    def render(self) -> str:
        lines = []
        for number, url, title in self.definitions:
            if title is not None:
                lines.append(f'[{number}]: {url} "{title}"')
            else:
                lines.append(f"[{number}]: {url}")
        return "\n".join(lines)


def convert_to_referenced_links(markdown: str) -> str:
    table = ReferenceTable()

    def _replace(match: re.Match[str]) -> str:
        text, url, title = match.groups()
        return f"[{text}][{table.number_for(url, title)}]"

    result = INLINE_LINK_RE.sub(_replace, markdown)
    if not table.definitions:
        return markdown
    return f"{result}\n\n{table.render()}\n"


def trim_trailing_whitespace(text: str) -> str:
    return "\n".join(line.rstrip() for line in text.split("\n"))


def postprocess(markdown: str, options: Options) -> str:
    result = escape_link_newlines(markdown)
    if options.link_style is LinkStyle.REFERENCED:
        result = convert_to_referenced_links(result)
    # Whitespace-only lines must be emptied before blank runs are collapsed.
    result = trim_trailing_whitespace(result)
    result = collapse_newlines(result)
    return result.strip()


__all__ = [
    "ReferenceTable",
    "convert_to_referenced_links",
    "escape_link_newlines",
    "postprocess",
    "trim_trailing_whitespace",
]
