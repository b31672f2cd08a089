"""Paragraph-level rules: paragraphs, quotes, rules and collapsible sections."""

from __future__ import annotations

from bs4 import Tag

from ..options import Options
from ..precompute import NodeMetadata
from ..whitespace import collapse_text, tidy_block
from .base import Rule, Walker

NON_CONTENT_TAGS = frozenset({"head", "script", "style", "noscript", "template"})


def quote_lines(text: str) -> list[str]:
    return [f"> {line}" if line else ">" for line in text.split("\n")]


class ParagraphRule(Rule):
    tags = frozenset({"p"})

    def convert(
        self, element: Tag, metadata: NodeMetadata | None, options: Options, walker: Walker
    ) -> str:
        content = walker.convert_children(element).strip()
        if not content:
            return ""
        return f"\n\n{content}\n\n"


class BlockquoteRule(Rule):
    tags = frozenset({"blockquote"})

    def convert(
        self, element: Tag, metadata: NodeMetadata | None, options: Options, walker: Walker
    ) -> str:
        content = tidy_block(walker.convert_children(element))
        if not content:
            return ""
        quoted = "\n".join(quote_lines(content))
        return f"\n\n{quoted}\n\n"


class HorizontalRule(Rule):
    tags = frozenset({"hr"})

    def convert(
        self, element: Tag, metadata: NodeMetadata | None, options: Options, walker: Walker
    ) -> str:
        return "\n\n---\n\n"


class DetailsRule(Rule):
    """``<details>`` becomes a blockquote led by the bold summary."""

    tags = frozenset({"details"})

    def convert(
        self, element: Tag, metadata: NodeMetadata | None, options: Options, walker: Walker
    ) -> str:
        summary = ""
        parts: list[str] = []
        for child in element.children:
            if isinstance(child, Tag) and child.name == "summary":
                if not summary:
                    summary = collapse_text(walker.convert_children(child))
                continue
            parts.append(walker.convert_node(child))
        content = tidy_block("".join(parts))
        if not summary and not content:
            return ""

        lines: list[str] = []
        if summary:
            lines.extend([f"> **{summary}**", ">"])
        if content:
            lines.extend(quote_lines(content))
        elif lines:
            lines.pop()
        return "\n\n" + "\n".join(lines) + "\n\n"


class NonContentRule(Rule):
    """Document metadata, scripts and templates never reach the output."""

    tags = NON_CONTENT_TAGS

    def convert(
        self, element: Tag, metadata: NodeMetadata | None, options: Options, walker: Walker
    ) -> str:
        return ""


__all__ = [
    "BlockquoteRule",
    "DetailsRule",
    "HorizontalRule",
    "NON_CONTENT_TAGS",
    "NonContentRule",
    "ParagraphRule",
]
