"""Inline formatting: emphasis, strike-through, line breaks and HTML passthrough tags."""

from __future__ import annotations

from typing import ClassVar

from bs4 import Tag

from ..escape import escape_attribute
from ..options import Options
from ..precompute import NodeMetadata
from .base import Rule, Walker, attribute


class WrapRule(Rule):
    """Wraps trimmed content in :attr:`marker`; empty content renders nothing."""

    marker: ClassVar[str] = ""

    def convert(
        self, element: Tag, metadata: NodeMetadata | None, options: Options, walker: Walker
    ) -> str:
        content = walker.convert_children(element).strip()
        if not content:
            return ""
        return f"{self.marker}{content}{self.marker}"


class StrongRule(WrapRule):
    tags = frozenset({"strong", "b"})
    marker = "**"


class EmphasisRule(WrapRule):
    tags = frozenset({"em", "i"})
    marker = "*"


class StrikethroughRule(WrapRule):
    tags = frozenset({"del", "s", "strike"})
    marker = "~~"


class HtmlPassthroughRule(Rule):
    """Keeps tags Markdown has no syntax for as inline HTML."""

    tags = frozenset({"sup", "sub", "kbd", "mark", "samp", "var", "abbr"})

    def convert(
        self, element: Tag, metadata: NodeMetadata | None, options: Options, walker: Walker
    ) -> str:
        content = walker.convert_children(element).strip()
        if not content:
            return ""
        name = element.name
        title = attribute(element, "title") if name == "abbr" else None
        if title is not None:
            return f'<{name} title="{escape_attribute(title)}">{content}</{name}>'
        return f"<{name}>{content}</{name}>"


class LineBreakRule(Rule):
    tags = frozenset({"br"})

    def convert(
        self, element: Tag, metadata: NodeMetadata | None, options: Options, walker: Walker
    ) -> str:
        return "  \n"


__all__ = [
    "EmphasisRule",
    "HtmlPassthroughRule",
    "LineBreakRule",
    "StrikethroughRule",
    "StrongRule",
    "WrapRule",
]
