from __future__ import annotations

from bs4 import Tag

from ..options import HeadingStyle, Options
from ..precompute import NodeMetadata
from ..whitespace import collapse_text
from .base import Rule, Walker

SETEXT_UNDERLINES = {1: "=", 2: "-"}


class HeadingRule(Rule):
    tags = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})

    def convert(
        self, element: Tag, metadata: NodeMetadata | None, options: Options, walker: Walker
    ) -> str:
        level = int(element.name[1])
        content = collapse_text(walker.convert_children(element))
        if not content:
            return ""
        underline = SETEXT_UNDERLINES.get(level)
        if options.heading_style is HeadingStyle.SETEXT and underline:
            return f"\n\n{content}\n{underline * len(content)}\n\n"
        return f"\n\n{'#' * level} {content}\n\n"


__all__ = ["HeadingRule"]
