from __future__ import annotations

from bs4 import Tag

from ..escape import escape_title, escape_url, resolve_url
from ..options import Options
from ..precompute import NodeMetadata
from ..whitespace import collapse_text
from .base import Rule, Walker, attribute

MAILTO = "mailto:"


class LinkRule(Rule):
    tags = frozenset({"a"})

    def convert(
        self, element: Tag, metadata: NodeMetadata | None, options: Options, walker: Walker
    ) -> str:
        content = collapse_text(walker.convert_children(element))
        href = attribute(element, "href") or ""
        if not href or href == "#":
            return content
        title = attribute(element, "title")
        if options.base_url:
            href = resolve_url(options.base_url, href)

        if title is None:
            if href.startswith(MAILTO) and content == href[len(MAILTO):]:
                return f"<{content}>"
            if content == href:
                return f"<{href}>"

        destination = escape_url(href)
        if title is not None:
            return f'[{content}]({destination} "{escape_title(title)}")'
        return f"[{content}]({destination})"


__all__ = ["LinkRule"]
