from __future__ import annotations

from bs4 import Tag

from ..escape import escape_title, escape_url, resolve_url
from ..options import Options
from ..precompute import NodeMetadata
from ..whitespace import collapse_text
from .base import Rule, Walker, attribute, child_tags


def render_image(element: Tag, options: Options) -> str:
    src = attribute(element, "src") or ""
    if not src:
        return ""
    alt = attribute(element, "alt") or ""
    title = attribute(element, "title")
    if options.base_url:
        src = resolve_url(options.base_url, src)
    src = escape_url(src)
    if title is not None:
        return f'![{alt}]({src} "{escape_title(title)}")'
    return f"![{alt}]({src})"


class ImageRule(Rule):
    tags = frozenset({"img"})

    def convert(
        self, element: Tag, metadata: NodeMetadata | None, options: Options, walker: Walker
    ) -> str:
        return render_image(element, options)


class FigureRule(Rule):
    """``<figure>`` renders its first image with the caption in italics below."""

    tags = frozenset({"figure"})

    def convert(
        self, element: Tag, metadata: NodeMetadata | None, options: Options, walker: Walker
    ) -> str:
        image = ""
        caption = ""
        for child in child_tags(element):
            if child.name == "figcaption":
                caption = collapse_text(walker.convert_children(child))
            elif image:
                continue
            elif child.name == "img":
                image = render_image(child, options)
            elif child.name == "picture":
                img = child.find("img")
                if isinstance(img, Tag):
                    image = render_image(img, options)
            else:
                nested = walker.convert_children(child)
                if "![" in nested:
                    image = nested.strip()
        if not image:
            return ""
        result = f"\n\n{image}"
        if caption:
            result += f"\n*{caption}*"
        return result + "\n\n"


__all__ = ["FigureRule", "ImageRule", "render_image"]
