from __future__ import annotations

from bs4 import NavigableString, Tag

from ..options import Options
from ..precompute import NodeMetadata
from ..whitespace import tidy_block
from .base import Rule, Walker


def indent_continuation(text: str, spaces: int) -> str:
    """Indent every line after the first by *spaces*; blank lines stay empty."""

    first, *rest = text.split("\n")
    pad = " " * spaces
    return "\n".join([first, *(f"{pad}{line}" if line else "" for line in rest)])


class ListRule(Rule):
    tags = frozenset({"ul", "ol"})

    def convert(
        self, element: Tag, metadata: NodeMetadata | None, options: Options, walker: Walker
    ) -> str:
        parts: list[str] = []
        for child in element.children:
            # Inter-item formatting whitespace is not content.
            if isinstance(child, NavigableString) and not child.strip():
                continue
            parts.append(walker.convert_node(child))
        content = "".join(parts).rstrip()
        if not content:
            return ""
        return f"\n\n{content}\n\n"


class ListItemRule(Rule):
    tags = frozenset({"li"})

    def convert(
        self, element: Tag, metadata: NodeMetadata | None, options: Options, walker: Walker
    ) -> str:
        content = tidy_block(walker.convert_children(element))
        if not content:
            return ""
        if metadata is not None and metadata.list_prefix is not None:
            prefix = metadata.list_prefix
            # Enclosing items already indent this item's lines to their content column.
            spaces = max(0, metadata.ancestor_indent - metadata.parent_item_indent)
        else:
            prefix = f"{options.bullet_marker} "
            spaces = 0
        body = indent_continuation(content, spaces + len(prefix))
        return f"{' ' * spaces}{prefix}{body}\n"


class DefinitionListRule(Rule):
    tags = frozenset({"dl"})

    def convert(
        self, element: Tag, metadata: NodeMetadata | None, options: Options, walker: Walker
    ) -> str:
        lines: list[str] = []
        last_was_term = False
        for child in element.children:
            if not isinstance(child, Tag) or child.name not in {"dt", "dd"}:
                continue
            content = tidy_block(walker.convert_children(child))
            if not content:
                continue
            if child.name == "dt":
                if lines and not last_was_term:
                    lines.append("")
                lines.append(content)
                last_was_term = True
            else:
                lines.append(": " + indent_continuation(content, 2))
                last_was_term = False
        if not lines:
            return ""
        return "\n\n" + "\n".join(lines) + "\n\n"


class DefinitionTermRule(Rule):
    tags = frozenset({"dt"})

    def convert(
        self, element: Tag, metadata: NodeMetadata | None, options: Options, walker: Walker
    ) -> str:
        return walker.convert_children(element).strip()


class DefinitionDescriptionRule(Rule):
    tags = frozenset({"dd"})

    def convert(
        self, element: Tag, metadata: NodeMetadata | None, options: Options, walker: Walker
    ) -> str:
        content = walker.convert_children(element).strip()
        return f": {content}" if content else ""


__all__ = [
    "DefinitionDescriptionRule",
    "DefinitionListRule",
    "DefinitionTermRule",
    "ListItemRule",
    "ListRule",
    "indent_continuation",
]
