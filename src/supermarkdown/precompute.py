"""Single-pass metadata extraction.

One depth-first traversal resolves list numbering and indentation plus the
exclude/include visibility of every element, so the render pass can look
both up in O(1) instead of re-walking ancestors for each node.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from bs4 import Tag

from .options import Options
from .selectors import CompiledSelectors

LIST_CONTAINERS = frozenset({"ul", "ol"})


@dataclass(slots=True)
class NodeMetadata:
    list_prefix: str | None = None
    ancestor_indent: int = 0
    parent_item_indent: int = 0
    skip: bool = False
    force_keep: bool = False
    keeps_descendants: bool = False


MetadataMap = dict[int, NodeMetadata]


@dataclass(slots=True)
class _ListFrame:
    ordered: bool
    index: int
    indent: int
    prefix_len: int = 2


@dataclass(slots=True)
class _VisibilityFrame:
    skip: bool
    is_list_item: bool


def _start_index(element: Tag) -> int:
    if element.name != "ol":
        return 0
    raw = element.get("start")
    try:
        start = int(str(raw).strip()) if raw is not None else 1
    except ValueError:
        start = 1
    # Items increment before use.
    return start - 1


def _iter_events(root: Tag) -> Iterator[tuple[Tag, bool]]:
    """Yield ``(element, entering)`` pairs in depth-first order."""

    stack: list[tuple[Tag, bool]] = [
        (child, True) for child in reversed(root.contents) if isinstance(child, Tag)
    ]
    while stack:
        element, entering = stack.pop()
        yield element, entering
        if entering:
            stack.append((element, False))
            stack.extend(
                (child, True) for child in reversed(element.contents) if isinstance(child, Tag)
            )


def precompute_metadata(
    root: Tag, selectors: CompiledSelectors, options: Options
) -> MetadataMap:
    metadata: MetadataMap = {}
    list_stack: list[_ListFrame] = []
    item_columns: list[int] = []
    visibility: list[_VisibilityFrame] = []
    # Skipped elements on the current path, innermost last.
    skipped_path: list[int] = []

    for element, entering in _iter_events(root):
        tag = element.name
        if not entering:
            if tag in LIST_CONTAINERS:
                list_stack.pop()
            frame = visibility.pop()
            if frame.is_list_item:
                item_columns.pop()
            if frame.skip:
                skipped_path.pop()
            continue

        if tag in LIST_CONTAINERS:
            parent = list_stack[-1] if list_stack else None
            list_stack.append(
                _ListFrame(
                    ordered=tag == "ol",
                    index=_start_index(element),
                    indent=parent.indent + parent.prefix_len if parent else 0,
                )
            )

        is_list_item = False
        if tag == "li" and list_stack:
            ctx = list_stack[-1]
            ctx.index += 1
            prefix = f"{ctx.index}. " if ctx.ordered else f"{options.bullet_marker} "
            ctx.prefix_len = len(prefix)
            meta = metadata.setdefault(id(element), NodeMetadata())
            meta.list_prefix = prefix
            meta.ancestor_indent = ctx.indent
            meta.parent_item_indent = item_columns[-1] if item_columns else 0
            item_columns.append(ctx.indent + len(prefix))
            is_list_item = True

        force_keep = selectors.matches_include(element)
        if force_keep:
            skip = False
        elif selectors.matches_exclude(element):
            skip = True
        else:
            skip = visibility[-1].skip if visibility else False

        if skip or force_keep:
            meta = metadata.setdefault(id(element), NodeMetadata())
            meta.skip = skip
            meta.force_keep = force_keep

        if force_keep:
            for ancestor_id in reversed(skipped_path):
                ancestor = metadata[ancestor_id]
                if ancestor.keeps_descendants:
                    break
                ancestor.keeps_descendants = True

        visibility.append(_VisibilityFrame(skip=skip, is_list_item=is_list_item))
        if skip:
            skipped_path.append(id(element))

    return metadata


__all__ = ["MetadataMap", "NodeMetadata", "precompute_metadata"]
