from __future__ import annotations

from collections.abc import Iterable
from typing import ClassVar, Protocol

from bs4 import PageElement, Tag

from ..options import Options
from ..precompute import NodeMetadata


class Walker(Protocol):
    def convert_children(self, element: Tag) -> str:  # pragma: no cover - interface
        ...

    def convert_node(self, node: PageElement) -> str:  # pragma: no cover - interface
        ...


class Rule:
    """Converts the elements named in :attr:`tags` to Markdown."""

    tags: ClassVar[frozenset[str]] = frozenset()

    def convert(
        self,
        element: Tag,
        metadata: NodeMetadata | None,
        options: Options,
        walker: Walker,
    ) -> str:  # pragma: no cover - interface
        raise NotImplementedError


class RuleRegistry:
    """Ordered, immutable set of rules with disjoint tag sets."""

    def __init__(self, rules: Iterable[Rule]) -> None:
        self._rules: tuple[Rule, ...] = tuple(rules)
        lookup: dict[str, Rule] = {}
        for rule in self._rules:
            for tag in rule.tags:
                if tag in lookup:
                    raise ValueError(
                        f"Tag {tag!r} claimed by both {type(lookup[tag]).__name__} "
                        f"and {type(rule).__name__}"
                    )
                lookup[tag] = rule
        self._lookup = lookup

    def find(self, tag: str) -> Rule | None:
        return self._lookup.get(tag)


def child_tags(element: Tag, *names: str) -> list[Tag]:
    """Direct element children of *element*, optionally filtered by tag name."""

    return [
        child
        for child in element.children
        if isinstance(child, Tag) and (not names or child.name in names)
    ]


def attribute(element: Tag, name: str) -> str | None:
    value = element.get(name)
    if value is None:
        return None
    if isinstance(value, list):
        return " ".join(value)
    return str(value)


def class_names(element: Tag) -> list[str]:
    value = element.get("class")
    if not value:
        return []
    if isinstance(value, str):
        return value.split()
    return [str(item) for item in value]


__all__ = ["Rule", "RuleRegistry", "Walker", "attribute", "child_tags", "class_names"]
