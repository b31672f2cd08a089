"""Compile exclude/include CSS selectors once per conversion."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

import soupsieve
from bs4 import Tag
from soupsieve import SoupSieve

from .options import Options

logger = logging.getLogger(__name__)


def compile_selector(selector: str) -> SoupSieve | None:
    """Compile *selector*, returning ``None`` when it cannot be parsed."""

    try:
        return soupsieve.compile(selector)
    except (soupsieve.SelectorSyntaxError, NotImplementedError) as exc:
        # Pseudo-elements and at-rules are unsupported rather than malformed.
        logger.warning("Ignoring invalid selector %r: %s", selector, exc)
        return None


def _compile_all(selectors: Iterable[str]) -> tuple[SoupSieve, ...]:
    compiled = (compile_selector(selector) for selector in selectors)
    return tuple(matcher for matcher in compiled if matcher is not None)


@dataclass(frozen=True, slots=True)
class CompiledSelectors:
    exclude: tuple[SoupSieve, ...] = ()
    include: tuple[SoupSieve, ...] = ()

    @classmethod
    def from_options(cls, options: Options) -> CompiledSelectors:
        return cls(
            exclude=_compile_all(options.exclude_selectors),
            include=_compile_all(options.include_selectors),
        )

    def matches_exclude(self, element: Tag) -> bool:
        return any(matcher.match(element) for matcher in self.exclude)

    def matches_include(self, element: Tag) -> bool:
        return any(matcher.match(element) for matcher in self.include)


__all__ = ["CompiledSelectors", "compile_selector"]
