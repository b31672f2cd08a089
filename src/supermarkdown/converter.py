from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from typing import Any

from bs4 import BeautifulSoup, NavigableString, PageElement, Tag
from bs4.element import PreformattedString

from .entities import decode_entities
from .logging import StageTimings
from .models import ConversionResult
from .options import Options
from .postprocess import postprocess
from .precompute import MetadataMap, precompute_metadata
from .rules import RuleRegistry, default_registry
from .rules.block import NON_CONTENT_TAGS
from .selectors import CompiledSelectors
from .whitespace import normalize_block_whitespace

logger = logging.getLogger(__name__)

PARSER = "lxml"

# Deeper subtrees are rendered as plain text to stay within the interpreter stack.
MAX_RENDER_DEPTH = 64


def _elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000


class _TreeWalker:
    """Render pass state for one conversion."""

    def __init__(self, registry: RuleRegistry, metadata: MetadataMap, options: Options) -> None:
        self._registry = registry
        self._metadata = metadata
        self._options = options
        self._depth = 0

    def convert_children(self, element: Tag) -> str:
        return "".join(self.convert_node(child) for child in element.children)

    def convert_node(self, node: PageElement) -> str:
        if isinstance(node, Tag):
            return self._convert_element(node)
        # Comments, doctypes, CDATA and processing instructions carry no content.
        if isinstance(node, NavigableString) and not isinstance(node, PreformattedString):
            return normalize_block_whitespace(decode_entities(str(node)))
        return ""

    def _convert_element(self, element: Tag) -> str:
        if self._depth >= MAX_RENDER_DEPTH:
            return self._flatten(element)
        self._depth += 1
        try:
            return self._render_element(element)
        finally:
            self._depth -= 1

    def _render_element(self, element: Tag) -> str:
        meta = self._metadata.get(id(element))
        if meta is not None and meta.skip and not meta.force_keep:
            if not meta.keeps_descendants:
                return ""
            return "".join(
                self._convert_element(child)
                for child in element.children
                if isinstance(child, Tag)
            )
        rule = self._registry.find(element.name)
        if rule is None:
            return self.convert_children(element)
        return rule.convert(element, meta, self._options, self)

    def _flatten(self, element: Tag) -> str:
        """Plain text of a subtree nested too deeply to render rule by rule."""

        parts: list[str] = []
        stack: list[PageElement] = [element]
        while stack:
            node = stack.pop()
            if not isinstance(node, Tag):
                parts.append(self.convert_node(node))
                continue
            if node.name in NON_CONTENT_TAGS:
                continue
            children = list(node.children)
            meta = self._metadata.get(id(node))
            if meta is not None and meta.skip and not meta.force_keep:
                if not meta.keeps_descendants:
                    continue
                children = [child for child in children if isinstance(child, Tag)]
            stack.extend(reversed(children))
        return "".join(parts)


class Converter:
    """Parses HTML, precomputes metadata, renders and postprocesses."""

    def __init__(self, registry: RuleRegistry | None = None) -> None:
        self._registry = registry or default_registry()

    def run(self, html: str, options: Options | None = None) -> ConversionResult:
        options = options or Options()
        timings = StageTimings()
        if not html:
            return ConversionResult(markdown="", timings=timings)

        started = time.perf_counter()
        soup = BeautifulSoup(html, PARSER)
        timings.parse_ms = _elapsed_ms(started)

        started = time.perf_counter()
        selectors = CompiledSelectors.from_options(options)
        metadata = precompute_metadata(soup, selectors, options)
        timings.precompute_ms = _elapsed_ms(started)

        started = time.perf_counter()
        walker = _TreeWalker(self._registry, metadata, options)
        rendered = walker.convert_children(soup)
        timings.render_ms = _elapsed_ms(started)

        started = time.perf_counter()
        markdown = postprocess(rendered, options)
        timings.postprocess_ms = _elapsed_ms(started)

        logger.debug(
            "Converted %d chars to %d chars in %.2f ms (%d metadata entries)",
            len(html),
            len(markdown),
            timings.total_ms,
            len(metadata),
        )
        return ConversionResult(
            markdown=markdown,
            timings=timings,
            input_chars=len(html),
            output_chars=len(markdown),
        )

    def convert(self, html: str, options: Options | None = None) -> str:
        return self.run(html, options).markdown


def coerce_options(options: Options | Mapping[str, Any] | None) -> Options:
    if isinstance(options, Options):
        return options
    return Options.from_mapping(options)


def convert(html: str) -> str:
    """Convert *html* to Markdown with default options."""

    return Converter().convert(html)


def convert_with_options(html: str, options: Options | Mapping[str, Any] | None) -> str:
    """Convert *html* to Markdown using *options* (an :class:`Options` or a plain mapping)."""

    return Converter().convert(html, coerce_options(options))


__all__ = ["Converter", "coerce_options", "convert", "convert_with_options"]
