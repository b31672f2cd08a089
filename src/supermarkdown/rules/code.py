"""Fenced code blocks and inline code spans."""

from __future__ import annotations

from bs4 import NavigableString, Tag
from bs4.element import PreformattedString

from ..escape import calculate_fence, code_delimiter_length
from ..options import Options
from ..precompute import NodeMetadata
from .base import Rule, Walker, child_tags, class_names

LANGUAGE_PREFIXES = ("language-", "lang-", "highlight-")
HLJS_PREFIX = "hljs-"
HLJS_TOKEN_CLASSES = frozenset(
    {"keyword", "string", "number", "comment", "function", "class", "built_in"}
)
KNOWN_LANGUAGES = frozenset(
    {
        "bash", "c", "cpp", "csharp", "css", "dart", "diff", "go", "graphql", "html",
        "java", "javascript", "js", "json", "kotlin", "lua", "makefile", "markdown",
        "objectivec", "perl", "php", "plaintext", "python", "r", "ruby", "rust",
        "scala", "shell", "sql", "swift", "typescript", "ts", "xml", "yaml", "yml",
    }
)
GUTTER_MARKERS = ("gutter", "line-number", "lineno", "linenumber")


def language_from_classes(classes: list[str]) -> str | None:
    for name in classes:
        for prefix in LANGUAGE_PREFIXES:
            if name.startswith(prefix):
                return name[len(prefix):]
        if name.startswith(HLJS_PREFIX):
            token = name[len(HLJS_PREFIX):]
            if token not in HLJS_TOKEN_CLASSES:
                return token
    for name in classes:
        lowered = name.lower()
        if lowered in KNOWN_LANGUAGES:
            return lowered
    return None


def detect_language(pre: Tag) -> str | None:
    language = language_from_classes(class_names(pre))
    if language:
        return language
    for code in child_tags(pre, "code"):
        language = language_from_classes(class_names(code))
        if language:
            return language
    return None


def _is_gutter(element: Tag) -> bool:
    joined = " ".join(class_names(element))
    return any(marker in joined for marker in GUTTER_MARKERS)


def collect_code_text(pre: Tag) -> str:
    """Raw text of *pre*, leaving out line-number gutters."""

    chunks: list[str] = []
    stack = list(reversed(pre.contents))
    while stack:
        node = stack.pop()
        if isinstance(node, Tag):
            if not _is_gutter(node):
                stack.extend(reversed(node.contents))
        elif isinstance(node, NavigableString) and not isinstance(node, PreformattedString):
            chunks.append(str(node))
    return "".join(chunks)


class PreRule(Rule):
    tags = frozenset({"pre"})

    def convert(
        self, element: Tag, metadata: NodeMetadata | None, options: Options, walker: Walker
    ) -> str:
        code = collect_code_text(element)
        if code.startswith("\n"):
            code = code[1:]
        code = code.rstrip("\n")
        if not code:
            return ""
        language = detect_language(element) or ""
        fence = calculate_fence(code, options.code_fence)
        return f"\n\n{fence}{language}\n{code}\n{fence}\n\n"


class InlineCodeRule(Rule):
    tags = frozenset({"code"})

    def convert(
        self, element: Tag, metadata: NodeMetadata | None, options: Options, walker: Walker
    ) -> str:
        code = element.get_text()
        parent = element.parent
        if isinstance(parent, Tag) and parent.name == "pre":
            return code
        if not code:
            return ""
        delimiter = "`" * code_delimiter_length(code)
        pad = " " if code.startswith("`") or code.endswith("`") else ""
        return f"{delimiter}{pad}{code}{pad}{delimiter}"


__all__ = [
    "InlineCodeRule",
    "KNOWN_LANGUAGES",
    "PreRule",
    "collect_code_text",
    "detect_language",
    "language_from_classes",
]
