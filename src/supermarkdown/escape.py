from __future__ import annotations

import re
from urllib.parse import urljoin

MARKDOWN_SPECIAL = frozenset("\\`*_{}[]()#+-.!|")

ABSOLUTE_PREFIXES = ("http://", "https://", "//", "mailto:", "tel:", "data:")

_URL_ESCAPES = str.maketrans({"(": "%28", ")": "%29", " ": "%20"})


def escape_markdown(text: str) -> str:
    return "".join(f"\\{char}" if char in MARKDOWN_SPECIAL else char for char in text)


def escape_title(text: str) -> str:
    """Escape a link or image title for use inside double quotes."""

    return text.replace("\\", "\\\\").replace('"', '\\"')


def escape_url(url: str) -> str:
    """Percent-encode the characters that break a Markdown link destination."""

    return url.translate(_URL_ESCAPES)


def escape_table_cell(text: str) -> str:
    return text.replace("|", "\\|")


def escape_attribute(text: str) -> str:
    return (
        text.replace("&", "&amp;")
        .replace('"', "&quot;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
    )


def longest_run(text: str, char: str) -> int:
    pattern = re.compile(f"{re.escape(char)}+")
    return max((len(match.group(0)) for match in pattern.finditer(text)), default=0)


def code_delimiter_length(code: str) -> int:
    """Number of backticks needed to wrap *code* as inline code."""

    return longest_run(code, "`") + 1


def calculate_fence(code: str, fence_char: str) -> str:
    """Shortest fence of *fence_char* that cannot be closed by *code* (minimum 3)."""

    return fence_char * max(3, longest_run(code, fence_char) + 1)


def resolve_url(base: str, relative: str) -> str:
    if relative.startswith(ABSOLUTE_PREFIXES):
        return relative
    return urljoin(base, relative)


__all__ = [
    "calculate_fence",
    "code_delimiter_length",
    "escape_attribute",
    "escape_markdown",
    "escape_table_cell",
    "escape_title",
    "escape_url",
    "longest_run",
    "resolve_url",
]
