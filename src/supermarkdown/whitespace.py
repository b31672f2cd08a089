from __future__ import annotations

import re

BLOCK_WS_RE = re.compile(r"\s+")
EXCESSIVE_NEWLINES_RE = re.compile(r"\n{3,}")


def normalize_block_whitespace(text: str) -> str:
    """Collapse every whitespace run, newlines included, to a single space."""

    return BLOCK_WS_RE.sub(" ", text)


def collapse_text(text: str) -> str:
    return normalize_block_whitespace(text.strip())


def collapse_newlines(text: str) -> str:
    return EXCESSIVE_NEWLINES_RE.sub("\n\n", text)


def tidy_block(text: str) -> str:
    """Trim *text*, right-strip each line and collapse blank-line runs."""

    lines = (line.rstrip() for line in text.strip().split("\n"))
    return collapse_newlines("\n".join(lines))


__all__ = [
    "collapse_newlines",
    "collapse_text",
    "normalize_block_whitespace",
    "tidy_block",
]
