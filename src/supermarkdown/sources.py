"""Reading HTML input and writing Markdown output for the command line."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TextIO

from .utils import atomic_write, size_within_limit

STDIN_MARKER = "-"


class SourceError(RuntimeError):
    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code


def describe_source(path: Path | None) -> str:
    if path is None or str(path) == STDIN_MARKER:
        return "<stdin>"
    return str(path)


def read_source(path: Path | None, max_bytes: int, stdin: TextIO | None = None) -> str:
    """Read HTML from *path*, or from stdin when *path* is ``None`` or ``-``."""

    if path is None or str(path) == STDIN_MARKER:
        stream = stdin or sys.stdin
        try:
            text = stream.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise SourceError("READ_ERROR", f"Failed to read stdin: {exc}") from exc
    else:
        if not path.is_file():
            raise SourceError("NOT_FOUND", f"Source file does not exist: {path}")
        if path.stat().st_size > max_bytes:
            raise SourceError("SIZE_LIMIT", f"File exceeds configured limit: {path.name}")
        try:
            text = path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            raise SourceError("READ_ERROR", f"Failed to read {path}: {exc}") from exc
    if not size_within_limit(text, max_bytes):
        raise SourceError("SIZE_LIMIT", f"Input exceeds configured limit: {describe_source(path)}")
    return text


def write_output(path: Path, markdown: str) -> None:
    try:
        atomic_write(path, markdown + "\n" if markdown else "")
    except OSError as exc:
        raise SourceError("WRITE_ERROR", f"Failed to write {path}: {exc}") from exc


__all__ = ["SourceError", "describe_source", "read_source", "write_output"]
