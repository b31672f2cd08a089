from __future__ import annotations

import os
import tempfile
from pathlib import Path


def atomic_write(path: Path, data: str, encoding: str = "utf-8") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile("w", delete=False, dir=path.parent, encoding=encoding) as tmp:
        tmp.write(data)
        tmp.flush()
        os.fsync(tmp.fileno())
    os.replace(tmp.name, path)


def size_within_limit(text: str, max_bytes: int) -> bool:
    return len(text.encode("utf-8")) <= max_bytes


__all__ = ["atomic_write", "size_within_limit"]
