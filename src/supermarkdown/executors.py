"""Execution helpers bridging synchronous conversion into async contexts."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from .converter import convert_with_options
from .options import Options

T = TypeVar("T")


async def run_sync(func: Callable[..., T], /, *args: Any, **kwargs: Any) -> T:
    """Execute *func* in a worker thread and return the result."""

    return await asyncio.to_thread(func, *args, **kwargs)


async def convert_async(html: str, options: Options | Mapping[str, Any] | None = None) -> str:
    return await run_sync(convert_with_options, html, options)


__all__ = ["convert_async", "run_sync"]
