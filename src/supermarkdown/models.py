"""Result models for conversions."""

from __future__ import annotations

from dataclasses import dataclass, field

from .logging import StageTimings


@dataclass(slots=True)
class ConversionResult:
    """Markdown output plus per-stage timings for a single conversion."""

    markdown: str
    timings: StageTimings = field(default_factory=StageTimings)
    input_chars: int = 0
    output_chars: int = 0


__all__ = ["ConversionResult"]
