"""Structured JSONL log of conversions."""

from __future__ import annotations

import json
import time
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any


@dataclass(slots=True)
class StageTimings:
    parse_ms: float = 0.0
    precompute_ms: float = 0.0
    render_ms: float = 0.0
    postprocess_ms: float = 0.0

    @property
    def total_ms(self) -> float:
        return self.parse_ms + self.precompute_ms + self.render_ms + self.postprocess_ms

    def as_dict(self) -> dict[str, float]:
        return {key: round(value, 3) for key, value in asdict(self).items()}


@dataclass(slots=True)
class ConversionLogEntry:
    source: str
    status: str
    error_code: str | None = None
    options: dict[str, Any] = field(default_factory=dict)
    timings: StageTimings = field(default_factory=StageTimings)
    input_chars: int = 0
    output_chars: int = 0
    timestamp: str = field(
        default_factory=lambda: time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())
    )

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["timings"] = self.timings.as_dict()
        return payload


class ConversionLogger:
    def __init__(self, log_file: Path) -> None:
        self._log_file = log_file

    def append(self, entry: ConversionLogEntry) -> None:
        self._log_file.parent.mkdir(parents=True, exist_ok=True)
        line = json.dumps(entry.to_dict(), ensure_ascii=False)
        with self._log_file.open("a", encoding="utf-8") as handle:
            handle.write(line + "\n")


def read_entries(log_file: Path) -> list[dict[str, Any]]:
    if not log_file.exists():
        return []
    with log_file.open("r", encoding="utf-8") as handle:
        return [json.loads(line) for line in handle if line.strip()]


__all__ = ["ConversionLogEntry", "ConversionLogger", "StageTimings", "read_entries"]
