from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

SELECTOR_KEYS = ("exclude_selectors", "include_selectors", "excludeSelectors", "includeSelectors")


class HealthStatus(BaseModel):
    status: str
    version: str


class ConvertRequest(BaseModel):
    html: str
    options: dict[str, Any] | None = None

    @field_validator("options")
    @classmethod
    def check_selector_lists(cls, value: dict[str, Any] | None) -> dict[str, Any] | None:
        for key in SELECTOR_KEYS:
            selectors = (value or {}).get(key)
            if selectors is None or isinstance(selectors, str):
                continue
            if not isinstance(selectors, list) or not all(isinstance(item, str) for item in selectors):
                raise ValueError(f"INVALID_OPTIONS: {key} must be a string or a list of strings")
        return value


class Timings(BaseModel):
    parse_ms: float
    precompute_ms: float
    render_ms: float
    postprocess_ms: float


class ConvertResponse(BaseModel):
    markdown: str
    timings: Timings
    input_chars: int = Field(ge=0)
    output_chars: int = Field(ge=0)


__all__ = ["ConvertRequest", "ConvertResponse", "HealthStatus", "Timings"]
