"""Conversion options shared by the library, CLI and local API."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class HeadingStyle(str, Enum):
    ATX = "atx"
    SETEXT = "setext"

    @classmethod
    def parse(cls, value: object) -> HeadingStyle:
        if isinstance(value, cls):
            return value
        normalized = str(value or "").strip().lower()
        if normalized == cls.SETEXT.value:
            return cls.SETEXT
        return cls.ATX


class LinkStyle(str, Enum):
    INLINE = "inline"
    REFERENCED = "referenced"

    @classmethod
    def parse(cls, value: object) -> LinkStyle:
        if isinstance(value, cls):
            return value
        normalized = str(value or "").strip().lower()
        if normalized in {"referenced", "reference"}:
            return cls.REFERENCED
        return cls.INLINE


DEFAULT_CODE_FENCE = "`"
DEFAULT_BULLET_MARKER = "-"

# camelCase spellings accepted from binding-style option records.
_KEY_ALIASES: dict[str, str] = {
    "headingStyle": "heading_style",
    "linkStyle": "link_style",
    "codeFence": "code_fence",
    "bulletMarker": "bullet_marker",
    "baseUrl": "base_url",
    "excludeSelectors": "exclude_selectors",
    "includeSelectors": "include_selectors",
}


def _first_char(value: object, default: str) -> str:
    text = str(value) if value is not None else ""
    return text[0] if text else default


def _selector_tuple(value: object) -> tuple[str, ...]:
    if not value:
        return ()
    if isinstance(value, str):
        return (value,)
    if isinstance(value, Iterable):
        return tuple(str(item) for item in value)
    logger.warning("Ignoring unsupported selector list %r", value)
    return ()


@dataclass(frozen=True, slots=True)
class Options:
    """Immutable settings for one HTML to Markdown conversion."""

    heading_style: HeadingStyle = HeadingStyle.ATX
    link_style: LinkStyle = LinkStyle.INLINE
    code_fence: str = DEFAULT_CODE_FENCE
    bullet_marker: str = DEFAULT_BULLET_MARKER
    base_url: str | None = None
    exclude_selectors: tuple[str, ...] = ()
    include_selectors: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "heading_style", HeadingStyle.parse(self.heading_style))
        object.__setattr__(self, "link_style", LinkStyle.parse(self.link_style))
        object.__setattr__(self, "code_fence", _first_char(self.code_fence, DEFAULT_CODE_FENCE))
        object.__setattr__(
            self, "bullet_marker", _first_char(self.bullet_marker, DEFAULT_BULLET_MARKER)
        )
        object.__setattr__(self, "base_url", str(self.base_url) if self.base_url else None)
        object.__setattr__(self, "exclude_selectors", _selector_tuple(self.exclude_selectors))
        object.__setattr__(self, "include_selectors", _selector_tuple(self.include_selectors))

    def replace(self, **changes: Any) -> Options:
        return replace(self, **changes)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None, base: Options | None = None) -> Options:
        """Build options from a plain keyed record, layered over *base*.

        Unknown keys are ignored and ``None`` values keep the base value.
        """

        base = base or cls()
        if not data:
            return base
        known = {field.name for field in fields(cls)}
        changes: dict[str, Any] = {}
        for key, value in data.items():
            name = _KEY_ALIASES.get(key, key)
            if name in known and value is not None:
                changes[name] = value
        return replace(base, **changes)

    def as_dict(self) -> dict[str, object]:
        return {
            "heading_style": self.heading_style.value,
            "link_style": self.link_style.value,
            "code_fence": self.code_fence,
            "bullet_marker": self.bullet_marker,
            "base_url": self.base_url,
            "exclude_selectors": list(self.exclude_selectors),
            "include_selectors": list(self.include_selectors),
        }


__all__ = ["HeadingStyle", "LinkStyle", "Options"]
