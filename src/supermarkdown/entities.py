"""HTML character reference decoding."""

from __future__ import annotations

import re
from html.entities import name2codepoint
from types import MappingProxyType

_NAMED: dict[str, str] = {name: chr(codepoint) for name, codepoint in name2codepoint.items()}
_NAMED["apos"] = "'"
_NAMED["nbsp"] = " "

ENTITIES = MappingProxyType(_NAMED)

ENTITY_RE = re.compile(r"&(?:#(\d+)|#[xX]([0-9a-fA-F]+)|(\w+));")

MAX_CODEPOINT = 0x10FFFF


def _from_codepoint(code: int) -> str | None:
    if code > MAX_CODEPOINT or 0xD800 <= code <= 0xDFFF:
        return None
    return chr(code)


def _replace(match: re.Match[str]) -> str:
    decimal, hexadecimal, name = match.groups()
    if decimal is not None:
        char = _from_codepoint(int(decimal))
    elif hexadecimal is not None:
        char = _from_codepoint(int(hexadecimal, 16))
    else:
        char = ENTITIES.get(name)
    return char if char is not None else match.group(0)


def decode_entities(text: str) -> str:
    """Decode named, decimal and hexadecimal references in *text*.

    Unknown names and out-of-range code points are left untouched.
    """

    if "&" not in text:
        return text
    return ENTITY_RE.sub(_replace, text)


__all__ = ["ENTITIES", "decode_entities"]
