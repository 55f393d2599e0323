"""Data structures describing font payloads handed to the engine."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any


class FontStyle(str, Enum):
    NORMAL = "normal"
    ITALIC = "italic"
    OBLIQUE = "oblique"

    @classmethod
    def coerce(cls, value: FontStyle | str | None) -> FontStyle:
        """Return the style matching ``value``; unknown values map to normal."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value or "normal").strip().lower())
        except ValueError:
            return cls.NORMAL

    def __str__(self) -> str:
        return self.value


FontData = bytes | bytearray | memoryview | Sequence[int]


@dataclass(slots=True)
class FontDescriptor:
    """One font variant requested for a render.

    ``data`` may arrive in any buffer-like representation; it is normalised
    to ``bytes`` only when the font is registered. ``cache_key`` overrides
    the ``family|weight|style`` deduplication key.
    """

    family: str
    weight: int = 400
    style: FontStyle = FontStyle.NORMAL
    data: FontData | None = None
    cache_key: str | None = None

    def __post_init__(self) -> None:
        self.style = FontStyle.coerce(self.style)

    @property
    def key(self) -> str:
        if self.cache_key:
            return self.cache_key
        return f"{self.family}|{self.weight}|{self.style.value}"

    @property
    def size(self) -> int:
        if self.data is None:
            return 0
        if isinstance(self.data, memoryview):
            return self.data.nbytes
        return len(self.data)

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> FontDescriptor:
        """Build a descriptor from a loosely typed mapping (``cacheKey`` accepted)."""
        return cls(
            family=str(payload["family"]),
            weight=int(payload.get("weight") or 400),
            style=FontStyle.coerce(payload.get("style")),
            data=payload.get("data"),
            cache_key=payload.get("cache_key") or payload.get("cacheKey"),
        )


def font_bytes(data: FontData) -> bytes:
    """Normalise any supported buffer representation to ``bytes``."""
    if isinstance(data, bytes):
        return data
    if isinstance(data, (bytearray, memoryview)):
        return bytes(data)
    return bytes(bytearray(data))


__all__ = ["FontData", "FontDescriptor", "FontStyle", "font_bytes"]
