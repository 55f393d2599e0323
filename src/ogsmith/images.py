"""Lightweight image dimension detection using magic bytes.

Only PNG, JPEG and GIF headers are understood. Nothing is decoded: the
dimensions are read straight from the fixed header layouts, and any input that
does not match (or is too short for the matched layout) yields an empty
:class:`ImageSize`.
"""

from __future__ import annotations

from dataclasses import dataclass


PNG_SIGNATURE = b"\x89P"
JPEG_SOI = b"\xff\xd8"
GIF_SIGNATURE = b"GIF"

# SOF0-SOF3 and SOF9 carry the frame dimensions.
_JPEG_SOF_MARKERS = frozenset({0xC0, 0xC1, 0xC2, 0xC3, 0xC9})


@dataclass(frozen=True, slots=True)
class ImageSize:
    """Width and height in pixels, either of which may be unknown."""

    width: int | None = None
    height: int | None = None

    def __bool__(self) -> bool:
        return self.width is not None and self.height is not None

    def as_dict(self) -> dict[str, int]:
        payload: dict[str, int] = {}
        if self.width is not None:
            payload["width"] = self.width
        if self.height is not None:
            payload["height"] = self.height
        return payload


def _be16(data: bytes, offset: int) -> int:
    return int.from_bytes(data[offset : offset + 2], "big")


def _be32(data: bytes, offset: int) -> int:
    return int.from_bytes(data[offset : offset + 4], "big")


def _le16(data: bytes, offset: int) -> int:
    return int.from_bytes(data[offset : offset + 2], "little")


def _jpeg_size(data: bytes) -> ImageSize | None:
    index = 2
    while index < len(data) - 8:
        if data[index] != 0xFF:
            index += 1
            continue
        marker = data[index + 1]
        if marker in _JPEG_SOF_MARKERS:
            return ImageSize(width=_be16(data, index + 7), height=_be16(data, index + 5))
        index += _be16(data, index + 2) + 2
    return None


def sniff_image_format(data: bytes | bytearray | memoryview) -> str | None:
    """Return ``png``, ``jpeg`` or ``gif`` when the signature matches."""
    payload = bytes(data[:3])
    if payload.startswith(PNG_SIGNATURE):
        return "png"
    if payload.startswith(JPEG_SOI):
        return "jpeg"
    if payload.startswith(GIF_SIGNATURE):
        return "gif"
    return None


def detect_image_size(data: bytes | bytearray | memoryview) -> ImageSize:
    """Read width and height from PNG, JPEG or GIF headers without decoding.

    The function is pure and never raises on malformed input.
    """
    payload = bytes(data)

    if payload.startswith(PNG_SIGNATURE) and len(payload) >= 24:
        return ImageSize(width=_be32(payload, 16), height=_be32(payload, 20))

    if payload.startswith(JPEG_SOI):
        size = _jpeg_size(payload)
        if size is not None:
            return size

    if payload.startswith(GIF_SIGNATURE) and len(payload) >= 10:
        return ImageSize(width=_le16(payload, 6), height=_le16(payload, 8))

    return ImageSize()


__all__ = ["ImageSize", "detect_image_size", "sniff_image_format"]
