"""Exception hierarchy for the raster provisioning pipeline."""

from __future__ import annotations


class OgsmithError(RuntimeError):
    """Base exception for provisioning and rendering failures."""


class FontRegistrationError(OgsmithError):
    """Raised when the rendering engine rejects a font payload."""

    def __init__(
        self,
        family: str,
        weight: int,
        reason: str | None = None,
        *,
        engine: str | None = None,
    ) -> None:
        self.family = family
        self.weight = weight
        self.engine = engine
        message = f"Failed to load font '{family}' (weight: {weight})"
        if engine:
            message = f"{message} into {engine}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ResourceFetchError(OgsmithError):
    """Raised when a single candidate URL cannot be retrieved."""

    def __init__(self, url: str, *, status_code: int | None = None, reason: str | None = None):
        self.url = url
        self.status_code = status_code
        detail = reason or (f"HTTP {status_code}" if status_code is not None else "unreachable")
        super().__init__(f"{url}: {detail}")


class UnsupportedFormatError(OgsmithError):
    """Raised when a raster format is requested that the renderer cannot emit."""


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


def exception_hint(exc: BaseException) -> str | None:
    """Return the most specific message available for an exception chain."""
    messages = exception_messages(exc)
    return messages[-1] if messages else None


__all__ = [
    "FontRegistrationError",
    "OgsmithError",
    "ResourceFetchError",
    "UnsupportedFormatError",
    "exception_hint",
    "exception_messages",
]
