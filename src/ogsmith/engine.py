"""Capability interface for the rendering engine backends."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable


if TYPE_CHECKING:
    from ogsmith.fonts.models import FontStyle
    from ogsmith.nodes import StyledNode


@runtime_checkable
class RenderEngine(Protocol):
    """Narrow surface the pipeline relies on.

    ``load_font`` registers one byte payload under a unique subset name and
    raises on rejection. ``render`` rasterises a styled tree and returns the
    encoded image bytes.
    """

    def load_font(self, name: str, data: bytes, weight: int, style: FontStyle) -> None: ...

    def render(self, tree: StyledNode, options: Mapping[str, Any]) -> bytes: ...


EngineFactory = Callable[[], RenderEngine]


__all__ = ["EngineFactory", "RenderEngine"]
