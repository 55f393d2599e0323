"""Compose the provisioning steps into a single raster render."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from ogsmith.core.config import RenderConfig
from ogsmith.core.diagnostics import DiagnosticEmitter, resolve_emitter
from ogsmith.core.exceptions import UnsupportedFormatError
from ogsmith.engine import EngineFactory
from ogsmith.fonts import (
    FontDescriptor,
    FontStateStore,
    get_font_state,
    load_fonts,
    rewrite_font_families,
)
from ogsmith.nodes import NodeStyle, StyledNode, collect_resource_urls
from ogsmith.resources import FetchedResource, ResourceResolver


SUPPORTED_FORMATS = ("png", "jpeg", "jpg")


def normalize_format(extension: str) -> str:
    """Map a requested extension to the format name the engine expects."""
    value = extension.strip().lower().lstrip(".")
    if value not in SUPPORTED_FORMATS:
        supported = ", ".join(SUPPORTED_FORMATS)
        raise UnsupportedFormatError(f"Unsupported image format '{extension}' (expected {supported}).")
    return "jpeg" if value == "jpg" else value


def _merge(defaults: Mapping[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    merged = dict(defaults)
    for key, value in overrides.items():
        if value is None:
            continue
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = _merge(current, value)
        else:
            merged[key] = value
    return merged


def build_render_options(
    config: RenderConfig,
    image_format: str,
    resources: Sequence[FetchedResource],
    overrides: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Return the engine options; explicit ``overrides`` win over defaults."""
    ratio = config.device_pixel_ratio
    if overrides and overrides.get("device_pixel_ratio") is not None:
        ratio = float(overrides["device_pixel_ratio"])
    defaults = {
        "width": round(config.width * ratio),
        "height": round(config.height * ratio),
        "format": image_format,
        "fetched_resources": list(resources),
        "device_pixel_ratio": ratio,
    }
    return _merge(defaults, overrides or {})


def describe_fonts(fonts: Iterable[FontDescriptor]) -> list[dict[str, Any]]:
    """Debug view of the descriptors, payload replaced by its size."""
    return [
        {
            "family": font.family,
            "weight": font.weight,
            "style": font.style.value,
            "cache_key": font.key,
            "size": font.size,
        }
        for font in fonts
    ]


class RasterPipeline:
    """Run fonts, fallback chains and resources through a session's engine."""

    def __init__(
        self,
        session: Any,
        engine_factory: EngineFactory,
        *,
        config: RenderConfig | None = None,
        resolver: ResourceResolver | None = None,
        emitter: DiagnosticEmitter | None = None,
    ) -> None:
        self.session = session
        self.config = config or RenderConfig()
        self.emitter = resolve_emitter(emitter)
        self.resolver = resolver or ResourceResolver.from_config(self.config, emitter=self.emitter)
        self._engine_factory = engine_factory

    @property
    def state(self) -> FontStateStore:
        return get_font_state(self.session, self._engine_factory)

    def prepare(
        self,
        tree: StyledNode,
        fonts: Iterable[FontDescriptor],
        *,
        font_family_override: str | None = None,
    ) -> list[FetchedResource]:
        """Load fonts, rewrite the tree and fetch its resources."""
        state = self.state
        load_fonts(state, fonts, emitter=self.emitter)

        if tree.style is None:
            tree.style = NodeStyle()
        if font_family_override and state.has_family(font_family_override):
            tree.style.font_family = font_family_override

        rewrite_font_families(tree, state.family_subsets)
        return self.resolver.resolve_all(collect_resource_urls(tree))

    def render(
        self,
        tree: StyledNode,
        fonts: Iterable[FontDescriptor],
        image_format: str = "png",
        *,
        font_family_override: str | None = None,
        overrides: Mapping[str, Any] | None = None,
    ) -> bytes:
        """Render ``tree`` to encoded bytes in ``image_format``."""
        resolved_format = normalize_format(image_format)
        resources = self.prepare(tree, fonts, font_family_override=font_family_override)
        options = build_render_options(self.config, resolved_format, resources, overrides)
        return self.state.engine.render(tree, options)

    def debug(self, tree: StyledNode, fonts: Iterable[FontDescriptor]) -> dict[str, Any]:
        """Return the tree and the font descriptors a render would use.

        Nothing is loaded or rewritten; the session's engine is left untouched.
        """
        return {"nodes": tree.to_dict(), "fonts": describe_fonts(fonts)}


__all__ = [
    "SUPPORTED_FORMATS",
    "RasterPipeline",
    "build_render_options",
    "describe_fonts",
    "normalize_format",
]
